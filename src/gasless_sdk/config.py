import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Optional

from dotenv import dotenv_values

from .constants import MAX_TOKEN_DECIMALS, USDC_DECIMALS
from .errors import ConfigurationError, ValidationError
from .utils.validation import validate_address, validate_endpoint_url

__all__ = [
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "ENV_VARS",
    "get_network_config",
    "load_config_from_env",
]


class Network(str, Enum):
    SEPOLIA = "sepolia"


@dataclass(frozen=True)
class NetworkConfig:
    """Endpoints and contract addresses for one deployment.

    Endpoints carry provider API keys, so presets leave them empty and
    they must be supplied by the caller.
    """
    rpc_url: str = ""
    bundler_url: str = ""
    paymaster_url: str = ""
    paymaster_address: str = ""
    usdc_address: str = ""
    nft_address: Optional[str] = None
    usdc_decimals: int = USDC_DECIMALS
    chain_id: Optional[int] = None
    sponsored: bool = True

    def validate(self) -> "NetworkConfig":
        """Check every required field.

        Returns:
            self, so the call can be chained

        Raises:
            ConfigurationError: Naming the first missing or malformed field
        """
        for name in ("rpc_url", "bundler_url", "paymaster_url"):
            try:
                validate_endpoint_url(getattr(self, name), name)
            except ValidationError as exc:
                raise ConfigurationError(exc.message, field=name) from exc

        required = ["paymaster_address", "usdc_address"]
        if self.nft_address is not None:
            required.append("nft_address")
        for name in required:
            try:
                validate_address(getattr(self, name), name)
            except ValidationError as exc:
                raise ConfigurationError(exc.message, field=name) from exc

        if isinstance(self.usdc_decimals, bool) or not isinstance(self.usdc_decimals, int) \
                or not 0 <= self.usdc_decimals <= MAX_TOKEN_DECIMALS:
            raise ConfigurationError(
                f"usdc_decimals must be an int in [0, {MAX_TOKEN_DECIMALS}]",
                field="usdc_decimals",
            )
        return self

    def require_nft_address(self) -> str:
        if not self.nft_address:
            raise ConfigurationError("nft_address is required to mint", field="nft_address")
        return self.nft_address


NETWORKS: dict[Network, NetworkConfig] = {
    Network.SEPOLIA: NetworkConfig(
        usdc_address="0x1c7d4b196cb0c7b01d743fbc6116a902379c7238",
        usdc_decimals=6,
        chain_id=11155111,
    ),
}

# NetworkConfig field -> environment variable
ENV_VARS = {
    "rpc_url": "RPC_URL",
    "bundler_url": "BUNDLER_URL",
    "paymaster_url": "PAYMASTER_URL",
    "paymaster_address": "PAYMASTER_ADDRESS",
    "usdc_address": "USDC_ADDRESS",
    "nft_address": "NFT_ADDRESS",
    "usdc_decimals": "USDC_DECIMALS",
    "chain_id": "CHAIN_ID",
}
_INT_FIELDS = ("usdc_decimals", "chain_id")


def get_network_config(network: Network, **overrides) -> NetworkConfig:
    """Return the preset for ``network`` with ``overrides`` applied.

    Overrides set to None are ignored, so optional CLI flags can be passed
    straight through.
    """
    cfg = NETWORKS[Network(network)]
    changes = {k: v for k, v in overrides.items() if v is not None}
    if not changes:
        return cfg
    try:
        return replace(cfg, **changes)
    except TypeError as exc:
        raise ConfigurationError(f"Unknown configuration field: {exc}") from exc


def load_config_from_env(
    environ: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[str] = None,
    network: Optional[Network] = None,
) -> NetworkConfig:
    """Build a validated NetworkConfig from environment variables.

    Values from ``dotenv_path`` (when given) are read first and overridden
    by ``environ`` (``os.environ`` by default). When ``network`` is given its
    preset supplies any value the environment leaves unset.

    Raises:
        ConfigurationError: If a required value is missing or malformed
    """
    values = dict(dotenv_values(dotenv_path)) if dotenv_path else {}
    values.update(os.environ if environ is None else environ)

    fields = {}
    for field_name, env_name in ENV_VARS.items():
        raw = values.get(env_name)
        if raw is None or raw.strip() == "":
            continue
        raw = raw.strip()
        if field_name in _INT_FIELDS:
            try:
                fields[field_name] = int(raw, 0)
            except ValueError as exc:
                raise ConfigurationError(
                    f"{env_name} must be an integer", field=field_name
                ) from exc
        else:
            fields[field_name] = raw

    if network is not None:
        config = get_network_config(network, **fields)
    else:
        config = NetworkConfig(**fields)
    return config.validate()
