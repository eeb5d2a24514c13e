#!/usr/bin/env python3
"""
Gasless Demo

Mints an NFT and sends 10.5 USDC from a Safe smart account with the gas
paid by the paymaster.

Configuration is read from a .env file (see README.md). Without a real
account client the demo runs against a dry-run client that prints what
would be sent to the bundler.

Run with: python examples/gasless_demo.py
"""

import asyncio
import os
from typing import Any, Dict, List

from gasless_sdk import GaslessWorkflow, load_config_from_env
from gasless_sdk.utils import configure_logging

SAFE_ADDRESS = os.environ.get("SAFE_ADDRESS", "0x" + "5a" * 20)
RECIPIENT = os.environ.get("RECIPIENT", "0x" + "b0" * 20)


class DryRunSession:
    """Session that prints each stage instead of talking to a bundler."""

    def __init__(self, options: Dict[str, Any]) -> None:
        self._options = options

    async def create_transaction(self, transactions: List[Dict[str, str]]) -> Dict[str, Any]:
        for tx in transactions:
            print(f"  call -> {tx['to']} value={tx['value']} data={tx['data'][:10]}...")
        return {"transactions": transactions}

    async def sign_safe_operation(self, operation: Dict[str, Any]) -> Dict[str, Any]:
        return dict(operation, signature="0x")

    async def execute_transaction(self, signed: Dict[str, Any]) -> str:
        return "0x" + "00" * 32

    async def wait_for_receipt(self, user_operation_hash: str) -> Dict[str, Any]:
        return {"success": True, "userOpHash": user_operation_hash}


class DryRunClient:
    async def init(self, options: Dict[str, Any]) -> DryRunSession:
        print(f"  bundler: {options['bundlerUrl']}")
        return DryRunSession(options)


async def main() -> None:
    print("=" * 60)
    print("GASLESS SDK - Demo")
    print("=" * 60)

    configure_logging("INFO")
    config = load_config_from_env(dotenv_path=".env")
    workflow = GaslessWorkflow(config, DryRunClient())
    signer = os.environ.get("SIGNER", "dry-run-signer")

    if config.nft_address:
        print("\nMinting NFT...")
        result = await workflow.mint_nft(signer, SAFE_ADDRESS, wait=True)
        print(f"Minted: {result.user_operation_hash} ({result.state.value})")

    print("\nSending 10.5 USDC...")
    result = await workflow.send(signer, SAFE_ADDRESS, RECIPIENT, 10.5, wait=True)
    print(f"Sent: {result.user_operation_hash} ({result.state.value})")


if __name__ == "__main__":
    asyncio.run(main())
