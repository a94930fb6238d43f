import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer

from chains import registery
from clients.evm.exceptions import BalanceLookupError
from clients.evm.factory import Web3ClientFactory
from config import settings

module_logger = logging.getLogger(__name__)


def load_contracts(contracts: list[str], contracts_file: Path | None) -> list[str]:
    addresses = list(contracts)
    if contracts_file is not None:
        for line in contracts_file.read_text().splitlines():
            line = line.split("#", 1)[0].strip()
            if line:
                addresses.append(line.split()[0])
    return addresses


async def fetch_balances(
    address_or_name: str,
    contract_addresses: list[str],
    chain: str,
    rpc_url: str | None,
    chunk_size: int,
    human_readable: bool,
) -> dict[str, dict]:
    chain_config = registery.find(chain)
    if chain_config is None:
        raise typer.BadParameter(f"Unknown chain {chain}", param_hint="--chain")

    if rpc_url:
        chain_config = replace(chain_config, rpc_url=rpc_url)
    if settings.MULTICALL_ADDRESS:
        chain_config = replace(chain_config, multicall3_address=settings.MULTICALL_ADDRESS)

    async with Web3ClientFactory(chain_config) as factory:
        client = factory.create_balance_client(chunk_size)
        balances = await client.get_token_balances(
            address_or_name, contract_addresses, human_readable
        )

    return {address: info.to_dict() for address, info in balances.items()}


def main(
    address_or_name: str,
    contracts: Optional[list[str]] = typer.Argument(None),
    contracts_file: Optional[Path] = typer.Option(None, exists=True, dir_okay=False),
    chain: str = str(settings.CHAIN_ID),
    rpc_url: Optional[str] = settings.RPC_URL,
    chunk_size: int = settings.CHUNK_SIZE,
    raw: bool = not settings.HUMAN_READABLE,
) -> None:
    """
    Print the non-zero ERC-20 balances of an address or ENS name as JSON.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    contract_addresses = load_contracts(contracts or [], contracts_file)
    if not contract_addresses:
        raise typer.BadParameter("No token contracts given")

    try:
        balances = asyncio.run(
            fetch_balances(
                address_or_name,
                contract_addresses,
                chain,
                rpc_url,
                chunk_size,
                not raw,
            )
        )
    except BalanceLookupError as e:
        module_logger.error(str(e))
        raise typer.Exit(code=1)

    typer.echo(json.dumps(balances, indent=2))


def cli() -> None:
    typer.run(main)


if __name__ == "__main__":
    cli()
