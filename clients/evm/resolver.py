import logging
from typing import Collection

from ens.exceptions import InvalidName
from eth_utils.address import is_address
from web3 import AsyncWeb3

from clients.evm.exceptions import InvalidNameError, UnsupportedNetworkError

module_logger = logging.getLogger(__name__)

ENS_CHAIN_IDS = frozenset({1})


async def resolve_address(
    address_or_name: str,
    w3: AsyncWeb3,
    ens_chain_ids: Collection[int] = ENS_CHAIN_IDS,
) -> str:
    if is_address(address_or_name):
        return address_or_name

    chain_id = await w3.eth.chain_id
    if chain_id not in ens_chain_ids:
        raise UnsupportedNetworkError(chain_id)

    try:
        address = await w3.ens.address(address_or_name)
    except InvalidName as e:
        raise InvalidNameError(address_or_name) from e

    if not address:
        raise InvalidNameError(address_or_name)

    module_logger.debug(f"Resolved {address_or_name} -> {address}")
    return address
