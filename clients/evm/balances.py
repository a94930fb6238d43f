import asyncio
import logging
from typing import Collection, Mapping, Sequence

from web3 import AsyncWeb3

from clients.evm.base import MULTICALL3_ADDRESS, BaseWeb3Client
from clients.evm.decoder import (
    ERC20_OUTPUT_TYPES,
    balances_by_contract,
    build_meta_calls,
    decode_meta_results,
    filter_non_zero_results,
    result_data_by_contract,
)
from clients.evm.dto import AssociatedCallResult, Call, TokenInfo
from clients.evm.resolver import ENS_CHAIN_IDS, resolve_address
from utils.utils import chunk

module_logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 500


class TokenBalanceClient(BaseWeb3Client):
    def __init__(
        self,
        w3: AsyncWeb3,
        multicall_address: str = MULTICALL3_ADDRESS,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        ens_chain_ids: Collection[int] = ENS_CHAIN_IDS,
        output_types: Mapping[str, str] = ERC20_OUTPUT_TYPES,
    ):
        super().__init__(w3, multicall_address)
        self.chunk_size = chunk_size
        self.ens_chain_ids = ens_chain_ids
        self.output_types = output_types

    async def fetch_raw_balances(
        self, owner: str, contract_addresses: Sequence[str]
    ) -> list[AssociatedCallResult]:
        calldata = self.encode_function_call(
            "balanceOf", [AsyncWeb3.to_checksum_address(owner)]
        )
        calls = [Call(target=address, call_data=calldata) for address in contract_addresses]

        results = await self.aggregate(calls)

        return filter_non_zero_results(results, contract_addresses)

    async def get_token_balances(
        self,
        address_or_name: str,
        contract_addresses: Sequence[str],
        human_readable: bool = True,
    ) -> dict[str, TokenInfo]:
        """
        Non-zero ERC-20 balances of ``address_or_name`` over
        ``contract_addresses``, keyed by contract address as given.

        Balances are read in chunks of ``chunk_size`` contracts, all chunks
        in flight at once; a failing chunk fails the whole lookup. Metadata
        for every non-zero balance is then read in one further batch.
        """
        owner = await resolve_address(address_or_name, self.w3, self.ens_chain_ids)

        chunks = chunk(contract_addresses, self.chunk_size)
        module_logger.debug(
            f"Fetching balances of {owner} over {len(contract_addresses)} contracts "
            f"in {len(chunks)} chunks"
        )

        chunk_results = await asyncio.gather(
            *(self.fetch_raw_balances(owner, addresses) for addresses in chunks)
        )
        raw_balance_results = [result for results in chunk_results for result in results]

        raw_balances = result_data_by_contract(raw_balance_results)
        meta_calls = build_meta_calls(raw_balance_results)
        meta_results = await self.aggregate(meta_calls.calls)
        meta = decode_meta_results(meta_results, meta_calls.context, self.output_types)

        return balances_by_contract(meta, raw_balances, human_readable)


async def get_token_balances(
    address_or_name: str,
    contract_addresses: Sequence[str],
    w3: AsyncWeb3,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    human_readable: bool = True,
    multicall_address: str = MULTICALL3_ADDRESS,
) -> dict[str, TokenInfo]:
    client = TokenBalanceClient(w3, multicall_address, chunk_size)
    return await client.get_token_balances(address_or_name, contract_addresses, human_readable)
