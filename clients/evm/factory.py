from web3 import AsyncWeb3
from web3.providers import AsyncHTTPProvider

from chains.dto import ChainConfig
from clients.evm.balances import DEFAULT_CHUNK_SIZE, TokenBalanceClient


class Web3ClientFactory:
    def __init__(self, chain_config: ChainConfig):
        self.chain_config = chain_config
        self._w3: AsyncWeb3 | None = None

    async def __aenter__(self):
        if self._w3 is None:
            self._w3 = AsyncWeb3(AsyncHTTPProvider(self.chain_config.rpc_url))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._w3 is not None:
            await self._w3.provider.disconnect()

            self._w3 = None

    @property
    def w3(self) -> AsyncWeb3:
        if self._w3 is None:
            raise RuntimeError("Web3ClientFactory must be entered before use")
        return self._w3

    def create_balance_client(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> TokenBalanceClient:
        ens_chain_ids = {self.chain_config.chain_id} if self.chain_config.ens_supported else set()
        return TokenBalanceClient(
            self.w3,
            self.chain_config.multicall3_address,
            chunk_size,
            ens_chain_ids,
        )
