from dataclasses import dataclass


@dataclass
class ChainConfig:
    chain_id: int
    name: str
    display_name: str
    symbol: str
    explorer: str
    rpc_url: str
    multicall3_address: str
    ens_supported: bool = False
