from dataclasses import dataclass, field
from typing import Any

from enums.decode import DecodeSource


@dataclass
class Call:
    target: str
    call_data: bytes


@dataclass
class CallResult:
    success: bool
    return_data: bytes


@dataclass
class AssociatedCallResult:
    contract_address: str
    success: bool
    return_data: bytes


@dataclass
class CallContext:
    contract_address: str
    method_name: str


@dataclass
class MetaCalls:
    calls: list[Call] = field(default_factory=list)
    context: list[CallContext] = field(default_factory=list)


@dataclass
class DecodedValue:
    value: Any
    source: DecodeSource

    @property
    def is_fallback(self) -> bool:
        return self.source is DecodeSource.FALLBACK


@dataclass
class TokenMeta:
    symbol: str = ""
    name: str = ""
    decimals: int = 0


@dataclass
class TokenInfo:
    symbol: str
    name: str
    decimals: int
    balance_of: str

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "decimals": self.decimals,
            "balanceOf": self.balance_of,
        }
