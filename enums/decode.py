from enum import Enum


class DecodeSource(str, Enum):
    ABI = "abi"
    FALLBACK = "fallback"
