import logging
from typing import Mapping, Sequence

from eth_abi.abi import decode as abi_decode
from eth_abi.exceptions import DecodingError

from clients.evm.base import BaseWeb3Client
from clients.evm.dto import (
    AssociatedCallResult,
    Call,
    CallContext,
    CallResult,
    DecodedValue,
    MetaCalls,
    TokenInfo,
    TokenMeta,
)
from clients.evm.exceptions import CallCountMismatchError
from enums.decode import DecodeSource
from utils.utils import format_units

module_logger = logging.getLogger(__name__)

WORD_SIZE = 32
ZERO_WORD = b"\x00" * WORD_SIZE

META_METHODS = ("symbol", "decimals", "name")
MAX_DECIMALS = 255

ERC20_OUTPUT_TYPES: dict[str, str] = {
    item["name"]: item["outputs"][0]["type"]
    for item in BaseWeb3Client.ERC20_ABI
    if item.get("outputs")
}

# Bytes32 metadata fed to the string decoder lands on one of these.
ABI_DECODE_ERRORS = (DecodingError, OverflowError, UnicodeDecodeError)


def filter_non_zero_results(
    results: Sequence[CallResult], contract_addresses: Sequence[str]
) -> list[AssociatedCallResult]:
    """
    Pair raw ``balanceOf`` results with their contracts and keep only those
    holding a well-formed, non-zero uint256.

    Zero balances and anything that is not exactly one word long (reverts,
    missing contracts, non-compliant returns) are dropped without a trace.
    """
    if len(results) != len(contract_addresses):
        raise CallCountMismatchError("contract addresses", len(results), len(contract_addresses))

    associated = []
    for contract_address, result in zip(contract_addresses, results):
        data = result.return_data
        if len(data) != WORD_SIZE or data == ZERO_WORD:
            continue
        associated.append(
            AssociatedCallResult(
                contract_address=contract_address,
                success=result.success,
                return_data=data,
            )
        )

    return associated


def result_data_by_contract(
    associated_results: Sequence[AssociatedCallResult],
) -> dict[str, bytes]:
    return {result.contract_address: result.return_data for result in associated_results}


def build_meta_calls(associated_results: Sequence[AssociatedCallResult]) -> MetaCalls:
    """
    Three calls per distinct contract, ``symbol``, ``decimals`` and ``name``
    in that order. ``calls[i]`` and ``context[i]`` always describe the same call.
    """
    meta_calls = MetaCalls()
    seen: set[str] = set()

    for result in associated_results:
        contract_address = result.contract_address
        if contract_address in seen:
            continue
        seen.add(contract_address)

        for method_name in META_METHODS:
            meta_calls.calls.append(
                Call(
                    target=contract_address,
                    call_data=BaseWeb3Client.encode_function_call(method_name),
                )
            )
            meta_calls.context.append(
                CallContext(contract_address=contract_address, method_name=method_name)
            )

    return meta_calls


def decode_bytes32_string(data: bytes) -> str:
    word = data[:WORD_SIZE].ljust(WORD_SIZE, b"\x00")
    return word.rstrip(b"\x00").decode("utf-8", errors="replace")


def decode_meta_value(output_type: str, data: bytes) -> DecodedValue:
    try:
        (value,) = abi_decode([output_type], data)
    except ABI_DECODE_ERRORS:
        return DecodedValue(value=decode_bytes32_string(data), source=DecodeSource.FALLBACK)

    return DecodedValue(value=value, source=DecodeSource.ABI)


def _coerce_decimals(decoded: DecodedValue, contract_address: str) -> int:
    if decoded.source is DecodeSource.ABI:
        return int(decoded.value)

    text = decoded.value.strip()
    if text.isascii() and text.isdecimal() and int(text) <= MAX_DECIMALS:
        return int(text)

    module_logger.warning(
        f"Unusable decimals {decoded.value!r} for {contract_address}, assuming 0"
    )
    return 0


def decode_meta_results(
    results: Sequence[CallResult],
    context: Sequence[CallContext],
    output_types: Mapping[str, str] = ERC20_OUTPUT_TYPES,
) -> dict[str, TokenMeta]:
    if len(results) != len(context):
        raise CallCountMismatchError("context entries", len(results), len(context))

    meta: dict[str, TokenMeta] = {}

    for result, ctx in zip(results, context):
        output_type = output_types.get(ctx.method_name)
        if output_type is None:
            raise ValueError(f"No output type known for method {ctx.method_name!r}")

        decoded = decode_meta_value(output_type, result.return_data)
        if decoded.is_fallback:
            module_logger.info(
                f"Problem decoding {ctx.method_name} for {ctx.contract_address}. "
                "The contract is likely not ERC-20 compliant."
            )

        value = decoded.value
        if ctx.method_name == "decimals":
            value = _coerce_decimals(decoded, ctx.contract_address)

        token_meta = meta.setdefault(ctx.contract_address, TokenMeta())
        setattr(token_meta, ctx.method_name, value)

    return meta


def balances_by_contract(
    meta_by_contract: Mapping[str, TokenMeta],
    balance_data_by_contract: Mapping[str, bytes],
    human_readable: bool = True,
) -> dict[str, TokenInfo]:
    orphaned = set(balance_data_by_contract) - set(meta_by_contract)
    for contract_address in orphaned:
        module_logger.warning(f"Balance for {contract_address} has no metadata, skipping")

    balances: dict[str, TokenInfo] = {}

    for contract_address, token_meta in meta_by_contract.items():
        balance_data = balance_data_by_contract.get(contract_address)
        if balance_data is None:
            module_logger.warning(f"Metadata for {contract_address} has no balance, skipping")
            continue

        (raw_balance,) = abi_decode(["uint256"], balance_data)
        balance = (
            format_units(raw_balance, token_meta.decimals)
            if human_readable
            else str(raw_balance)
        )

        balances[contract_address] = TokenInfo(
            symbol=token_meta.symbol,
            name=token_meta.name,
            decimals=token_meta.decimals,
            balance_of=balance,
        )

    return balances
