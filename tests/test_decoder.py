import logging

import pytest
from eth_abi.abi import encode as abi_encode

from clients.evm.decoder import (
    balances_by_contract,
    build_meta_calls,
    decode_bytes32_string,
    decode_meta_results,
    decode_meta_value,
    filter_non_zero_results,
    result_data_by_contract,
)
from clients.evm.dto import AssociatedCallResult, CallContext, CallResult, TokenMeta
from clients.evm.exceptions import CallCountMismatchError
from enums.decode import DecodeSource

A = "0x" + "0a" * 20
B = "0x" + "0b" * 20
C = "0x" + "0c" * 20


def uint256(value: int) -> bytes:
    return abi_encode(["uint256"], [value])


def test_filter_non_zero_results() -> None:
    results = [
        CallResult(True, b"\x00" * 32),
        CallResult(True, b"\x00" * 31 + b"\x01"),
        CallResult(True, b"\xde\xad"),
    ]

    assert filter_non_zero_results(results, [A, B, C]) == [
        AssociatedCallResult(B, True, b"\x00" * 31 + b"\x01")
    ]


def test_filter_drops_failed_empty_results() -> None:
    results = [CallResult(False, b""), CallResult(True, uint256(7))]

    assert filter_non_zero_results(results, [A, B]) == [AssociatedCallResult(B, True, uint256(7))]


def test_filter_requires_one_address_per_result() -> None:
    with pytest.raises(CallCountMismatchError):
        filter_non_zero_results([CallResult(True, uint256(1))], [A, B])


def test_result_data_by_contract() -> None:
    associated = [AssociatedCallResult(A, True, uint256(1)), AssociatedCallResult(B, True, uint256(2))]

    assert result_data_by_contract(associated) == {A: uint256(1), B: uint256(2)}


def test_build_meta_calls() -> None:
    meta_calls = build_meta_calls(
        [AssociatedCallResult(A, True, uint256(1)), AssociatedCallResult(B, True, uint256(2))]
    )

    assert len(meta_calls.calls) == 6
    assert [(ctx.contract_address, ctx.method_name) for ctx in meta_calls.context] == [
        (A, "symbol"),
        (A, "decimals"),
        (A, "name"),
        (B, "symbol"),
        (B, "decimals"),
        (B, "name"),
    ]
    assert [call.target for call in meta_calls.calls] == [A, A, A, B, B, B]
    assert [call.call_data.hex() for call in meta_calls.calls[:3]] == [
        "95d89b41",
        "313ce567",
        "06fdde03",
    ]


def test_build_meta_calls_skips_duplicate_contracts() -> None:
    meta_calls = build_meta_calls(
        [AssociatedCallResult(A, True, uint256(1)), AssociatedCallResult(A, True, uint256(1))]
    )

    assert len(meta_calls.calls) == len(meta_calls.context) == 3


def test_decode_meta_value_standard_string() -> None:
    decoded = decode_meta_value("string", abi_encode(["string"], ["Dai Stablecoin"]))

    assert decoded.value == "Dai Stablecoin"
    assert decoded.source is DecodeSource.ABI


def test_decode_meta_value_falls_back_for_bytes32() -> None:
    decoded = decode_meta_value("string", b"MKR".ljust(32, b"\x00"))

    assert decoded.value == "MKR"
    assert decoded.is_fallback


def test_decode_bytes32_string_handles_short_data() -> None:
    assert decode_bytes32_string(b"") == ""
    assert decode_bytes32_string(b"AB") == "AB"


def test_decode_meta_results(caplog: pytest.LogCaptureFixture) -> None:
    results = [
        CallResult(True, abi_encode(["string"], ["USDC"])),
        CallResult(True, abi_encode(["uint8"], [6])),
        CallResult(True, abi_encode(["string"], ["USD Coin"])),
        CallResult(True, b"MKR".ljust(32, b"\x00")),
        CallResult(True, abi_encode(["uint256"], [18])),
        CallResult(True, b"Maker".ljust(32, b"\x00")),
    ]
    context = [
        CallContext(contract, method)
        for contract in (A, B)
        for method in ("symbol", "decimals", "name")
    ]

    with caplog.at_level(logging.INFO, logger="clients.evm.decoder"):
        meta = decode_meta_results(results, context)

    assert meta == {
        A: TokenMeta(symbol="USDC", name="USD Coin", decimals=6),
        B: TokenMeta(symbol="MKR", name="Maker", decimals=18),
    }
    assert isinstance(meta[B].decimals, int)
    assert "not ERC-20 compliant" in caplog.text
    assert B in caplog.text


def test_decode_meta_results_non_numeric_decimals_default_to_zero() -> None:
    meta = decode_meta_results([CallResult(False, b"")], [CallContext(A, "decimals")])

    assert meta[A].decimals == 0


def test_decode_meta_results_requires_context_per_result() -> None:
    with pytest.raises(CallCountMismatchError):
        decode_meta_results([CallResult(True, b"")], [])


def test_decode_meta_results_unknown_method() -> None:
    with pytest.raises(ValueError):
        decode_meta_results([CallResult(True, b"")], [CallContext(A, "totalSupply")])


@pytest.mark.parametrize("human_readable, expected", [(True, "1"), (False, "1000000")])
def test_balances_by_contract(human_readable: bool, expected: str) -> None:
    meta = {A: TokenMeta(symbol="USDC", name="USD Coin", decimals=6)}

    balances = balances_by_contract(meta, {A: uint256(1_000_000)}, human_readable)

    assert balances[A].to_dict() == {
        "symbol": "USDC",
        "name": "USD Coin",
        "decimals": 6,
        "balanceOf": expected,
    }


def test_balances_without_metadata_are_skipped(caplog: pytest.LogCaptureFixture) -> None:
    meta = {A: TokenMeta(symbol="USDC", name="USD Coin", decimals=6)}

    with caplog.at_level(logging.WARNING, logger="clients.evm.decoder"):
        balances = balances_by_contract(meta, {A: uint256(1), B: uint256(2)})

    assert list(balances) == [A]
    assert B in caplog.text


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"18".ljust(32, b"\x00"), 18),
        ("²".encode().ljust(32, b"\x00"), 0),
        (b"99999999".ljust(32, b"\x00"), 0),
        (b"256".ljust(32, b"\x00"), 0),
    ],
)
def test_decode_meta_results_bytes32_decimals(data: bytes, expected: int) -> None:
    meta = decode_meta_results([CallResult(True, data)], [CallContext(A, "decimals")])

    assert meta[A].decimals == expected


def test_out_of_range_bytes32_decimals_still_normalize() -> None:
    meta = decode_meta_results(
        [CallResult(True, b"99999999".ljust(32, b"\x00"))], [CallContext(A, "decimals")]
    )

    balances = balances_by_contract(meta, {A: uint256(42)})

    assert balances[A].balance_of == "42"


def test_metadata_without_balance_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    meta = {
        A: TokenMeta(symbol="USDC", name="USD Coin", decimals=6),
        B: TokenMeta(symbol="DAI", name="Dai Stablecoin", decimals=18),
    }

    with caplog.at_level(logging.WARNING, logger="clients.evm.decoder"):
        balances = balances_by_contract(meta, {A: uint256(1_000_000)})

    assert list(balances) == [A]
    assert B in caplog.text
