import logging
from abc import ABC
from typing import Any, Sequence

from eth_abi.abi import encode as abi_encode
from eth_utils import function_signature_to_4byte_selector
from web3 import AsyncWeb3

from clients.evm.dto import Call, CallResult

module_logger = logging.getLogger(__name__)

MULTICALL3_ADDRESS = "0xcA11bde05977b3631167028862bE2a173976CA11"


class BaseWeb3Client(ABC):
    MULTICALL3_ABI = [
        {
            "inputs": [
                {"internalType": "bool", "name": "requireSuccess", "type": "bool"},
                {
                    "components": [
                        {
                            "internalType": "address",
                            "name": "target",
                            "type": "address",
                        },
                        {"internalType": "bytes", "name": "callData", "type": "bytes"},
                    ],
                    "internalType": "struct Multicall3.Call[]",
                    "name": "calls",
                    "type": "tuple[]",
                },
            ],
            "name": "tryBlockAndAggregate",
            "outputs": [
                {"internalType": "uint256", "name": "blockNumber", "type": "uint256"},
                {"internalType": "bytes32", "name": "blockHash", "type": "bytes32"},
                {
                    "components": [
                        {"internalType": "bool", "name": "success", "type": "bool"},
                        {
                            "internalType": "bytes",
                            "name": "returnData",
                            "type": "bytes",
                        },
                    ],
                    "internalType": "struct Multicall3.Result[]",
                    "name": "returnData",
                    "type": "tuple[]",
                },
            ],
            "stateMutability": "payable",
            "type": "function",
        }
    ]

    ERC20_ABI = [
        {
            "inputs": [],
            "name": "name",
            "outputs": [{"name": "", "type": "string"}],
            "stateMutability": "view",
            "type": "function",
        },
        {
            "inputs": [],
            "name": "symbol",
            "outputs": [{"name": "", "type": "string"}],
            "stateMutability": "view",
            "type": "function",
        },
        {
            "inputs": [],
            "name": "decimals",
            "outputs": [{"name": "", "type": "uint8"}],
            "stateMutability": "view",
            "type": "function",
        },
        {
            "inputs": [{"name": "owner", "type": "address"}],
            "name": "balanceOf",
            "outputs": [{"name": "", "type": "uint256"}],
            "stateMutability": "view",
            "type": "function",
        },
    ]

    def __init__(self, w3: AsyncWeb3, multicall_address: str = MULTICALL3_ADDRESS):
        self._w3 = w3
        self.multicall_address = multicall_address

    @property
    def w3(self) -> AsyncWeb3:
        return self._w3

    @staticmethod
    def _create_call(target: str, calldata: bytes) -> tuple:
        return (AsyncWeb3.to_checksum_address(target), calldata)

    @classmethod
    def encode_function_call(
        cls, method_name: str, args: Sequence[Any] = ()
    ) -> bytes:
        fragment = next(
            item for item in cls.ERC20_ABI
            if item["type"] == "function" and item["name"] == method_name
        )
        input_types = [inp["type"] for inp in fragment["inputs"]]
        selector = function_signature_to_4byte_selector(
            f"{method_name}({','.join(input_types)})"
        )
        return selector + abi_encode(input_types, list(args))

    def _get_multicall_contract(self):
        return self.w3.eth.contract(
            AsyncWeb3.to_checksum_address(self.multicall_address),
            abi=self.MULTICALL3_ABI,
        )

    async def aggregate(self, calls: Sequence[Call]) -> list[CallResult]:
        """
        Run ``calls`` through Multicall3.tryBlockAndAggregate with
        requireSuccess disabled, so a reverting call only flags its own result.

        Block number and hash are dropped. Results come back in call order.
        Provider errors propagate as raised; nothing is retried here.
        """
        if not calls:
            return []

        multicall = self._get_multicall_contract()
        module_logger.debug(f"tryBlockAndAggregate with {len(calls)} calls")

        _, _, results = await multicall.functions.tryBlockAndAggregate(
            False,
            [self._create_call(call.target, call.call_data) for call in calls],
        ).call()

        return [CallResult(success=bool(success), return_data=bytes(data)) for success, data in results]
