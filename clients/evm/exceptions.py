class BalanceLookupError(Exception):
    pass


class UnsupportedNetworkError(BalanceLookupError):
    def __init__(self, chain_id: int):
        self.chain_id = chain_id
        super().__init__(f"Chain {chain_id} does not support ENS name resolution")


class InvalidNameError(BalanceLookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid ENS name: {name}")


class CallCountMismatchError(BalanceLookupError, ValueError):
    def __init__(self, what: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} {what}, got {actual}")
