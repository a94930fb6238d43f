import pytest

from tests.fakes import DAI, MKR, OWNER, USDC, FakeToken, FakeWeb3


@pytest.fixture
def tokens() -> dict[str, FakeToken]:
    return {
        USDC: FakeToken("USDC", "USD Coin", 6, {OWNER: 0}),
        MKR: FakeToken("MKR", "Maker", 18, {OWNER: 500}, bytes32_strings=True),
        DAI: FakeToken("DAI", "Dai Stablecoin", 18, {OWNER: 0}),
    }


@pytest.fixture
def fake_w3(tokens: dict[str, FakeToken]) -> FakeWeb3:
    return FakeWeb3(tokens, names={"owner.eth": OWNER})
