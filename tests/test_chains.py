from chains import base, bsc, ethereum, registery


def test_find_by_chain_id() -> None:
    assert registery.find("1") is ethereum
    assert registery.find("56") is bsc


def test_find_by_name() -> None:
    assert registery.find("base") is base
    assert registery.find("Ethereum") is ethereum


def test_find_unknown() -> None:
    assert registery.find("137") is None
    assert registery.find("polygon") is None


def test_only_mainnet_supports_ens() -> None:
    assert [cfg.chain_id for cfg in registery.list() if cfg.ens_supported] == [1]
