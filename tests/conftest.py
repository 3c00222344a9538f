"""
FSS Engine Test Fixtures
"""

import pytest

from fss.config import EngineConfig
from fss.core.types import AccountCategory, LinkedAccountRecord
from fss.state.engine import StorageEngine

FIXED_TIME = 1700000000.0


class FixedRandom:
    """Jitter source that always returns the same value."""

    def __init__(self, value: int = 0):
        self.value = value
        self.calls = 0

    def randrange(self, stop: int) -> int:
        self.calls += 1
        return self.value


@pytest.fixture
def fixed_random() -> FixedRandom:
    return FixedRandom(0)


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2023-11-14T22:13:20Z."""
    return lambda: FIXED_TIME


@pytest.fixture
def bitcoin_record() -> LinkedAccountRecord:
    return LinkedAccountRecord(
        category=AccountCategory.BITCOIN,
        timestamp=1700000000000,
        address="bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq",
    )


@pytest.fixture
def ethereum_record() -> LinkedAccountRecord:
    # 50-character address payload
    return LinkedAccountRecord(
        category=AccountCategory.ETHEREUM,
        timestamp=1700000001000,
        address="0x" + "ab" * 24,
        public_key="04" + "cd" * 32,
    )


@pytest.fixture
def coinbase_record() -> LinkedAccountRecord:
    return LinkedAccountRecord(
        category=AccountCategory.COINBASE,
        timestamp=1700000002000,
        account_id="cb-account-0042",
        provider_info={"scope": ["wallet:accounts:read"], "sandbox": True},
    )


@pytest.fixture
def plaid_record() -> LinkedAccountRecord:
    return LinkedAccountRecord(
        category=AccountCategory.PLAID,
        timestamp=1700000003000,
        account_id="plaid-item-7",
        provider_info={
            "institution": {"id": "ins_3", "name": "Chase"},
            "mask": "0000",
            "subtype": "checking",
        },
    )


@pytest.fixture
def all_records(bitcoin_record, ethereum_record, coinbase_record, plaid_record):
    return [bitcoin_record, ethereum_record, coinbase_record, plaid_record]


@pytest.fixture
def engine(fixed_random, fixed_clock) -> StorageEngine:
    """Uninitialized engine with pinned jitter and time."""
    return StorageEngine(EngineConfig(), rng=fixed_random, clock=fixed_clock)


@pytest.fixture
def ready_engine(engine) -> StorageEngine:
    """Engine initialized with the test passphrase."""
    engine.initialize("secret123")
    return engine


@pytest.fixture
def make_random():
    """Factory for FixedRandom jitter sources."""
    return FixedRandom
