import pytest

from chatpass.domain.notifier import Notifier
from chatpass.domain.quota import QuotaMeter
from chatpass.domain.turns import PendingTurns
from tests.fakes import FakeClock, FakeErroredQuotaStore, FakeQuotaStore

SECRET = "test-secret"
NOW_MS = 1_700_000_000_000


@pytest.fixture()
def store():
    return FakeQuotaStore()


@pytest.fixture()
def errored_store():
    return FakeErroredQuotaStore()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def notifier():
    return Notifier()


@pytest.fixture()
def events(notifier):
    received = []
    notifier.subscribe(received.append)
    return received


@pytest.fixture()
def pending():
    return PendingTurns()


@pytest.fixture()
def make_meter(store, notifier, pending, clock):
    def _make(key: str = "q:tok", **overrides) -> QuotaMeter:
        kwargs = dict(
            key=key,
            store=store,
            notifier=notifier,
            pending=pending,
            clock=clock,
        )
        kwargs.update(overrides)
        return QuotaMeter(**kwargs)

    return _make
