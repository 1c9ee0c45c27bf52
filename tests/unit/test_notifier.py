from chatpass.domain import notifier as notifier_mod
from chatpass.domain.notifier import Notifier, QuotaChanged


def test_publish_reaches_all_subscribers_in_order():
    bus = Notifier()
    seen = []
    bus.subscribe(lambda e: seen.append(("a", e.remaining)))
    bus.subscribe(lambda e: seen.append(("b", e.remaining)))

    bus.publish(QuotaChanged(remaining=3, key="k"))

    assert seen == [("a", 3), ("b", 3)]


def test_unsubscribe_stops_delivery_and_is_idempotent():
    bus = Notifier()
    seen = []
    unsubscribe = bus.subscribe(seen.append)
    unsubscribe()
    unsubscribe()

    bus.publish(QuotaChanged(remaining=1))

    assert seen == []


def test_failing_subscriber_does_not_block_others():
    bus = Notifier()
    seen = []

    def boom(event):
        raise RuntimeError("boom")

    bus.subscribe(boom)
    bus.subscribe(seen.append)

    bus.publish(QuotaChanged(remaining=2, key="k"))

    assert [e.remaining for e in seen] == [2]


def test_get_notifier_is_a_singleton(monkeypatch):
    monkeypatch.setattr(notifier_mod, "_notifier", None)
    assert notifier_mod.get_notifier() is notifier_mod.get_notifier()
