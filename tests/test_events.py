import logging

import pytest

from savepicker.events import ORIGIN_FOREIGN, ChangeFeed, StorageChange


def test_publish_in_subscription_order():
    feed = ChangeFeed()
    calls = []
    feed.subscribe(lambda change: calls.append(("first", change.key)))
    feed.subscribe(lambda change: calls.append(("second", change.key)))
    feed.publish(StorageChange("k"))
    assert calls == [("first", "k"), ("second", "k")]
    assert len(feed) == 2


def test_failing_listener_does_not_block_others(caplog):
    feed = ChangeFeed()
    got = []

    def boom(change: StorageChange) -> None:
        raise RuntimeError("boom")

    feed.subscribe(boom)
    feed.subscribe(got.append)
    with caplog.at_level(logging.ERROR):
        feed.publish(StorageChange("k", ORIGIN_FOREIGN))
    assert got == [StorageChange("k", ORIGIN_FOREIGN)]
    assert got[0].foreign
    assert "Change listener failed" in caplog.text


def test_subscribe_requires_callable():
    with pytest.raises(TypeError):
        ChangeFeed().subscribe("not callable")  # type: ignore[arg-type]


def test_unsubscribe_unknown_is_ignored():
    feed = ChangeFeed()
    feed.unsubscribe(print)
    assert len(feed) == 0


def test_local_change_is_not_foreign():
    assert not StorageChange(None).foreign
