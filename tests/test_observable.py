import threading

from news_client.observable import LiveValue


def test_unset_by_default():
    live = LiveValue()
    assert live.value is None
    assert not live.has_value
    assert not live.settled
    assert live.wait(0.01) is None
    assert not live.wait_settled(0.01)


def test_observer_registered_before_publication():
    live = LiveValue()
    seen = []
    live.observe(seen.append)

    live.post_value([1, 2])

    assert seen == [[1, 2]]
    assert live.has_value
    assert live.settled


def test_observer_registered_after_publication_gets_value():
    live = LiveValue()
    live.post_value("ready")
    seen = []

    live.observe(seen.append)

    assert seen == ["ready"]


def test_value_published_at_most_once():
    live = LiveValue()
    seen = []
    live.observe(seen.append)

    live.post_value("first")
    live.post_value("second")

    assert live.value == "first"
    assert seen == ["first"]


def test_removed_observer_not_called():
    live = LiveValue()
    seen = []
    live.observe(seen.append)
    live.remove_observer(seen.append)

    live.post_value("x")

    assert seen == []


def test_error_does_not_touch_value_channel():
    live = LiveValue()
    values, errors = [], []
    live.observe(values.append)
    live.observe_error(errors.append)
    boom = RuntimeError("boom")

    live.post_error(boom)
    live.post_value("late")

    assert values == []
    assert errors == [boom]
    assert live.value is None
    assert live.error is boom
    assert live.wait_settled(0)


def test_wait_returns_value_from_other_thread():
    live = LiveValue()
    threading.Timer(0.05, live.post_value, args=("done",)).start()

    assert live.wait(5) == "done"
