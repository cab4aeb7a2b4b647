from watch_notify import Channel, Registry


def test_send_reaches_subscribers():
    registry = Registry()
    channel = Channel(registry, "agent:1:in")
    received = []

    handle = channel.subscribe(received.append)
    assert registry.has_observer(handle)
    assert channel.active is True

    assert channel.send({"hello": "world"}) is True
    assert received == [{"hello": "world"}]


def test_send_without_subscribers():
    channel = Channel(Registry(), "empty")
    assert channel.active is False
    assert channel.send("ignored") is False


def test_subscribe_once_and_scope():
    registry = Registry()
    channel = Channel(registry, "t")
    scope = object()
    received = []

    channel.subscribe_once(lambda this, value: received.append((this, value)), scope)
    channel.send(1)
    channel.send(2)
    assert received == [(scope, 1)]


def test_close_only_removes_own_observers():
    registry = Registry()
    channel = Channel(registry, "shared")
    other = registry.register("shared", lambda *args: None)

    channel.subscribe(lambda *args: None)
    channel.subscribe(lambda *args: None)
    channel.subscribe_once(lambda *args: None)
    channel.send()  # consumes the once observer

    assert channel.close() == 2
    assert registry.has_observer(other)
    assert registry.count("shared") == 1
    assert channel.close() == 0


def test_rejected_subscription_is_not_tracked():
    channel = Channel(Registry(), "t")
    assert channel.subscribe("not callable") is False
    assert channel.close() == 0
