from order_courier.signals import StopSignal


def test_cancel_sets_flag_before_callbacks():
    signal = StopSignal()
    seen: list[bool] = []

    signal.register(lambda: seen.append(signal.cancelled))
    signal.cancel()

    assert seen == [True]
    assert signal.cancelled


def test_cancel_is_idempotent():
    signal = StopSignal()
    calls: list[int] = []

    signal.register(lambda: calls.append(1))
    signal.cancel()
    signal.cancel()

    assert calls == [1]


def test_register_after_cancel_runs_immediately():
    signal = StopSignal()
    signal.cancel()
    calls: list[int] = []

    signal.register(lambda: calls.append(1))

    assert calls == [1]


def test_unregister_removes_callback():
    signal = StopSignal()
    calls: list[int] = []

    unregister = signal.register(lambda: calls.append(1))
    unregister()
    signal.cancel()

    assert calls == []

