import gc
import threading

import pytest

from teamstats.match_timer import (
    PERIOD_LABELS,
    MatchTimer,
    RepeatingTicker,
    TimerPhase,
    format_time,
)


class FakeTicker:
    """Manual ticker: the test fires ticks instead of a background thread."""

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self, times=1):
        result = True
        for _ in range(times):
            result = self.callback()
        return result


class FakeTickerFactory:
    def __init__(self):
        self.tickers = []

    def __call__(self, interval, callback):
        ticker = FakeTicker(interval, callback)
        self.tickers.append(ticker)
        return ticker

    @property
    def last(self):
        return self.tickers[-1]


@pytest.fixture
def factory():
    return FakeTickerFactory()


@pytest.fixture
def timer(factory):
    with MatchTimer(ticker_factory=factory) as t:
        yield t


# ---------------- format_time ----------------
@pytest.mark.parametrize(
    "ms, expected",
    [
        (0, "00:00.00"),
        (10, "00:00.01"),
        (999, "00:00.99"),
        (61_230, "01:01.23"),
        (61_234, "01:01.23"),
        (600_000, "10:00.00"),
        (3_599_990, "59:59.99"),
        (6_000_000, "100:00.00"),
        (-50, "00:00.00"),
    ],
)
def test_format_time(ms, expected):
    assert format_time(ms) == expected


def test_format_time_under_a_minute_shows_zero_minutes():
    assert all(format_time(ms).startswith("00:") for ms in range(0, 60_000, 7))


# ---------------- state machine ----------------
def test_new_timer_is_idle(timer):
    state = timer.state
    assert timer.phase is TimerPhase.IDLE
    assert state.elapsed_ms == 0
    assert state.displayed_label is None
    assert not timer.has_active_ticker


def test_start_tick_stop(timer, factory):
    timer.toggle_running()
    assert timer.phase is TimerPhase.RUNNING
    assert factory.last.started
    assert factory.last.interval == pytest.approx(0.01)

    factory.last.fire(150)
    timer.toggle_running()

    assert timer.phase is TimerPhase.STOPPED
    assert timer.state.elapsed_ms == 1500
    assert timer.snapshot().formatted_time == "00:01.50"
    assert factory.last.cancelled
    assert not timer.has_active_ticker


def test_stale_tick_after_stop_is_ignored(timer, factory):
    timer.toggle_running()
    ticker = factory.last
    ticker.fire(3)
    timer.toggle_running()

    assert ticker.fire() is False
    assert timer.state.elapsed_ms == 30


def test_restart_continues_from_elapsed(timer, factory):
    timer.toggle_running()
    factory.last.fire(5)
    timer.toggle_running()
    timer.toggle_running()
    factory.last.fire(5)

    assert len(factory.tickers) == 2
    assert timer.state.elapsed_ms == 100


def test_period_selection_flow(timer, factory):
    timer.toggle_running()
    timer.request_label_selection()
    assert timer.phase is TimerPhase.RUNNING_SELECTING
    assert timer.snapshot().available_labels == PERIOD_LABELS

    # ticking continues while the picker is open
    factory.last.fire(2)
    timer.select_label("2nd Half")

    view = timer.snapshot()
    assert view.displayed_label == "2nd Half"
    assert not view.selecting_label
    assert timer.state.elapsed_ms == 20


def test_stop_closes_picker_and_keeps_label(timer):
    timer.toggle_running()
    timer.select_label("1st Half")
    timer.request_label_selection()
    timer.toggle_running()

    state = timer.state
    assert not state.selecting_label
    assert state.displayed_label == "1st Half"


def test_label_actions_ignored_while_stopped(timer):
    timer.request_label_selection()
    timer.select_label("1st Half")

    state = timer.state
    assert not state.selecting_label
    assert state.displayed_label is None


def test_unknown_label_ignored(timer):
    timer.toggle_running()
    timer.request_label_selection()
    timer.select_label("Overtime penalties")

    state = timer.state
    assert state.selecting_label
    assert state.displayed_label is None


def test_reset_from_any_state_is_idempotent(timer, factory):
    timer.toggle_running()
    timer.select_label("Extra Time")
    timer.request_label_selection()
    ticker = factory.last
    ticker.fire(7)

    timer.reset()
    first = timer.state
    timer.reset()

    assert timer.state == first
    assert timer.phase is TimerPhase.IDLE
    assert first.elapsed_ms == 0
    assert first.displayed_label is None
    assert ticker.cancelled
    assert ticker.fire() is False
    assert timer.state.elapsed_ms == 0


def test_running_flag_matches_ticker_ownership(timer):
    actions = [
        timer.toggle_running,
        timer.request_label_selection,
        timer.toggle_running,
        timer.toggle_running,
        timer.reset,
        timer.toggle_running,
    ]
    for action in actions:
        action()
        assert timer.state.running == timer.has_active_ticker
        if timer.state.selecting_label:
            assert timer.state.running


def test_close_cancels_ticker_and_keeps_elapsed(factory):
    timer = MatchTimer(ticker_factory=factory)
    timer.toggle_running()
    factory.last.fire(4)
    timer.close()

    assert factory.last.cancelled
    assert not timer.has_active_ticker
    assert timer.state.elapsed_ms == 40
    assert not timer.state.running


def test_render_passes_snapshot(timer):
    assert timer.render(lambda view: view.formatted_time) == "00:00.00"


def test_state_is_a_copy(timer):
    state = timer.state
    state.elapsed_ms = 999
    assert timer.state.elapsed_ms == 0


def test_abandoned_timer_stops_ticking(factory):
    timer = MatchTimer(ticker_factory=factory)
    timer.toggle_running()
    ticker = factory.last
    del timer
    gc.collect()

    assert ticker.fire() is False


# ---------------- RepeatingTicker ----------------
def test_repeating_ticker_stops_when_callback_returns_false():
    calls = []
    done = threading.Event()

    def callback():
        calls.append(1)
        if len(calls) >= 3:
            done.set()
            return False
        return True

    ticker = RepeatingTicker(0.001, callback)
    ticker.start()

    assert done.wait(2.0)
    assert ticker._stopped.wait(2.0)
    assert ticker.cancelled
    assert len(calls) == 3


def test_repeating_ticker_cancel():
    ticker = RepeatingTicker(0.001, lambda: True)
    ticker.start()
    ticker.cancel()
    assert ticker.cancelled


def test_real_ticker_advances_elapsed_time():
    with MatchTimer() as timer:
        timer.toggle_running()
        deadline = threading.Event()
        for _ in range(200):
            if timer.state.elapsed_ms >= 30:
                break
            deadline.wait(0.01)
        timer.toggle_running()

        assert timer.state.elapsed_ms >= 30
        assert timer.state.elapsed_ms % 10 == 0


def test_label_then_stop_then_reset_returns_to_idle(timer):
    timer.toggle_running()
    timer.select_label("1st Half")
    timer.toggle_running()
    timer.reset()

    state = timer.state
    assert timer.phase is TimerPhase.IDLE
    assert state.displayed_label is None
    assert not state.running
    assert not state.selecting_label


# ---------------- button rules ----------------
def test_reset_disabled_only_while_running_at_zero(timer, factory):
    assert not timer.snapshot().reset_disabled

    timer.toggle_running()
    view = timer.snapshot()
    assert view.elapsed_ms == 0
    assert view.reset_disabled

    factory.last.fire()
    assert not timer.snapshot().reset_disabled

    timer.toggle_running()
    assert not timer.snapshot().reset_disabled


def test_select_period_enabled_only_while_running_and_not_selecting(timer):
    assert timer.snapshot().select_period_disabled

    timer.toggle_running()
    assert not timer.snapshot().select_period_disabled

    timer.request_label_selection()
    assert timer.snapshot().select_period_disabled

    timer.select_label("1st Half")
    assert not timer.snapshot().select_period_disabled
