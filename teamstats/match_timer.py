"""Match timer (stopwatch) used on the sideline during games.

The timer is a small state machine driven by four operator actions
(start/stop, reset, "select period", pick a period label) and an internal
tick that adds 10 ms to the elapsed time while running. Ticks come from a
:class:`RepeatingTicker` owned by the timer: it is started when the timer
enters a running state and cancelled on stop, reset and teardown. Ticks
delivered by a cancelled ticker are ignored.

Rendering is left to the hosting view, which receives a :class:`TimerView`
snapshot through :meth:`MatchTimer.render`.
"""

from __future__ import annotations

import threading
import weakref
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence, Tuple, TypeVar

from teamstats.logs import get_logger

__all__ = [
    "PERIOD_LABELS",
    "TICK_MS",
    "MatchTimer",
    "RepeatingTicker",
    "TimerPhase",
    "TimerState",
    "TimerView",
    "format_time",
]

log = get_logger(__name__)

TICK_MS = 10

PERIOD_LABELS: Tuple[str, ...] = (
    "1st Half",
    "2nd Half",
    "3rd Half",
    "4th Half",
    "Extra Time",
    "Half-time Break",
    "Full Time",
)

T = TypeVar("T")


def format_time(elapsed_ms: int) -> str:
    """Return ``MM:SS.CC`` for ``elapsed_ms``; minutes grow past two digits."""

    ms = max(0, int(elapsed_ms))
    minutes = ms // 60000
    seconds = (ms % 60000) // 1000
    centiseconds = (ms % 1000) // 10
    return f"{minutes:02d}:{seconds:02d}.{centiseconds:02d}"


class TimerPhase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    RUNNING_SELECTING = "running_selecting"
    STOPPED = "stopped"


@dataclass
class TimerState:
    elapsed_ms: int = 0
    running: bool = False
    selecting_label: bool = False
    displayed_label: Optional[str] = None

    @property
    def phase(self) -> TimerPhase:
        if self.running:
            return TimerPhase.RUNNING_SELECTING if self.selecting_label else TimerPhase.RUNNING
        return TimerPhase.STOPPED if self.elapsed_ms > 0 else TimerPhase.IDLE


@dataclass(frozen=True)
class TimerView:
    """What the hosting view needs to draw the stopwatch."""

    formatted_time: str
    running: bool
    selecting_label: bool
    displayed_label: Optional[str]
    available_labels: Tuple[str, ...]
    elapsed_ms: int = 0

    @property
    def reset_disabled(self) -> bool:
        # nothing to reset yet
        return self.running and self.elapsed_ms == 0

    @property
    def select_period_disabled(self) -> bool:
        return not self.running or self.selecting_label


class Ticker(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TickerFactory = Callable[[float, Callable[[], bool]], Ticker]


class RepeatingTicker:
    """Call ``callback`` every ``interval`` seconds on a daemon thread.

    Stops when cancelled or when ``callback`` returns ``False``.
    """

    def __init__(self, interval: float, callback: Callable[[], Optional[bool]]) -> None:
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="match-timer-ticker", daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        self._stopped.set()

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            if self.callback() is False:
                self._stopped.set()


class MatchTimer:
    """Stopwatch with period labels.

    All public operations are total: calls that make no sense in the current
    state (picking a label while stopped) leave the state untouched.
    """

    def __init__(
        self,
        *,
        labels: Sequence[str] = PERIOD_LABELS,
        ticker_factory: TickerFactory = RepeatingTicker,
        tick_ms: int = TICK_MS,
    ) -> None:
        self.labels: Tuple[str, ...] = tuple(labels)
        self.tick_ms = tick_ms
        self._ticker_factory = ticker_factory
        self._lock = threading.RLock()
        self._state = TimerState()
        self._ticker: Optional[Ticker] = None
        self._generation = 0

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def state(self) -> TimerState:
        with self._lock:
            return replace(self._state)

    @property
    def phase(self) -> TimerPhase:
        with self._lock:
            return self._state.phase

    @property
    def has_active_ticker(self) -> bool:
        with self._lock:
            return self._ticker is not None

    def snapshot(self) -> TimerView:
        with self._lock:
            state = self._state
            return TimerView(
                formatted_time=format_time(state.elapsed_ms),
                running=state.running,
                selecting_label=state.selecting_label,
                displayed_label=state.displayed_label,
                available_labels=self.labels,
                elapsed_ms=state.elapsed_ms,
            )

    def render(self, callback: Callable[[TimerView], T]) -> T:
        return callback(self.snapshot())

    # ------------------------------------------------------------------
    # Operator actions
    # ------------------------------------------------------------------
    def toggle_running(self) -> None:
        with self._lock:
            if self._state.running:
                self._release_ticker()
                self._state.running = False
                self._state.selecting_label = False
                log.debug("Match timer stopped at %s", format_time(self._state.elapsed_ms))
            else:
                self._state.running = True
                self._acquire_ticker()
                log.debug("Match timer started at %s", format_time(self._state.elapsed_ms))

    def reset(self) -> None:
        with self._lock:
            self._release_ticker()
            self._state = TimerState()
            log.debug("Match timer reset")

    def request_label_selection(self) -> None:
        with self._lock:
            if not self._state.running:
                log.debug("Ignoring period selection request while stopped")
                return
            self._state.selecting_label = True

    def select_label(self, label: str) -> None:
        with self._lock:
            if not self._state.running:
                log.debug("Ignoring period label %r while stopped", label)
                return
            if label not in self.labels:
                log.debug("Ignoring unknown period label %r", label)
                return
            self._state.displayed_label = label
            self._state.selecting_label = False

    # ------------------------------------------------------------------
    # Ticker ownership
    # ------------------------------------------------------------------
    def close(self) -> None:
        """Cancel the ticker and stop; elapsed time and label are kept."""

        with self._lock:
            self._release_ticker()
            self._state.running = False
            self._state.selecting_label = False

    def __enter__(self) -> "MatchTimer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _acquire_ticker(self) -> None:
        self._release_ticker()
        generation = self._generation
        # weak reference: an abandoned timer must not be kept alive by its own ticker
        ref = weakref.ref(self)

        def _deliver() -> bool:
            timer = ref()
            return timer is not None and timer._on_tick(generation)

        ticker = self._ticker_factory(self.tick_ms / 1000.0, _deliver)
        self._ticker = ticker
        ticker.start()

    def _release_ticker(self) -> None:
        self._generation += 1
        ticker, self._ticker = self._ticker, None
        if ticker is not None:
            ticker.cancel()

    def _on_tick(self, generation: int) -> bool:
        with self._lock:
            if generation != self._generation or not self._state.running:
                return False
            self._state.elapsed_ms += self.tick_ms
            return True
