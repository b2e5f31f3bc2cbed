"""Shared test helpers for PomoWidget."""

from dataclasses import replace

from pomowidget.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeHost:
    """Records the window-level calls the dispatcher makes."""

    def __init__(self):
        self.calls: list = []

    def minimize(self):
        self.calls.append(("minimize",))

    def close_app(self):
        self.calls.append(("close_app",))

    def set_draggable(self, draggable):
        self.calls.append(("set_draggable", draggable))

    def set_transparent(self, transparent):
        self.calls.append(("set_transparent", transparent))


def set_time_left(engine: TimerEngine, seconds: int) -> None:
    """Jump the clock without going through a broadcast."""
    engine._state = replace(engine._state, time_left=seconds)


def run_ticks(engine: TimerEngine, count: int) -> None:
    for _ in range(count):
        engine._on_tick()


def complete_session(engine: TimerEngine) -> None:
    """Fast-complete the current session by jumping to the last tick."""
    if not engine.is_running:
        engine.start()
    set_time_left(engine, 1)
    engine._on_tick()
