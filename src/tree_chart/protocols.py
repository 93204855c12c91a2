"""Clock Protocol for the transition-timing extension point.

The renderer stamps every transition with the current clock reading and the
presentation layer samples transitions against the same clock.  Any
zero-argument callable returning seconds as a float satisfies the protocol —
``time.monotonic`` is the default, tests pass a controllable fake.

Example::

    from tree_chart.protocols import Clock

    class FrameClock:
        def __init__(self) -> None:
            self.now = 0.0

        def __call__(self) -> float:
            return self.now

    assert isinstance(FrameClock(), Clock)  # True — structural conformance
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Structural protocol for monotonic clocks measured in seconds."""

    def __call__(self) -> float: ...
