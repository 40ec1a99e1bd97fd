# navtemplate/events.py

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class TapDetails:
    """Details for a tap event."""
    count: int = 1


@dataclass(frozen=True)
class LongPressDetails:
    """Details for a press that was held down."""
    duration: float  # Seconds the pointer stayed down


@dataclass(frozen=True)
class PanUpdateDetails:
    """Details for a pan (drag) update event."""
    dx: float  # Change in x since the pan started
    dy: float  # Change in y since the pan started

    @property
    def distance(self) -> float:
        return math.hypot(self.dx, self.dy)
