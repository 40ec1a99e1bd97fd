# navtemplate/animation.py
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Animation:
    """
    Describes how a state change should be animated by whoever renders it.

    Correctness never depends on it; a renderer is free to ignore it.
    """
    curve: str
    duration: Optional[float] = None
    response: Optional[float] = None
    damping_fraction: Optional[float] = None
    blend_duration: Optional[float] = None

    @classmethod
    def spring(cls, response: float = 0.55, damping_fraction: float = 0.825,
               blend_duration: float = 0.0) -> 'Animation':
        return cls(curve="spring", response=response,
                   damping_fraction=damping_fraction, blend_duration=blend_duration)

    @classmethod
    def ease_in_out(cls, duration: float = 0.35) -> 'Animation':
        return cls(curve="ease-in-out", duration=duration)

    def to_css(self) -> str:
        """CSS transition shorthand approximating this animation."""
        if self.curve == "spring":
            # Under-damped springs overshoot, which a back-out bezier mimics.
            overshoot = round(1.0 + (1.0 - (self.damping_fraction or 1.0)), 3)
            return f"all {self.response}s cubic-bezier(0.34, {overshoot}, 0.64, 1)"
        return f"all {self.duration}s ease-in-out"


@dataclass(frozen=True)
class Transaction:
    """A single committed state change and the animation it was wrapped in."""
    animation: Optional[Animation] = None
