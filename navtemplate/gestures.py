# navtemplate/gestures.py
"""
Gesture recognizers and the erased gesture used by widget erasure.

A recognizer looks at an event's details and either produces a payload
(the gesture "fired") or returns ``NOT_RECOGNIZED``. `AnyGesture` throws the
payload away so the only thing a holder can observe is whether it fired.
"""
import logging
from typing import Any, Callable, Optional, Tuple

from .events import LongPressDetails, PanUpdateDetails, TapDetails

logger = logging.getLogger(__name__)


class _NotRecognized:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "NOT_RECOGNIZED"


NOT_RECOGNIZED = _NotRecognized()


class Gesture:
    """
    Base class for gesture recognizers.

    :param action: Optional callback invoked with the payload whenever the gesture fires.
    """
    def __init__(self, action: Optional[Callable[[Any], None]] = None):
        self.action = action

    def recognize(self, details: Any) -> Any:
        """Return the payload for ``details``, or NOT_RECOGNIZED."""
        raise NotImplementedError(f"{self.__class__.__name__} must implement recognize()")

    def fire(self, details: Any) -> bool:
        """Run recognition and invoke the action with the payload if it fired."""
        return self._fire_payload(details) is not NOT_RECOGNIZED

    def _fire_payload(self, details: Any) -> Any:
        payload = self.recognize(details)
        if payload is not NOT_RECOGNIZED and self.action:
            self.action(payload)
        return payload

    def map(self, transform: Callable[[Any], Any]) -> 'MappedGesture':
        """Returns a gesture that fires together with this one and transforms its payload."""
        return MappedGesture(self, transform)


class TapGesture(Gesture):
    """Fires on a tap with at least ``count`` consecutive clicks. Payload is None."""
    def __init__(self, count: int = 1, action: Optional[Callable[[Any], None]] = None):
        super().__init__(action)
        self.count = count

    def recognize(self, details: Any) -> Any:
        if isinstance(details, TapDetails) and details.count >= self.count:
            return None
        return NOT_RECOGNIZED


class LongPressGesture(Gesture):
    """Fires when a press is held for ``minimum_duration`` seconds. Payload is True."""
    def __init__(self, minimum_duration: float = 0.5, action: Optional[Callable[[Any], None]] = None):
        super().__init__(action)
        self.minimum_duration = minimum_duration

    def recognize(self, details: Any) -> Any:
        if isinstance(details, LongPressDetails) and details.duration >= self.minimum_duration:
            return True
        return NOT_RECOGNIZED


class DragGesture(Gesture):
    """Fires once a pan travels ``minimum_distance`` points. Payload is the PanUpdateDetails."""
    def __init__(self, minimum_distance: float = 10, action: Optional[Callable[[Any], None]] = None):
        super().__init__(action)
        self.minimum_distance = minimum_distance

    def recognize(self, details: Any) -> Any:
        if isinstance(details, PanUpdateDetails) and details.distance >= self.minimum_distance:
            return details
        return NOT_RECOGNIZED


class MappedGesture(Gesture):
    """A gesture whose payload is ``transform(payload)`` of the wrapped gesture."""
    def __init__(self, base: Gesture, transform: Callable[[Any], Any],
                 action: Optional[Callable[[Any], None]] = None):
        super().__init__(action)
        self.base = base
        self.transform = transform

    def recognize(self, details: Any) -> Any:
        payload = self.base.recognize(details)
        if payload is NOT_RECOGNIZED:
            return NOT_RECOGNIZED
        return self.transform(payload)

    def _fire_payload(self, details: Any) -> Any:
        # The wrapped gesture's own action still runs.
        payload = self.base._fire_payload(details)
        if payload is NOT_RECOGNIZED:
            return NOT_RECOGNIZED
        payload = self.transform(payload)
        if self.action:
            self.action(payload)
        return payload


class AnyGesture:
    """
    An erased gesture whose only observable effect is whether it fired.

    The wrapped gesture's payload (drag distance, press flag...) is mapped to
    None and never exposed. Instances are immutable; `on_ended` returns a copy.

    :param gesture: The recognizer to erase.
    """
    def __init__(self, gesture: Gesture, actions: Tuple[Callable[[], None], ...] = ()):
        if isinstance(gesture, AnyGesture):
            self._gesture: MappedGesture = gesture._gesture
            self._actions: Tuple[Callable[[], None], ...] = gesture._actions + tuple(actions)
        else:
            self._gesture = gesture.map(lambda _: None)
            self._actions = tuple(actions)

    @property
    def gesture(self) -> Gesture:
        return self._gesture

    def on_ended(self, action: Callable[[], None]) -> 'AnyGesture':
        """Returns a copy of this gesture that also calls ``action`` when it fires."""
        return AnyGesture(self, (action,))

    def handle(self, details: Any) -> bool:
        """Feed an event to the gesture. Returns True if it fired."""
        if not self._gesture.fire(details):
            return False
        logger.debug("Gesture %s fired", type(self._gesture.base).__name__)
        for action in self._actions:
            action()
        return True

    def __repr__(self):
        return f"AnyGesture({type(self._gesture.base).__name__})"
