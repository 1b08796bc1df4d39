"""
Progress events and observer registration for the training pipeline.

Observers are called synchronously, in subscription order, on the thread
that emits the event.
"""

import logging
import time
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class EventKind(Enum):
    """Notification kinds emitted by the pipeline."""
    PREPROCESSING_PROGRESS = "preprocessing_progress"
    TRAINING_PROGRESS = "training_progress"
    TRAINING_COMPLETE = "training_complete"
    TRAINING_ERROR = "training_error"


@dataclass(frozen=True)
class PreprocessingProgress:
    current: int
    total: int

    @property
    def progress(self) -> float:
        """Percent complete, 0-100."""
        if self.total == 0:
            return 100.0
        return self.current / self.total * 100


@dataclass(frozen=True)
class TrainingProgress:
    epoch: int
    total_epochs: int
    loss: float
    accuracy: float

    @property
    def progress(self) -> float:
        """Percent complete, 0-100."""
        if self.total_epochs == 0:
            return 100.0
        return self.epoch / self.total_epochs * 100


@dataclass(frozen=True)
class TrainingComplete:
    model: Any  # TrainedModel


@dataclass(frozen=True)
class TrainingFailed:
    error: BaseException


_EVENT_KINDS = {
    PreprocessingProgress: EventKind.PREPROCESSING_PROGRESS,
    TrainingProgress: EventKind.TRAINING_PROGRESS,
    TrainingComplete: EventKind.TRAINING_COMPLETE,
    TrainingFailed: EventKind.TRAINING_ERROR,
}

Observer = Callable[[Any], None]


class EventBus:
    """
    Register observers per event kind and deliver events to them.

    An observer that raises is logged and skipped, so one bad subscriber
    cannot abort a training run. Observers taking longer than
    ``slow_observer_seconds`` are reported as warnings.
    """

    def __init__(self, slow_observer_seconds: float = 1.0):
        self.slow_observer_seconds = slow_observer_seconds
        self._observers: DefaultDict[EventKind, List[Observer]] = defaultdict(list)

    def subscribe(self, kind: EventKind, callback: Observer) -> Callable[[], None]:
        """
        Register a callback for an event kind.

        Returns:
            A function that removes the subscription.
        """
        self._observers[kind].append(callback)
        return lambda: self.unsubscribe(kind, callback)

    def unsubscribe(self, kind: EventKind, callback: Observer) -> bool:
        observers = self._observers.get(kind, [])
        if callback in observers:
            observers.remove(callback)
            return True
        return False

    def observer_count(self, kind: Optional[EventKind] = None) -> int:
        if kind is not None:
            return len(self._observers.get(kind, []))
        return sum(len(observers) for observers in self._observers.values())

    def emit(self, event: Any) -> None:
        """Deliver an event to every observer of its kind."""
        kind = _EVENT_KINDS[type(event)]

        for callback in list(self._observers.get(kind, [])):
            started = time.monotonic()
            try:
                callback(event)
            except Exception:
                logger.exception("Observer %r failed handling %s", callback, kind.value)
            elapsed = time.monotonic() - started
            if elapsed > self.slow_observer_seconds:
                logger.warning(
                    "Observer %r took %.2fs handling %s", callback, elapsed, kind.value
                )
