"""
Prediction session — the playground's request lifecycle.

    idle → analyzing → calculating → predicting → complete

The caller drives every transition and decides how long to dwell in each
transitional state; nothing here sleeps or schedules. start() snapshots the
inputs, so edits made mid-flight only affect the next run. Changing any
input while a result is held returns the session to idle.
"""

import enum
import logging
from dataclasses import replace
from typing import Optional

from pipeline.classification.classifier import Category, category_of
from pipeline.scoring.predictor import DEFAULT_INPUT, VARIABLE_BOUNDS, ScoringInput, predict

logger = logging.getLogger(__name__)


class PredictionState(str, enum.Enum):
    idle = "idle"
    analyzing = "analyzing"
    calculating = "calculating"
    predicting = "predicting"
    complete = "complete"


_NEXT_STATE = {
    PredictionState.idle:        PredictionState.analyzing,
    PredictionState.analyzing:   PredictionState.calculating,
    PredictionState.calculating: PredictionState.predicting,
    PredictionState.predicting:  PredictionState.complete,
}

STATUS_LINES = {
    PredictionState.idle:        "Ready to predict",
    PredictionState.analyzing:   "Analyzing variables",
    PredictionState.calculating: "Computing factors",
    PredictionState.predicting:  "Predicting AQI",
    PredictionState.complete:    "Prediction complete",
}


class InvalidTransition(Exception):
    """Raised for a transition the current state does not allow."""


class PredictionSession:
    """Holds the input vector, the current state and, once complete, the result."""

    def __init__(self, variables: Optional[ScoringInput] = None):
        self.variables = variables or DEFAULT_INPUT
        self.state = PredictionState.idle
        self.result: Optional[int] = None
        self._scored: Optional[ScoringInput] = None

    @property
    def status_line(self) -> str:
        return STATUS_LINES[self.state]

    @property
    def category(self) -> Optional[Category]:
        return category_of(self.result) if self.result is not None else None

    def start(self) -> PredictionState:
        """
        Begin a new prediction from idle or complete, discarding a held result.

        Raises:
            InvalidTransition: A prediction is already in flight.
        """
        if self.state not in (PredictionState.idle, PredictionState.complete):
            raise InvalidTransition(f"Prediction already in flight (state '{self.state.value}')")
        self.state = PredictionState.idle
        self.result = None
        return self.advance()

    def advance(self) -> PredictionState:
        """
        Move to the next state. Leaving `idle` snapshots the inputs and
        entering `complete` runs predict() on that snapshot.

        Raises:
            InvalidTransition: Called while already complete.
        """
        nxt = _NEXT_STATE.get(self.state)
        if nxt is None:
            raise InvalidTransition(f"No transition out of state '{self.state.value}'")
        if self.state is PredictionState.idle:
            self._scored = self.variables
        if nxt is PredictionState.complete:
            self.result = predict(self._scored)
            logger.debug("Prediction complete: aqi=%s", self.result)
        self.state = nxt
        return self.state

    def run(self) -> int:
        """Drive start → complete without dwelling and return the result."""
        self.start()
        while self.state is not PredictionState.complete:
            self.advance()
        return self.result

    def update_variable(self, name: str, value: float) -> None:
        """Set one input; a held result is dropped and the session goes idle."""
        if name not in VARIABLE_BOUNDS:
            raise KeyError(f"Unknown variable: {name}")
        self.variables = replace(self.variables, **{name: value})
        if self.state is PredictionState.complete:
            self.state = PredictionState.idle
            self.result = None

    def increment(self, name: str) -> None:
        """Add 1 unless already at the declared maximum."""
        _, upper = VARIABLE_BOUNDS[name]
        current = getattr(self.variables, name)
        if current < upper:
            self.update_variable(name, current + 1)

    def decrement(self, name: str) -> None:
        """Subtract 1 unless already at the declared minimum."""
        lower, _ = VARIABLE_BOUNDS[name]
        current = getattr(self.variables, name)
        if current > lower:
            self.update_variable(name, current - 1)

    def reset(self) -> None:
        """Restore default inputs and return to idle."""
        self.variables = DEFAULT_INPUT
        self.state = PredictionState.idle
        self.result = None
        self._scored = None
