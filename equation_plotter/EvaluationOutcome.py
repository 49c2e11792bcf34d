"""Result types of one sampling call.

``sample`` always returns an ``EvaluationOutcome``: a tag (``OutcomeKind``)
plus a ``PointSet`` that is non-empty only for ``OutcomeKind.POINTS``. The
UI maps the tag to one of the fixed messages in ``OUTCOME_MESSAGES``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence

import numpy as np

__all__ = ["OUTCOME_MESSAGES", "EvaluationOutcome", "OutcomeKind", "PointSet"]


class OutcomeKind(str, Enum):
    POINTS = "points"
    EMPTY_EXPRESSION = "empty_expression"
    SELF_REFERENTIAL = "self_referential"
    NO_VALID_POINTS = "no_valid_points"
    SYNTAX_OR_RUNTIME_ERROR = "syntax_or_runtime_error"


OUTCOME_MESSAGES: Dict[OutcomeKind, str] = {
    OutcomeKind.POINTS: "",
    OutcomeKind.EMPTY_EXPRESSION: "Please enter an equation",
    OutcomeKind.SELF_REFERENTIAL: "Invalid equation: contains direct self-reference",
    OutcomeKind.NO_VALID_POINTS: "Error: Unable to generate valid points for the equation.",
    OutcomeKind.SYNTAX_OR_RUNTIME_ERROR: "Invalid equation. Please check syntax.",
}


def _frozen_array(values: Sequence[float]) -> np.ndarray:
    array = np.array(values, dtype=float).reshape(-1)
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class PointSet:
    """Index-aligned x/y samples in evaluation order.

    Parameters
    ----------
    xs, ys : sequence of float
        Coordinates; stored as read-only float arrays of equal length.
        Point ``i`` is ``(xs[i], ys[i])``. Order follows the sweep, with
        multi-valued branches at one sample appended consecutively.
    """

    xs: np.ndarray
    ys: np.ndarray

    def __post_init__(self) -> None:
        xs = _frozen_array(self.xs)
        ys = _frozen_array(self.ys)
        if xs.shape != ys.shape:
            raise ValueError(
                f"PointSet requires equal-length coordinates; got {xs.size} xs and {ys.size} ys."
            )
        object.__setattr__(self, "xs", xs)
        object.__setattr__(self, "ys", ys)

    @classmethod
    def empty(cls) -> "PointSet":
        return cls(xs=(), ys=())

    def __len__(self) -> int:
        return int(self.xs.size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointSet):
            return NotImplemented
        return np.array_equal(self.xs, other.xs) and np.array_equal(self.ys, other.ys)

    @property
    def is_empty(self) -> bool:
        return self.xs.size == 0

    def to_dict(self) -> Dict[str, List[float]]:
        """Return ``{"x": [...], "y": [...]}`` as consumed by a scatter trace."""
        return {"x": self.xs.tolist(), "y": self.ys.tolist()}


@dataclass(frozen=True)
class EvaluationOutcome:
    """Tagged result of :func:`equation_plotter.sampler.sample`.

    Parameters
    ----------
    kind : OutcomeKind
        Exactly one tag per sampling call.
    points : PointSet
        Sampled points; empty unless ``kind`` is ``OutcomeKind.POINTS``.
    detail : str
        Developer-facing diagnostic (e.g. the parser message). Not shown to
        users; ``message`` is.
    """

    kind: OutcomeKind
    points: PointSet = field(default_factory=PointSet.empty)
    detail: str = ""

    @classmethod
    def failure(cls, kind: OutcomeKind, detail: str = "") -> "EvaluationOutcome":
        if kind is OutcomeKind.POINTS:
            raise ValueError("failure() requires a non-POINTS outcome kind.")
        return cls(kind=kind, points=PointSet.empty(), detail=detail)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.POINTS

    @property
    def message(self) -> str:
        """User-facing message; empty for a successful outcome."""
        return OUTCOME_MESSAGES[self.kind]

    def __repr__(self) -> str:
        return f"EvaluationOutcome(kind={self.kind.value!r}, points={len(self.points)})"
