"""Immutable inputs of one sampling call: the equation and its domain.

An ``Equation`` pairs an orientation (which axis is swept) with the formula
text. A ``Domain`` is the inclusive numeric range swept over the independent
variable. Both are frozen and carry no identity across calls; a UI builds a
fresh pair from its current field values every time it asks for points.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .InputConvert import InputConvert

__all__ = ["Domain", "Equation", "Orientation"]


class Orientation(str, Enum):
    """Which variable the formula defines.

    ``Y_OF_X`` is ``y = f(x)``: ``x`` is swept and ``y`` computed.
    ``X_OF_Y`` is ``x = f(y)``.
    """

    Y_OF_X = "y"
    X_OF_Y = "x"

    @property
    def dependent(self) -> str:
        """Name of the computed variable."""
        return self.value

    @property
    def independent(self) -> str:
        """Name of the swept variable."""
        return "x" if self is Orientation.Y_OF_X else "y"

    @classmethod
    def from_name(cls, name: "str | Orientation") -> "Orientation":
        """Resolve ``"y"``/``"x"`` (the left-hand side) or an enum member name."""
        if isinstance(name, Orientation):
            return name
        key = str(name).strip()
        for member in cls:
            if key.lower() == member.value or key.upper() == member.name:
                return member
        raise ValueError(f"Unknown orientation {name!r}; expected 'y' or 'x'.")


@dataclass(frozen=True)
class Equation:
    """An equation ``<dependent> = <expression>``.

    Parameters
    ----------
    orientation : Orientation
        Selects the dependent (left-hand side) variable.
    expression : str
        Right-hand side exactly as typed.
    """

    orientation: Orientation
    expression: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "orientation", Orientation.from_name(self.orientation))

    @property
    def is_blank(self) -> bool:
        return not self.expression.strip()

    @property
    def label(self) -> str:
        """Header text such as ``"Y = SIN(X)"``."""
        return f"{self.orientation.dependent.upper()} = {self.expression.upper()}"


@dataclass(frozen=True)
class Domain:
    """Inclusive sweep range ``[start, end]`` of the independent variable.

    ``start > end`` is allowed and samples to zero points.
    """

    start: float
    end: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", float(self.start))
        object.__setattr__(self, "end", float(self.end))

    @classmethod
    def from_values(cls, start: Any, end: Any) -> "Domain":
        """Build a domain from numbers or formula text such as ``"-2*pi"``.

        Raises
        ------
        ValueError
            If either bound cannot be converted to a real number.
        """
        return cls(InputConvert(start, float), InputConvert(end, float))

    @property
    def span(self) -> float:
        """Length ``end - start``; the regular sweep step is a fraction of it."""
        return self.end - self.start

    def as_tuple(self) -> tuple[float, float]:
        return (self.start, self.end)
