# === SECTION: InputConvert [id: InputConvert]===
from __future__ import annotations

import math
from typing import Any, Type, TypeVar

from .expression import ExpressionError, parse_expression

T = TypeVar("T", int, float)


def InputConvert(obj: Any, dest_type: Type[T] = float, truncate: bool = True) -> T:
    """
    Convert `obj` (a number or user-typed text) to `dest_type`.

    Supported destination types:
    - float
    - int

    Rules:
    - If `obj` is a number: cast via dest_type(obj).
    - If `obj` is a string:
        1) try float(s)
        2) else parse it as a constant formula (e.g. "-2*pi", "sqrt(2)/2")
           with the plotter's own formula parser, and take its first value.
           Nothing is executed; only the formula language is accepted.

    Truncation Rules (`truncate`):
    - When converting Float -> Int:
        - If `truncate=True`: Truncate decimal part (e.g., 3.9 -> 3).
        - If `truncate=False`: Require exact integer (e.g., 3.0 -> 3, 3.1 -> Error).

    Raises
    ------
    NotImplementedError
        If dest_type is unsupported.
    ValueError
        If conversion fails, the value is not finite, or violates truncation rules.
    """
    if dest_type not in (float, int):
        raise NotImplementedError(
            f"Unsupported destination type: {dest_type!r}. Only float and int are supported."
        )

    def _coerce_real(value: float) -> T:
        if not math.isfinite(value):
            raise ValueError(f"Could not convert {obj!r} to {dest_type.__name__}: value is not finite.")
        if dest_type is float:
            return float(value)  # type: ignore[return-value]

        if not float(value).is_integer() and not truncate:
            raise ValueError(
                f"Could not convert {obj!r} to int: value is not an exact integer."
            )
        # int() truncates towards zero
        return int(value)  # type: ignore[return-value]

    # Fast path: numeric types (exclude bool)
    if isinstance(obj, (int, float)) and not isinstance(obj, bool):
        return _coerce_real(float(obj))

    if isinstance(obj, str):
        s = obj.strip()
        if s == "":
            raise ValueError(f"Cannot convert empty string to {dest_type.__name__}.")

        try:
            return _coerce_real(float(s))
        except ValueError:
            pass

        try:
            values = parse_expression(s).evaluate({})
        except ExpressionError as e:
            raise ValueError(
                f"Could not convert {obj!r} to {dest_type.__name__} (neither directly nor as a formula)."
            ) from e
        if not values:
            raise ValueError(f"Could not convert {obj!r} to {dest_type.__name__}: formula has no real value.")
        return _coerce_real(values[0])

    # Fallback: numpy scalars and other float-likes
    try:
        return _coerce_real(float(obj))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Could not convert {obj!r} to {dest_type.__name__}.") from e

# === END OF SECTION: InputConvert [id: InputConvert]===
