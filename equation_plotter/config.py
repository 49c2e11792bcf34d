"""Sampler configuration and application defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .Equation import Domain
from .power_resolver import MAX_DENOMINATOR, RATIONAL_TOLERANCE

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_DOMAIN",
    "DEFAULT_EXPRESSION",
    "SamplerConfig",
]


@dataclass(frozen=True)
class SamplerConfig:
    """Tunable limits of :func:`equation_plotter.sampler.sample`.

    Parameters
    ----------
    divisions : int
        The regular step is ``(end - start) / divisions``.
    unit_step : float
        Step used when the formula calls ``pow`` on a negative literal base.
    max_samples : int
        Ceiling on samples per sweep; longer sweeps are truncated at the end
        of the domain.
    max_denominator, tolerance
        Rational approximation limits forwarded to the power resolver.
    """

    divisions: int = 200
    unit_step: float = 1.0
    max_samples: int = 10_000
    max_denominator: int = MAX_DENOMINATOR
    tolerance: float = RATIONAL_TOLERANCE

    def __post_init__(self) -> None:
        if self.divisions <= 0:
            raise ValueError("divisions must be > 0")
        if not self.unit_step > 0:
            raise ValueError("unit_step must be > 0")
        if self.max_samples <= 0:
            raise ValueError("max_samples must be > 0")
        if self.max_denominator <= 0:
            raise ValueError("max_denominator must be > 0")


DEFAULT_CONFIG = SamplerConfig()
DEFAULT_DOMAIN = Domain(-10.0, 10.0)
DEFAULT_EXPRESSION = "x"
