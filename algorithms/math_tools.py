import math
from typing import Iterable, Sequence

import numpy as np

from schemas import CalculationResult, InputCheck


class MathTools:
    """Provides the one-rep max estimators and input validation."""

    EPLEY_DIVISOR: float = 30.0
    BRZYCKI_NUMERATOR: float = 36.0
    BRZYCKI_LIMIT: int = 37
    LOMBARDI_EXPONENT: float = 0.1
    MIN_REPS: int = 1
    MAX_REPS: int = 20
    ACCURATE_REPS: int = 10
    FORMULAS: tuple[str, ...] = ("epley", "brzycki", "lombardi")

    @classmethod
    def epley_1rm(cls, weight: float, reps: int) -> float:
        """Return the estimated one-rep max using the Epley formula."""
        return weight * (1 + reps / cls.EPLEY_DIVISOR)

    @classmethod
    def brzycki_1rm(cls, weight: float, reps: int) -> float:
        """Return the Brzycki estimate; saturates to ``weight`` at 37+ reps."""
        if reps >= cls.BRZYCKI_LIMIT:
            return weight
        return weight * (cls.BRZYCKI_NUMERATOR / (cls.BRZYCKI_LIMIT - reps))

    @classmethod
    def lombardi_1rm(cls, weight: float, reps: int) -> float:
        """Return the estimated one-rep max using the Lombardi formula."""
        return weight * math.pow(reps, cls.LOMBARDI_EXPONENT)

    @staticmethod
    def median(values: Iterable[float]) -> float:
        """Return the median of ``values`` or 0 for an empty input."""
        data = list(values)
        if not data:
            return 0.0
        return float(np.median(np.array(data, dtype=float)))

    @classmethod
    def estimate_one_rep_max(
        cls,
        weight: float,
        reps: int,
        formulas: Sequence[str] | None = None,
    ) -> CalculationResult:
        """Estimate 1RM with every formula and aggregate the enabled ones.

        ``best`` is the median of the enabled estimates, which keeps a single
        outlying formula from dragging the result at low or high rep counts.
        """
        enabled = list(formulas) if formulas is not None else list(cls.FORMULAS)
        if not enabled:
            raise ValueError("at least one formula must be enabled")
        unknown = [f for f in enabled if f not in cls.FORMULAS]
        if unknown:
            raise ValueError(f"unknown formula: {', '.join(unknown)}")
        estimates = {
            "epley": cls.epley_1rm(weight, reps),
            "brzycki": cls.brzycki_1rm(weight, reps),
            "lombardi": cls.lombardi_1rm(weight, reps),
        }
        # duplicates would skew the median
        enabled = list(dict.fromkeys(enabled))
        best = cls.median(estimates[f] for f in enabled)
        return CalculationResult(**estimates, best=best, formulas=enabled)

    @classmethod
    def validate_inputs(cls, weight: float, reps: int) -> InputCheck:
        """Check a weight/reps pair before estimation.

        Blocking problems come back as ``error``; a high rep count only sets
        ``warning`` since the estimate is still computed.
        """
        if not (math.isfinite(weight) and weight > 0):
            return InputCheck(error="Weight must be greater than 0")
        if reps < cls.MIN_REPS or reps > cls.MAX_REPS:
            return InputCheck(
                error=f"Reps must be between {cls.MIN_REPS} and {cls.MAX_REPS}"
            )
        if reps > cls.ACCURATE_REPS:
            return InputCheck(
                warning=f"Estimates less accurate at >{cls.ACCURATE_REPS} reps"
            )
        return InputCheck()

    @staticmethod
    def parse_inputs(weight: str | float, reps: str | int) -> tuple[float, int]:
        """Parse raw form values; garbage becomes values the validator rejects."""
        try:
            weight_val = float(weight)
        except (TypeError, ValueError):
            weight_val = math.nan
        try:
            reps_val = int(float(reps))
        except (TypeError, ValueError, OverflowError):
            reps_val = 0
        return weight_val, reps_val
