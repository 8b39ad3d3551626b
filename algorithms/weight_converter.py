import math

from schemas import AVAILABLE_BARS, DEFAULT_BAR, UNITS


class WeightConverter:
    """Utility for converting between kg and lb."""

    KG_TO_LB = 2.20462262185
    LB_TO_KG = 1 / KG_TO_LB
    DISPLAY_STEP = {"kg": 0.5, "lb": 1.0}

    @staticmethod
    def kg_to_lb(kg: float) -> float:
        return kg * WeightConverter.KG_TO_LB

    @staticmethod
    def lb_to_kg(lb: float) -> float:
        return lb * WeightConverter.LB_TO_KG

    @staticmethod
    def _check_unit(unit: str) -> None:
        if unit not in UNITS:
            raise ValueError(f"unknown unit: {unit}")

    @classmethod
    def convert(cls, weight: float, from_unit: str, to_unit: str) -> float:
        """Convert ``weight`` from ``from_unit`` to ``to_unit`` without rounding."""
        cls._check_unit(from_unit)
        cls._check_unit(to_unit)
        if from_unit == to_unit:
            return weight
        if from_unit == "kg":
            return cls.kg_to_lb(weight)
        return cls.lb_to_kg(weight)

    @staticmethod
    def round_half_up(value: float, step: float = 1.0) -> float:
        """Round ``value`` to a multiple of ``step``; exact halves go up.

        Values too large to scale by ``step`` are returned unchanged.
        """
        scaled = value / step
        if not math.isfinite(scaled):
            return value
        return math.floor(scaled + 0.5) * step

    @classmethod
    def round_for_display(cls, weight: float, unit: str) -> float:
        """Round for presentation: kg to the nearest 0.5, lb to the nearest 1."""
        cls._check_unit(unit)
        return float(cls.round_half_up(weight, cls.DISPLAY_STEP[unit]))

    @staticmethod
    def format_weight(value: float) -> str:
        value = float(value)
        if value.is_integer():
            return str(int(value))
        return repr(value)

    @classmethod
    def default_bar(cls, unit: str) -> float:
        cls._check_unit(unit)
        return DEFAULT_BAR[unit]

    @classmethod
    def available_bars(cls, unit: str) -> list[float]:
        cls._check_unit(unit)
        return list(AVAILABLE_BARS[unit])
