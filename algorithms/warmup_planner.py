from schemas import BarbellConfig, WarmupSet
from .plate_calculator import PlateCalculator
from .weight_converter import WeightConverter


class WarmupPlanner:
    """Builds the fixed five-step warm-up ramp towards a working weight."""

    STAGES: tuple[tuple[int, int, str], ...] = (
        (0, 8, "Empty bar"),
        (40, 5, "Light warm-up"),
        (60, 3, "Moderate warm-up"),
        (75, 2, "Heavy warm-up"),
        (85, 1, "Working weight prep"),
    )
    BAR_ONLY = "Bar only"
    EXAMPLE_WORKING_WEIGHT: float = 100.0

    @classmethod
    def plan(cls, working_weight: float, unit: str, config: BarbellConfig) -> list[WarmupSet]:
        """Return the warm-up sets for ``working_weight``, lightest first."""
        sets: list[WarmupSet] = []
        for percentage, reps, description in cls.STAGES:
            if percentage == 0:
                weight = config.bar
                plates = cls.BAR_ONLY
            else:
                # plate math needs whole units
                weight = WeightConverter.round_half_up(working_weight * percentage / 100)
                result = PlateCalculator.calculate(weight, config)
                plates = PlateCalculator.describe(result, config, unit)
            sets.append(
                WarmupSet(
                    percentage=percentage,
                    reps=reps,
                    weight=weight,
                    plates=plates,
                    description=description,
                )
            )
        return sets

    @staticmethod
    def format_set(warmup_set: WarmupSet) -> str:
        if warmup_set.percentage == 0:
            return f"{warmup_set.reps} reps"
        return f"{warmup_set.percentage}% × {warmup_set.reps} reps"
