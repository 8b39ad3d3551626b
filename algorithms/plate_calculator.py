from schemas import DEFAULT_BAR, BarbellConfig, PlateResult, PlateSpec, default_plates
from .weight_converter import WeightConverter


class PlateCalculator:
    """Greedy plate math for a barbell loaded symmetrically on both sides.

    Each available denomination is used at most once per side and plates are
    picked largest-first without backtracking, so a remainder may be left even
    when some other combination would hit the target exactly.
    """

    EPSILON: float = 1e-9

    @staticmethod
    def default_config(unit: str) -> BarbellConfig:
        return BarbellConfig(unit=unit, bar=DEFAULT_BAR[unit], plates=default_plates(unit))

    @classmethod
    def calculate(cls, target_weight: float, config: BarbellConfig) -> PlateResult:
        """Return the plates needed per side to reach ``target_weight``."""
        per_side = (target_weight - config.bar) / 2
        if per_side <= 0:
            shortfall = abs(target_weight - config.bar)
            return PlateResult(
                plates=[],
                total=config.bar,
                remainder=WeightConverter.round_for_display(shortfall, config.unit),
            )

        available = sorted(
            (p for p in config.plates if p.available),
            key=lambda p: p.weight,
            reverse=True,
        )
        chosen: list[PlateSpec] = []
        total = config.bar
        for plate in available:
            if per_side + cls.EPSILON >= plate.weight:
                chosen.append(plate)
                per_side -= plate.weight
                total += plate.weight * 2

        remainder = WeightConverter.round_for_display(per_side, config.unit)
        return PlateResult(plates=chosen, total=total, remainder=max(0.0, remainder))

    @staticmethod
    def set_availability(config: BarbellConfig, index: int, available: bool) -> BarbellConfig:
        """Return a copy of ``config`` with one plate toggled."""
        if index < 0 or index >= len(config.plates):
            raise IndexError(f"no plate at index {index}")
        plates = list(config.plates)
        plates[index] = PlateSpec(weight=plates[index].weight, available=available)
        return BarbellConfig(unit=config.unit, bar=config.bar, plates=plates)

    @staticmethod
    def is_valid_target(target_weight: float, config: BarbellConfig) -> bool:
        return target_weight > config.bar

    @staticmethod
    def target_hint(target_weight: float, config: BarbellConfig) -> str | None:
        if target_weight <= config.bar:
            bar = WeightConverter.format_weight(config.bar)
            return f"Weight must be greater than bar weight ({bar} {config.unit})"
        return None

    @staticmethod
    def describe(result: PlateResult, config: BarbellConfig, unit: str | None = None) -> str:
        """Human readable loading, e.g. ``20 bar + 25 kg + 10 kg per side``."""
        unit = unit or config.unit
        bar = WeightConverter.format_weight(config.bar)
        if not result.plates:
            return f"{bar} {unit} bar"
        plate_list = " + ".join(
            f"{WeightConverter.format_weight(p.weight)} {unit}" for p in result.plates
        )
        return f"{bar} bar + {plate_list} per side"
