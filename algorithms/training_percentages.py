from schemas import PercentageRow
from .weight_converter import WeightConverter


class TrainingPercentages:
    """Percent-of-1RM table with the rep range each intensity suits."""

    ROWS: tuple[tuple[int, str, str], ...] = (
        (95, "2-3", "Maximal strength"),
        (90, "3-4", "Heavy strength"),
        (85, "5-6", "Strength endurance"),
        (80, "7-8", "Hypertrophy"),
        (75, "8-10", "Muscle building"),
        (70, "10-12", "Endurance"),
        (65, "12-15", "Light endurance"),
        (60, "15+", "Technique work"),
        (50, "Technique", "Form practice"),
    )
    SHARE_ROWS: tuple[tuple[int, str], ...] = (
        (80, "3-5 reps"),
        (85, "2-3 reps"),
        (90, "1-2 reps"),
        (95, "1 rep"),
    )

    @classmethod
    def table(cls, one_rm: float, unit: str) -> list[PercentageRow]:
        rows = []
        for percent, reps, description in cls.ROWS:
            weight = one_rm * percent / 100
            rows.append(
                PercentageRow(
                    percent=percent,
                    reps=reps,
                    description=description,
                    weight=weight,
                    display_weight=WeightConverter.round_for_display(weight, unit),
                )
            )
        return rows

    @classmethod
    def share_lines(cls, one_rm: float, unit: str) -> list[str]:
        lines = []
        for percent, reps in cls.SHARE_ROWS:
            shown = WeightConverter.round_for_display(one_rm * percent / 100, unit)
            lines.append(f"{percent}%: {WeightConverter.format_weight(shown)} {unit} ({reps})")
        return lines
