from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Sequence

from algorithms import (
    MathTools,
    PlateCalculator,
    TrainingPercentages,
    WarmupPlanner,
    WeightConverter,
)
from schemas import (
    UNITS,
    AppState,
    CalculationRecord,
    PercentageRow,
    PlateResult,
    StateOverride,
    WarmupSet,
)
from state_service import StateService

logger = logging.getLogger(__name__)


class CalculatorService:
    """Owns the session state and runs the calculator workflows on it."""

    def __init__(self, state_service: StateService, query: str | Mapping[str, Any] | None = None) -> None:
        self.states = state_service
        self.state: AppState = state_service.initial_state(query)

    def _replace(self, state: AppState) -> AppState:
        self.state = state
        self.states.save(state)
        return state

    def calculate(
        self,
        weight: str | float,
        reps: str | int,
        formulas: Sequence[str] | None = None,
    ) -> dict:
        """Estimate 1RM from raw input and record it as the last calculation.

        Raises ``ValueError`` with the validation message when the input is
        rejected; the soft rep-count warning is returned in the payload.
        """
        weight_val, reps_val = MathTools.parse_inputs(weight, reps)
        check = MathTools.validate_inputs(weight_val, reps_val)
        if not check.ok:
            raise ValueError(check.error)
        result = MathTools.estimate_one_rep_max(weight_val, reps_val, formulas)
        if not math.isfinite(result.best):
            raise ValueError("Weight is too large")
        record = CalculationRecord(
            weight=weight_val, reps=reps_val, unit=self.state.unit, best_1rm=result.best
        )
        # build everything derived from the estimate before it is stored
        payload = {
            "result": result,
            "display_best": WeightConverter.round_for_display(result.best, record.unit),
            "unit": record.unit,
            "warning": check.warning,
            "percentages": self.percentages(result.best),
            "warmup": self.warmup(result.best),
        }
        self._replace(
            self.states.reconcile(
                self.state,
                StateOverride(weight=weight_val, reps=reps_val, last_calculation=record),
            )
        )
        logger.debug("Estimated %.2f %s from %s x %s", result.best, record.unit, weight_val, reps_val)
        payload["url"] = self.share_url()
        return payload

    def change_unit(self, unit: str) -> AppState:
        """Switch units, converting the weight and resetting the bar."""
        if unit not in UNITS:
            raise ValueError(f"unknown unit: {unit}")
        if unit == self.state.unit:
            return self.state
        weight = WeightConverter.round_half_up(
            WeightConverter.convert(self.state.weight, self.state.unit, unit)
        )
        if not math.isfinite(weight):
            raise ValueError("Weight is too large to convert")
        override = StateOverride(
            unit=unit,
            weight=max(weight, 1.0),
            bar=WeightConverter.default_bar(unit),
        )
        return self._replace(self.states.reconcile(self.state, override))

    def set_bar(self, bar: float) -> AppState:
        if not (math.isfinite(bar) and bar > 0):
            raise ValueError("Bar weight must be greater than 0")
        return self._replace(self.states.reconcile(self.state, StateOverride(bar=bar)))

    def set_plate_availability(self, index: int, available: bool) -> AppState:
        config = PlateCalculator.set_availability(self.state.plate_config, index, available)
        return self._replace(self.states.reconcile(self.state, StateOverride(plate_config=config)))

    def apply_query(self, query: str | Mapping[str, Any]) -> AppState:
        """Apply share-link parameters on top of the current state."""
        return self._replace(self.states.reconcile(self.state, self.states.parse_query(query)))

    def plates(self, target_weight: float) -> dict:
        if not math.isfinite(target_weight):
            raise ValueError("Target weight must be a number")
        config = self.state.plate_config
        result: PlateResult = PlateCalculator.calculate(target_weight, config)
        return {
            "result": result,
            "description": PlateCalculator.describe(result, config),
            "hint": PlateCalculator.target_hint(target_weight, config),
        }

    def last_best(self) -> float | None:
        """Last estimated 1RM expressed in the current unit."""
        record = self.state.last_calculation
        if record is None:
            return None
        best = WeightConverter.convert(record.best_1rm, record.unit, self.state.unit)
        if not math.isfinite(best):
            logger.warning(
                "Last 1RM %s %s overflows in %s", record.best_1rm, record.unit, self.state.unit
            )
            return None
        return best

    def working_weight(self) -> float:
        best = self.last_best()
        return best if best is not None else WarmupPlanner.EXAMPLE_WORKING_WEIGHT

    def warmup(self, working_weight: float | None = None) -> list[WarmupSet]:
        if working_weight is None:
            working_weight = self.working_weight()
        if not (math.isfinite(working_weight) and working_weight > 0):
            raise ValueError("Working weight must be greater than 0")
        return WarmupPlanner.plan(working_weight, self.state.unit, self.state.plate_config)

    def percentages(self, one_rm: float | None = None) -> list[PercentageRow]:
        if one_rm is None:
            one_rm = self.last_best()
            if one_rm is None:
                return []
        elif not (math.isfinite(one_rm) and one_rm > 0):
            raise ValueError("one_rm must be greater than 0")
        return TrainingPercentages.table(one_rm, self.state.unit)

    def share_url(self, path: str = "/") -> str:
        return StateService.generate_url(self.state, path)

    def share_text(self) -> str:
        record = self.state.last_calculation
        if record is None:
            raise ValueError("No calculation to share")
        best = WeightConverter.format_weight(
            WeightConverter.round_for_display(record.best_1rm, record.unit)
        )
        weight = WeightConverter.format_weight(record.weight)
        lines = [
            "1RM Calculator Results:",
            f"• Weight: {weight} {record.unit} × {record.reps} reps",
            f"• Estimated 1RM: {best} {record.unit}",
            "• Key percentages:",
        ]
        lines.extend(
            f"  - {line}" for line in TrainingPercentages.share_lines(record.best_1rm, record.unit)
        )
        return "\n".join(lines)
