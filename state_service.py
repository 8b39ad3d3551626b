from __future__ import annotations

import json
import logging
import math
from typing import Any, Mapping, Sequence
from urllib.parse import parse_qs, unquote, urlencode, urlsplit

import yaml
from pydantic import ValidationError

from algorithms import MathTools, WeightConverter
from config import YamlConfig
from schemas import (
    DEFAULT_PLATE_WEIGHTS,
    UNITS,
    AppState,
    BarbellConfig,
    CalculationRecord,
    PlateSpec,
    StateOverride,
)

logger = logging.getLogger(__name__)


class StateService:
    """Merges stored and shared-link configuration into one ``AppState``.

    Both external representations are parsed field by field: a value that
    fails validation is treated as absent, so one bad parameter never throws
    away the rest. Reading or writing the store never raises; failures are
    logged and the defaults are used instead.
    """

    QUERY_KEYS = ("w", "r", "unit", "bar", "plates")

    def __init__(self, store: YamlConfig | None = None) -> None:
        self.store = store or YamlConfig()

    @staticmethod
    def default_state() -> AppState:
        return AppState()

    # field parsers -------------------------------------------------------

    @staticmethod
    def _positive_float(value: Any) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(number) or number <= 0:
            return None
        return number

    @staticmethod
    def _reps(value: Any) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, float):
            if not value.is_integer():
                return None
            value = int(value)
        try:
            number = int(value)
        except (TypeError, ValueError):
            return None
        if number < MathTools.MIN_REPS or number > MathTools.MAX_REPS:
            return None
        return number

    @staticmethod
    def _unit(value: Any) -> str | None:
        return value if value in UNITS else None

    @staticmethod
    def _plate_flags(value: Any) -> list[bool] | None:
        if isinstance(value, str):
            for text in (value, unquote(value)):
                try:
                    value = json.loads(text)
                    break
                except ValueError:
                    continue
            else:
                return None
        if not isinstance(value, list):
            return None
        flags = []
        for item in value:
            if isinstance(item, bool):
                flags.append(item)
            elif isinstance(item, (int, float)) and item in (0, 1):
                flags.append(bool(item))
            else:
                return None
        return flags

    @staticmethod
    def _model(model: type, value: Any):
        if value is None:
            return None
        try:
            return model.model_validate(value)
        except ValidationError:
            return None

    # external representations -------------------------------------------

    @classmethod
    def parse_record(cls, raw: Mapping[str, Any]) -> StateOverride:
        """Parse a persisted record, dropping fields that fail validation."""
        fields = {
            "weight": cls._positive_float(raw.get("weight")),
            "reps": cls._reps(raw.get("reps")),
            "unit": cls._unit(raw.get("unit")),
            "bar": cls._positive_float(raw.get("bar")),
            "plate_config": cls._model(BarbellConfig, raw.get("plate_config")),
            "last_calculation": cls._model(CalculationRecord, raw.get("last_calculation")),
        }
        dropped = [k for k, v in fields.items() if v is None and raw.get(k) is not None]
        if dropped:
            logger.debug("Ignoring invalid stored fields: %s", ", ".join(dropped))
        return StateOverride(**fields)

    @classmethod
    def parse_query(cls, query: str | Mapping[str, Any] | None) -> StateOverride:
        """Parse share-link parameters from a query string, URL or mapping."""
        if not query:
            return StateOverride()
        if isinstance(query, str):
            if "?" in query:
                query = urlsplit(query).query
            params = {k: v[0] for k, v in parse_qs(query, keep_blank_values=True).items()}
        else:
            params = dict(query)
        fields = {
            "weight": cls._positive_float(params.get("w")),
            "reps": cls._reps(params.get("r")),
            "unit": cls._unit(params.get("unit")),
            "bar": cls._positive_float(params.get("bar")),
            "plate_flags": cls._plate_flags(params.get("plates")),
        }
        parsed = dict(zip(cls.QUERY_KEYS, fields.values()))
        dropped = [k for k in cls.QUERY_KEYS if k in params and parsed[k] is None]
        if dropped:
            logger.debug("Ignoring invalid query parameters: %s", ", ".join(dropped))
        return StateOverride(**fields)

    @staticmethod
    def generate_query(state: AppState) -> str:
        """Encode ``state`` as share-link parameters.

        Plate flags follow the standard plate order of the unit, which is the
        order ``parse_query`` reads them back in; plates missing from the
        inventory are flagged available.
        """
        available = {p.weight: p.available for p in state.plate_config.plates}
        flags = [1 if available.get(w, True) else 0 for w in DEFAULT_PLATE_WEIGHTS[state.unit]]
        return urlencode(
            {
                "w": WeightConverter.format_weight(state.weight),
                "r": str(state.reps),
                "unit": state.unit,
                "bar": WeightConverter.format_weight(state.bar),
                "plates": json.dumps(flags, separators=(",", ":")),
            }
        )

    @classmethod
    def generate_url(cls, state: AppState, path: str = "/") -> str:
        return f"{path}?{cls.generate_query(state)}"

    # merging -------------------------------------------------------------

    @staticmethod
    def _default_plates_with(unit: str, flags: Sequence[bool]) -> list[PlateSpec]:
        return [
            PlateSpec(weight=weight, available=flags[i] if i < len(flags) else True)
            for i, weight in enumerate(DEFAULT_PLATE_WEIGHTS[unit])
        ]

    @classmethod
    def reconcile(cls, persisted: AppState | None, override: StateOverride) -> AppState:
        """Overlay ``override`` on ``persisted`` (or the defaults).

        The plate inventory is re-keyed to the standard set of the resulting
        unit when it came from the other unit, carrying availability by
        position, and always takes the resulting bar weight.
        """
        base = persisted if persisted is not None else cls.default_state()
        unit = override.unit or base.unit
        bar = override.bar if override.bar is not None else base.bar

        if override.plate_flags is not None:
            plates = cls._default_plates_with(unit, override.plate_flags)
        else:
            source = override.plate_config or base.plate_config
            plates = list(source.plates)
            if source.unit != unit:
                plates = cls._default_plates_with(unit, [p.available for p in plates])

        return AppState(
            weight=override.weight if override.weight is not None else base.weight,
            reps=override.reps if override.reps is not None else base.reps,
            unit=unit,
            bar=bar,
            plate_config=BarbellConfig(unit=unit, bar=bar, plates=plates),
            last_calculation=override.last_calculation or base.last_calculation,
        )

    # store ---------------------------------------------------------------

    def load(self) -> AppState:
        try:
            raw = self.store.load()
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning("Failed to load state from %s: %s", self.store.path, e)
            return self.default_state()
        if raw is None:
            return self.default_state()
        return self.reconcile(None, self.parse_record(raw))

    def save(self, state: AppState) -> None:
        try:
            self.store.save(state.model_dump())
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to save state to %s: %s", self.store.path, e)

    def initial_state(self, query: str | Mapping[str, Any] | None = None) -> AppState:
        """Stored state with any share-link parameters applied on top."""
        return self.reconcile(self.load(), self.parse_query(query))
