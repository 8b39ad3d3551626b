from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

WeightUnit = Literal["kg", "lb"]

UNITS: tuple[str, ...] = ("kg", "lb")

# Standard plate sets, heaviest first. URL plate flags are index-aligned to these.
DEFAULT_PLATE_WEIGHTS: dict[str, tuple[float, ...]] = {
    "kg": (25.0, 20.0, 15.0, 10.0, 5.0, 2.5, 1.25, 0.5),
    "lb": (55.0, 45.0, 35.0, 25.0, 10.0, 5.0, 2.5),
}

DEFAULT_BAR: dict[str, float] = {"kg": 20.0, "lb": 45.0}

AVAILABLE_BARS: dict[str, tuple[float, ...]] = {
    "kg": (20.0, 15.0, 10.0),
    "lb": (45.0, 35.0, 15.0),
}


class PlateSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    weight: float = Field(gt=0)
    available: bool = True


def default_plates(unit: str) -> list[PlateSpec]:
    return [PlateSpec(weight=w) for w in DEFAULT_PLATE_WEIGHTS[unit]]


class BarbellConfig(BaseModel):
    """Bar weight plus the plate inventory loaded symmetrically on it."""

    model_config = ConfigDict(frozen=True)

    unit: WeightUnit = "kg"
    bar: float = Field(default=DEFAULT_BAR["kg"], gt=0)
    plates: list[PlateSpec] = Field(default_factory=lambda: default_plates("kg"))

    @field_validator("plates")
    @classmethod
    def _unique_weights(cls, plates: list[PlateSpec]) -> list[PlateSpec]:
        weights = [p.weight for p in plates]
        if len(set(weights)) != len(weights):
            raise ValueError("plate weights must be unique")
        return plates


class CalculationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    weight: float = Field(gt=0)
    reps: int = Field(ge=1)
    unit: WeightUnit
    best_1rm: float = Field(gt=0)


class AppState(BaseModel):
    """Complete configuration of a calculator session.

    Instances are immutable snapshots; changes produce a new snapshot.
    ``plate_config`` always mirrors the top-level ``unit`` and ``bar``.
    """

    model_config = ConfigDict(frozen=True)

    weight: float = Field(default=100.0, gt=0)
    reps: int = Field(default=5, ge=1, le=20)
    unit: WeightUnit = "kg"
    bar: float = Field(default=DEFAULT_BAR["kg"], gt=0)
    plate_config: BarbellConfig = Field(default_factory=BarbellConfig)
    last_calculation: Optional[CalculationRecord] = None

    @model_validator(mode="after")
    def _plate_config_in_sync(self) -> "AppState":
        if self.plate_config.unit != self.unit or self.plate_config.bar != self.bar:
            raise ValueError("plate_config unit and bar must match the state")
        return self


class StateOverride(BaseModel):
    """Partial state; ``None`` means the field was not supplied."""

    weight: Optional[float] = None
    reps: Optional[int] = None
    unit: Optional[WeightUnit] = None
    bar: Optional[float] = None
    plate_config: Optional[BarbellConfig] = None
    plate_flags: Optional[list[bool]] = None
    last_calculation: Optional[CalculationRecord] = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class InputCheck(BaseModel):
    error: Optional[str] = None
    warning: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CalculationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    epley: float
    brzycki: float
    lombardi: float
    best: float
    formulas: list[str]


class PlateResult(BaseModel):
    """Plates for one side of the bar, heaviest first."""

    model_config = ConfigDict(frozen=True)

    plates: list[PlateSpec]
    total: float
    remainder: float = Field(ge=0)


class WarmupSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    percentage: int = Field(ge=0, le=100)
    reps: int = Field(ge=1)
    weight: float
    plates: str
    description: str


class PercentageRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    percent: int
    reps: str
    description: str
    weight: float
    display_weight: float


def validate_state(data: dict) -> AppState:
    try:
        return AppState(**data)
    except ValidationError as e:
        raise ValueError(str(e))
