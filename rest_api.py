import math

from fastapi import APIRouter, FastAPI, HTTPException, Request

from algorithms import MathTools, WarmupPlanner, WeightConverter
from calculator_service import CalculatorService
from config import APP_VERSION, YamlConfig
from state_service import StateService


class OneRepMaxAPI:
    """Provides REST endpoints for the 1RM calculator."""

    def __init__(self, yaml_path: str | None = None) -> None:
        self.store = YamlConfig(yaml_path)
        self.states = StateService(self.store)
        self.calculator = CalculatorService(self.states)
        self.app = FastAPI(
            title="1RM API",
            description="One-rep max estimates, plate math and warm-up plans",
            version=APP_VERSION,
        )
        self._setup_routes()

    def _setup_routes(self) -> None:
        state_router = APIRouter(prefix="/state", tags=["State"])

        @self.app.get("/health")
        def health():
            return {"status": "ok", "version": APP_VERSION}

        @self.app.post(
            "/calculate",
            summary="Estimate a one-rep max",
            description="Accepts raw form values; formulas is a comma-separated subset of epley,brzycki,lombardi.",
        )
        def calculate(weight: str, reps: str, formulas: str | None = None):
            enabled = [f for f in formulas.split(",") if f] if formulas else None
            try:
                return self.calculator.calculate(weight, reps, enabled)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.get("/validate")
        def validate(weight: str, reps: str):
            weight_val, reps_val = MathTools.parse_inputs(weight, reps)
            check = MathTools.validate_inputs(weight_val, reps_val)
            return {"ok": check.ok, "error": check.error, "warning": check.warning}

        @self.app.get("/plates")
        def plates(target: float):
            try:
                return self.calculator.plates(target)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.get("/warmup")
        def warmup(working_weight: float | None = None):
            try:
                sets = self.calculator.warmup(working_weight)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            return [
                {**s.model_dump(), "label": WarmupPlanner.format_set(s)} for s in sets
            ]

        @self.app.get("/percentages")
        def percentages(one_rm: float | None = None):
            try:
                return self.calculator.percentages(one_rm)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.get("/convert")
        def convert(weight: float, from_unit: str, to_unit: str):
            try:
                value = WeightConverter.convert(weight, from_unit, to_unit)
                if not math.isfinite(value):
                    raise ValueError("Weight must be a finite number")
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            return {
                "weight": value,
                "display": WeightConverter.round_for_display(value, to_unit),
                "unit": to_unit,
            }

        @self.app.get("/bars")
        def bars(unit: str | None = None):
            unit = unit or self.calculator.state.unit
            try:
                return {"unit": unit, "bars": WeightConverter.available_bars(unit)}
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.get("/share")
        def share(path: str = "/"):
            try:
                text = self.calculator.share_text()
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            return {"text": text, "url": self.calculator.share_url(path)}

        @state_router.get("")
        def get_state():
            return self.calculator.state

        @state_router.get("/url")
        def state_url(path: str = "/"):
            return {"url": self.calculator.share_url(path)}

        @state_router.put("/unit")
        def set_unit(unit: str):
            try:
                return self.calculator.change_unit(unit)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @state_router.put("/bar")
        def set_bar(bar: float):
            try:
                return self.calculator.set_bar(bar)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @state_router.put("/plates/{index}")
        def set_plate(index: int, available: bool):
            try:
                return self.calculator.set_plate_availability(index, available)
            except IndexError as e:
                raise HTTPException(status_code=404, detail=str(e))

        @state_router.post(
            "/query",
            summary="Apply a shared link",
            description="Overlay w, r, unit, bar and plates parameters on the current state.",
        )
        def apply_query(request: Request, query: str | None = None):
            source = query if query is not None else request.query_params
            return self.calculator.apply_query(source)

        self.app.include_router(state_router)


api = OneRepMaxAPI()
app = api.app

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app)
