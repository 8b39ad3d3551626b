import requests
from typing import Optional


class OneRepMaxClient:
    """Simple REST client for the 1RM API."""

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 5) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str, **params):
        resp = requests.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def _send(self, method: str, path: str, **params):
        resp = requests.request(
            method, f"{self.base_url}{path}", params=params, timeout=self.timeout
        )
        resp.raise_for_status()
        return resp.json()

    def health(self) -> dict:
        return self._get("/health")

    def calculate(self, weight: float, reps: int, formulas: Optional[list[str]] = None) -> dict:
        params = {"weight": weight, "reps": reps}
        if formulas:
            params["formulas"] = ",".join(formulas)
        return self._send("POST", "/calculate", **params)

    def validate(self, weight: float, reps: int) -> dict:
        return self._get("/validate", weight=weight, reps=reps)

    def plates(self, target: float) -> dict:
        return self._get("/plates", target=target)

    def warmup(self, working_weight: Optional[float] = None) -> list:
        if working_weight is None:
            return self._get("/warmup")
        return self._get("/warmup", working_weight=working_weight)

    def percentages(self, one_rm: Optional[float] = None) -> list:
        if one_rm is None:
            return self._get("/percentages")
        return self._get("/percentages", one_rm=one_rm)

    def convert(self, weight: float, from_unit: str, to_unit: str) -> dict:
        return self._get("/convert", weight=weight, from_unit=from_unit, to_unit=to_unit)

    def bars(self, unit: Optional[str] = None) -> dict:
        if unit is None:
            return self._get("/bars")
        return self._get("/bars", unit=unit)

    def share(self, path: str = "/") -> dict:
        return self._get("/share", path=path)

    def state(self) -> dict:
        return self._get("/state")

    def state_url(self, path: str = "/") -> str:
        return self._get("/state/url", path=path)["url"]

    def set_unit(self, unit: str) -> dict:
        return self._send("PUT", "/state/unit", unit=unit)

    def set_bar(self, bar: float) -> dict:
        return self._send("PUT", "/state/bar", bar=bar)

    def set_plate(self, index: int, available: bool) -> dict:
        return self._send(
            "PUT", f"/state/plates/{index}", available=str(available).lower()
        )

    def apply_query(self, query: str) -> dict:
        return self._send("POST", "/state/query", query=query)
