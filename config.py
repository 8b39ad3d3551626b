import os
import yaml

APP_VERSION = "1.0.0"

DEFAULT_STATE_PATH = "onerepmax_state.yaml"


class YamlConfig:
    """Load and save a single keyed record in a YAML file."""

    STATE_KEY = "onerepmax_state"

    def __init__(self, path: str | None = None, key: str = STATE_KEY) -> None:
        self.path = path or os.environ.get("ONEREPMAX_STATE_PATH", DEFAULT_STATE_PATH)
        self.key = key

    def load(self) -> dict | None:
        """Return the stored record, or ``None`` when nothing is stored.

        Unreadable files and malformed YAML propagate to the caller.
        """
        if not os.path.exists(self.path):
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a mapping")
        record = data.get(self.key)
        if record is None:
            return None
        if not isinstance(record, dict):
            raise ValueError(f"{self.key} in {self.path} is not a mapping")
        return record

    def save(self, record: dict) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump({self.key: record}, f, sort_keys=False)

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
