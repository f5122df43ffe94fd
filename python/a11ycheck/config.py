# SPDX-License-Identifier: AGPL-3.0-only
from pathlib import Path
from typing import Any, Dict, List, Optional
try:
    import tomllib
except ImportError:
    import tomli as tomllib

from .rules import MESSAGES

CONFIG_FILENAMES = ("a11ycheck.toml", "pyproject.toml")

# Default configuration structure
DEFAULT_CONFIG = {
    "device": [],
    "ignore_ids": [],
    "ignore_tags": [],
    "ignore_rules": [],
}


def _string_list(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ValueError(f"a11ycheck config key {key!r} must be a list of strings")
    return [str(v) for v in value]


class Config:
    def __init__(self, data: Dict[str, Any], path: Optional[Path] = None):
        self.data = data
        self.path = path

    @classmethod
    def default(cls) -> "Config":
        return cls(dict(DEFAULT_CONFIG), None)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from a11ycheck.toml or pyproject.toml."""
        if path is None:
            cwd = Path.cwd()
            for name in CONFIG_FILENAMES:
                candidate = cwd / name
                if candidate.exists():
                    path = candidate
                    break
            else:
                raise FileNotFoundError(
                    f"No {' or '.join(CONFIG_FILENAMES)} found in {cwd}."
                )
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"No a11ycheck config found at {path}.")

        try:
            with open(path, "rb") as f:
                raw = tomllib.load(f)
        except Exception as e:
            raise ValueError(f"Failed to parse {path}: {e}")

        if path.name == "pyproject.toml":
            table = raw.get("tool", {}).get("a11ycheck", {})
        else:
            table = raw.get("a11ycheck", raw)
        if not isinstance(table, dict):
            raise ValueError(f"{path}: a11ycheck settings must be a table")
        return cls(table, path)

    @property
    def device(self) -> List[str]:
        return _string_list(self.data.get("device"), "device")

    @property
    def ignore_ids(self) -> List[str]:
        return _string_list(self.data.get("ignore_ids"), "ignore_ids")

    @property
    def ignore_tags(self) -> List[str]:
        return [t.strip().lower() for t in _string_list(self.data.get("ignore_tags"), "ignore_tags")]

    @property
    def ignore_rules(self) -> List[str]:
        rules = _string_list(self.data.get("ignore_rules"), "ignore_rules")
        unknown = [r for r in rules if r not in MESSAGES]
        if unknown:
            raise ValueError(f"Unknown rule id(s) in ignore_rules: {', '.join(unknown)}")
        return rules

    def filter_fn(self):
        ids = set(self.ignore_ids)
        tags = set(self.ignore_tags)
        messages = {MESSAGES[r] for r in self.ignore_rules}
        if not (ids or tags or messages):
            return None

        def keep(tag, node_id, message):
            if node_id is not None and node_id in ids:
                return False
            if tag in tags:
                return False
            return message not in messages

        return keep

    def to_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"device": self.device}
        filter_fn = self.filter_fn()
        if filter_fn is not None:
            options["filterFn"] = filter_fn
        return options
