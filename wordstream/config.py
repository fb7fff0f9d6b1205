from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict


DEFAULT_CONFIG_PATH = Path("config.toml")


@dataclass(frozen=True)
class WordStreamConfig:
    raw: Dict[str, Any]

    @staticmethod
    def load(path: str | Path) -> "WordStreamConfig":
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Config not found: {p}")
        data = tomllib.loads(p.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("config.toml must parse to a table")
        return WordStreamConfig(raw=data)

    def get(self, *keys: str, default: Any = None) -> Any:
        cur: Any = self.raw
        for k in keys:
            if not isinstance(cur, dict) or k not in cur:
                return default
            cur = cur[k]
        return cur


def load_optional_config(path: str | Path | None) -> WordStreamConfig | None:
    """Load ``path``, or ./config.toml when no path is given and it exists."""
    if path is not None:
        return WordStreamConfig.load(path)
    if DEFAULT_CONFIG_PATH.is_file():
        return WordStreamConfig.load(DEFAULT_CONFIG_PATH)
    return None
