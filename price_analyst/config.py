"""Central configuration loader for Price Analyst."""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from dotenv import load_dotenv

# Project root is the parent of the price_analyst/ directory
PROJECT_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(PROJECT_ROOT / ".env")


def load_settings(path: Path | None = None) -> dict:
    """Load settings from configs/settings.yaml.

    Returns an empty dict when the file does not exist so the engine can run
    with its built-in defaults.
    """
    settings_path = path or Path(
        os.getenv("PRICE_ANALYST_SETTINGS", PROJECT_ROOT / "configs" / "settings.yaml")
    )
    if not settings_path.exists():
        return {}
    with open(settings_path) as f:
        return yaml.safe_load(f) or {}


SETTINGS = load_settings()


@dataclass(frozen=True)
class AnalysisSettings:
    """Sample-size gates used by the analysis pipeline."""

    min_bars_indicators: int = 50
    min_bars_levels: int = 50
    min_bars_trend: int = 200
    min_bars_volatility: int = 20
    limited_data_warning: int = 50
    volatility_period: int = 20

    @classmethod
    def from_settings(cls, settings: dict | None = None) -> "AnalysisSettings":
        section = (settings if settings is not None else SETTINGS).get("analysis") or {}
        known = cls.__dataclass_fields__
        return cls(**{k: int(v) for k, v in section.items() if k in known})


def log_level() -> str:
    """Configured log level; the environment wins over settings.yaml."""
    return os.getenv(
        "PRICE_ANALYST_LOG_LEVEL",
        SETTINGS.get("app", {}).get("log_level", "INFO"),
    )
