"""Tests for price_analyst.config -- settings loading."""

import logging

import price_analyst.analysis.engine  # noqa: F401
import price_analyst.analysis.indicators  # noqa: F401
import price_analyst.data  # noqa: F401
from price_analyst.config import PROJECT_ROOT, AnalysisSettings, load_settings, log_level


class TestSettings:

    def test_missing_file_gives_empty_dict(self, tmp_path):
        assert load_settings(tmp_path / "nope.yaml") == {}

    def test_repo_settings(self):
        settings = load_settings(PROJECT_ROOT / "configs" / "settings.yaml")
        assert settings["analysis"]["min_bars_trend"] == 200
        assert settings["data"]["max_bars"] == 200

    def test_custom_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("analysis:\n  min_bars_indicators: 30\n")
        settings = AnalysisSettings.from_settings(load_settings(path))
        assert settings.min_bars_indicators == 30
        assert settings.min_bars_trend == 200

    def test_unknown_keys_ignored(self):
        settings = AnalysisSettings.from_settings({"analysis": {"min_bars_levels": "40", "colour": 1}})
        assert settings.min_bars_levels == 40

    def test_defaults(self):
        s = AnalysisSettings.from_settings({})
        assert (s.min_bars_indicators, s.min_bars_levels, s.min_bars_trend, s.min_bars_volatility) == (
            50, 50, 200, 20,
        )
        assert s.volatility_period == 20


class TestLogLevel:

    def test_environment_overrides_settings(self, monkeypatch):
        monkeypatch.setenv("PRICE_ANALYST_LOG_LEVEL", "DEBUG")
        assert log_level() == "DEBUG"

    def test_module_loggers_use_configured_level(self):
        expected = getattr(logging, log_level().upper())
        for name in ("indicators", "data", "engine"):
            assert logging.getLogger(name).level == expected
