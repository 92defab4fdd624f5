"""Tests for the command-line entry point."""

import json
import sys

import numpy as np
import pandas as pd
import pytest

import main


def _write_csv(path, n=120):
    close = np.linspace(50.0, 60.0, n)
    df = pd.DataFrame({
        "date": pd.bdate_range(start="2024-01-01", periods=n).strftime("%Y-%m-%d"),
        "open": close, "high": close * 1.01, "low": close * 0.99,
        "close": close, "volume": 1000,
    })
    df.to_csv(path, index=False)


class TestCli:

    def test_analyze_prints_record(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "msft.csv"
        _write_csv(path)
        monkeypatch.setattr(sys, "argv", ["main.py", "analyze", str(path), "--max-bars", "100"])
        main.main()
        out = json.loads(capsys.readouterr().out)
        assert out["symbol"] == "MSFT"
        assert out["current_price"] == pytest.approx(60.0)
        assert out["calculations"]["technical"]["sma50"] is not None

    def test_quote_and_consensus(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "prices.csv"
        _write_csv(path)
        consensus = tmp_path / "consensus.json"
        consensus.write_text(json.dumps({"targetMeanPrice": 70.0, "numberOfAnalystOpinions": 12}))
        monkeypatch.setattr(sys, "argv", [
            "main.py", "analyze", str(path), "--symbol", "ABC",
            "--price", "61", "--previous-close", "60", "--consensus", str(consensus),
        ])
        main.main()
        out = json.loads(capsys.readouterr().out)
        assert out["symbol"] == "ABC"
        assert out["price_change"] == pytest.approx(1.0)
        assert out["analyst_target_price"] == 70.0
        assert out["number_of_analyst_opinions"] == 12

    def test_empty_file_exits(self, tmp_path, monkeypatch):
        path = tmp_path / "empty.csv"
        path.write_text("date,open,high,low,close,volume\n")
        monkeypatch.setattr(sys, "argv", ["main.py", "analyze", str(path)])
        with pytest.raises(SystemExit) as exc:
            main.main()
        assert exc.value.code == 1

    def test_consensus_must_be_an_object(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "prices.csv"
        _write_csv(path)
        consensus = tmp_path / "consensus.json"
        consensus.write_text(json.dumps([70.0, 12]))
        monkeypatch.setattr(sys, "argv", [
            "main.py", "analyze", str(path), "--consensus", str(consensus),
        ])
        with pytest.raises(SystemExit) as exc:
            main.main()
        assert exc.value.code == 1
        assert capsys.readouterr().out.startswith("Error:")
