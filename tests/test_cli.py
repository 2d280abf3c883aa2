"""Tests for the command-line interface."""

import json

from typer.testing import CliRunner

from fare_horizon.cli import app

runner = CliRunner()


def test_recommend_json():
    result = runner.invoke(app, ["recommend", "MNL", "--seed", "11", "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [r["month"] for r in data] == list(range(12))
    assert all(r["recommended"]["validation"]["status"] == "VALID" for r in data)


def test_recommend_table():
    result = runner.invoke(app, ["recommend", "MNL", "--seed", "11", "--adults", "2", "--children", "1"])
    assert result.exit_code == 0, result.output
    assert "Monthly Destination Picks" in result.output


def test_recommend_rejects_bad_cabin():
    result = runner.invoke(app, ["recommend", "MNL", "--cabin", "lounge"])
    assert result.exit_code == 1
    assert "Invalid cabin" in result.output


def test_recommend_rejects_too_many_passengers():
    result = runner.invoke(app, ["recommend", "MNL", "--adults", "6", "--children", "4"])
    assert result.exit_code == 1
    assert "At most 9 passengers" in result.output


def test_trend_json():
    result = runner.invoke(app, ["trend", "nrt", "--seed", "5", "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert len(data) == 12
    assert data[0]["month"] == "2026-01"


def test_insight_table():
    result = runner.invoke(app, ["insight", "MNL", "--seed", "2"])
    assert result.exit_code == 0, result.output
    assert "Monthly Destination Picks" in result.output
