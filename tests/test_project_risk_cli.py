"""
Unit tests for the risk projection CLI.

These tests run the script offline; the analysis service is never contacted
except where a fake remote is patched in.

Usage:
    pytest tests/test_project_risk_cli.py -v
"""
import sys
import asyncio
import json
import pytest
from pathlib import Path
from unittest.mock import patch

# Add scripts directory to path for importing the CLI
scripts_path = Path(__file__).parent.parent / "scripts"
sys.path.insert(0, str(scripts_path))

from project_risk import (
    build_answers,
    build_parser,
    build_snapshot,
    format_table,
    main,
    run_projection,
)
from risk_projection.analysis_client import RemoteAnalysisSuccess

ANSWER_ARGS = [
    "--exercise", "none",
    "--diet", "average",
    "--sleep", "5-6",
    "--stress", "high",
    "--smoking", "occasional",
    "--alcohol", "regular",
    "--water", "less1L",
    "--screen", "more8",
]


class TestParser:
    """Test argument parsing."""

    def test_answers_map_to_lifestyle(self):
        args = build_parser().parse_args(ANSWER_ARGS)
        answers = build_answers(args)

        assert answers.water_intake == "less1L"
        assert answers.screen_time == "more8"
        assert answers.is_complete()

    def test_missing_answer_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(ANSWER_ARGS[:-2])

        assert exc_info.value.code == 2

    def test_unknown_choice_exits(self):
        args = list(ANSWER_ARGS)
        args[args.index("--diet") + 1] = "keto"

        with pytest.raises(SystemExit):
            build_parser().parse_args(args)


class TestSnapshot:
    """Test snapshot loading and seed overrides."""

    def test_diabetes_score_override(self):
        args = build_parser().parse_args(ANSWER_ARGS + ["--diabetes-score", "80"])

        assert build_snapshot(args) == {"riskFactors": {"diabetes": {"score": 80.0}}}

    def test_snapshot_file(self, tmp_path, high_risk_snapshot):
        path = tmp_path / "record.json"
        path.write_text(json.dumps(high_risk_snapshot))
        args = build_parser().parse_args(
            ANSWER_ARGS + ["--snapshot", str(path), "--diabetes-score", "10"]
        )

        snapshot = build_snapshot(args)

        assert snapshot["profile"]["healthId"] == "john.doe@sbx"
        assert snapshot["riskFactors"]["diabetes"]["score"] == 10.0
        assert snapshot["riskFactors"]["diabetes"]["risk"] == "High"
        assert snapshot["riskFactors"]["hypertension"]["score"] == 60


class TestRunProjection:
    """Test resolving through the CLI."""

    @pytest.mark.asyncio
    async def test_offline_uses_fallback(self):
        args = build_parser().parse_args(ANSWER_ARGS + ["--offline", "--diabetes-score", "50"])

        outcome = await run_projection(args)

        assert outcome.source == "fallback"
        assert outcome.warning is None
        assert [p.probability for p in outcome.predictions] == [58, 54, 28]

    @pytest.mark.asyncio
    async def test_online_uses_analysis_client(self):
        args = build_parser().parse_args(ANSWER_ARGS + ["--user-id", "cli-user"])

        async def fake_analyze(self, user_id, lifestyle):
            return RemoteAnalysisSuccess(predictions=[{"condition": user_id, "years": 1}])

        with patch("project_risk.AnalysisClient.analyze", fake_analyze):
            outcome = await run_projection(args)

        assert outcome.source == "remote"
        assert outcome.predictions[0].condition == "cli-user"

    def test_format_table(self):
        args = build_parser().parse_args(ANSWER_ARGS + ["--offline"])

        outcome = asyncio.run(run_projection(args))
        table = format_table(outcome)

        assert "Source: fallback" in table
        assert "Type 2 Diabetes" in table
        assert "type_2_diabetes: Medium (58)" in table


class TestMain:
    """Test the entry point output."""

    def test_json_output(self, capsys):
        main(ANSWER_ARGS + ["--offline", "--json"])

        data = json.loads(capsys.readouterr().out)
        assert data["source"] == "fallback"
        assert [p["years"] for p in data["predictions"]] == [3, 6, 10]

    def test_missing_snapshot_file(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(ANSWER_ARGS + ["--offline", "--snapshot", "/nonexistent/record.json"])

        assert exc_info.value.code == 1
        assert "[ERROR]" in capsys.readouterr().err
