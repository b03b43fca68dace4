"""
Unit tests for risk factor derivation and display banding.

These tests verify:
1. Condition names slugify consistently
2. Risk labels use the 40/70 thresholds
3. Duplicate conditions resolve last-write-wins
4. Merging overlays derived entries without mutating inputs
5. Display banding keeps its separate 50/70 thresholds

Usage:
    pytest tests/test_risk_factors.py -v
"""
import copy
import pytest

from risk_projection.display import probability_band
from risk_projection.predictions import PredictionTimeline
from risk_projection.risk_factors import (
    condition_slug,
    derive_risk_factors,
    merge_risk_factors,
    risk_label,
)


def prediction(condition="Type 2 Diabetes", probability=50, **kwargs) -> PredictionTimeline:
    return PredictionTimeline(years=3, condition=condition, probability=probability, **kwargs)


class TestConditionSlug:
    """Test slug generation for condition names."""

    @pytest.mark.parametrize("condition,expected", [
        ("Type 2 Diabetes", "type_2_diabetes"),
        ("Cardiovascular Disease", "cardiovascular_disease"),
        ("Chronic   Kidney\tDisease", "chronic_kidney_disease"),
        ("Anemia", "anemia"),
    ])
    def test_slugs(self, condition, expected):
        assert condition_slug(condition) == expected


class TestRiskLabel:
    """Test the 40/70 derivation thresholds at their boundaries."""

    @pytest.mark.parametrize("score,expected", [
        (100, "High"),
        (70, "High"),
        (69, "Medium"),
        (40, "Medium"),
        (39, "Low"),
        (0, "Low"),
    ])
    def test_boundaries(self, score, expected):
        assert risk_label(score) == expected


class TestDeriveRiskFactors:
    """Test folding predictions into a risk-factor summary."""

    def test_entry_shape(self):
        """Each entry should carry risk, score, trend and the prediction's details."""
        summary = derive_risk_factors([
            prediction(
                probability=58,
                interventions=["Improve diet"],
                rationale="Metabolic markers",
                citations=["ADA 2024"],
            )
        ])

        assert summary == {
            "type_2_diabetes": {
                "risk": "Medium",
                "score": 58,
                "trend": "Stable",
                "rationale": "Metabolic markers",
                "interventions": ["Improve diet"],
                "citations": ["ADA 2024"],
            }
        }

    def test_trend_carried_through(self):
        summary = derive_risk_factors([prediction(trend="increasing")])

        assert summary["type_2_diabetes"]["trend"] == "increasing"

    @pytest.mark.parametrize("probability,expected", [(40, "Medium"), (39, "Low"), (70, "High"), (69, "Medium")])
    def test_label_boundaries_through_derivation(self, probability, expected):
        summary = derive_risk_factors([prediction(probability=probability)])

        assert summary["type_2_diabetes"]["risk"] == expected

    def test_raw_records_accepted(self):
        """Raw remote records should be normalized before derivation."""
        summary = derive_risk_factors([
            {"condition": "Heart Failure", "probability_pct": 72.4, "trend": "increasing"},
            {"name": "Stroke", "prob": 150},
        ])

        assert summary["heart_failure"]["score"] == 72
        assert summary["heart_failure"]["risk"] == "High"
        assert summary["heart_failure"]["trend"] == "increasing"
        assert summary["stroke"]["score"] == 100

    def test_duplicate_slugs_last_write_wins(self):
        """Later predictions for the same condition should replace earlier ones."""
        summary = derive_risk_factors([
            prediction(condition="Type 2 Diabetes", probability=80),
            prediction(condition="type 2  diabetes", probability=20),
        ])

        assert list(summary) == ["type_2_diabetes"]
        assert summary["type_2_diabetes"]["score"] == 20
        assert summary["type_2_diabetes"]["risk"] == "Low"

    def test_idempotent(self):
        """Deriving twice from the same list should give identical output."""
        predictions = [
            prediction(condition="A", probability=10),
            prediction(condition="B", probability=55, interventions=["Walk"]),
        ]

        assert derive_risk_factors(predictions) == derive_risk_factors(predictions)

    def test_output_lists_are_copies(self):
        """Mutating the summary should not touch the source prediction."""
        source = prediction(interventions=["Walk"])
        summary = derive_risk_factors([source])

        summary["type_2_diabetes"]["interventions"].append("Run")

        assert source.interventions == ["Walk"]

    def test_empty_input(self):
        assert derive_risk_factors([]) == {}


class TestMergeRiskFactors:
    """Test overlaying derived entries on a baseline."""

    def test_overlay_keeps_baseline_entries(self, high_risk_snapshot):
        baseline = high_risk_snapshot["riskFactors"]
        merged = merge_risk_factors(baseline, [prediction(condition="Cardiovascular", probability=90)])

        assert merged["diabetes"] == baseline["diabetes"]
        assert merged["hypertension"] == baseline["hypertension"]
        assert merged["cardiovascular"]["score"] == 90
        assert merged["cardiovascular"]["risk"] == "High"

    def test_inputs_not_mutated(self, high_risk_snapshot):
        baseline = high_risk_snapshot["riskFactors"]
        before = copy.deepcopy(baseline)

        merge_risk_factors(baseline, [prediction(condition="Diabetes", probability=5)])

        assert baseline == before

    def test_missing_baseline(self):
        merged = merge_risk_factors(None, [prediction()])

        assert list(merged) == ["type_2_diabetes"]


class TestProbabilityBand:
    """Display banding uses 50/70, separate from the 40/70 risk labels."""

    @pytest.mark.parametrize("probability,expected", [
        (95, "high"),
        (70, "high"),
        (69, "moderate"),
        (50, "moderate"),
        (49, "low"),
        (40, "low"),
        (0, "low"),
    ])
    def test_bands(self, probability, expected):
        assert probability_band(probability) == expected

    def test_bands_differ_from_risk_labels(self):
        """A score of 45 is Medium risk but still a low display band."""
        assert risk_label(45) == "Medium"
        assert probability_band(45) == "low"
