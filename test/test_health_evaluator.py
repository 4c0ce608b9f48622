#!/usr/bin/env python3
"""Tests for the health evaluation rules."""

from decimal import Decimal

import pytest

from src.validator_health.health_evaluator import (
    HealthEvaluator,
    calculate_sync_percentage,
    evaluate_health,
)
from src.validator_health.models import ChainSnapshot, HealthVerdict


class TestCalculateSyncPercentage:
    """Tests for calculate_sync_percentage."""

    def test_zero_latest(self):
        """Test the division-by-zero guard."""
        assert calculate_sync_percentage(0, 0) == Decimal("0.00")
        assert str(calculate_sync_percentage(0, 0)) == "0.00"

    @pytest.mark.parametrize("finalized,latest,expected", [
        (12320, 12345, "99.80"),
        (12280, 12345, "99.47"),
        (100, 100, "100.00"),
        (0, 100, "0.00"),
        (1, 3, "33.33"),
        (2, 3, "66.67"),
        (1, 8, "12.50"),
        (1, 800, "0.13"),
    ])
    def test_rounding(self, finalized, latest, expected):
        """Test percentages are rounded half-up to two decimals."""
        assert str(calculate_sync_percentage(finalized, latest)) == expected

    def test_finalized_ahead_of_latest(self):
        """Test percentages above 100 are reported as computed."""
        assert calculate_sync_percentage(101, 100) == Decimal("101.00")

    def test_large_heights_stay_exact(self):
        """Test heights far beyond float precision."""
        latest = 2 ** 80
        assert calculate_sync_percentage(latest - 1, latest) == Decimal("100.00")
        assert calculate_sync_percentage(latest // 2, latest) == Decimal("50.00")


class TestEvaluateHealth:
    """Tests for evaluate_health."""

    def test_gap_equal_to_max_is_healthy(self):
        """Test the boundary where the gap equals the maximum."""
        verdict = evaluate_health(12345, 12320, 25)

        assert verdict == HealthVerdict(
            gap=25,
            sync_percentage=Decimal("99.80"),
            is_healthy=True,
            max_allowed_gap=25
        )
        assert verdict.status == "HEALTHY"

    def test_gap_above_max_is_unhealthy(self):
        """Test a lag beyond the threshold."""
        verdict = evaluate_health(12345, 12280, 25)

        assert verdict.gap == 65
        assert verdict.sync_percentage == Decimal("99.47")
        assert verdict.is_healthy is False
        assert verdict.status == "UNHEALTHY"

    def test_gap_one_over_max(self):
        """Test the first unhealthy gap."""
        assert evaluate_health(126, 100, 25).is_healthy is False

    def test_zero_gap_is_healthy(self):
        """Test a fully finalized chain."""
        verdict = evaluate_health(500, 500, 25)
        assert verdict.gap == 0
        assert verdict.is_healthy is True

    def test_empty_chain(self):
        """Test a fresh chain at genesis."""
        verdict = evaluate_health(0, 0, 25)
        assert verdict.gap == 0
        assert verdict.sync_percentage == Decimal("0.00")
        assert verdict.is_healthy is True

    @pytest.mark.parametrize("latest,finalized", [(100, 101), (0, 5), (12345, 20000)])
    def test_negative_gap_is_never_healthy(self, latest, finalized):
        """Test finalized ahead of latest is unhealthy and not clamped."""
        verdict = evaluate_health(latest, finalized, 10 ** 9)
        assert verdict.gap == latest - finalized
        assert verdict.gap < 0
        assert verdict.is_healthy is False

    def test_zero_max_gap(self):
        """Test a zero tolerance threshold."""
        assert evaluate_health(10, 10, 0).is_healthy is True
        assert evaluate_health(11, 10, 0).is_healthy is False

    def test_pure_function(self):
        """Test repeated evaluation gives equal verdicts."""
        assert evaluate_health(12345, 12320, 25) == evaluate_health(12345, 12320, 25)


class TestHealthEvaluator:
    """Tests for the HealthEvaluator wrapper."""

    def test_evaluate_snapshot(self):
        """Test the configured threshold is applied to a snapshot."""
        evaluator = HealthEvaluator(max_allowed_gap=25)
        verdict = evaluator.evaluate(ChainSnapshot(latest_block=12345, finalized_block=12280))

        assert verdict.gap == 65
        assert verdict.max_allowed_gap == 25
        assert verdict.is_healthy is False

    def test_verdict_to_dict(self):
        """Test verdict serialization."""
        verdict = HealthEvaluator(25).evaluate(ChainSnapshot(12345, 12320))

        assert verdict.to_dict() == {
            "gap": 25,
            "sync_percentage": "99.80",
            "is_healthy": True,
            "max_allowed_gap": 25,
            "status": "HEALTHY"
        }
