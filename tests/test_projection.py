"""
Projection Calculator Tests
"""

from datetime import datetime, timedelta, timezone

import pytest

from quizfunnel.projection import (
    MIN_TARGET_SCORE,
    PROGRAM_DURATION_DAYS,
    REDUCTION_FACTORS,
    calculate_projection,
    get_reduction_factor,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestReductionFactor:
    @pytest.mark.parametrize("minutes,factor", [(5, 0.25), (10, 0.40), (15, 0.55), (20, 0.70)])
    def test_factors(self, minutes, factor):
        assert get_reduction_factor(minutes) == factor

    @pytest.mark.parametrize("minutes", [0, 7, 30, -5])
    def test_unsupported_commitment(self, minutes):
        with pytest.raises(ValueError):
            get_reduction_factor(minutes)


class TestCalculateProjection:
    def test_eighty_with_ten_minutes(self):
        projection = calculate_projection(80, 10, now=NOW)

        assert projection.target_score == 48
        assert projection.reduction_percent == 40
        assert projection.display_current_score == 40
        assert projection.display_target_score == 24

    def test_target_date_is_end_of_program(self):
        projection = calculate_projection(50, 5, now=NOW)
        assert projection.target_date == NOW + timedelta(days=PROGRAM_DURATION_DAYS)

    def test_floor_applies(self):
        projection = calculate_projection(20, 20, now=NOW)
        # 20 * 0.3 = 6 -> floored
        assert projection.target_score == MIN_TARGET_SCORE
        assert projection.reduction_percent == 50

    def test_zero_score_has_zero_reduction(self):
        projection = calculate_projection(0, 15, now=NOW)
        assert projection.reduction_percent == 0
        assert projection.target_score == MIN_TARGET_SCORE

    def test_reduction_never_negative(self):
        projection = calculate_projection(5, 5, now=NOW)
        assert projection.reduction_percent == 0

    @pytest.mark.parametrize("score", [10, 33, 50, 80, 100])
    @pytest.mark.parametrize("minutes", sorted(REDUCTION_FACTORS))
    def test_target_bounds(self, score, minutes):
        projection = calculate_projection(score, minutes, now=NOW)
        assert MIN_TARGET_SCORE <= projection.target_score <= score

    @pytest.mark.parametrize("score", [30, 60, 100])
    def test_more_time_never_projects_higher(self, score):
        targets = [calculate_projection(score, m, now=NOW).target_score for m in sorted(REDUCTION_FACTORS)]
        assert targets == sorted(targets, reverse=True)
