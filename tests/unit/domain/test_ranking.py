"""
Unit tests for the leaderboard ranking rules.

Tests the ordering key, the limit clamp and the age buckets.
"""

from datetime import datetime, timedelta, timezone

import pytest

from ghostagotchi.domain.models.ranking import clamp_limit, format_age, ranking_key

NOW = datetime(2025, 10, 31, 12, 0, tzinfo=timezone.utc)


@pytest.mark.unit
@pytest.mark.domain
class TestClampLimit:
    """Caller limits are normalized into [1, 50]."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, 10),
            ("abc", 10),
            ("", 10),
            (True, 10),
            (0, 1),
            (-5, 1),
            ("0", 1),
            (1, 1),
            (25, 25),
            ("7", 7),
            ("3.9", 3),
            (50, 50),
            (51, 50),
            (1000, 50),
        ],
    )
    def test_clamp(self, raw, expected):
        assert clamp_limit(raw) == expected

    def test_custom_default_and_maximum(self):
        assert clamp_limit(None, default=5, maximum=20) == 5
        assert clamp_limit(99, default=5, maximum=20) == 20


@pytest.mark.unit
@pytest.mark.domain
class TestRankingKey:
    """Level desc, experience desc, created_at asc."""

    def test_orders_by_all_three_keys(self):
        # Arrange
        older = NOW - timedelta(days=3)
        rows = [
            ("low", 1, 50, older),
            ("young_tie", 3, 250, NOW),
            ("old_tie", 3, 250, older),
            ("top", 4, 300, NOW),
            ("same_level_more_xp", 3, 290, NOW),
        ]

        # Act
        ordered = sorted(rows, key=lambda r: ranking_key(r[1], r[2], r[3]))

        # Assert
        assert [r[0] for r in ordered] == [
            "top",
            "same_level_more_xp",
            "old_tie",
            "young_tie",
            "low",
        ]

    def test_full_ties_keep_input_order(self):
        rows = [("a", 2, 120, NOW), ("b", 2, 120, NOW)]

        ordered = sorted(rows, key=lambda r: ranking_key(r[1], r[2], r[3]))

        assert [r[0] for r in ordered] == ["a", "b"]


@pytest.mark.unit
@pytest.mark.domain
class TestFormatAge:
    """Human-readable age buckets."""

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(minutes=0), "Just born"),
            (timedelta(minutes=59), "Just born"),
            (timedelta(hours=1), "1 hour old"),
            (timedelta(hours=5, minutes=30), "5 hours old"),
            (timedelta(hours=23, minutes=59), "23 hours old"),
            (timedelta(days=1), "1 day old"),
            (timedelta(days=1, hours=23), "1 day old"),
            (timedelta(days=2), "2 days old"),
            (timedelta(days=6), "6 days old"),
            (timedelta(days=7), "1 week old"),
            (timedelta(days=13), "1 week old"),
            (timedelta(days=14), "2 weeks old"),
            (timedelta(days=27), "3 weeks old"),
            (timedelta(days=28), "0 months old"),
            (timedelta(days=30), "1 month old"),
            (timedelta(days=75), "2 months old"),
            (timedelta(days=365), "12 months old"),
        ],
    )
    def test_buckets(self, delta, expected):
        assert format_age(NOW - delta, NOW) == expected

    def test_future_creation_is_just_born(self):
        assert format_age(NOW + timedelta(hours=3), NOW) == "Just born"
