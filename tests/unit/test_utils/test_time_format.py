"""Tests for relative_time utility."""

from datetime import UTC, datetime, timedelta

from sessionkeeper.utils.time_format import relative_time

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


class TestRelativeTime:
    def test_just_now(self) -> None:
        assert relative_time(NOW - timedelta(seconds=30), now=NOW) == "just now"

    def test_minutes_ago(self) -> None:
        assert relative_time(NOW - timedelta(minutes=5), now=NOW) == "5 min ago"

    def test_one_minute_ago(self) -> None:
        dt = NOW - timedelta(minutes=1, seconds=30)
        assert relative_time(dt, now=NOW) == "1 min ago"

    def test_hours_ago(self) -> None:
        assert relative_time(NOW - timedelta(hours=3), now=NOW) == "3 hours ago"

    def test_one_hour_ago(self) -> None:
        dt = NOW - timedelta(hours=1, minutes=10)
        assert relative_time(dt, now=NOW) == "1 hour ago"

    def test_days_ago(self) -> None:
        assert relative_time(NOW - timedelta(days=3), now=NOW) == "3 days ago"

    def test_one_day_ago(self) -> None:
        assert relative_time(NOW - timedelta(days=1), now=NOW) == "1 day ago"

    def test_weeks_ago(self) -> None:
        assert relative_time(NOW - timedelta(weeks=2), now=NOW) == "2 weeks ago"

    def test_months_ago(self) -> None:
        assert relative_time(NOW - timedelta(days=90), now=NOW) == "3 months ago"

    def test_one_month_ago(self) -> None:
        assert relative_time(NOW - timedelta(days=35), now=NOW) == "1 month ago"

    def test_epoch_seconds_timestamp(self) -> None:
        """File mtimes are plain epoch seconds."""
        mtime = (NOW - timedelta(hours=2)).timestamp()
        assert relative_time(mtime, now=NOW) == "2 hours ago"

    def test_defaults_to_current_time(self) -> None:
        dt = datetime.now(UTC) - timedelta(days=2)
        assert relative_time(dt) == "2 days ago"
