"""Unit tests for timestamp and text utilities."""

from datetime import datetime, timedelta, timezone

from jobboard.utils.text import truncate_text
from jobboard.utils.timestamps import ensure_utc, format_timestamp, parse_timestamp, utc_now


class TestTimestamps:
    def test_utc_now_is_aware(self):
        assert utc_now().tzinfo == timezone.utc

    def test_ensure_utc(self):
        assert ensure_utc(None) is None
        assert ensure_utc(datetime(2024, 5, 1, 8)).tzinfo == timezone.utc
        shifted = datetime(2024, 5, 1, 8, tzinfo=timezone(timedelta(hours=-4)))
        assert ensure_utc(shifted).hour == 12

    def test_format_uses_z_suffix(self):
        dt = datetime(2024, 5, 1, 8, 30, 0, 123456, tzinfo=timezone.utc)
        assert format_timestamp(dt) == "2024-05-01T08:30:00.123456Z"
        assert format_timestamp(None) is None

    def test_parse_with_and_without_microseconds(self):
        assert parse_timestamp("2024-05-01T08:30:00.123456Z") == datetime(
            2024, 5, 1, 8, 30, 0, 123456, tzinfo=timezone.utc
        )
        assert parse_timestamp("2024-05-01T08:30:00Z") == datetime(
            2024, 5, 1, 8, 30, tzinfo=timezone.utc
        )
        assert parse_timestamp("") is None

    def test_stored_strings_sort_chronologically(self):
        earlier = format_timestamp(datetime(2024, 5, 1, 8, tzinfo=timezone.utc))
        later = format_timestamp(datetime(2024, 5, 1, 10, tzinfo=timezone(timedelta(hours=1))))
        assert earlier < later


class TestTruncateText:
    def test_short_text_unchanged(self):
        assert truncate_text("short", 10) == "short"

    def test_cuts_at_word_boundary(self):
        result = truncate_text("This is a very long text that needs truncating", max_length=30)
        assert result == "This is a very long text..."

    def test_never_exceeds_limit(self):
        result = truncate_text("x" * 600, 500)
        assert len(result) == 500
        assert result.endswith("...")
