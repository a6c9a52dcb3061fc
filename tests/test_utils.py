from datetime import date, datetime, timedelta, timezone

from upi_extractor.utils.utils import (
    date_range_bounds,
    generate_api_key,
    to_utc_isoformat,
    utc_now,
)


class TestUtcHelpers:
    def test_utc_now_is_naive_utc(self):
        now = utc_now()

        assert now.tzinfo is None
        assert abs(datetime.now(timezone.utc).replace(tzinfo=None) - now) < timedelta(seconds=5)

    def test_naive_values_get_utc_offset(self):
        assert to_utc_isoformat(datetime(2024, 3, 12, 10, 15)) == "2024-03-12T10:15:00+00:00"

    def test_aware_values_are_converted(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        assert to_utc_isoformat(datetime(2024, 3, 12, 15, 45, tzinfo=ist)) == "2024-03-12T10:15:00+00:00"

    def test_none(self):
        assert to_utc_isoformat(None) is None


class TestDateRangeBounds:
    def test_end_day_is_included(self):
        start, end = date_range_bounds(date(2024, 3, 1), date(2024, 3, 5))

        assert start == datetime(2024, 3, 1)
        assert end == datetime(2024, 3, 6)

    def test_open_bounds(self):
        assert date_range_bounds(None, None) == (None, None)


def test_generate_api_key():
    key = generate_api_key()

    assert key.startswith("key_")
    assert len(key) == 36
    assert key != generate_api_key()
