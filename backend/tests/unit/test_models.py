"""Unit tests for model column types."""

from datetime import datetime, timedelta, timezone

from sqlalchemy.dialects import sqlite

from fusion_database.models import Feed, UTCDateTime

DIALECT = sqlite.dialect()


class TestUTCDateTime:
    def test_naive_value_from_database_is_tagged_utc(self):
        value = UTCDateTime().process_result_value(datetime(2024, 5, 1, 12, 0), DIALECT)

        assert value == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert value.utcoffset() == timedelta(0)

    def test_offset_value_is_converted_to_utc(self):
        paris = timezone(timedelta(hours=2))

        value = UTCDateTime().process_bind_param(datetime(2024, 5, 1, 14, 0, tzinfo=paris), DIALECT)

        assert value == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert value.tzinfo is timezone.utc

    def test_none_passes_through(self):
        assert UTCDateTime().process_bind_param(None, DIALECT) is None
        assert UTCDateTime().process_result_value(None, DIALECT) is None


class TestFeedRefreshTime:
    def test_feed_updated_at_has_no_onupdate(self):
        assert Feed.__table__.c.updated_at.onupdate is None
        assert Feed.__table__.c.updated_at.default is not None
