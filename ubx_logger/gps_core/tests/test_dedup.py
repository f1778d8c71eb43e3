"""Unit tests for timestamp deduplication."""

import datetime as dt

from ubx_logger.gps_core.parsers.dedup import SampleDeduplicator
from ubx_logger.gps_core.parsers.ubx_types import ParserContext

T0 = dt.datetime(2024, 5, 17, 12, 34, 56, tzinfo=dt.timezone.utc)


class TestSampleDeduplicator:
    """Test one-emission-per-timestamp filtering."""

    def test_first_sample_accepted(self, make_sample):
        dedup = SampleDeduplicator()
        assert dedup.last_emitted is None
        assert dedup.accept(make_sample(T0)) is True
        assert dedup.last_emitted == T0

    def test_repeat_timestamp_rejected(self, make_sample):
        """Identical timestamps emit once even if the position moved."""
        dedup = SampleDeduplicator()
        assert dedup.accept(make_sample(T0, latitude_deg=1.0)) is True
        assert dedup.accept(make_sample(T0, latitude_deg=2.0)) is False
        assert dedup.last_emitted == T0

    def test_different_timestamp_accepted(self, make_sample):
        dedup = SampleDeduplicator()
        later = T0 + dt.timedelta(seconds=1)
        assert dedup.accept(make_sample(T0)) is True
        assert dedup.accept(make_sample(later)) is True
        assert dedup.last_emitted == later

    def test_earlier_timestamp_still_differs(self, make_sample):
        dedup = SampleDeduplicator()
        dedup.accept(make_sample(T0))
        assert dedup.accept(make_sample(T0 - dt.timedelta(seconds=1))) is True

    def test_only_last_emitted_is_compared(self, make_sample):
        dedup = SampleDeduplicator()
        later = T0 + dt.timedelta(seconds=1)
        emitted = [dedup.accept(make_sample(t)) for t in (T0, later, T0)]
        assert emitted == [True, True, True]

    def test_reset(self, make_sample):
        dedup = SampleDeduplicator()
        dedup.accept(make_sample(T0))
        dedup.reset()
        assert dedup.last_emitted is None
        assert dedup.accept(make_sample(T0)) is True


class TestParserContext:
    """Test counters and the diagnostic rate limiter."""

    def test_last_emitted_follows_dedup(self, make_sample):
        context = ParserContext()
        context.dedup.accept(make_sample(T0))
        assert context.last_emitted_timestamp == T0

    def test_diagnostic_due(self):
        context = ParserContext()
        assert context.diagnostic_due(10.0) is True
        assert context.diagnostic_due(10.5) is False
        assert context.diagnostic_due(11.0) is True

    def test_reset_clears_everything(self, make_sample):
        context = ParserContext(valid_frames=3, checksum_failures=2, last_diagnostic=5.0)
        context.dedup.accept(make_sample(T0))
        context.reset()
        assert context.valid_frames == 0
        assert context.checksum_failures == 0
        assert context.last_diagnostic is None
        assert context.last_emitted_timestamp is None
