"""Tests for the execution engine and error aggregation."""

from datetime import time

import pytest

from horologe import format_date, format_time, to_string
from horologe.compiler import compile_pattern
from horologe.directives import FormatContext
from horologe.engine import aggregate, execute, run
from horologe.errors import AggregatedFormatError, DirectiveExecutionError
from horologe.locale_data import LocaleDataRepository
from horologe.protocols import LocaleInfo
from horologe.values import TimeValue


@pytest.fixture
def en_context():
    """Execution context for English."""
    data = LocaleDataRepository.default().get("en")
    return FormatContext(locale=LocaleInfo.parse("en"), data=data, calendar=data.calendar())


# ==============================================================================
# Execution
# ==============================================================================

class TestExecute:
    """Tests for executing compiled sequences."""

    def test_one_fragment_per_directive(self, en_context):
        sequence = compile_pattern("h:mm a", "en")
        fragments = execute(sequence, TimeValue(hour=7, minute=35, second=13), en_context)
        assert fragments == ["7", ":", "35", " ", "AM"]

    def test_failures_stay_in_position(self, en_context):
        """Test that a failing directive does not stop execution."""
        sequence = compile_pattern("h:mm", "en")
        fragments = execute(sequence, TimeValue(hour=7), en_context)
        assert len(fragments) == len(sequence)
        assert fragments[:2] == ["7", ":"]
        assert isinstance(fragments[2], DirectiveExecutionError)
        assert fragments[2].symbol == "m"
        assert fragments[2].count == 2

    def test_out_of_range_field(self, en_context):
        """Test that a month outside 1-12 becomes an error fragment."""
        sequence = compile_pattern("MMM", "en")
        fragments = execute(sequence, TimeValue(year=2024, month=13, day=1), en_context)
        assert isinstance(fragments[0], DirectiveExecutionError)

    def test_month_zero(self, en_context):
        sequence = compile_pattern("M QQQ", "en")
        fragments = execute(sequence, TimeValue(year=2024, month=0, day=1), en_context)
        assert isinstance(fragments[0], DirectiveExecutionError)
        assert isinstance(fragments[2], DirectiveExecutionError)
        assert "between 1 and 12" in fragments[0].message

    def test_invalid_calendar_date(self, en_context):
        sequence = compile_pattern("EEEE", "en")
        fragments = execute(sequence, TimeValue(year=2024, month=2, day=30), en_context)
        assert isinstance(fragments[0], DirectiveExecutionError)
        assert "2024-2-30" in fragments[0].message


# ==============================================================================
# Aggregation
# ==============================================================================

class TestAggregate:
    """Tests for joining fragments and collecting errors."""

    def test_concatenates_text(self):
        assert aggregate(["7", ":", "35"]) == "7:35"

    def test_empty(self):
        assert aggregate([]) == ""

    def test_collects_every_error(self):
        first = DirectiveExecutionError("first failed", symbol="y", count=4)
        second = DirectiveExecutionError("second failed", symbol="M", count=2)
        with pytest.raises(AggregatedFormatError) as exc_info:
            aggregate([first, "-", second])
        assert exc_info.value.errors == [first, second]
        assert str(exc_info.value) == "first failed; second failed"

    def test_run(self, en_context):
        sequence = compile_pattern("HH:mm", "en")
        assert run(sequence, TimeValue(hour=7, minute=5), en_context) == "07:05"


# ==============================================================================
# End to End Errors
# ==============================================================================

class TestFormatErrors:
    """Tests for error behaviour of the public entry points."""

    def test_every_failing_directive_is_reported(self):
        """Test that each missing field is named in one message."""
        with pytest.raises(AggregatedFormatError) as exc_info:
            format_time(time(7, 35, 13), "en", "yyyy-MM-dd HH:mm")
        message = str(exc_info.value)
        assert len(exc_info.value.errors) == 3
        assert "'yyyy'" in message
        assert "'MM'" in message
        assert "'dd'" in message
        assert message.count("; ") == 2

    def test_no_partial_output(self):
        result = to_string(time(7, 35, 13), "en", "HH:mm G")
        assert isinstance(result, AggregatedFormatError)

    def test_missing_zone(self):
        """Test that a zone symbol needs an offset."""
        with pytest.raises(AggregatedFormatError) as exc_info:
            format_time(time(7, 35, 13), "en", "long")
        assert "utc_offset" in str(exc_info.value)

    def test_date_errors(self):
        with pytest.raises(AggregatedFormatError):
            format_date({"year": 2024, "month": 1, "day": 1}, "en", "d MMM y HH")
