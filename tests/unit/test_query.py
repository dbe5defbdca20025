"""
Tests for query parameter validation.
"""
import pytest

from utils.errors import AnalysisError, InvalidQueryError, InvalidThresholdError
from utils.query import parse_date, parse_sentiment_type, parse_threshold, sentiment_label


class TestParseThreshold:
    @pytest.mark.parametrize("value, expected", [(1, 1), (5, 5), ("3", 3), (" 7 ", 7), (2.0, 2)])
    def test_accepts_positive_integers(self, value, expected):
        assert parse_threshold(value) == expected

    @pytest.mark.parametrize("value", [0, -1, "0", "abc", "2.5", 2.5, None, True, [], ""])
    def test_rejects_everything_else(self, value):
        with pytest.raises(InvalidThresholdError):
            parse_threshold(value)

    def test_error_hierarchy(self):
        with pytest.raises(ValueError):
            parse_threshold(0)
        with pytest.raises(AnalysisError):
            parse_threshold(0)


class TestParseSentimentType:
    def test_empty_means_no_filter(self):
        assert parse_sentiment_type(None) is None
        assert parse_sentiment_type("") is None

    def test_case_insensitive(self):
        assert parse_sentiment_type("Positive") == "positive"
        assert parse_sentiment_type("NEUTRAL") == "neutral"

    def test_unknown_label(self):
        with pytest.raises(InvalidQueryError):
            parse_sentiment_type("happy")


class TestParseDate:
    def test_valid_date(self):
        assert parse_date("2025-10-11") == "2025-10-11"

    def test_empty_means_unbounded(self):
        assert parse_date(None) is None
        assert parse_date("") is None

    @pytest.mark.parametrize("value", ["2025/10/11", "2025-13-01", "2025-02-30", "10-11", "yesterday"])
    def test_invalid_dates(self, value):
        with pytest.raises(InvalidQueryError):
            parse_date(value)


class TestSentimentLabel:
    @pytest.mark.parametrize("value, expected", [
        ("positive", "positive"),
        (" Positive ", "positive"),
        ("NEUTRAL", "neutral"),
        ("happy", None),
        ("", None),
        (None, None),
        (5, None),
    ])
    def test_normalizes_case_and_rejects_unknown(self, value, expected):
        assert sentiment_label(value) == expected
