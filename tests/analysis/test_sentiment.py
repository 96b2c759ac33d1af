"""Tests for sentiment helpers."""

import pytest

from vidlyzer.analysis.sentiment import density_sentiment, sentiment_emoji, sentiment_finding
from vidlyzer.models.analysis import FindingKind


class TestSentimentEmoji:
    @pytest.mark.parametrize(
        "label, emoji",
        [
            ("positive", "😊"),
            ("Positive", "😊"),
            ("negative", "😞"),
            ("neutral", "😐"),
            ("Mixed", "😐"),
            ("Positive.", "😐"),
            ("", "😐"),
        ],
    )
    def test_mapping(self, label, emoji):
        assert sentiment_emoji(label) == emoji

    def test_finding_keeps_label_verbatim(self):
        finding = sentiment_finding("Somewhat positive")

        assert finding.kind is FindingKind.SENTIMENT
        assert finding.description == "Somewhat positive"
        assert finding.timestamp == "-"
        assert finding.emoji == "😐"


class TestDensitySentiment:
    @pytest.mark.parametrize(
        "flagged, duration, label",
        [
            (12, 100.0, "Negative"),
            (7, 100.0, "Neutral"),
            (2, 100.0, "Positive"),
            (0, 100.0, "Positive"),
            (5, 100.0, "Positive"),
            (1, None, "Negative"),
            (1, 0.0, "Negative"),
        ],
    )
    def test_thresholds(self, flagged, duration, label):
        assert density_sentiment(flagged, duration) == label
