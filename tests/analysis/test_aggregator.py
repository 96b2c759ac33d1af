"""Tests for finding aggregation."""

import pytest

from vidlyzer.analysis.aggregator import build_findings
from vidlyzer.errors import ModerationError, SentimentAnalysisError
from vidlyzer.models.analysis import FindingKind, OutcomeStatus
from vidlyzer.models.transcript import TranscriptionResult


class TestBuildFindings:
    def test_not_flagged_short_circuits(self, transcript, classifier, moderation_factory):
        outcome = build_findings(transcript, [moderation_factory(False)], classifier)

        assert outcome.status is OutcomeStatus.NO_OFFENSIVE_CONTENT
        assert outcome.findings == ()
        assert outcome.message == "No offensive content detected."
        assert not outcome.issues_detected
        classifier.classify.assert_not_called()

    def test_flagged_ordering(self, transcript, classifier, moderation_factory):
        outcome = build_findings(
            transcript, [moderation_factory(True, harassment=True)], classifier
        )

        kinds = [f.kind for f in outcome.findings]
        assert kinds == [
            FindingKind.OFFENSIVE_WORD,
            FindingKind.PAUSE,
            FindingKind.PAUSE,
            FindingKind.SENTIMENT,
        ]
        assert outcome.status is OutcomeStatus.ISSUES_DETECTED
        assert outcome.message == "Issues Detected"

    def test_ordering_ignores_timestamps(self, classifier, moderation_factory):
        # the pause comes before the offensive word in time
        transcript = TranscriptionResult.from_payload(
            {
                "text": "well you idiot",
                "duration": 10.0,
                "words": [
                    {"word": "well", "start": 0.0, "end": 0.5},
                    {"word": "you", "start": 4.0, "end": 4.2},
                    {"word": "idiot", "start": 4.2, "end": 4.8},
                ],
            }
        )

        outcome = build_findings(transcript, [moderation_factory(True, harassment=True)], classifier)

        assert [f.kind for f in outcome.findings] == [
            FindingKind.OFFENSIVE_WORD,
            FindingKind.PAUSE,
            FindingKind.SENTIMENT,
        ]
        assert outcome.findings[0].timestamp_seconds > outcome.findings[1].timestamp_seconds

    def test_sentiment_finding_last(self, transcript, classifier, moderation_factory):
        outcome = build_findings(transcript, [moderation_factory(True)], classifier)

        sentiment = outcome.findings[-1]
        assert sentiment.kind is FindingKind.SENTIMENT
        assert sentiment.timestamp == "-"
        assert sentiment.timestamp_seconds == 0
        assert sentiment.description == "Negative"
        assert sentiment.emoji == "😞"
        assert sum(f.kind is FindingKind.SENTIMENT for f in outcome.findings) == 1
        classifier.classify.assert_called_once_with(transcript.text)

    def test_word_findings_within_duration(self, transcript, classifier, moderation_factory):
        outcome = build_findings(transcript, [moderation_factory(True, harassment=True)], classifier)

        for finding in outcome.findings[:-1]:
            assert 0 <= finding.timestamp_seconds <= transcript.duration

    def test_pause_description(self, transcript, classifier, moderation_factory):
        outcome = build_findings(transcript, [moderation_factory(True)], classifier)

        pause = outcome.findings[0]
        assert pause.kind is FindingKind.PAUSE
        assert pause.description == "Unusual pause of 2.50 seconds"
        assert pause.emoji == "⏸️"

    def test_only_first_result_used(self, transcript, classifier, moderation_factory):
        results = [moderation_factory(False), moderation_factory(True, harassment=True)]

        outcome = build_findings(transcript, results, classifier)

        assert outcome.status is OutcomeStatus.NO_OFFENSIVE_CONTENT

    def test_custom_pause_threshold(self, transcript, classifier, moderation_factory):
        outcome = build_findings(transcript, [moderation_factory(True)], classifier, pause_threshold=2.6)

        assert [f.kind for f in outcome.findings] == [FindingKind.PAUSE, FindingKind.SENTIMENT]

    def test_no_words(self, classifier, moderation_factory):
        transcript = TranscriptionResult.from_payload({"text": "you idiot"})

        outcome = build_findings(transcript, [moderation_factory(True, harassment=True)], classifier)

        assert [f.kind for f in outcome.findings] == [FindingKind.SENTIMENT]

    def test_empty_results(self, transcript, classifier):
        with pytest.raises(ModerationError):
            build_findings(transcript, [], classifier)

    def test_classifier_failure_propagates(self, transcript, classifier, moderation_factory):
        classifier.classify.side_effect = SentimentAnalysisError("Request timed out", retryable=True)

        with pytest.raises(SentimentAnalysisError) as exc:
            build_findings(transcript, [moderation_factory(True)], classifier)

        assert str(exc.value) == "Sentiment Analysis Error: Request timed out"
