"""
Finding aggregation

Turns a transcript and its moderation verdict into the ordered findings shown
next to the player: offensive words, then pauses, then one sentiment finding.
"""
import logging
from typing import List, Mapping, Sequence

from vidlyzer.analysis.offensive import OFFENSIVE_WORDS, match_offensive_words
from vidlyzer.analysis.pauses import PAUSE_THRESHOLD_SECONDS, detect_pauses
from vidlyzer.analysis.sentiment import sentiment_finding
from vidlyzer.errors import ModerationError
from vidlyzer.llm.base import SentimentClassifier
from vidlyzer.models.analysis import (
    ISSUES_DETECTED_MESSAGE,
    AnalysisOutcome,
    Finding,
    FindingKind,
    OutcomeStatus,
    Pause,
)
from vidlyzer.models.moderation import ModerationResult
from vidlyzer.models.transcript import TranscriptionResult

logger = logging.getLogger(__name__)

PAUSE_EMOJI = "⏸️"


def pause_finding(pause: Pause) -> Finding:
    return Finding(
        kind=FindingKind.PAUSE,
        timestamp=pause.timestamp,
        timestamp_seconds=pause.seconds,
        description=f"Unusual pause of {pause.duration:.2f} seconds",
        emoji=PAUSE_EMOJI,
    )


def build_findings(
    transcript: TranscriptionResult,
    moderation_results: Sequence[ModerationResult],
    classifier: SentimentClassifier,
    dictionary: Mapping[str, Sequence[str]] = OFFENSIVE_WORDS,
    pause_threshold: float = PAUSE_THRESHOLD_SECONDS,
) -> AnalysisOutcome:
    """
    Aggregate one analysis run

    Only the first moderation result is considered. When it is not flagged the
    outcome carries no findings and the classifier is not called.

    :param transcript: transcription with word timings
    :param moderation_results: moderation verdicts for the transcript text
    :param classifier: sentiment classifier, called once with the transcript text
    :param dictionary: category -> watch-words
    :param pause_threshold: minimum gap between words (seconds)
    :return: AnalysisOutcome
    :raises ModerationError: when there is no moderation result
    :raises SentimentAnalysisError: propagated from the classifier
    """
    if not moderation_results:
        raise ModerationError("No data received from the server")

    moderation = moderation_results[0]
    if not moderation.flagged:
        logger.info("[Aggregator] moderation not flagged, no findings")
        return AnalysisOutcome.no_offensive_content()

    words = transcript.word_list

    findings: List[Finding] = match_offensive_words(
        transcript.text, words, moderation.categories, dictionary
    )
    findings += [pause_finding(p) for p in detect_pauses(words, pause_threshold)]

    label = classifier.classify(transcript.text)
    findings.append(sentiment_finding(label))

    logger.info(
        f"[Aggregator] findings={len(findings)} "
        f"(offensive={sum(f.kind is FindingKind.OFFENSIVE_WORD for f in findings)}, "
        f"pauses={sum(f.kind is FindingKind.PAUSE for f in findings)}, sentiment={label})"
    )
    return AnalysisOutcome(
        status=OutcomeStatus.ISSUES_DETECTED,
        findings=tuple(findings),
        message=ISSUES_DETECTED_MESSAGE,
    )
