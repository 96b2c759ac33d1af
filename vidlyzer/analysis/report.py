"""
Plain-text compliance summary

An offline alternative to the finding list: pauses, denylisted words, harmful
content categories and a rule based sentiment, rendered as one text block.
"""
from typing import List, Sequence, Tuple

from vidlyzer.analysis.pauses import SUMMARY_PAUSE_THRESHOLD_SECONDS, detect_pauses
from vidlyzer.analysis.sentiment import density_sentiment
from vidlyzer.analysis.timestamps import format_timestamp
from vidlyzer.models.analysis import Pause
from vidlyzer.models.moderation import ModerationResult
from vidlyzer.models.transcript import TranscriptionResult

# Compliance denylist, unrelated to the moderation categories
DISALLOWED_WORDS: Tuple[str, ...] = ("anchor", "implant", "stud")

# wire category -> report label, in report order
HARMFUL_CONTENT_LABELS: Tuple[Tuple[str, str], ...] = (
    ("hate", "Hate Speech"),
    ("violence", "Violence"),
    ("sexual", "Sexual Content"),
    ("self-harm", "Self-Harm"),
    ("harassment", "Harassment"),
    ("illicit", "Illicit"),
)


class ComplianceReport:
    """Compliance summary over a transcript and every moderation result"""

    def __init__(
        self,
        transcript: TranscriptionResult,
        moderation_results: Sequence[ModerationResult],
        pause_threshold: float = SUMMARY_PAUSE_THRESHOLD_SECONDS,
        disallowed_words: Sequence[str] = DISALLOWED_WORDS,
    ):
        self.transcript = transcript
        self.moderation_results = list(moderation_results)
        self.pause_threshold = pause_threshold
        self.disallowed_words = {w.lower() for w in disallowed_words}

    def unusual_pauses(self) -> List[Pause]:
        return detect_pauses(self.transcript.word_list, self.pause_threshold)

    def compliance_violations(self) -> List[Tuple[str, float]]:
        """(word, start) for every spoken denylisted word"""
        return [
            (segment.word, segment.start)
            for segment in self.transcript.word_list
            if segment.word.strip().lower() in self.disallowed_words
        ]

    def harmful_content(self) -> List[Tuple[str, float]]:
        """
        (label, time) per raised category of every flagged result

        Category flags are not correlated with word timings, so every time is 0.0.
        """
        flagged_content: List[Tuple[str, float]] = []
        for moderation in self.moderation_results:
            if not moderation.flagged:
                continue
            for category, label in HARMFUL_CONTENT_LABELS:
                if moderation.categories.is_flagged(category):
                    flagged_content.append((label, 0.0))
        return flagged_content

    def sentiment(self) -> str:
        flagged_count = sum(1 for m in self.moderation_results if m.flagged)
        return density_sentiment(flagged_count, self.transcript.duration)

    def render(self) -> str:
        pauses = self.unusual_pauses()
        violations = self.compliance_violations()
        harmful = self.harmful_content()

        lines = ["Content Analysis Summary:", ""]

        lines.append("1. Detected Unusual Pauses:")
        lines += [
            f"- Pause of {p.duration:.2f} seconds at {format_timestamp(p.seconds)}" for p in pauses
        ] or ["- None"]

        lines += ["", "2. Compliance Violations:"]
        lines += [
            f"- Violation: '{word}' at {format_timestamp(time)}" for word, time in violations
        ] or ["- None"]

        lines += ["", "3. Harmful Content:"]
        lines += [f"- {label} at {format_timestamp(time)}" for label, time in harmful] or ["- None"]

        lines += ["", "4. Overall Sentiment:", f"- {self.sentiment()}"]

        return "\n".join(lines) + "\n"
