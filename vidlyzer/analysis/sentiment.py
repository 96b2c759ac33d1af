"""
Sentiment labels: emoji mapping for the LLM label and the offline density heuristic
"""
from typing import Optional

from vidlyzer.models.analysis import Finding, FindingKind

SENTIMENT_EMOJI = {
    "positive": "😊",
    "negative": "😞",
    "neutral": "😐",
}
DEFAULT_SENTIMENT_EMOJI = "😐"

# flagged results per second of audio
NEGATIVE_DENSITY = 0.10
NEUTRAL_DENSITY = 0.05


def sentiment_emoji(label: str) -> str:
    return SENTIMENT_EMOJI.get(label.lower(), DEFAULT_SENTIMENT_EMOJI)


def sentiment_finding(label: str) -> Finding:
    """The single sentiment finding closing every flagged analysis"""
    return Finding(
        kind=FindingKind.SENTIMENT,
        timestamp="-",
        timestamp_seconds=0,
        description=label,
        emoji=sentiment_emoji(label),
    )


def density_sentiment(flagged_count: int, duration: Optional[float]) -> str:
    """
    Rule based sentiment from the density of flagged moderation results

    :param flagged_count: number of flagged moderation results
    :param duration: transcript duration (seconds); missing or non-positive counts as 1.0
    :return: "Negative" / "Neutral" / "Positive"
    """
    total_duration = duration if duration and duration > 0 else 1.0
    density = flagged_count / total_duration

    if density > NEGATIVE_DENSITY:
        return "Negative"
    elif density > NEUTRAL_DENSITY:
        return "Neutral"
    return "Positive"
