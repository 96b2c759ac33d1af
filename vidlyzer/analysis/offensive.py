"""
Offensive word matching

Cross-references the flagged moderation categories against a static
category -> watch-word dictionary and the words actually spoken.
"""
import logging
import string
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence

from vidlyzer.analysis.timestamps import format_timestamp
from vidlyzer.models.analysis import Finding, FindingKind
from vidlyzer.models.moderation import ModerationCategories
from vidlyzer.models.transcript import WordSegment

logger = logging.getLogger(__name__)

OFFENSIVE_WORD_EMOJI = "🛑"

# Keyed by moderation wire category name
OFFENSIVE_WORDS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "hate": ("scum", "vermin", "subhuman"),
    "harassment": ("fuck", "idiot", "loser", "moron"),
    "self-harm": ("suicide", "overdose"),
    "violence": ("kill", "murder", "stab"),
    "sexual": ("porn", "nude"),
    "illicit": ("cocaine", "heroin"),
})

_STRIP_CHARS = string.punctuation + "“”‘’…"


def normalize_token(token: str) -> str:
    """Lowercase a token and strip surrounding punctuation ("Fuck." -> "fuck")"""
    return token.strip().strip(_STRIP_CHARS).lower()


def extract_offensive_words(
    text: str,
    categories: ModerationCategories,
    dictionary: Mapping[str, Sequence[str]] = OFFENSIVE_WORDS,
) -> List[str]:
    """
    Watch-words of every flagged category that occur in the text

    :param text: full transcript text, tokenized on whitespace
    :param categories: moderation flags gating which word lists are searched
    :param dictionary: category -> watch-words
    :return: matching watch-words in dictionary order, without duplicates
    """
    candidates: List[str] = []
    for category, words in dictionary.items():
        if categories.is_flagged(category):
            candidates.extend(words)

    tokens = {normalize_token(t) for t in text.split()}
    tokens.discard("")

    detected: List[str] = []
    for word in candidates:
        key = word.lower()
        if key in tokens and key not in detected:
            detected.append(key)
    return detected


def find_word_segment(word: str, segments: Sequence[WordSegment]) -> Optional[WordSegment]:
    """First segment whose normalized token equals the watch-word"""
    key = word.lower()
    for segment in segments:
        if normalize_token(segment.word) == key:
            return segment
    return None


def match_offensive_words(
    text: str,
    segments: Sequence[WordSegment],
    categories: ModerationCategories,
    dictionary: Mapping[str, Sequence[str]] = OFFENSIVE_WORDS,
) -> List[Finding]:
    """
    Timestamped offensive word findings

    Findings follow transcript order. A watch-word present in the text but with no
    matching word segment is dropped.
    """
    findings: List[Finding] = []
    for word in extract_offensive_words(text, categories, dictionary):
        segment = find_word_segment(word, segments)
        if segment is None:
            logger.warning(f"[Matcher] '{word}' found in text but not in word timings, dropped")
            continue
        findings.append(
            Finding(
                kind=FindingKind.OFFENSIVE_WORD,
                timestamp=format_timestamp(segment.start),
                timestamp_seconds=segment.start,
                description=word,
                emoji=OFFENSIVE_WORD_EMOJI,
            )
        )
    findings.sort(key=lambda f: f.timestamp_seconds)
    return findings
