"""
Unusual pause detection over word timings
"""
from typing import List, Sequence

from vidlyzer.analysis.timestamps import format_timestamp
from vidlyzer.models.analysis import Pause
from vidlyzer.models.transcript import WordSegment

# Threshold used when building findings
PAUSE_THRESHOLD_SECONDS = 2.0

# Threshold used by the plain-text compliance report
SUMMARY_PAUSE_THRESHOLD_SECONDS = 1.0


def detect_pauses(words: Sequence[WordSegment], threshold: float = PAUSE_THRESHOLD_SECONDS) -> List[Pause]:
    """
    Emit a pause wherever the silence between two consecutive words reaches the threshold

    The pause sits at the end of the earlier word and spans the whole gap.

    :param words: time ordered word segments
    :param threshold: minimum gap (seconds)
    :return: pauses in transcript order, empty for fewer than two words
    """
    words = list(words)
    pauses: List[Pause] = []
    for previous_word, current_word in zip(words, words[1:]):
        gap = current_word.start - previous_word.end
        if gap >= threshold:
            pauses.append(
                Pause(
                    timestamp=format_timestamp(previous_word.end),
                    duration=gap,
                    seconds=previous_word.end,
                )
            )
    return pauses
