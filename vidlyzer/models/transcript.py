"""
Transcription result data models
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict


class WordSegment(BaseModel):
    """A single transcribed word with its timing"""
    model_config = ConfigDict(frozen=True)

    word: str      # the word as transcribed
    start: float   # start time (seconds)
    end: float     # end time (seconds)


class TranscriptionResult(BaseModel):
    """Verbose transcription response with word level timestamps"""
    model_config = ConfigDict(frozen=True)

    task: str = "transcribe"
    text: str
    language: Optional[str] = None
    duration: Optional[float] = None               # total audio duration (seconds)
    words: Optional[List[WordSegment]] = None      # time ordered, non-overlapping

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TranscriptionResult":
        """Validate a raw `verbose_json` transcription payload"""
        return cls.model_validate(payload)

    @property
    def word_list(self) -> List[WordSegment]:
        return list(self.words or [])
