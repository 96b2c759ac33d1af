"""
Content analysis data models
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from vidlyzer.models.moderation import ModerationResult
from vidlyzer.models.transcript import TranscriptionResult

NO_OFFENSIVE_CONTENT_MESSAGE = "No offensive content detected."
ISSUES_DETECTED_MESSAGE = "Issues Detected"


# -------- internal data models (dataclass) --------

class FindingKind(str, Enum):
    OFFENSIVE_WORD = "Offensive Word"
    PAUSE = "Pause"
    SENTIMENT = "Sentiment"


class OutcomeStatus(str, Enum):
    ISSUES_DETECTED = "issues_detected"
    NO_OFFENSIVE_CONTENT = "no_offensive_content"


@dataclass(frozen=True)
class Finding:
    """One reviewable event anchored to a playback position"""
    kind: FindingKind
    timestamp: str                  # "MM:SS" / "HH:MM:SS", "-" for sentiment
    timestamp_seconds: float
    description: str
    emoji: str


@dataclass(frozen=True)
class Pause:
    """Silence between two consecutive words"""
    timestamp: str                  # formatted position of the pause
    duration: float                 # gap length (seconds)
    seconds: float                  # end of the word before the gap


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of one aggregation run"""
    status: OutcomeStatus
    findings: tuple[Finding, ...] = ()
    message: str = ""

    @property
    def issues_detected(self) -> bool:
        return self.status is OutcomeStatus.ISSUES_DETECTED

    @classmethod
    def no_offensive_content(cls) -> "AnalysisOutcome":
        return cls(status=OutcomeStatus.NO_OFFENSIVE_CONTENT, message=NO_OFFENSIVE_CONTENT_MESSAGE)


@dataclass
class AnalysisResult:
    """Pipeline product"""
    transcript: TranscriptionResult
    moderation_results: List[ModerationResult]
    outcome: AnalysisOutcome
    report: str


# -------- API request / response models (Pydantic) --------

class FindingResponse(BaseModel):
    kind: str
    timestamp: str
    timestamp_seconds: float
    description: str
    emoji: str

    @classmethod
    def from_finding(cls, finding: Finding) -> "FindingResponse":
        return cls(
            kind=finding.kind.value,
            timestamp=finding.timestamp,
            timestamp_seconds=finding.timestamp_seconds,
            description=finding.description,
            emoji=finding.emoji,
        )


class AnalysisResponse(BaseModel):
    """Synchronous analysis result"""
    task_id: str
    status: str                               # issues_detected / no_offensive_content
    message: str
    findings: List[FindingResponse]
    report: str
    text: str
    language: Optional[str] = None
    duration: Optional[float] = None
    category_scores: dict[str, float] = {}


class TaskStatusResponse(BaseModel):
    """Async task status"""
    task_id: str
    status: str          # pending / transcribing / moderating / analyzing / success / failed
    message: str = ""
    result: Optional[AnalysisResponse] = None


class ReportRequest(BaseModel):
    """Offline compliance report input"""
    transcription: TranscriptionResult
    moderation_results: List[ModerationResult]


class ReportResponse(BaseModel):
    report: str
