"""
Pipeline errors

Every stage failure is surfaced as a labelled message naming the stage,
e.g. "Transcription Error: Failed to parse response."
"""


class AnalysisError(Exception):
    """Stage failure with a human readable label"""

    stage = "Analysis Error"

    def __init__(self, message: str, retryable: bool = False) -> None:
        super().__init__(message)
        self.message = message
        self.retryable = retryable

    def __str__(self) -> str:
        return f"{self.stage}: {self.message}"


class TranscriptionError(AnalysisError):
    stage = "Transcription Error"


class ModerationError(AnalysisError):
    stage = "Moderation Error"


class SentimentAnalysisError(AnalysisError):
    stage = "Sentiment Analysis Error"


class AnalysisCancelled(Exception):
    """Raised when a caller cancels an in-flight analysis"""
