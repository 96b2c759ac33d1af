"""
Transcriber abstract base class
"""
from abc import ABC, abstractmethod

from vidlyzer.models.transcript import TranscriptionResult


class Transcriber(ABC):
    """Audio transcriber"""

    @abstractmethod
    def transcribe(self, file_path: str) -> TranscriptionResult:
        """
        Transcribe an audio (or video) file with word level timestamps

        :param file_path: media file path
        :return: transcription result
        :raises TranscriptionError: when the call fails
        """
        ...
