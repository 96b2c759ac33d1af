"""
Whisper transcriber over an OpenAI compatible audio API
Requests verbose_json with word level timestamp granularity
"""
import logging
from pathlib import Path

import openai
from pydantic import ValidationError

from vidlyzer.errors import TranscriptionError
from vidlyzer.models.transcript import TranscriptionResult
from vidlyzer.openai_client import create_client, to_analysis_error
from vidlyzer.transcribers.base import Transcriber

logger = logging.getLogger(__name__)


class OpenAITranscriber(Transcriber):
    """
    Cloud transcription via /audio/transcriptions

    Works with OpenAI (whisper-1) and Groq (whisper-large-v3-turbo) base URLs.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "whisper-1",
        timeout: float = 60.0,
        language: str | None = None,
    ):
        self.model = model
        self.language = language
        self.client = create_client(api_key, base_url, timeout)
        logger.info(f"[Transcriber] initialized: model={model}, base_url={base_url}")

    def transcribe(self, file_path: str) -> TranscriptionResult:
        """
        Transcribe through the API

        :param file_path: media file path
        :return: TranscriptionResult with word timings
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Media file not found: {file_path}")

        file_size = path.stat().st_size / (1024 * 1024)
        logger.info(f"[Transcriber] start: {path.name} ({file_size:.1f} MB)")

        with open(path, "rb") as media_file:
            kwargs = {
                "model": self.model,
                "file": media_file,
                "response_format": "verbose_json",
                "timestamp_granularities": ["word"],
            }
            if self.language:
                kwargs["language"] = self.language

            try:
                response = self.client.audio.transcriptions.create(**kwargs)
            except openai.OpenAIError as e:
                logger.error(f"[Transcriber] request failed: {e}")
                raise to_analysis_error(e, TranscriptionError) from e

        if response is None:
            raise TranscriptionError("No data received from Server")

        payload = response if isinstance(response, dict) else response.model_dump()
        try:
            result = TranscriptionResult.from_payload(payload)
        except ValidationError as e:
            logger.error(f"[Transcriber] decoding error: {e}")
            raise TranscriptionError("Failed to parse response.") from e

        logger.info(
            f"[Transcriber] done: language={result.language}, words={len(result.word_list)}, "
            f"chars={len(result.text)}"
        )
        return result
