"""
Content analysis pipeline
Orchestrates the whole flow: transcription → moderation → findings → report
"""
import json
import logging
import threading
from pathlib import Path
from typing import Optional

from vidlyzer.analysis.aggregator import build_findings
from vidlyzer.analysis.offensive import OFFENSIVE_WORDS
from vidlyzer.analysis.report import ComplianceReport
from vidlyzer.config import settings
from vidlyzer.errors import AnalysisCancelled
from vidlyzer.llm.base import SentimentClassifier
from vidlyzer.llm.openai_llm import OpenAISentimentClassifier
from vidlyzer.models.analysis import AnalysisResponse, AnalysisResult, FindingResponse
from vidlyzer.models.moderation import ModerationResult
from vidlyzer.models.transcript import TranscriptionResult
from vidlyzer.moderators.base import Moderator
from vidlyzer.moderators.openai_moderator import OpenAIModerator
from vidlyzer.transcribers.base import Transcriber
from vidlyzer.transcribers.openai_transcriber import OpenAITranscriber

logger = logging.getLogger(__name__)


def _create_transcriber() -> Transcriber:
    return OpenAITranscriber(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.transcription_model,
        timeout=settings.request_timeout,
    )


def _create_moderator() -> Moderator:
    return OpenAIModerator(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.moderation_model,
        timeout=settings.request_timeout,
    )


def _create_classifier() -> SentimentClassifier:
    return OpenAISentimentClassifier(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.sentiment_model,
        timeout=settings.request_timeout,
    )


class AnalysisService:
    """
    Video content analysis service

    Pipeline:
    1. Transcribe the uploaded media with word timestamps
    2. Moderate the transcript text
    3. Aggregate offensive words, pauses and sentiment into findings
    4. Render the plain-text compliance report

    Network calls run strictly in sequence; each result is an immutable value,
    so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        transcriber: Optional[Transcriber] = None,
        moderator: Optional[Moderator] = None,
        classifier: Optional[SentimentClassifier] = None,
    ):
        self.transcriber = transcriber or _create_transcriber()
        self.moderator = moderator or _create_moderator()
        self.classifier = classifier or _create_classifier()
        logger.info(
            f"[AnalysisService] initialized: "
            f"transcription={settings.transcription_model}, "
            f"moderation={settings.moderation_model}, "
            f"sentiment={settings.sentiment_model}"
        )

    # ==================== Core pipeline ====================

    def analyze(
        self,
        file_path: str,
        task_id: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> AnalysisResult:
        """
        Entry point: media file → findings + compliance report

        :param file_path: uploaded audio / video file
        :param task_id: unique task id, names the working directory
        :param cancel_event: set it to abort before the next network call
        :return: AnalysisResult
        """
        task_dir = settings.output_dir / task_id
        task_dir.mkdir(parents=True, exist_ok=True)

        try:
            # ---- Step 1: transcription ----
            self._check_cancelled(cancel_event)
            self._update_status(task_dir, "transcribing", "Transcribing audio...")

            transcript = self._step_transcribe(file_path=file_path)

            # ---- Step 2: moderation ----
            self._check_cancelled(cancel_event)
            self._update_status(task_dir, "moderating", "Moderating transcript...")

            moderation_results = self.moderator.moderate(transcript.text)

            # ---- Step 3: findings ----
            self._check_cancelled(cancel_event)
            self._update_status(task_dir, "analyzing", "Analyzing content...")

            outcome = build_findings(
                transcript=transcript,
                moderation_results=moderation_results,
                classifier=self.classifier,
                dictionary=OFFENSIVE_WORDS,
                pause_threshold=settings.pause_threshold,
            )

            # ---- Step 4: compliance report ----
            report = ComplianceReport(
                transcript=transcript,
                moderation_results=moderation_results,
                pause_threshold=settings.summary_pause_threshold,
            ).render()

            result = AnalysisResult(
                transcript=transcript,
                moderation_results=moderation_results,
                outcome=outcome,
                report=report,
            )
            self._save_result(task_dir, task_id, result)
            self._update_status(task_dir, "success", outcome.message)

            logger.info(f"[Pipeline] task finished: task_id={task_id}, status={outcome.status.value}")
            return result

        except AnalysisCancelled:
            logger.info(f"[Pipeline] task cancelled: task_id={task_id}")
            self._update_status(task_dir, "cancelled", "Analysis cancelled")
            raise
        except Exception as exc:
            logger.error(f"[Pipeline] task failed: task_id={task_id}, error={exc}", exc_info=True)
            self._update_status(task_dir, "failed", str(exc))
            raise

    # ==================== Pipeline steps ====================

    def _step_transcribe(self, file_path: str) -> TranscriptionResult:
        """Step 1: transcription with word timings"""
        transcript = self.transcriber.transcribe(file_path=file_path)
        if not transcript.word_list:
            logger.warning("[Transcribe] no word timings returned, pauses and word findings will be empty")
        return transcript

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event]):
        if cancel_event is not None and cancel_event.is_set():
            raise AnalysisCancelled("Analysis cancelled")

    # ==================== Status management ====================

    @classmethod
    def create_task(cls, task_id: str):
        """Register a queued task so it can be polled before it starts"""
        task_dir = settings.output_dir / task_id
        task_dir.mkdir(parents=True, exist_ok=True)
        cls._update_status(task_dir, "pending", "Task submitted")

    @classmethod
    def fail_task(cls, task_id: str, message: str):
        """Mark a task failed when it could not reach the pipeline"""
        task_dir = settings.output_dir / task_id
        task_dir.mkdir(parents=True, exist_ok=True)
        cls._update_status(task_dir, "failed", message)

    @staticmethod
    def _update_status(task_dir: Path, status: str, message: str = ""):
        """Atomically update the task status file"""
        status_file = task_dir / "status.json"
        data = {"status": status, "message": message}
        temp_file = status_file.with_suffix(".tmp")
        temp_file.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        temp_file.replace(status_file)

    @staticmethod
    def get_status(task_id: str) -> dict:
        task_dir = settings.output_dir / task_id
        status_file = task_dir / "status.json"

        if not status_file.exists():
            return {"status": "not_found", "message": "Task not found"}

        return json.loads(status_file.read_text(encoding="utf-8"))

    @staticmethod
    def get_result(task_id: str) -> Optional[dict]:
        task_dir = settings.output_dir / task_id
        result_file = task_dir / "result.json"

        if not result_file.exists():
            return None

        return json.loads(result_file.read_text(encoding="utf-8"))

    @staticmethod
    def _save_result(task_dir: Path, task_id: str, result: AnalysisResult):
        """Save the final result as JSON"""
        result_file = task_dir / "result.json"
        response = to_response(task_id, result)
        result_file.write_text(response.model_dump_json(indent=2), encoding="utf-8")


def to_response(task_id: str, result: AnalysisResult) -> AnalysisResponse:
    """API view of a pipeline result"""
    scores: dict[str, float] = {}
    first: Optional[ModerationResult] = result.moderation_results[0] if result.moderation_results else None
    if first is not None:
        scores = first.category_scores.model_dump(by_alias=True)

    return AnalysisResponse(
        task_id=task_id,
        status=result.outcome.status.value,
        message=result.outcome.message,
        findings=[FindingResponse.from_finding(f) for f in result.outcome.findings],
        report=result.report,
        text=result.transcript.text,
        language=result.transcript.language,
        duration=result.transcript.duration,
        category_scores=scores,
    )
