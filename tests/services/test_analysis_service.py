"""Tests for the analysis pipeline orchestration."""

import json
import threading
from unittest.mock import MagicMock, patch

import pytest

from vidlyzer.errors import AnalysisCancelled, ModerationError, TranscriptionError
from vidlyzer.models.analysis import OutcomeStatus
from vidlyzer.moderators.base import Moderator
from vidlyzer.services.analysis_service import AnalysisService, to_response
from vidlyzer.transcribers.base import Transcriber


@pytest.fixture
def mock_settings(tmp_path):
    with patch("vidlyzer.services.analysis_service.settings") as mock:
        mock.output_dir = tmp_path / "output"
        mock.pause_threshold = 2.0
        mock.summary_pause_threshold = 1.0
        yield mock


@pytest.fixture
def transcriber(transcript):
    mock = MagicMock(spec=Transcriber)
    mock.transcribe.return_value = transcript
    return mock


@pytest.fixture
def moderator(moderation_factory):
    mock = MagicMock(spec=Moderator)
    mock.moderate.return_value = [moderation_factory(True, harassment=True)]
    return mock


@pytest.fixture
def service(mock_settings, transcriber, moderator, classifier):
    return AnalysisService(transcriber=transcriber, moderator=moderator, classifier=classifier)


def _status(mock_settings, task_id):
    return json.loads((mock_settings.output_dir / task_id / "status.json").read_text(encoding="utf-8"))


class TestAnalyze:
    def test_success(self, service, mock_settings, transcript, moderator, classifier):
        result = service.analyze("clip.mp4", "task-1")

        assert result.outcome.status is OutcomeStatus.ISSUES_DETECTED
        assert result.report.startswith("Content Analysis Summary:")
        moderator.moderate.assert_called_once_with(transcript.text)
        classifier.classify.assert_called_once_with(transcript.text)
        assert _status(mock_settings, "task-1") == {"status": "success", "message": "Issues Detected"}

        saved = service.get_result("task-1")
        assert saved["status"] == "issues_detected"
        assert saved["message"] == "Issues Detected"
        assert saved["findings"][0]["kind"] == "Offensive Word"
        assert saved["findings"][0]["description"] == "idiot"
        assert "self-harm" in saved["category_scores"]

    def test_not_flagged(self, service, mock_settings, moderator, classifier, moderation_factory):
        moderator.moderate.return_value = [moderation_factory(False)]

        result = service.analyze("clip.mp4", "task-2")

        assert result.outcome.status is OutcomeStatus.NO_OFFENSIVE_CONTENT
        assert result.outcome.findings == ()
        classifier.classify.assert_not_called()
        assert _status(mock_settings, "task-2")["message"] == "No offensive content detected."

    def test_transcribes_on_every_run(self, service, mock_settings, transcriber):
        service.analyze("clip.mp4", "task-3")
        service.analyze("clip.mp4", "task-3")

        assert transcriber.transcribe.call_count == 2
        transcriber.transcribe.assert_called_with(file_path="clip.mp4")
        assert sorted(p.name for p in (mock_settings.output_dir / "task-3").iterdir()) == [
            "result.json",
            "status.json",
        ]

    def test_cancelled_before_any_call(self, service, mock_settings, transcriber):
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(AnalysisCancelled):
            service.analyze("clip.mp4", "task-4", cancel_event=cancel)

        transcriber.transcribe.assert_not_called()
        assert _status(mock_settings, "task-4")["status"] == "cancelled"

    def test_cancelled_between_stages(self, service, mock_settings, transcriber, moderator, transcript):
        cancel = threading.Event()

        def transcribe(file_path):
            cancel.set()
            return transcript

        transcriber.transcribe.side_effect = transcribe

        with pytest.raises(AnalysisCancelled):
            service.analyze("clip.mp4", "task-5", cancel_event=cancel)

        moderator.moderate.assert_not_called()
        assert _status(mock_settings, "task-5")["status"] == "cancelled"

    def test_stage_failure_aborts(self, service, mock_settings, transcriber, moderator):
        transcriber.transcribe.side_effect = TranscriptionError("Request timed out", retryable=True)

        with pytest.raises(TranscriptionError):
            service.analyze("clip.mp4", "task-6")

        moderator.moderate.assert_not_called()
        assert _status(mock_settings, "task-6") == {
            "status": "failed",
            "message": "Transcription Error: Request timed out",
        }
        assert service.get_result("task-6") is None

    def test_moderation_failure(self, service, mock_settings, moderator, classifier):
        moderator.moderate.side_effect = ModerationError("Failed to parse response.")

        with pytest.raises(ModerationError):
            service.analyze("clip.mp4", "task-7")

        classifier.classify.assert_not_called()
        assert _status(mock_settings, "task-7")["status"] == "failed"


class TestTaskStatus:
    def test_not_found(self, mock_settings):
        assert AnalysisService.get_status("missing") == {"status": "not_found", "message": "Task not found"}

    def test_create_task_pending(self, mock_settings):
        AnalysisService.create_task("task-8")

        assert AnalysisService.get_status("task-8") == {"status": "pending", "message": "Task submitted"}
        assert not (mock_settings.output_dir / "task-8" / "status.tmp").exists()

    def test_fail_task_overrides_pending(self, mock_settings):
        AnalysisService.create_task("task-10")

        AnalysisService.fail_task("task-10", "OPENAI_API_KEY is not configured, set it in .env")

        assert AnalysisService.get_status("task-10") == {
            "status": "failed",
            "message": "OPENAI_API_KEY is not configured, set it in .env",
        }


class TestToResponse:
    def test_fields(self, service):
        result = service.analyze("clip.mp4", "task-9")

        response = to_response("task-9", result)

        assert response.task_id == "task-9"
        assert response.text == result.transcript.text
        assert response.duration == 12.0
        assert [f.kind for f in response.findings] == [
            "Offensive Word",
            "Pause",
            "Pause",
            "Sentiment",
        ]
        assert response.findings[-1].timestamp == "-"
