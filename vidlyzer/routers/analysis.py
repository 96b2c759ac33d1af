"""
Content analysis API routes

  1. POST /api/analyze        - sync, upload a video, wait for the findings
  2. POST /api/analyze_async  - async, returns task_id immediately, processed in the background
  3. GET  /api/task/{task_id} - async task status and result
  4. POST /api/report         - offline compliance report from an existing transcript + moderation
  5. GET  /api/health
"""
import logging
import uuid
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from vidlyzer.analysis.report import ComplianceReport
from vidlyzer.config import settings
from vidlyzer.errors import AnalysisCancelled, AnalysisError
from vidlyzer.models.analysis import (
    AnalysisResponse,
    ReportRequest,
    ReportResponse,
    TaskStatusResponse,
)
from vidlyzer.services.analysis_service import AnalysisService, to_response

logger = logging.getLogger(__name__)
router = APIRouter(tags=["analysis"])

UPLOAD_CHUNK_SIZE = 1024 * 1024

_analysis_service: Optional[AnalysisService] = None


def get_service() -> AnalysisService:
    """Get or create the service singleton"""
    global _analysis_service
    if _analysis_service is None:
        _analysis_service = AnalysisService()
    return _analysis_service


# ==================== API Endpoints ====================


@router.post("/analyze", summary="Analyze a video synchronously", response_model=AnalysisResponse)
def analyze_sync(file: UploadFile):
    """
    Upload a video (or audio) file and wait for the findings

    Suited to short clips; use the async endpoint for anything long
    """
    task_id = str(uuid.uuid4())
    file_path = _save_upload(file, task_id)

    try:
        result = get_service().analyze(file_path=str(file_path), task_id=task_id)
    except AnalysisError as e:
        logger.error(f"[API] analysis failed: {e}")
        return _stage_error_response(e)
    except Exception as e:
        logger.error(f"[API] analysis failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        _remove_upload(file_path)

    return to_response(task_id, result)


@router.post("/analyze_async", summary="Analyze a video in the background")
def analyze_async(file: UploadFile, background_tasks: BackgroundTasks):
    """
    Submit an analysis task

    Returns a task_id; poll GET /api/task/{task_id} for the result
    """
    task_id = str(uuid.uuid4())
    file_path = _save_upload(file, task_id)
    AnalysisService.create_task(task_id)

    background_tasks.add_task(_run_task, task_id=task_id, file_path=str(file_path))

    logger.info(f"[API] async task submitted: task_id={task_id}")
    return {"task_id": task_id, "status": "pending", "message": "Task submitted"}


@router.get("/task/{task_id}", summary="Task status", response_model=TaskStatusResponse)
def get_task_status(task_id: str):
    """
    Status flow: pending → transcribing → moderating → analyzing → success / failed / cancelled
    """
    status_data = AnalysisService.get_status(task_id)
    status = status_data.get("status", "not_found")
    message = status_data.get("message", "")

    result = None
    if status == "success":
        result_data = AnalysisService.get_result(task_id)
        if result_data:
            result = AnalysisResponse.model_validate(result_data)

    return TaskStatusResponse(
        task_id=task_id,
        status=status,
        message=message,
        result=result,
    )


@router.post("/report", summary="Offline compliance report", response_model=ReportResponse)
def compliance_report(req: ReportRequest):
    """Rule based summary from an existing transcript and moderation results, no network calls"""
    report = ComplianceReport(
        transcript=req.transcription,
        moderation_results=req.moderation_results,
        pause_threshold=settings.summary_pause_threshold,
    )
    return ReportResponse(report=report.render())


@router.get("/health")
def health():
    return {"status": "ok"}


# ==================== Helpers ====================


def _save_upload(file: UploadFile, task_id: str) -> Path:
    """Stream the upload into data_dir, rejecting it as soon as it passes the size cap"""
    limit = int(settings.max_upload_mb * 1024 * 1024)
    suffix = Path(file.filename or "").suffix or ".mp4"
    file_path = settings.data_dir / f"{task_id}{suffix}"

    size = 0
    with open(file_path, "wb") as out:
        while True:
            chunk = file.file.read(UPLOAD_CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if size > limit:
                break
            out.write(chunk)

    if size > limit:
        _remove_upload(file_path)
        raise HTTPException(
            status_code=413,
            detail=f"Please select a video smaller than {settings.max_upload_mb:g} MB.",
        )
    if size == 0:
        _remove_upload(file_path)
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    logger.info(f"[API] upload saved: {file.filename} ({size / (1024 * 1024):.1f} MB) -> {file_path}")
    return file_path


def _remove_upload(file_path: Path):
    """The upload is only needed while its task runs"""
    Path(file_path).unlink(missing_ok=True)


def _stage_error_response(error: AnalysisError) -> JSONResponse:
    return JSONResponse(
        status_code=502,
        content={"error": error.stage, "message": str(error), "retryable": error.retryable},
    )


# ==================== Background task ====================


def _run_task(task_id: str, file_path: str):
    """Run an analysis task in the background; every exit leaves a terminal status"""
    try:
        get_service().analyze(file_path=file_path, task_id=task_id)
    except AnalysisCancelled:
        logger.info(f"[Background] cancelled: task_id={task_id}")
    except Exception as e:
        # covers failures before the pipeline starts, e.g. a missing API key
        logger.error(f"[Background] failed: task_id={task_id}, error={e}", exc_info=True)
        AnalysisService.fail_task(task_id, str(e))
    finally:
        _remove_upload(file_path)
