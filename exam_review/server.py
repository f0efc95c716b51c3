"""
FastAPI web server for the exam screenshot review service.
시험 문제 스크린샷 분석 서비스 웹 서버입니다.

Endpoints:
  POST /api/ocr/upload       - ZIP of screenshots -> full review report
  GET  /api/results/latest   - most recently saved report
  GET  /api/results/list     - saved result files
  POST /api/export/markdown  - analyses -> Markdown text
  GET  /health               - health check
"""

import asyncio
import logging
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .auth import require_api_key
from .config import get_settings
from .errors import ArchiveError, NoImagesError, OCRError, ResultsNotFoundError
from .export import format_markdown
from .ocr import is_engine_available
from .pipeline import ReviewPipeline
from .schema import CamelModel, QuestionAnalysis, ResultFileInfo, ReviewReport
from .storage import list_results, load_latest, save_report

logger = logging.getLogger(__name__)

_ZIP_CONTENT_TYPES = {"application/zip", "application/x-zip-compressed", "multipart/x-zip"}


# ---------------------------------------------------------------------------
# Lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if not is_engine_available(settings.OCR_ENGINE):
        logger.warning(
            "OCR engine '%s' is not installed; uploads will fail until it is", settings.OCR_ENGINE
        )
    Path(settings.RESULTS_DIR).mkdir(parents=True, exist_ok=True)
    yield


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Exam Screenshot Review API",
    description="OCR exam-question screenshots and summarize accuracy by category",
    version=__version__,
    lifespan=lifespan,
)

_cors_origins = get_settings().cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=bool(_cors_origins),
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization", "X-API-Key"],
)


# ---------------------------------------------------------------------------
# Request / response schemas
# ---------------------------------------------------------------------------


class LatestResultResponse(ReviewReport):
    file: str


class ResultListResponse(CamelModel):
    success: bool = True
    count: int
    files: list[ResultFileInfo]


class ExportRequest(CamelModel):
    questions: list[QuestionAnalysis]


class ExportResponse(CamelModel):
    success: bool = True
    formatted_text: str
    hint: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _save_upload(upload: UploadFile, max_bytes: int) -> str:
    """Save uploaded ZIP to a temp location, return the path.

    Validates the type before reading, then streams in chunks to enforce the
    size limit without buffering the whole archive in memory.
    """
    if not (
        upload.content_type in _ZIP_CONTENT_TYPES
        or (upload.filename or "").lower().endswith(".zip")
    ):
        raise HTTPException(status_code=415, detail="Only ZIP archives are supported")

    tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".zip", prefix="screenshots-")
    try:
        total_size = 0
        chunk_size = 1024 * 1024  # 1 MB chunks
        while True:
            chunk = await upload.read(chunk_size)
            if not chunk:
                break
            total_size += len(chunk)
            if total_size > max_bytes:
                tmp.close()
                Path(tmp.name).unlink(missing_ok=True)
                raise HTTPException(
                    status_code=413, detail=f"File too large (max {max_bytes // 1024 // 1024} MB)"
                )
            tmp.write(chunk)
        tmp.close()
    except HTTPException:
        raise
    except Exception:
        tmp.close()
        Path(tmp.name).unlink(missing_ok=True)
        raise
    logger.info("Upload received: %s (%d bytes)", upload.filename, total_size)
    return tmp.name


def _run_review_sync(zip_path: str) -> ReviewReport:
    """Blocking batch: runs inside a thread pool executor."""
    settings = get_settings()
    pipeline = ReviewPipeline()
    with tempfile.TemporaryDirectory(prefix="extracted-") as work_dir:
        report = pipeline.run_archive(zip_path, work_dir)
    save_report(report, settings.RESULTS_DIR)
    return report


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", tags=["meta"])
async def health():
    """Health check."""
    engine = get_settings().OCR_ENGINE
    return {
        "status": "ok",
        "version": __version__,
        "ocrEngine": engine,
        "ocrAvailable": is_engine_available(engine),
    }


@app.post(
    "/api/ocr/upload",
    response_model=ReviewReport,
    tags=["review"],
    dependencies=[Depends(require_api_key)],
)
async def upload_zip(
    archive: UploadFile = File(..., alias="zip", description="ZIP archive of question screenshots"),
):
    """
    OCR every screenshot in the archive and return the full review report.

    The report is also saved to RESULTS_DIR.
    """
    settings = get_settings()
    zip_path = await _save_upload(archive, settings.max_upload_bytes)

    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, _run_review_sync, zip_path)
    except ArchiveError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NoImagesError as exc:
        raise HTTPException(
            status_code=400,
            detail={
                "error": "No image files found in ZIP",
                "hint": "Make sure your ZIP contains .png, .jpg, .jpeg, or .webp files",
            },
        ) from exc
    except OCRError as exc:
        logger.error("OCR engine unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Review failed")
        raise HTTPException(status_code=500, detail="Processing failed. Check server logs for details.") from exc
    finally:
        Path(zip_path).unlink(missing_ok=True)


@app.get(
    "/api/results/latest",
    response_model=LatestResultResponse,
    tags=["results"],
    dependencies=[Depends(require_api_key)],
)
async def latest_result():
    """Most recently saved report."""
    try:
        info, report = load_latest(get_settings().RESULTS_DIR)
    except ResultsNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    # Timestamp reports when the file was written, not when the batch started
    return LatestResultResponse(**{**report.model_dump(), "timestamp": info.timestamp, "file": info.name})


@app.get(
    "/api/results/list",
    response_model=ResultListResponse,
    tags=["results"],
    dependencies=[Depends(require_api_key)],
)
async def result_list():
    files = list_results(get_settings().RESULTS_DIR)
    return ResultListResponse(count=len(files), files=files)


@app.post(
    "/api/export/markdown",
    response_model=ExportResponse,
    tags=["export"],
    dependencies=[Depends(require_api_key)],
)
async def export_markdown(body: ExportRequest):
    """Format analyses as Markdown for pasting into an LLM chat for concept review."""
    return ExportResponse(
        formatted_text=format_markdown(body.questions),
        hint="Copy the 'formattedText' field and paste it into a chat assistant for concept analysis",
    )
