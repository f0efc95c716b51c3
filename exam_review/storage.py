"""
Persistence of review reports as timestamped JSON files.
리뷰 결과를 타임스탬프가 붙은 JSON 파일로 저장하고 불러옵니다.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from .errors import ResultsNotFoundError
from .schema import ResultFileInfo, ReviewReport

logger = logging.getLogger(__name__)

RESULT_PREFIX = "results-"
RESULT_SUFFIX = ".json"


def result_filename(timestamp: str) -> str:
    """results-2026-01-31T10-15-00-123456+00-00.json style name for a report timestamp."""
    safe = timestamp.replace(":", "-").replace(".", "-")
    return f"{RESULT_PREFIX}{safe}{RESULT_SUFFIX}"


def save_report(report: ReviewReport, results_dir: str | Path) -> Path:
    """Save a report to results_dir and return the file path."""
    out_dir = Path(results_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    output_path = out_dir / result_filename(report.timestamp)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report.to_record(), f, ensure_ascii=False, indent=2)

    logger.info("Results saved to %s", output_path)
    return output_path


def load_report(path: str | Path) -> ReviewReport:
    with open(path, encoding="utf-8") as f:
        return ReviewReport.model_validate(json.load(f))


def _result_files(results_dir: Path) -> list[Path]:
    if not results_dir.is_dir():
        return []
    files = [
        p for p in results_dir.iterdir()
        if p.is_file() and p.name.startswith(RESULT_PREFIX) and p.name.endswith(RESULT_SUFFIX)
    ]
    # Newest first; name breaks mtime ties deterministically
    return sorted(files, key=lambda p: (p.stat().st_mtime, p.name), reverse=True)


def _file_info(path: Path) -> ResultFileInfo:
    stat = path.stat()
    return ResultFileInfo(
        name=path.name,
        timestamp=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat(),
        size=stat.st_size,
    )


def list_results(results_dir: str | Path) -> list[ResultFileInfo]:
    """Saved result files, newest first."""
    return [_file_info(p) for p in _result_files(Path(results_dir))]


def load_latest(results_dir: str | Path) -> tuple[ResultFileInfo, ReviewReport]:
    """
    Load the most recently saved report.

    Raises:
        ResultsNotFoundError: nothing has been saved yet
    """
    files = _result_files(Path(results_dir))
    if not files:
        raise ResultsNotFoundError("No results found. Upload a ZIP file first.")
    latest = files[0]
    return _file_info(latest), load_report(latest)
