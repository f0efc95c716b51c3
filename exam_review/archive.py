"""
ZIP extraction and image discovery.
업로드된 ZIP 파일을 풀고 이미지 파일 목록을 찾습니다.
"""

import logging
import zipfile
from pathlib import Path

from .errors import ArchiveError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp")


def extract_archive(zip_path: str | Path, dest_dir: str | Path) -> Path:
    """
    Extract a ZIP archive into dest_dir.

    Members whose path would land outside dest_dir are rejected.

    Raises:
        ArchiveError: not a ZIP file, corrupt, or unsafe member paths
    """
    dest = Path(dest_dir).resolve()
    dest.mkdir(parents=True, exist_ok=True)

    try:
        with zipfile.ZipFile(zip_path) as zf:
            for member in zf.namelist():
                target = (dest / member).resolve()
                if not target.is_relative_to(dest):
                    raise ArchiveError(f"Unsafe path in archive: {member}")
            zf.extractall(dest)
            logger.info("Extracted %d entries from %s", len(zf.namelist()), Path(zip_path).name)
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Not a valid ZIP archive: {e}") from e

    return dest


def find_image_files(root: str | Path) -> list[Path]:
    """Recursively list image files under root, sorted by path.

    Hidden directories and "__"-prefixed ones (e.g. __MACOSX) are skipped.
    """
    root = Path(root)
    files = []
    for path in root.rglob("*"):
        relative_parts = path.relative_to(root).parts[:-1]
        if any(part.startswith((".", "__")) for part in relative_parts):
            continue
        if path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS:
            files.append(path)
    return sorted(files)
