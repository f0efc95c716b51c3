import io
import zipfile

import pytest

from exam_review.archive import extract_archive, find_image_files
from exam_review.errors import ArchiveError


def test_extract_and_find_images(make_zip, tmp_path):
    zip_path = tmp_path / "shots.zip"
    zip_path.write_bytes(make_zip({
        "set1/q1.png": None,
        "set1/q2.JPEG": None,
        "set2/q3.webp": None,
        "set2/readme.md": b"# notes",
        "__MACOSX/set1/._q1.png": None,
        ".hidden/q9.png": None,
    }))

    root = extract_archive(zip_path, tmp_path / "out")
    images = find_image_files(root)

    assert [p.relative_to(root).as_posix() for p in images] == [
        "set1/q1.png",
        "set1/q2.JPEG",
        "set2/q3.webp",
    ]


def test_find_images_in_empty_directory(tmp_path):
    assert find_image_files(tmp_path) == []


def test_corrupt_archive(tmp_path):
    zip_path = tmp_path / "broken.zip"
    zip_path.write_bytes(b"PK\x03\x04 this is not really a zip")
    with pytest.raises(ArchiveError):
        extract_archive(zip_path, tmp_path / "out")


def test_rejects_paths_outside_destination(tmp_path):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("../escape.png", b"x")
    zip_path = tmp_path / "evil.zip"
    zip_path.write_bytes(buf.getvalue())

    with pytest.raises(ArchiveError, match="Unsafe path"):
        extract_archive(zip_path, tmp_path / "out")
    assert not (tmp_path / "escape.png").exists()
