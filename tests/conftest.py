"""
Shared fixtures for scanner and matcher tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import sys
import pytest
import tempfile
from pathlib import Path
from typing import Dict

# Add src/ to sys.path so 'mediascanner' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from mediascanner.core.errors import FileUnreadableError
from mediascanner.core.hasher import HasherImpl


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def hello_world_tree(temp_dir) -> Dict[str, Path]:
    """
    root/
      a.txt      "hello"
      c.txt      "world"
      sub/
        b.txt    "hello"
    """
    files = {
        "a": temp_dir / "a.txt",
        "c": temp_dir / "c.txt",
        "b": temp_dir / "sub" / "b.txt",
    }
    files["b"].parent.mkdir()
    files["a"].write_bytes(b"hello")
    files["b"].write_bytes(b"hello")
    files["c"].write_bytes(b"world")
    return files


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for matching scenarios:
    - 3 identical photos (one in a nested directory)
    - 2 identical documents
    - 2 unique files
    - 1 empty directory
    """
    files = {}

    photo = b"\x89PNG" + b"A" * 1024
    files["img_1"] = temp_dir / "IMG_001.png"
    files["img_2"] = temp_dir / "photos" / "img_001_copy.png"
    files["img_3"] = temp_dir / "photos" / "2024" / "holiday.png"
    files["img_3"].parent.mkdir(parents=True)
    for key in ("img_1", "img_2", "img_3"):
        files[key].write_bytes(photo)

    doc = b"B" * 2048
    files["doc_1"] = temp_dir / "report.txt"
    files["doc_2"] = temp_dir / "photos" / "report (1).txt"
    files["doc_1"].write_bytes(doc)
    files["doc_2"].write_bytes(doc)

    files["unique_1"] = temp_dir / "notes.md"
    files["unique_1"].write_bytes(b"C" * 1500)
    files["unique_2"] = temp_dir / "photos" / "img_unique.png"
    files["unique_2"].write_bytes(b"D" * 2500)

    files["empty_dir"] = temp_dir / "empty"
    files["empty_dir"].mkdir()

    return files


class SelectiveFailingHasher(HasherImpl):
    """Hasher that refuses to read files whose name is in `unreadable`."""

    def __init__(self, unreadable):
        super().__init__()
        self.unreadable = set(unreadable)

    def compute_fingerprint(self, path: str) -> bytes:
        if os.path.basename(path) in self.unreadable:
            raise FileUnreadableError(path, "Permission denied")
        return super().compute_fingerprint(path)


@pytest.fixture
def failing_hasher():
    """Factory for hashers that fail on the given file names."""
    return SelectiveFailingHasher
