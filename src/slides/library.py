"""
On-disk slide library.

Slides are copied into a presentations directory next to a config.json
index of the form {"title": ..., "slides": [{"id", "title", "image"}]}.
"""
import json
import mimetypes
import random
import shutil
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .deck import Slide, SlideDeck


INDEX_FILENAME = "config.json"
DEFAULT_TITLE = "Presentation"
DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024  # 50MB

ALLOWED_MIME_TYPES = {"image/png", "image/jpeg", "image/jpg"}
ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".pptx"}


class SlideError(Exception):
    """Base exception for slide library errors."""
    pass


class UnsupportedFileError(SlideError):
    """Raised when a file type cannot be used as a slide."""
    pass


class FileTooLargeError(SlideError):
    """Raised when a slide file exceeds the size limit."""
    pass


class SlideNotFoundError(SlideError):
    """Raised when a slide id is not in the index."""
    pass


def is_supported_file(path: Path) -> bool:
    """Check a file name against the accepted slide formats."""
    if path.suffix.lower() in ALLOWED_EXTENSIONS:
        return True
    mime, _ = mimetypes.guess_type(path.name)
    return mime in ALLOWED_MIME_TYPES


class SlideLibrary:
    """
    Stores slide files and their JSON index in a single directory.
    """

    def __init__(
        self,
        directory: Union[str, Path],
        title: str = DEFAULT_TITLE,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ):
        """
        Args:
            directory: Presentations directory
            title: Title written to a newly created index
            max_file_size: Upload limit in bytes
        """
        self.directory = Path(directory)
        self.index_path = self.directory / INDEX_FILENAME
        self._default_title = title
        self.max_file_size = max_file_size

    def initialize(self) -> None:
        """Create the directory and an empty index if they don't exist."""
        self.directory.mkdir(parents=True, exist_ok=True)
        if not self.index_path.exists():
            self._write_index(self._empty_index())
            print(f"Created slide index: {self.index_path}")

    def _empty_index(self) -> dict:
        return {"title": self._default_title, "slides": []}

    def _read_index(self) -> dict:
        with open(self.index_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def _read_index_or_empty(self) -> dict:
        try:
            data = self._read_index()
        except (OSError, ValueError):
            return self._empty_index()
        if not isinstance(data, dict):
            return self._empty_index()
        data.setdefault("title", self._default_title)
        data.setdefault("slides", [])
        return data

    def _write_index(self, data: dict) -> None:
        with open(self.index_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @property
    def title(self) -> str:
        return self._read_index_or_empty()["title"]

    def _to_slide(self, entry: dict) -> Slide:
        image_path = self.directory / entry["image"]
        try:
            uploaded_at = datetime.fromtimestamp(image_path.stat().st_mtime)
        except OSError:
            uploaded_at = datetime.now()
        return Slide(
            id=entry["id"],
            name=entry.get("title", entry["id"]),
            image_path=str(image_path),
            uploaded_at=uploaded_at,
        )

    def list_slides(self) -> List[Slide]:
        return [self._to_slide(e) for e in self._read_index_or_empty()["slides"]]

    def add_slide(self, source: Union[str, Path], title: Optional[str] = None) -> Slide:
        """
        Copy a file into the library and append it to the index.

        Args:
            source: PNG/JPEG image or .pptx file
            title: Slide title (defaults to the file name without extension)

        Returns:
            The new Slide.
        """
        source = Path(source)
        if not source.is_file():
            raise SlideError(f"File not found: {source}")
        if not is_supported_file(source):
            raise UnsupportedFileError(f"Unsupported file type: {source.name}")
        size = source.stat().st_size
        if size > self.max_file_size:
            raise FileTooLargeError(
                f"{source.name} is {size} bytes (limit {self.max_file_size})"
            )

        self.directory.mkdir(parents=True, exist_ok=True)
        data = self._read_index_or_empty()

        millis = int(time.time() * 1000)
        filename = f"slide-{millis}-{random.randint(0, 10**9)}{source.suffix}"
        shutil.copyfile(source, self.directory / filename)

        existing = {s["id"] for s in data["slides"]}
        slide_id = f"slide-{millis}"
        suffix = 1
        while slide_id in existing:
            slide_id = f"slide-{millis}-{suffix}"
            suffix += 1

        entry = {
            "id": slide_id,
            "title": title or source.stem,
            "image": filename,
        }
        data["slides"].append(entry)
        self._write_index(data)
        return self._to_slide(entry)

    def remove_slide(self, slide_id: str) -> None:
        """Delete a slide's file and index entry."""
        data = self._read_index_or_empty()
        for i, entry in enumerate(data["slides"]):
            if entry["id"] == slide_id:
                break
        else:
            raise SlideNotFoundError(f"Slide not found: {slide_id}")

        self._delete_image(entry)
        del data["slides"][i]
        self._write_index(data)

    def reorder(self, slide_ids: Sequence[str]) -> None:
        """
        Rewrite the index in the given order.

        Args:
            slide_ids: Every slide id exactly once
        """
        data = self._read_index_or_empty()
        entries = {e["id"]: e for e in data["slides"]}
        for slide_id in slide_ids:
            if slide_id not in entries:
                raise SlideNotFoundError(f"Slide not found: {slide_id}")
        if len(slide_ids) != len(entries) or len(set(slide_ids)) != len(entries):
            raise SlideError("Reorder must list every slide exactly once")

        data["slides"] = [entries[slide_id] for slide_id in slide_ids]
        self._write_index(data)

    def remove_all(self) -> int:
        """Delete every slide file and empty the index. Returns the number removed."""
        data = self._read_index_or_empty()
        for entry in data["slides"]:
            self._delete_image(entry)
        count = len(data["slides"])
        data["slides"] = []
        self._write_index(data)
        return count

    def _delete_image(self, entry: dict) -> None:
        try:
            (self.directory / entry["image"]).unlink()
        except OSError as e:
            print(f"Could not delete slide image {entry['image']}: {e}")

    def load_deck(self) -> SlideDeck:
        data = self._read_index_or_empty()
        return SlideDeck(
            [self._to_slide(e) for e in data["slides"]],
            title=data["title"],
        )
