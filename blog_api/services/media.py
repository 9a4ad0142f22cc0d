"""Media lifecycle: store, replace and discard uploaded files referenced by records.

Files live in a single directory and are addressed by generated filename.
Callers persist a filename only after store/replace has returned it.
"""

import logging
import os
import tempfile
import uuid
from dataclasses import dataclass
from pathlib import Path

from blog_api.core.errors import DeleteFailed, UploadFailed, ValidationFailed

logger = logging.getLogger(__name__)

_TEMP_PREFIX = ".upload-"

# Most filesystems cap a single name at 255 bytes.
MAX_FILENAME_BYTES = 255
MAX_EXTENSION_BYTES = 16


@dataclass(frozen=True)
class MediaUpload:
    """An uploaded file as received from the client."""

    filename: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


def build_filename(original: str) -> str:
    """
    Generate a collision-resistant name: base + uuid + "." + extension.

    The base is everything before the first '.', the extension everything after
    the last one. Directory components of the client-supplied name are dropped.
    """
    name = os.path.basename((original or "").replace("\\", "/"))
    parts = name.split(".")
    token = uuid.uuid4().hex
    if len(parts) < 2 or not parts[-1]:
        suffix = ""
    else:
        suffix = "." + _truncate_utf8(parts[-1], MAX_EXTENSION_BYTES)
    budget = MAX_FILENAME_BYTES - len(token) - len(suffix.encode("utf-8"))
    return f"{_truncate_utf8(parts[0], budget)}{token}{suffix}"


def _truncate_utf8(value: str, max_bytes: int) -> str:
    # Filesystem name limits count bytes, not characters.
    return value.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")


class MediaStore:
    """Filesystem-backed store for avatars and thumbnails."""

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)

    def path_for(self, filename: str) -> Path:
        """Absolute path for a stored filename; rejects names that escape the root."""
        if not filename or os.path.basename(filename) != filename or filename in (".", ".."):
            raise ValueError(f"Invalid media filename: {filename!r}")
        return self.root / filename

    def exists(self, filename: str) -> bool:
        try:
            return self.path_for(filename).is_file()
        except ValueError:
            return False

    def list_files(self) -> list[str]:
        """Names of all stored files (in-flight temp files excluded)."""
        if not self.root.is_dir():
            return []
        return sorted(
            p.name
            for p in self.root.iterdir()
            if p.is_file() and not p.name.startswith(_TEMP_PREFIX)
        )

    def store(self, upload: MediaUpload, max_size: int) -> str:
        """
        Validate the size and write the file under a generated name.

        Raises ValidationFailed if the file is larger than max_size and
        UploadFailed on any I/O error (no partial file is left behind).
        """
        if upload.size > max_size:
            raise ValidationFailed(
                f"File is too large. Please use a file smaller than {max_size} bytes."
            )
        filename = build_filename(upload.filename)
        target = self.path_for(filename)
        tmp_path: str | None = None
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=_TEMP_PREFIX, dir=self.root)
            with os.fdopen(fd, "wb") as fh:
                fh.write(upload.content)
            os.replace(tmp_path, target)
            tmp_path = None
        except OSError as e:
            logger.error("Storing media file %s failed: %s", filename, e)
            raise UploadFailed("File upload failed") from e
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    logger.warning("Could not remove temp upload %s", tmp_path)
        logger.info("Stored media file %s (%d bytes)", filename, upload.size)
        return filename

    def replace(self, old_filename: str | None, upload: MediaUpload, max_size: int) -> str:
        """
        Validate the new file, remove the old one, then store the new one.

        Nothing is touched when validation fails. A failure to delete the old
        file is logged and does not block the new upload.
        """
        if upload.size > max_size:
            raise ValidationFailed(
                f"File is too large. Please use a file smaller than {max_size} bytes."
            )
        if old_filename:
            try:
                self.discard(old_filename)
            except DeleteFailed:
                logger.warning("Old media file %s could not be deleted; continuing", old_filename)
        return self.store(upload, max_size)

    def discard(self, filename: str) -> None:
        """
        Remove a stored file. A file that is already gone counts as discarded.
        Raises DeleteFailed on any other I/O error.
        """
        try:
            path = self.path_for(filename)
        except ValueError as e:
            raise DeleteFailed("File deletion error") from e
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Media file %s already missing", filename)
            return
        except OSError as e:
            logger.error("Deleting media file %s failed: %s", filename, e)
            raise DeleteFailed("File deletion error") from e
        logger.info("Discarded media file %s", filename)

    def discard_quietly(self, filename: str) -> bool:
        """Best-effort discard used to compensate a failed record write. Returns success."""
        try:
            self.discard(filename)
            return True
        except DeleteFailed:
            logger.error("Compensation failed; %s is now an orphan file", filename)
            return False
