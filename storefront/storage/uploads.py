"""Image upload sink.

Persists one uploaded file per request under the upload directory and hands
back the public reference path that is stored on the product record.
"""

import logging
import shutil
import time
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Optional, Union

# Configure module logger
logger = logging.getLogger(__name__)

# URL prefix the upload directory is served under
UPLOADS_URL_PREFIX = "/uploads"

# Used when the client sends a file part without a usable name
DEFAULT_UPLOAD_NAME = "upload"


class UploadSink:
    """Writes uploaded files to disk and resolves their references.

    Attributes:
        upload_dir: Directory uploaded files are written to.
        url_prefix: Prefix of the returned reference paths.
    """

    def __init__(
        self,
        upload_dir: Union[str, Path],
        url_prefix: str = UPLOADS_URL_PREFIX,
    ):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def ensure_exists(self) -> None:
        """Create the upload directory if it is missing."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def generate_filename(self, original_filename: Optional[str]) -> str:
        """Build ``<millisecond-timestamp>-<original name>``.

        Only the base name of the client-supplied filename is kept, so a name
        such as ``../../etc/passwd`` cannot leave the upload directory.
        """
        # Browsers on Windows may send backslash-separated paths
        name = PurePosixPath((original_filename or "").replace("\\", "/")).name
        if name in ("", ".", ".."):
            name = DEFAULT_UPLOAD_NAME
        return f"{int(time.time() * 1000)}-{name}"

    def save(self, original_filename: Optional[str], fileobj: BinaryIO) -> str:
        """Write an uploaded file and return its reference path.

        No content-type, size or extension checks are applied.

        Args:
            original_filename: Filename reported by the client.
            fileobj: Readable binary stream with the file content.

        Returns:
            Reference path of the form ``/uploads/<generated-filename>``.
        """
        self.ensure_exists()
        filename = self.generate_filename(original_filename)
        file_path = self.upload_dir / filename

        with open(file_path, "wb") as buffer:
            shutil.copyfileobj(fileobj, buffer)

        logger.info(
            "Stored upload",
            extra={
                "upload_filename": filename,
                "size_bytes": file_path.stat().st_size,
            },
        )
        return f"{self.url_prefix}/{filename}"

    def resolve(self, reference: str) -> Optional[Path]:
        """Map a reference path back to a file inside the upload directory.

        Returns:
            The file path, or None if the reference does not point into the
            upload directory.
        """
        prefix = f"{self.url_prefix}/"
        if not reference.startswith(prefix):
            return None

        name = reference[len(prefix):]
        if not name or PurePosixPath(name).name != name or name in (".", ".."):
            return None

        return self.upload_dir / name

    def delete(self, reference: str) -> bool:
        """Remove the file behind ``reference``.

        A missing file is not an error, so deleting twice is harmless.

        Returns:
            True if a file was removed, False otherwise.
        """
        file_path = self.resolve(reference)
        if file_path is None:
            logger.warning(
                "Ignoring image reference outside upload directory",
                extra={"reference": reference},
            )
            return False

        try:
            file_path.unlink()
        except FileNotFoundError:
            logger.debug("Image already removed", extra={"reference": reference})
            return False

        logger.info("Removed upload", extra={"reference": reference})
        return True
