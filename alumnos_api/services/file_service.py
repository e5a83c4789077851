"""
Alumnos API: Upload Storage Service
===================================

What:  Persists uploaded files unchanged into the upload directory.
How:   The file keeps the client-supplied original name; uploading the
       same name again overwrites the previous file without notice.
Who:   Called by POST /upload.

Naming:
    Only the final path component of the supplied name is used, so
    "../../etc/passwd" is stored as "passwd" inside the upload directory.
"""

import logging
from pathlib import Path
from typing import Optional

import aiofiles

from alumnos_api.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)


class FileService:
    """Writes uploads to `<upload_dir>/<original filename>`."""

    def __init__(self, upload_dir: str):
        self.upload_dir = Path(upload_dir).resolve()

    def target_path(self, filename: Optional[str]) -> Path:
        """
        Resolve where an upload with this original name is stored.

        Raises:
            ValidationError if the name is empty once directories are stripped.
        """
        name = Path((filename or "").replace("\\", "/")).name
        if name in ("", ".", ".."):
            raise ValidationError(
                message="The uploaded file has no file name",
                field="archivo",
                context={"filename": filename},
            )
        return self.upload_dir / name

    async def store(self, filename: Optional[str], content: bytes) -> Path:
        """
        Write the bytes to the upload directory under the original name.

        Returns:
            Absolute path of the stored file.

        Raises:
            ValidationError: no usable file name
            FileStorageError: the directory or file could not be written
        """
        path = self.target_path(filename)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store upload at %s: %s", path, str(e))
            raise FileStorageError(
                message="Failed to save the uploaded file",
                context={"path": str(path), "os_error": str(e)},
            )

        logger.info("Upload stored: %s (%d bytes)", path.name, len(content))
        return path
