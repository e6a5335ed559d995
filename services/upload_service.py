"""
Local image storage for uploaded files.

Files land in ``{upload_dir}/{kind}/`` and are served by the app's
``/uploads`` static mount, so the public URL is
``{base_url}/uploads/{kind}/{filename}``.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from config import UploadSettings
from errors import ValidationError
from shared.generators import generate_unique_suffix
from shared.logging import get_logger
from shared.validators import is_allowed_image

log = get_logger(__name__)


class UploadService:
    def __init__(self, settings: UploadSettings, base_url: str) -> None:
        self._root = Path(settings.upload_dir).resolve()
        self._max_size = settings.max_file_size
        self._base_url = base_url.rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    def public_url(self, kind: str, filename: str) -> str:
        return f"{self._base_url}/uploads/{kind}/{filename}"

    def _path_for_url(self, url: str) -> Optional[Path]:
        prefix = f"{self._base_url}/uploads/"
        if not url or not url.startswith(prefix):
            return None
        path = (self._root / url[len(prefix):]).resolve()
        if self._root not in path.parents:
            return None
        return path

    async def save_image(
        self, upload: UploadFile, kind: str, field_name: str = "image"
    ) -> str:
        """Validate and store an uploaded image; return its public URL.

        Raises:
            ValidationError: not an allowed image type, empty, or too large.
        """
        if not is_allowed_image(upload.filename, upload.content_type):
            raise ValidationError(
                "Only image files (jpeg, jpg, png, gif, webp) are allowed",
                field=field_name,
            )

        content = await upload.read(self._max_size + 1)
        if not content:
            raise ValidationError("Uploaded file is empty", field=field_name)
        if len(content) > self._max_size:
            raise ValidationError(
                f"File too large; maximum size is {self._max_size // (1024 * 1024)}MB",
                field=field_name,
            )

        ext = os.path.splitext(upload.filename)[1].lower()
        filename = f"{field_name}-{generate_unique_suffix()}{ext}"
        target_dir = self._root / kind
        await asyncio.to_thread(target_dir.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread((target_dir / filename).write_bytes, content)

        log.info("file_uploaded", kind=kind, filename=filename, size=len(content))
        return self.public_url(kind, filename)

    async def delete_by_url(self, url: Optional[str]) -> bool:
        """Remove a previously stored file; unknown or foreign URLs are ignored."""
        path = self._path_for_url(url) if url else None
        if path is None:
            return False
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            return False
        log.info("file_deleted", path=str(path.relative_to(self._root)))
        return True
