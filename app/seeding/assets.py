"""Local asset source used to load seed images from disk."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from app.errors import AssetNotFound


@dataclass(frozen=True)
class Asset:
    filename: str
    content: bytes
    mime_type: str


def guess_mime_type(filename: str) -> str:
    """
    Infer a MIME type from the file extension.

    Parameters
    ----------
    filename : str
        File name with extension.

    Returns
    -------
    str
        MIME type, ``application/octet-stream`` when unknown.
    """
    mime, _ = mimetypes.guess_type(filename)
    return mime or "application/octet-stream"


class AssetLoader:
    """
    Read-only lookup of binary resources by file name inside one directory.

    A loader built with ``base_dir=None`` models a deployment without
    filesystem access: every lookup raises ``AssetNotFound``.
    """

    def __init__(self, base_dir: Optional[Union[str, Path]]):
        self.base_dir = Path(base_dir).resolve() if base_dir else None

    def _resolve(self, filename: str) -> Path:
        if self.base_dir is None or not filename:
            raise AssetNotFound(filename)
        path = (self.base_dir / filename).resolve()
        # Only plain names inside base_dir are served.
        if path.parent != self.base_dir or not path.is_file():
            raise AssetNotFound(filename)
        return path

    def load(self, filename: str) -> Asset:
        """
        Load one asset.

        Raises
        ------
        app.errors.AssetNotFound
            If the file does not exist or cannot be read.
        """
        path = self._resolve(filename)
        try:
            content = path.read_bytes()
        except OSError:
            raise AssetNotFound(filename) from None
        return Asset(filename=filename, content=content, mime_type=guess_mime_type(filename))
