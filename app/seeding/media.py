"""Media registration with lookup-before-create by file name."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from app.errors import AssetNotFound
from app.seeding.assets import AssetLoader, guess_mime_type
from app.seeding.defaults import AssetSpec
from app.store import ContentStore

log = logging.getLogger("seed")


class MediaRegistrar:
    """
    Ingest binary assets into the ``media`` collection without duplicating them.

    The store is always checked for an existing row with the same file name,
    so repeated boots reuse earlier uploads; the per-instance cache only saves
    the lookup within one run.
    """

    def __init__(self, store: ContentStore):
        self.store = store
        self._ids: Dict[str, int] = {}

    def register(self, content: bytes, filename: str, alt: str, mime_type: Optional[str] = None) -> int:
        """
        Return the id of the media row for ``filename``, creating it if needed.

        Parameters
        ----------
        content : bytes
            Binary payload.
        filename : str
            Dedup key; must be non-empty.
        alt : str
            Alt text stored with the asset.
        mime_type : str | None
            MIME type; inferred from the extension when omitted.

        Returns
        -------
        int
            Identifier of the existing or newly created media row.

        Raises
        ------
        ValueError
            If ``filename`` is empty.
        app.errors.StoreUnavailable
            If the store cannot be reached.
        """
        if not filename or not filename.strip():
            raise ValueError("filename must be non-empty")
        if filename in self._ids:
            return self._ids[filename]

        existing = self.store.find("media", where={"filename": filename}, limit=1)
        if existing:
            media_id = existing[0].id
            log.info("Media %s already present (id=%s)", filename, media_id)
        else:
            row = self.store.create(
                "media",
                {
                    "filename": filename,
                    "alt": alt,
                    "mime_type": mime_type or guess_mime_type(filename),
                    "filesize": len(content),
                    "data": content,
                },
            )
            media_id = row.id
            log.info("Uploaded media %s (id=%s)", filename, media_id)
        self._ids[filename] = media_id
        return media_id

    def register_asset(self, loader: AssetLoader, spec: AssetSpec) -> Optional[int]:
        """
        Load a seed asset and register it; a missing file yields None.
        """
        try:
            asset = loader.load(spec.filename)
        except AssetNotFound as exc:
            log.warning("%s; %s will have no image", exc, spec.key)
            return None
        return self.register(asset.content, asset.filename, spec.alt, asset.mime_type)
