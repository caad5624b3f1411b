"""Exceptions raised while bootstrapping and reading the content store."""


class SeedError(Exception):
    """Base class for content store bootstrap failures."""


class AssetNotFound(SeedError):
    """A named seed asset is missing from the local asset source."""

    def __init__(self, filename: str):
        super().__init__(f"Asset not found: {filename!r}")
        self.filename = filename


class StoreError(SeedError):
    """A document store call failed."""


class StoreUnavailable(StoreError):
    """The document store could not be reached or its schema is missing."""


class PartialCollectionWipeFailure(SeedError):
    """A collection could not be fully wiped during a force reseed."""

    def __init__(self, collection: str, deleted: int, cause: Exception):
        super().__init__(f"Wipe of {collection!r} stopped after {deleted} rows: {cause}")
        self.collection = collection
        self.deleted = deleted
        self.cause = cause
