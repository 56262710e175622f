"""Errors raised by the rating store."""


class StoreError(Exception):
    """Base class for rating store errors."""


class NotFoundError(StoreError):
    """No anime with the requested id exists in the store."""

    def __init__(self, anidb_id: int) -> None:
        self.anidb_id = anidb_id
        super().__init__(f"Anime {anidb_id} not found in rating store")


class DuplicateIdentityError(StoreError):
    """An anime with this id has already been imported."""

    def __init__(self, anidb_id: int) -> None:
        self.anidb_id = anidb_id
        super().__init__(f"Anime {anidb_id} already exists in rating store")


class StoreUnavailableError(StoreError):
    """The store file is missing, unreadable or has an unexpected schema."""
