"""Storage exceptions."""


class StorageError(Exception):
    """Base class for article store failures"""
    pass


class StorageUnavailable(StorageError):
    """The persistent medium cannot be reached, or a write failed for a non-uniqueness reason"""
    pass
