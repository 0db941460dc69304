class LibraryError(Exception):
    """Base exception for library catalog errors."""


class InvalidStateError(LibraryError):
    """Item status does not allow the requested transition."""
