from typing import Optional


class GridDetectorError(Exception):
    """
    Base class for errors raised by the grid detection core.
    """


class ConfigAccessError(GridDetectorError):
    """
    Raised when the local Steam/Dota directories exist but cannot be read
    (permissions, I/O errors). A missing directory is never an error.
    """


class CatalogUnavailable(GridDetectorError):
    """
    Raised when the remote grid catalog cannot be fetched.
    status_code is None for transport failures (DNS, timeout, refused).
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
