"""
Exception types for Redact Canvas.

Engine-level errors (NoImageLoaded, NoBaseline, DegenerateRegion) are caught
by the editing session and turned into no-ops. Ingest and export errors are
surfaced to the user as notifications and never change the buffer.
"""


class RedactError(Exception):
    """Base class for all Redact Canvas errors."""


class NoImageLoaded(RedactError):
    """A blur operation was attempted before any image was ingested."""


class NoBaseline(RedactError):
    """The baseline snapshot was requested before one was captured."""


class DegenerateRegion(RedactError, ValueError):
    """A selection or brush footprint has zero area after clamping."""


class UnsupportedFormat(RedactError, ValueError):
    """The pasted or uploaded data is not an image type."""


class DecodeError(RedactError, ValueError):
    """The image data could not be decoded."""


class ExportFailure(RedactError, OSError):
    """The platform refused the download or clipboard write."""
