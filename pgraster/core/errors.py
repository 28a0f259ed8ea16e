"""Error taxonomy for PostGIS raster WKB decoding.

Every failure the decoder can report derives from DecodeError. Fatal errors
abort the decode call and are raised to the caller, who should treat them as
"no raster for this row". Non-fatal errors describe a single band that could
not be decoded; they are logged and collected on the returned Raster instead
of being raised.

Example:
    Skip rows that cannot be decoded:
        >>> from pgraster import decode
        >>> from pgraster.core.errors import DecodeError

        >>> try:
        ...     raster = decode(row_bytes)
        ... except DecodeError as e:
        ...     print(f"Skipping row: {e}")

    Inspect bands that were left at their pre-filled value:
        >>> for issue in raster.skipped_bands:
        ...     print(issue.band, issue)
"""

from __future__ import annotations


class DecodeError(ValueError):
    """Base class for all raster WKB decoding errors.

    Attributes:
        fatal: Whether the condition aborts the whole decode call.
    """

    fatal: bool = True


class UnsupportedVersion(DecodeError):
    """Raised when the header carries a WKB version other than 0."""

    def __init__(self, version: int) -> None:
        self.version = version
        super().__init__(f"WKB version {version} unsupported")


class UnsupportedRotation(DecodeError):
    """Raised when the raster has a non-zero skew (rotation)."""

    def __init__(self, skew_x: float, skew_y: float) -> None:
        self.skew_x = skew_x
        self.skew_y = skew_y
        super().__init__(
            f"raster rotation is not supported (skewX={skew_x}, skewY={skew_y})"
        )


class UnsupportedBandCount(DecodeError):
    """Raised when the raster has neither 1 (grayscale) nor 3 (RGB) bands."""

    def __init__(self, num_bands: int) -> None:
        self.num_bands = num_bands
        super().__init__(f"raster with {num_bands} bands is not supported")


class BufferUnderrun(DecodeError):
    """Raised when a read needs more bytes than the buffer has left.

    Attributes:
        offset: Cursor offset at which the read was attempted.
        requested: Number of bytes the read needed.
        remaining: Number of bytes left in the buffer.
    """

    def __init__(self, offset: int, requested: int, remaining: int) -> None:
        self.offset = offset
        self.requested = requested
        self.remaining = remaining
        super().__init__(
            f"buffer underrun at offset {offset}: "
            f"need {requested} bytes, {remaining} remaining"
        )


class InputTooLarge(DecodeError):
    """Raised when the input exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"input of {size} bytes exceeds limit of {limit} bytes")


class MalformedInput(DecodeError):
    """Raised when the hex text form of a raster cannot be decoded."""


class UnsupportedPixelType(DecodeError):
    """A band whose pixel type is not 8-bit signed/unsigned integer.

    Non-fatal: the band's channel keeps its pre-filled value.
    """

    fatal = False

    def __init__(self, band: int, code: int) -> None:
        self.band = band
        self.code = code
        super().__init__(f"band {band} type {code} unsupported")


class UnsupportedOfflineBand(DecodeError):
    """A band stored outside the database.

    Non-fatal: the band's channel keeps its pre-filled value.
    """

    fatal = False

    def __init__(self, band: int) -> None:
        self.band = band
        super().__init__(f"offline band {band} unsupported")
