"""Data models for decoded PostGIS rasters.

This module defines the value types produced while decoding a raster WKB
buffer: the pixel type enumeration, the per-band descriptor, the fixed-size
raster header and the final Raster image.

Example:
    Inspect a decoded raster:
        >>> from pgraster import decode
        >>> raster = decode(wkb)
        >>> raster.extent
        (0.0, 0.0, 1.0, 1.0)
        >>> raster.pixels.shape
        (1, 1, 4)
        >>> raster.data
        b'\\x7f\\x7f\\x7f\\xff'
"""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

    from pgraster.core import errors

Extent = tuple[float, float, float, float]


class PixelType(enum.IntEnum):
    """Pixel type codes defined by the raster WKB format."""

    BOOL_1BIT = 0
    UINT_2BIT = 1
    UINT_4BIT = 2
    INT_8BIT = 3
    UINT_8BIT = 4
    INT_16BIT = 5
    UINT_16BIT = 6
    INT_32BIT = 7
    UINT_32BIT = 8
    FLOAT_32BIT = 10
    FLOAT_64BIT = 11
    END = 13

    @property
    def byte_size(self) -> int:
        """Width in bytes of one sample (and of the nodata value) on the wire.

        Sub-byte types occupy a full byte per sample. END has no samples.
        """
        return _BYTE_SIZES[self]

    @property
    def is_supported(self) -> bool:
        """Whether the decoder can turn samples of this type into pixels."""
        return self in (PixelType.INT_8BIT, PixelType.UINT_8BIT)


_BYTE_SIZES = {
    PixelType.BOOL_1BIT: 1,
    PixelType.UINT_2BIT: 1,
    PixelType.UINT_4BIT: 1,
    PixelType.INT_8BIT: 1,
    PixelType.UINT_8BIT: 1,
    PixelType.INT_16BIT: 2,
    PixelType.UINT_16BIT: 2,
    PixelType.INT_32BIT: 4,
    PixelType.UINT_32BIT: 4,
    PixelType.FLOAT_32BIT: 4,
    PixelType.FLOAT_64BIT: 8,
    PixelType.END: 0,
}


@dataclasses.dataclass(frozen=True)
class BandDescriptor:
    """Decoded band-type byte.

    Attributes:
        code: Raw 4-bit pixel type code (0-15).
        is_offline: Band data is stored outside the database.
        has_nodata: The stored nodata value is meaningful.
        is_nodata: Every value of the band is nodata (informational only).
    """

    code: int
    is_offline: bool = False
    has_nodata: bool = False
    is_nodata: bool = False

    @property
    def pixel_type(self) -> PixelType | None:
        """Pixel type for the code, or None if the format does not define it."""
        try:
            return PixelType(self.code)
        except ValueError:
            return None

    @property
    def is_supported(self) -> bool:
        """Whether the band's pixel type can be decoded."""
        pixel_type = self.pixel_type
        return pixel_type is not None and pixel_type.is_supported


@dataclasses.dataclass(frozen=True)
class RasterHeader:
    """Fixed-size raster WKB header.

    Attributes:
        version: WKB format version (0 is the only supported version).
        num_bands: Number of band records following the header.
        scale_x: Pixel width in geographical units.
        scale_y: Pixel height in geographical units.
        ip_x: X ordinate of the upper-left pixel's upper-left corner.
        ip_y: Y ordinate of the upper-left pixel's upper-left corner.
        skew_x: Rotation about the Y axis.
        skew_y: Rotation about the X axis.
        srid: Spatial reference id.
        width: Number of pixel columns.
        height: Number of pixel rows.
        little_endian: Byte order of the multi-byte fields.
    """

    version: int
    num_bands: int
    scale_x: float
    scale_y: float
    ip_x: float
    ip_y: float
    skew_x: float
    skew_y: float
    srid: int
    width: int
    height: int
    little_endian: bool = True

    @property
    def extent(self) -> Extent:
        """Geographic extent as (ip_x, ip_y, far x, far y)."""
        return (
            self.ip_x,
            self.ip_y,
            self.ip_x + self.width * self.scale_x,
            self.ip_y + self.height * self.scale_y,
        )


@dataclasses.dataclass(frozen=True, eq=False)
class Raster:
    """Decoded raster image.

    Pixels are stored as a read-only uint8 array of shape
    (height, width, 4), row-major with the top row first. Byte positions
    0-2 hold the color channels and position 3 the alpha channel.

    Attributes:
        extent: Geographic extent (ip_x, ip_y, far x, far y).
        width: Number of pixel columns.
        height: Number of pixel rows.
        pixels: Pixel array, owned by the caller.
        premultiplied_alpha: Always True for this decoder.
        srid: Spatial reference id carried over from the header.
        skipped_bands: Non-fatal errors for bands left at the pre-fill value.
    """

    extent: Extent
    width: int
    height: int
    pixels: npt.NDArray[np.uint8]
    premultiplied_alpha: bool = True
    srid: int = 0
    skipped_bands: tuple[errors.DecodeError, ...] = ()

    def __post_init__(self) -> None:
        self.pixels.setflags(write=False)

    @property
    def data(self) -> bytes:
        """Packed pixel buffer of width * height * 4 bytes."""
        return self.pixels.tobytes()
