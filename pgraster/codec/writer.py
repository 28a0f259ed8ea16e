"""Raster WKB encoding for 8-bit bands.

The writer produces buffers the reader accepts: a 61-byte header in the
header's byte order followed by in-database band records. It is used to build
fixtures and to hand small rasters back to PostGIS
(``ST_RastFromWKB``/``::raster`` casts).

Example:
    Build a 2x1 grayscale raster:
        >>> from pgraster.codec import models, writer
        >>> wkb = writer.build_raster(
        ...     width=2,
        ...     height=1,
        ...     bands=[(models.BandDescriptor(code=4), 0, [10, 20])],
        ... )
        >>> len(wkb)
        65
"""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING

import numpy as np

from pgraster.codec import band_type, models

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    import numpy.typing as npt

    Samples = Iterable[int] | npt.NDArray[np.integer]

SAMPLE_MIN = -128
SAMPLE_MAX = 255


def encode_header(header: models.RasterHeader) -> bytes:
    """Encode a raster header into its 61-byte wire form."""
    order = "<" if header.little_endian else ">"
    return struct.pack("B", 1 if header.little_endian else 0) + struct.pack(
        order + "HHddddddiHH",
        header.version,
        header.num_bands,
        header.scale_x,
        header.scale_y,
        header.ip_x,
        header.ip_y,
        header.skew_x,
        header.skew_y,
        header.srid,
        header.width,
        header.height,
    )


def encode_band(
    band: models.BandDescriptor,
    nodata: int,
    samples: Samples,
) -> bytes:
    """Encode one in-database band record with single-byte samples.

    Samples are written row-major; signed 8-bit values are stored as their
    two's-complement byte.

    Raises:
        ValueError: if the band is offline or its pixel type is wider than
            one byte, or if nodata or a sample is not an integer in
            -128..255.
    """
    pixel_type = band.pixel_type
    if band.is_offline or pixel_type is None or pixel_type.byte_size != 1:
        raise ValueError(f"cannot encode band type {band.code} with 8-bit samples")
    if not SAMPLE_MIN <= nodata <= SAMPLE_MAX:
        raise ValueError(f"nodata {nodata} does not fit in 8 bits")
    array = samples if isinstance(samples, np.ndarray) else np.asarray(list(samples))
    if array.dtype.kind == "f" and not np.array_equal(array, np.trunc(array)):
        raise ValueError("samples must be whole numbers")
    if array.size and (array.min() < SAMPLE_MIN or array.max() > SAMPLE_MAX):
        raise ValueError(
            f"samples must be in {SAMPLE_MIN}..{SAMPLE_MAX}, "
            f"got {array.min()}..{array.max()}"
        )
    values = array.astype(np.int64).ravel()
    payload = (values & 0xFF).astype(np.uint8).tobytes()
    return bytes([band_type.encode_band_type(band), nodata & 0xFF]) + payload


def build_raster(
    width: int,
    height: int,
    bands: Sequence[tuple[models.BandDescriptor, int, Samples]],
    *,
    scale: tuple[float, float] = (1.0, 1.0),
    origin: tuple[float, float] = (0.0, 0.0),
    srid: int = 0,
    little_endian: bool = True,
) -> bytes:
    """Build a complete raster WKB buffer.

    Args:
        width: Number of pixel columns.
        height: Number of pixel rows.
        bands: (descriptor, nodata, samples) for each band.
        scale: Pixel size as (scale_x, scale_y).
        origin: Upper-left corner as (ip_x, ip_y).
        srid: Spatial reference id.
        little_endian: Byte order of the header fields.

    Returns:
        The encoded raster.
    """
    header = models.RasterHeader(
        version=0,
        num_bands=len(bands),
        scale_x=scale[0],
        scale_y=scale[1],
        ip_x=origin[0],
        ip_y=origin[1],
        skew_x=0.0,
        skew_y=0.0,
        srid=srid,
        width=width,
        height=height,
        little_endian=little_endian,
    )
    out = bytearray(encode_header(header))
    for index, (band, nodata, samples) in enumerate(bands):
        record = encode_band(band, nodata, samples)
        if len(record) - 2 != width * height:
            raise ValueError(
                f"band {index} has {len(record) - 2} samples, "
                f"expected {width * height}"
            )
        out += record
    return bytes(out)
