"""Raster WKB header parser.

The header is 61 bytes: an endianness byte followed by the version, band
count, geotransform, srid and pixel dimensions. Validation is fail-fast: the
version is checked as soon as it is read and the skew right after skewY, so
no further bytes are consumed once a check fails. The band count is left to
the caller, which still needs the dimensions for diagnostics.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pgraster.codec import models
from pgraster.core import errors

if TYPE_CHECKING:
    from pgraster.utils import byte_cursor

log = logging.getLogger(__name__)

HEADER_SIZE = 61


def parse_header(cursor: byte_cursor.ByteCursor) -> models.RasterHeader:
    """Read the raster header and fix the cursor's byte order.

    Args:
        cursor: Cursor positioned at the start of the WKB buffer, with no
            byte order fixed yet.

    Returns:
        Decoded RasterHeader. The cursor is left at offset 61.

    Raises:
        UnsupportedVersion: if the version field is not 0.
        UnsupportedRotation: if skewX or skewY is non-zero.
        BufferUnderrun: if the buffer ends inside the header.
    """
    little_endian = cursor.read_uint8() != 0
    cursor.set_byte_order(little_endian)

    version = cursor.read_uint16()
    if version != 0:
        log.warning(f"WKB version {version} unsupported")
        raise errors.UnsupportedVersion(version)

    num_bands = cursor.read_uint16()
    scale_x = cursor.read_float64()
    scale_y = cursor.read_float64()
    ip_x = cursor.read_float64()
    ip_y = cursor.read_float64()
    skew_x = cursor.read_float64()
    skew_y = cursor.read_float64()
    if skew_x or skew_y:
        log.warning("raster rotation is not supported")
        raise errors.UnsupportedRotation(skew_x, skew_y)

    srid = cursor.read_int32()
    width = cursor.read_uint16()
    height = cursor.read_uint16()

    log.debug(f"version={version} numBands={num_bands}")
    log.debug(f"scaleX={scale_x} scaleY={scale_y}")
    log.debug(f"ipX={ip_x} ipY={ip_y}")
    log.debug(f"skewX={skew_x} skewY={skew_y}")
    log.debug(f"srid={srid} size={width}x{height}")

    return models.RasterHeader(
        version=version,
        num_bands=num_bands,
        scale_x=scale_x,
        scale_y=scale_y,
        ip_x=ip_x,
        ip_y=ip_y,
        skew_x=skew_x,
        skew_y=skew_y,
        srid=srid,
        width=width,
        height=height,
        little_endian=little_endian,
    )
