"""Band-type byte codec.

Each band record in a raster WKB starts with one byte describing the band:

    bit 7    offline (data stored outside the database)
    bit 6    has nodata
    bit 5    is nodata
    bit 4    reserved
    bits 0-3 pixel type code

Example:
    >>> from pgraster.codec.band_type import decode_band_type
    >>> band = decode_band_type(0x44)
    >>> band.pixel_type, band.has_nodata
    (<PixelType.UINT_8BIT: 4>, True)
"""

from __future__ import annotations

from pgraster.codec import models

PIXTYPE_MASK = 0x0F
FLAG_OFFLINE = 1 << 7
FLAG_HAS_NODATA = 1 << 6
FLAG_IS_NODATA = 1 << 5
FLAG_RESERVED = 1 << 4


def decode_band_type(value: int) -> models.BandDescriptor:
    """Split a band-type byte into its pixel type code and flags.

    The reserved bit is ignored.

    Raises:
        ValueError: if ``value`` does not fit in one byte.
    """
    if not 0 <= value <= 0xFF:
        raise ValueError(f"band type must be a single byte, got {value}")
    return models.BandDescriptor(
        code=value & PIXTYPE_MASK,
        is_offline=bool(value & FLAG_OFFLINE),
        has_nodata=bool(value & FLAG_HAS_NODATA),
        is_nodata=bool(value & FLAG_IS_NODATA),
    )


def encode_band_type(band: models.BandDescriptor) -> int:
    """Pack a band descriptor back into its band-type byte.

    The reserved bit is always written as 0.

    Raises:
        ValueError: if the pixel type code does not fit in 4 bits.
    """
    if not 0 <= band.code <= PIXTYPE_MASK:
        raise ValueError(f"pixel type code must fit in 4 bits, got {band.code}")
    value = band.code
    if band.is_offline:
        value |= FLAG_OFFLINE
    if band.has_nodata:
        value |= FLAG_HAS_NODATA
    if band.is_nodata:
        value |= FLAG_IS_NODATA
    return value
