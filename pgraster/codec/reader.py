"""PostGIS raster WKB reader.

This module turns one raster WKB value, as returned by a database driver for
a PostGIS ``raster`` column, into a Raster image. Only unrotated rasters with
1 (grayscale) or 3 (RGB) bands of 8-bit samples are decoded; anything else
either raises a DecodeError or, for individual bands, leaves the affected
channels at their opaque white pre-fill.

Example:
    Decode bytes fetched with ``SELECT rast FROM tiles``:
        >>> from pgraster.codec.reader import decode
        >>> raster = decode(row[0])
        >>> raster.width, raster.height
        (256, 256)

    Decode the hex text form (``SELECT rast::text FROM tiles``):
        >>> from pgraster.codec.reader import decode_hex
        >>> raster = decode_hex(row[0])
"""

from __future__ import annotations

import binascii
import logging

import numpy as np

from pgraster.codec import header as wkb_header
from pgraster.codec import models, planes
from pgraster.core import config, errors
from pgraster.utils import byte_cursor

log = logging.getLogger(__name__)

OPAQUE_WHITE = 0xFF


class RasterReader:
    """Single-use reader for one raster WKB buffer.

    Args:
        data: Raster WKB buffer. It is never modified.
        settings: Decoder settings; the cached process-wide settings are used
            when omitted.

    Example:
        >>> reader = RasterReader(wkb)
        >>> raster = reader.read()
        >>> reader.cursor.offset == len(wkb)
        True
    """

    def __init__(
        self,
        data: bytes | bytearray | memoryview,
        settings: config.DecoderSettings | None = None,
    ) -> None:
        self.settings = settings if settings is not None else config.get_settings()
        self.cursor = byte_cursor.ByteCursor(data)

    def read(self) -> models.Raster:
        """Decode the buffer into a Raster.

        Returns:
            Raster with a read-only (height, width, 4) pixel array.

        Raises:
            InputTooLarge: if the buffer exceeds settings.max_input_bytes.
            UnsupportedVersion: if the WKB version is not 0.
            UnsupportedRotation: if the raster is rotated.
            UnsupportedBandCount: if the raster has neither 1 nor 3 bands.
            BufferUnderrun: if the buffer ends before the declared data.
        """
        size = self.cursor.remaining
        if size > self.settings.max_input_bytes:
            raise errors.InputTooLarge(size, self.settings.max_input_bytes)

        header = wkb_header.parse_header(self.cursor)
        extent = header.extent
        log.debug(f"raster extent={extent}")

        if header.num_bands == 1:
            decode_bands = planes.read_grayscale
        elif header.num_bands == 3:
            decode_bands = planes.read_rgb
        else:
            log.warning(f"raster with {header.num_bands} bands is not supported")
            raise errors.UnsupportedBandCount(header.num_bands)

        pixels = np.full(
            (header.height, header.width, 4),
            OPAQUE_WHITE,
            dtype=np.uint8,
        )
        skipped = decode_bands(self.cursor, header, pixels, self.settings)

        return models.Raster(
            extent=extent,
            width=header.width,
            height=header.height,
            pixels=pixels,
            premultiplied_alpha=True,
            srid=header.srid,
            skipped_bands=tuple(skipped),
        )


def decode(
    data: bytes | bytearray | memoryview,
    settings: config.DecoderSettings | None = None,
) -> models.Raster:
    """Decode a raster WKB buffer.

    Args:
        data: Raster WKB buffer.
        settings: Optional decoder settings.

    Returns:
        The decoded Raster.

    Raises:
        DecodeError: for any fatal decoding condition.
    """
    return RasterReader(data, settings).read()


def decode_hex(
    text: str,
    settings: config.DecoderSettings | None = None,
) -> models.Raster:
    """Decode the hex text form PostGIS uses for raster values.

    A leading ``\\x`` (bytea escape) and surrounding whitespace are ignored.

    Raises:
        MalformedInput: if ``text`` is not valid hex.
        DecodeError: for any fatal decoding condition.
    """
    text = text.strip()
    if text[:2] in ("\\x", "\\X"):
        text = text[2:]
    try:
        data = binascii.unhexlify(text)
    except (binascii.Error, ValueError) as e:
        raise errors.MalformedInput(f"invalid raster hex: {e}") from e
    return decode(data, settings)
