"""Band plane decoding into an RGBA pixel array.

Every band record is a band-type byte, a nodata byte and, for online bands
with an 8-bit pixel type, width * height samples in row-major order. The
nodata byte is always consumed, whatever the has-nodata flag says.

Grayscale rasters (1 band) copy each sample into the three color channels.
RGB rasters (3 bands) write band b into channel b. The alpha channel is never
touched and keeps the caller's pre-fill.

Bands that cannot be decoded are reported as non-fatal errors. How the
stream continues after such a band depends on
DecoderSettings.skip_unsupported_payload: by default the payload is not
skipped, matching the legacy reader, so the next band header is read from
inside it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from pgraster.codec import band_type
from pgraster.core import errors

if TYPE_CHECKING:
    import numpy.typing as npt

    from pgraster.codec import models
    from pgraster.core import config
    from pgraster.utils import byte_cursor

log = logging.getLogger(__name__)


def _band_issue(index: int, band: models.BandDescriptor) -> errors.DecodeError | None:
    """Return the non-fatal error preventing a band from being decoded."""
    if band.is_offline:
        return errors.UnsupportedOfflineBand(index)
    if not band.is_supported:
        return errors.UnsupportedPixelType(index, band.code)
    return None


def _skip_payload(
    cursor: byte_cursor.ByteCursor,
    band: models.BandDescriptor,
    header: models.RasterHeader,
) -> bool:
    """Skip the rest of an undecodable band record.

    The first nodata byte has already been consumed. Returns False when the
    record length cannot be derived from the header (offline bands and
    undefined pixel types), in which case nothing is skipped.
    """
    pixel_type = band.pixel_type
    if band.is_offline or pixel_type is None or pixel_type.byte_size == 0:
        return False
    size = pixel_type.byte_size
    cursor.skip(size - 1 + header.width * header.height * size)
    return True


def _read_plane(
    cursor: byte_cursor.ByteCursor,
    header: models.RasterHeader,
) -> npt.NDArray[np.uint8]:
    """Read width * height single-byte samples as a (height, width) array."""
    raw = cursor.read_bytes(header.width * header.height)
    return np.frombuffer(raw, dtype=np.uint8).reshape(header.height, header.width)


def _read_descriptor(
    cursor: byte_cursor.ByteCursor,
    index: int,
) -> tuple[models.BandDescriptor, int]:
    band = band_type.decode_band_type(cursor.read_uint8())
    log.debug(
        f"band {index} type:{band.code} offline:{band.is_offline} "
        f"hasnodata:{band.has_nodata}"
    )
    nodata = cursor.read_uint8()
    return band, nodata


def read_grayscale(
    cursor: byte_cursor.ByteCursor,
    header: models.RasterHeader,
    pixels: npt.NDArray[np.uint8],
    settings: config.DecoderSettings,
) -> list[errors.DecodeError]:
    """Decode a single-band raster into the color channels of ``pixels``.

    Args:
        cursor: Cursor positioned at the band record.
        header: Parsed raster header.
        pixels: Writable (height, width, 4) array, pre-filled by the caller.
        settings: Decoder settings.

    Returns:
        Non-fatal errors for the band, empty if it was decoded.

    Raises:
        BufferUnderrun: if the band record is truncated.
    """
    band, nodata = _read_descriptor(cursor, 0)

    issue = _band_issue(0, band)
    if issue is not None:
        log.warning(str(issue))
        if settings.skip_unsupported_payload:
            _skip_payload(cursor, band, header)
        return [issue]

    if band.has_nodata:
        log.warning(f"nodata value {nodata} unsupported")

    plane = _read_plane(cursor, header)
    pixels[:, :, :3] = plane[:, :, np.newaxis]
    return []


def read_rgb(
    cursor: byte_cursor.ByteCursor,
    header: models.RasterHeader,
    pixels: npt.NDArray[np.uint8],
    settings: config.DecoderSettings,
) -> list[errors.DecodeError]:
    """Decode a three-band raster, band b into channel b of ``pixels``.

    Band 0's nodata byte is the canonical nodata value. Differing nodata
    bytes on later bands are only reported.

    Args:
        cursor: Cursor positioned at the first band record.
        header: Parsed raster header.
        pixels: Writable (height, width, 4) array, pre-filled by the caller.
        settings: Decoder settings.

    Returns:
        Non-fatal errors for the bands that were not decoded.

    Raises:
        BufferUnderrun: if a band record is truncated.
    """
    issues: list[errors.DecodeError] = []
    canonical_nodata = 0

    for index in range(header.num_bands):
        band, nodata = _read_descriptor(cursor, index)

        issue = _band_issue(index, band)
        if index == 0:
            canonical_nodata = nodata
        elif issue is None and nodata != canonical_nodata:
            log.warning(
                f"band {index} nodataval {nodata} != "
                f"band 0 nodataval {canonical_nodata}"
            )

        if issue is not None:
            log.warning(str(issue))
            issues.append(issue)
            if settings.skip_unsupported_payload and not _skip_payload(
                cursor, band, header
            ):
                log.warning(
                    f"cannot locate the band after band {index}, "
                    "remaining bands left blank"
                )
                break
            continue

        pixels[:, :, index] = _read_plane(cursor, header)

    return issues
