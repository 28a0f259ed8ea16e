"""PostGIS raster WKB decoder.

This package decodes the Well-Known-Binary form of PostGIS ``raster`` values
into RGBA images ready for a renderer. It reads the endian-aware raster
header, dispatches on the band count and pixel type of each band, and
returns an immutable Raster with its geographic extent.

- Grayscale (1 band) and RGB (3 bands) rasters of 8-bit samples
- Bounds-checked reads: truncated buffers raise BufferUnderrun
- Typed DecodeError subclasses for every unsupported condition
- Settings loaded from PGRASTER_* environment variables

Example:
    >>> import pgraster
    >>> try:
    ...     raster = pgraster.decode(row_bytes)
    ... except pgraster.DecodeError:
    ...     raster = None
"""

from pgraster.codec.models import BandDescriptor, PixelType, Raster, RasterHeader
from pgraster.codec.reader import RasterReader, decode, decode_hex
from pgraster.core.config import DecoderSettings, get_settings
from pgraster.core.errors import DecodeError

__all__ = [
    "BandDescriptor",
    "DecodeError",
    "DecoderSettings",
    "PixelType",
    "Raster",
    "RasterHeader",
    "RasterReader",
    "decode",
    "decode_hex",
    "get_settings",
]
