"""Unit tests for pgraster.codec.models value types.

Key coverage:
    - PixelType wire widths and the supported 8-bit subrange.
    - RasterHeader extent computation.
    - Raster immutability and packed data buffer.

See Also:
    - pgraster/codec/models.py for implementation.
"""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from pgraster.codec import models
from pgraster.core import errors


def test_pixel_type_sizes() -> None:
    """Sub-byte types take a full byte, wider types their natural width."""
    assert models.PixelType.BOOL_1BIT.byte_size == 1
    assert models.PixelType.UINT_8BIT.byte_size == 1
    assert models.PixelType.INT_16BIT.byte_size == 2
    assert models.PixelType.FLOAT_32BIT.byte_size == 4
    assert models.PixelType.FLOAT_64BIT.byte_size == 8
    assert models.PixelType.END.byte_size == 0


def test_only_8bit_types_supported() -> None:
    """Exactly the signed and unsigned 8-bit types are decodable."""
    supported = {t for t in models.PixelType if t.is_supported}
    assert supported == {models.PixelType.INT_8BIT, models.PixelType.UINT_8BIT}


def test_header_extent() -> None:
    """Extent is origin then origin plus size times scale."""
    header = models.RasterHeader(
        version=0,
        num_bands=1,
        scale_x=2.0,
        scale_y=-4.0,
        ip_x=-10.0,
        ip_y=10.0,
        skew_x=0.0,
        skew_y=0.0,
        srid=3857,
        width=5,
        height=5,
    )
    assert header.extent == (-10.0, 10.0, 0.0, -10.0)


def test_raster_is_immutable() -> None:
    """Fields cannot be reassigned and pixels cannot be written."""
    pixels = np.full((2, 3, 4), 0xFF, dtype=np.uint8)
    raster = models.Raster(
        extent=(0.0, 0.0, 3.0, 2.0),
        width=3,
        height=2,
        pixels=pixels,
        skipped_bands=(errors.UnsupportedOfflineBand(0),),
    )
    with pytest.raises(dataclasses.FrozenInstanceError):
        raster.width = 4  # type: ignore[misc]
    with pytest.raises(ValueError):
        raster.pixels[0, 0, 0] = 1
    assert raster.premultiplied_alpha is True
    assert raster.data == b"\xff" * 24
    assert raster.skipped_bands[0].band == 0
