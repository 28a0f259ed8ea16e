"""Unit tests for pgraster.codec.header.

This module tests parse_header against hand-packed headers, validating:
    - Field order and widths in both byte orders.
    - Fail-fast version and rotation checks and the bytes they consume.
    - Band count being left unvalidated at this stage.
    - BufferUnderrun on truncated headers.

See Also:
    - pgraster/codec/header.py for implementation.
"""

from __future__ import annotations

import logging
import struct

import pytest

from pgraster.codec import header
from pgraster.core import errors
from pgraster.utils import byte_cursor


def _pack_header(
    *,
    endian: int = 1,
    version: int = 0,
    num_bands: int = 1,
    scale: tuple[float, float] = (1.0, 1.0),
    origin: tuple[float, float] = (0.0, 0.0),
    skew: tuple[float, float] = (0.0, 0.0),
    srid: int = 0,
    size: tuple[int, int] = (1, 1),
) -> bytes:
    """Pack a raster header by hand, independent of the writer module."""
    order = "<" if endian else ">"
    return bytes([endian]) + struct.pack(
        order + "HHddddddiHH",
        version,
        num_bands,
        scale[0],
        scale[1],
        origin[0],
        origin[1],
        skew[0],
        skew[1],
        srid,
        size[0],
        size[1],
    )


def test_parse_little_endian_header() -> None:
    """All fields are decoded and the cursor stops at offset 61."""
    data = _pack_header(
        num_bands=3,
        scale=(0.5, -0.25),
        origin=(100.0, 200.0),
        srid=4326,
        size=(640, 480),
    )
    cursor = byte_cursor.ByteCursor(data)
    parsed = header.parse_header(cursor)
    assert parsed.version == 0
    assert parsed.num_bands == 3
    assert parsed.scale_x == 0.5
    assert parsed.scale_y == -0.25
    assert parsed.ip_x == 100.0
    assert parsed.ip_y == 200.0
    assert parsed.srid == 4326
    assert (parsed.width, parsed.height) == (640, 480)
    assert parsed.little_endian is True
    assert cursor.offset == header.HEADER_SIZE == 61


def test_parse_big_endian_header() -> None:
    """A zero endianness byte switches every field to big-endian."""
    data = _pack_header(endian=0, num_bands=1, srid=-1, size=(300, 2))
    cursor = byte_cursor.ByteCursor(data)
    parsed = header.parse_header(cursor)
    assert parsed.little_endian is False
    assert parsed.srid == -1
    assert (parsed.width, parsed.height) == (300, 2)
    assert cursor.little_endian is False


def test_any_nonzero_endianness_byte_is_little_endian() -> None:
    """The endianness byte is a boolean, not the value 1."""
    data = bytearray(_pack_header(size=(258, 1)))
    data[0] = 0x7F
    parsed = header.parse_header(byte_cursor.ByteCursor(data))
    assert parsed.little_endian is True
    assert parsed.width == 258


def test_unsupported_version_stops_after_version(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A non-zero version fails with only 3 bytes consumed."""
    cursor = byte_cursor.ByteCursor(_pack_header(version=1))
    with caplog.at_level(logging.WARNING), pytest.raises(
        errors.UnsupportedVersion
    ) as exc_info:
        header.parse_header(cursor)
    assert exc_info.value.version == 1
    assert cursor.offset == 3
    assert "WKB version 1 unsupported" in caplog.text


def test_skew_x_is_rejected() -> None:
    """Rotation fails right after the skew fields."""
    cursor = byte_cursor.ByteCursor(_pack_header(skew=(1.0, 0.0)))
    with pytest.raises(errors.UnsupportedRotation) as exc_info:
        header.parse_header(cursor)
    assert exc_info.value.skew_x == 1.0
    assert cursor.offset == 53


def test_skew_y_is_rejected() -> None:
    """A non-zero skewY alone is enough to reject the raster."""
    with pytest.raises(errors.UnsupportedRotation):
        header.parse_header(byte_cursor.ByteCursor(_pack_header(skew=(0.0, -0.5))))


def test_band_count_not_validated() -> None:
    """Unsupported band counts still parse; the assembler rejects them."""
    parsed = header.parse_header(byte_cursor.ByteCursor(_pack_header(num_bands=7)))
    assert parsed.num_bands == 7


def test_truncated_header_underruns() -> None:
    """A header cut inside the geotransform raises BufferUnderrun."""
    cursor = byte_cursor.ByteCursor(_pack_header()[:40])
    with pytest.raises(errors.BufferUnderrun) as exc_info:
        header.parse_header(cursor)
    assert exc_info.value.offset == 37


def test_extent_uses_double_arithmetic() -> None:
    """Extent is origin plus size times scale, in plain float arithmetic."""
    data = _pack_header(scale=(0.1, -0.1), origin=(10.0, 20.0), size=(3, 7))
    parsed = header.parse_header(byte_cursor.ByteCursor(data))
    assert parsed.extent == (10.0, 20.0, 10.0 + 3 * 0.1, 20.0 + 7 * -0.1)


def test_header_fields_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    """Every decoded field, skew included, shows up in the debug log."""
    data = _pack_header(num_bands=3, scale=(2.0, -2.0), srid=3857, size=(4, 5))
    with caplog.at_level(logging.DEBUG, logger="pgraster.codec.header"):
        header.parse_header(byte_cursor.ByteCursor(data))
    assert "version=0 numBands=3" in caplog.text
    assert "scaleX=2.0 scaleY=-2.0" in caplog.text
    assert "ipX=0.0 ipY=0.0" in caplog.text
    assert "skewX=0.0 skewY=0.0" in caplog.text
    assert "srid=3857 size=4x5" in caplog.text
