"""Decoder settings and configuration management.

This module provides Pydantic-based settings management that loads decoder
configuration from environment variables (prefixed with ``PGRASTER_``) or a
.env file. Settings control how bands with unsupported pixel types are
handled and how large an input buffer the decoder accepts.

Example:
    Settings can be accessed via the cached get_settings() function:
        >>> from pgraster.core.config import get_settings
        >>> settings = get_settings()
        >>> print(settings.skip_unsupported_payload)

    Environment variables can override defaults:
        >>> PGRASTER_SKIP_UNSUPPORTED_PAYLOAD=true
        >>> PGRASTER_MAX_INPUT_BYTES=1048576
"""

import functools

import pydantic
import pydantic_settings


class DecoderSettings(pydantic_settings.BaseSettings):
    """Runtime decoder configuration pulled from environment or defaults.

    Attributes:
        skip_unsupported_payload: When False (the default), a band with an
            unsupported pixel type or offline storage consumes only its type
            and nodata bytes, exactly like the legacy reader. Subsequent
            bands of an RGB raster are then read from inside the skipped
            payload. When True, the unsupported band's nodata value and
            payload are skipped using the pixel type's wire width so
            subsequent bands decode correctly.
        max_input_bytes: Largest input buffer accepted by decode
            (default 512MB).

    Example:
        Opt into resynchronising band reads:
            >>> settings = DecoderSettings(skip_unsupported_payload=True)
            >>> raster = decode(wkb, settings=settings)
    """

    skip_unsupported_payload: bool = False
    max_input_bytes: pydantic.PositiveInt = 512 * 1024 * 1024

    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix="PGRASTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )


@functools.lru_cache
def get_settings() -> DecoderSettings:
    """Get cached decoder settings.

    Settings are loaded from environment variables or .env file and cached
    for the lifetime of the process. Subsequent calls return the same
    instance; call ``get_settings.cache_clear()`` after changing the
    environment.

    Returns:
        DecoderSettings instance with all configuration values populated.
    """
    return DecoderSettings()
