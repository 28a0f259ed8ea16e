"""Raster WKB codec subpackage.

Submodules:
    - models: PixelType, BandDescriptor, RasterHeader and Raster.
    - band_type: Band-type byte decoding and encoding.
    - header: Fixed-size raster header parser.
    - planes: Grayscale and RGB band plane decoding.
    - reader: RasterReader and the decode entry points.
    - writer: Raster WKB encoding for 8-bit bands.
"""
