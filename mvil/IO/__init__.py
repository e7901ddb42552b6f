# -*- coding: utf-8 -*-
"""
IO Module - Raster decode and encode for scalar field planes.

Sub-modules
-----------
base.py
    ``ImageReader`` and ``ImageWriter`` abstract interfaces.
raster.py
    Pillow-backed ``RasterReader``, ``RasterWriter``, ``encode`` and
    ``decode`` for BMP, PNG, JPEG and TIFF.

Usage
-----
    >>> from mvil.IO import RasterReader, RasterWriter
    >>> from mvil.vocabulary import OutputFormat
    >>> with RasterReader('input.tif') as reader:
    ...     planes = reader.planes()
    ...     dpi = reader.dpi
    >>> with RasterWriter('output.png', OutputFormat.PNG, dpi=dpi) as writer:
    ...     writer.write(planes)

Dependencies
------------
Pillow

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-11

Modified
--------
2026-10-11
"""

from mvil.IO.base import ImageReader, ImageWriter
from mvil.IO.raster import (
    DEFAULT_DPI,
    RasterReader,
    RasterWriter,
    decode,
    encode,
    format_for_path,
)

__all__ = [
    'ImageReader',
    'ImageWriter',
    'DEFAULT_DPI',
    'RasterReader',
    'RasterWriter',
    'decode',
    'encode',
    'format_for_path',
]
