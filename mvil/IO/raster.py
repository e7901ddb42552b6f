# -*- coding: utf-8 -*-
"""
Raster Codec - Decode and encode BMP, PNG, JPEG and TIFF images with Pillow.

Unpacks an image into one ``ScalarField`` per plane (gray, gray+alpha,
RGB or RGBA samples) and packs planes back into an 8-bit image. Packing
clamps each value into ``[0, 255]`` and truncates it toward zero.
Horizontal and vertical resolution (dpi) are read from and written to the
file; images without resolution metadata report 72 dpi.

- ``RasterReader``: file-backed reader exposing ``width``, ``height``,
  ``depth``, ``dpi`` and ``planes()``.
- ``RasterWriter``: file-backed writer for a chosen ``OutputFormat``.
- ``encode`` / ``decode``: in-memory byte stream variants.

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
2026-10-14
"""

# Standard library
import io
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

# Third-party
import numpy as np

try:
    from PIL import Image
    _HAS_PIL = True
except ImportError:
    _HAS_PIL = False

# MVIL internal
from mvil.exceptions import DependencyError, DimensionMismatchError, ValidationError
from mvil.IO.base import ImageReader, ImageWriter
from mvil.types.field import ScalarField
from mvil.vocabulary import OutputFormat

logger = logging.getLogger(__name__)

#: Resolution reported for images that carry none.
DEFAULT_DPI = (72.0, 72.0)

#: Pillow mode for each plane count when packing.
_PACK_MODES = {1: 'L', 2: 'LA', 3: 'RGB', 4: 'RGBA'}

#: Pillow modes each output format can store.
_FORMAT_MODES = {
    OutputFormat.BMP: ('L', 'RGB', 'RGBA'),
    OutputFormat.PNG: ('L', 'LA', 'RGB', 'RGBA'),
    OutputFormat.JPEG: ('L', 'RGB'),
    OutputFormat.TIFF: ('L', 'LA', 'RGB', 'RGBA'),
}

_SUFFIX_FORMATS = {
    '.bmp': OutputFormat.BMP,
    '.png': OutputFormat.PNG,
    '.jpg': OutputFormat.JPEG,
    '.jpeg': OutputFormat.JPEG,
    '.tif': OutputFormat.TIFF,
    '.tiff': OutputFormat.TIFF,
}

_DEPTHS = {
    np.dtype(np.uint8): 8,
    np.dtype(np.uint16): 16,
    np.dtype(np.int32): 32,
    np.dtype(np.float32): 32,
}


def _require_pil() -> None:
    if not _HAS_PIL:
        raise DependencyError(
            "Pillow is required for raster IO. "
            "Install with: pip install Pillow"
        )


def format_for_path(path: Union[str, Path]) -> OutputFormat:
    """Output format implied by a file suffix.

    Raises
    ------
    ValidationError
        If the suffix is not a supported raster extension.
    """
    suffix = Path(path).suffix.lower()
    try:
        return _SUFFIX_FORMATS[suffix]
    except KeyError:
        raise ValidationError(
            f"Cannot infer an output format from suffix {suffix!r}; "
            f"expected one of {sorted(_SUFFIX_FORMATS)}"
        ) from None


def _normalized_mode(image: 'Image.Image') -> 'Image.Image':
    if image.mode == '1':
        return image.convert('L')
    if image.mode == 'P':
        return image.convert('RGBA' if 'transparency' in image.info else 'RGB')
    if image.mode in ('CMYK', 'YCbCr', 'LAB', 'HSV'):
        return image.convert('RGB')
    return image


def _dpi(image: 'Image.Image') -> Tuple[float, float]:
    dpi = image.info.get('dpi')
    if not dpi:
        return DEFAULT_DPI
    return float(dpi[0]), float(dpi[1])


def _unpack(image: 'Image.Image') -> Tuple[List[ScalarField], Dict[str, Any]]:
    image = _normalized_mode(image)
    array = np.asarray(image)
    if array.ndim == 2:
        stack = [array]
    else:
        stack = [array[:, :, i] for i in range(array.shape[2])]
    metadata = {
        'width': image.width,
        'height': image.height,
        'depth': _DEPTHS.get(array.dtype, 8 * array.dtype.itemsize),
        'planes': len(stack),
        'mode': image.mode,
        'dpi': _dpi(image),
    }
    return [ScalarField.from_array(p.astype(np.float32)) for p in stack], metadata


def _pack(planes: Sequence[ScalarField], fmt: OutputFormat) -> 'Image.Image':
    if isinstance(planes, ScalarField):
        planes = [planes]
    planes = list(planes)
    mode = _PACK_MODES.get(len(planes))
    if mode is None:
        raise ValidationError(
            f"Can pack 1 to 4 planes, got {len(planes)}"
        )
    if mode not in _FORMAT_MODES[fmt]:
        raise ValidationError(
            f"{fmt.name} cannot store {len(planes)} planes (mode {mode})"
        )
    shape = planes[0].shape
    for i, plane in enumerate(planes[1:], start=1):
        if plane.shape != shape:
            raise DimensionMismatchError(
                f"Plane {i} has shape {plane.shape}, expected {shape}"
            )

    stack = [np.clip(p.to_array(copy=False), 0, 255).astype(np.uint8) for p in planes]
    data = stack[0] if len(stack) == 1 else np.dstack(stack)
    return Image.fromarray(data)


def decode(data: bytes) -> List[ScalarField]:
    """Decode an encoded raster byte stream into planes."""
    _require_pil()
    with Image.open(io.BytesIO(data)) as image:
        image.load()
        planes, _ = _unpack(image)
    return planes


def encode(
    planes: Sequence[ScalarField],
    fmt: OutputFormat,
    dpi: Tuple[float, float] = DEFAULT_DPI,
) -> bytes:
    """Pack planes into an 8-bit image and encode it.

    Parameters
    ----------
    planes : Sequence[ScalarField]
        1 (gray), 2 (gray + alpha), 3 (RGB) or 4 (RGBA) planes of equal
        shape. A single ``ScalarField`` is accepted as one plane.
    fmt : OutputFormat
        Target encoding.
    dpi : Tuple[float, float]
        Horizontal and vertical resolution to record.

    Returns
    -------
    bytes

    Raises
    ------
    ValidationError
        If the plane count is unsupported by ``fmt``.
    DimensionMismatchError
        If the planes differ in shape.
    """
    _require_pil()
    image = _pack(planes, OutputFormat(fmt))
    buffer = io.BytesIO()
    image.save(buffer, format=OutputFormat(fmt).value, dpi=tuple(dpi))
    return buffer.getvalue()


class RasterReader(ImageReader):
    """Read a BMP, PNG, JPEG or TIFF image as per-plane scalar fields.

    Gray images yield one plane, gray + alpha two, RGB three and RGBA
    four. Palette and bilevel images are expanded to RGB(A) and gray
    first. ``depth`` is the bit depth of one plane sample.

    Parameters
    ----------
    filepath : str or Path
        Image file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    DependencyError
        If Pillow is not installed.

    Examples
    --------
    >>> with RasterReader('wafer.tif') as reader:
    ...     gray = reader.planes()[0]
    ...     reader.width, reader.height, reader.depth, reader.dpi
    (1024, 768, 8, (300.0, 300.0))
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        _require_pil()
        self._planes: List[ScalarField] = []
        super().__init__(filepath)

    def _load_metadata(self) -> None:
        with Image.open(self.filepath) as image:
            image.load()
            self.metadata['format'] = image.format
            self._planes, info = _unpack(image)
        self.metadata.update(info)
        logger.debug("Read %s: %dx%d, %d planes, depth %d",
                     self.filepath.name, self.width, self.height,
                     self.plane_count, self.depth)

    def read_plane(self, index: int) -> ScalarField:
        if not 0 <= index < self.plane_count:
            raise IndexError(
                f"Plane index {index} out of range for {self.plane_count} planes"
            )
        return self._planes[index].copy()


class RasterWriter(ImageWriter):
    """Write planes to a BMP, PNG, JPEG or TIFF file.

    Parameters
    ----------
    filepath : str or Path
        Output path. When ``fmt`` is given and the suffix does not match
        it, the format's extension is appended.
    fmt : OutputFormat, optional
        Target encoding. Inferred from the suffix when omitted.
    dpi : Tuple[float, float], optional
        Resolution to record. Defaults to ``metadata['dpi']``, else 72.
    metadata : Dict[str, Any], optional
        Extra metadata; ``dpi`` is honored.

    Examples
    --------
    >>> with RasterWriter('mask', OutputFormat.PNG, dpi=reader.dpi) as w:
    ...     w.write([mask])
    PosixPath('mask.png')
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        fmt: Optional[OutputFormat] = None,
        dpi: Optional[Tuple[float, float]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        _require_pil()
        super().__init__(filepath, metadata)
        if fmt is None:
            self.format = format_for_path(self.filepath)
        else:
            self.format = OutputFormat(fmt)
            if _SUFFIX_FORMATS.get(self.filepath.suffix.lower()) is not self.format:
                self.filepath = self.filepath.with_name(
                    self.filepath.name + self.format.extension
                )
        self.dpi = tuple(dpi or self.metadata.get('dpi', DEFAULT_DPI))

    def write(self, planes: Sequence[ScalarField]) -> Path:
        image = _pack(planes, self.format)
        image.save(self.filepath, format=self.format.value, dpi=self.dpi)
        logger.debug("Wrote %s (%s, dpi %s)", self.filepath, self.format.name,
                     self.dpi)
        return self.filepath
