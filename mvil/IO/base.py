# -*- coding: utf-8 -*-
"""
IO Base Classes - Abstract interfaces for raster readers and writers.

Readers expose an image as one ``ScalarField`` per plane together with
its width, height, bit depth and resolution metadata. Writers accept a
sequence of planes and persist them. Concrete implementations live in
:mod:`mvil.IO.raster`.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

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
2026-10-13
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from mvil.types.field import ScalarField


class ImageReader(ABC):
    """
    Abstract base class for raster readers.

    Attributes
    ----------
    filepath : Path
        Path to the image file.
    metadata : Dict[str, Any]
        Metadata extracted from the file. Populated by ``_load_metadata``
        with at least ``width``, ``height``, ``depth``, ``planes`` and
        ``dpi``.
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        """
        Initialize the image reader.

        Parameters
        ----------
        filepath : Union[str, Path]
            Path to the image file.

        Raises
        ------
        FileNotFoundError
            If the specified filepath does not exist.
        """
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise FileNotFoundError(f"File not found: {self.filepath}")

        self.metadata: Dict[str, Any] = {}
        self._load_metadata()

    @abstractmethod
    def _load_metadata(self) -> None:
        """Populate ``self.metadata`` from the file."""
        pass

    @abstractmethod
    def read_plane(self, index: int) -> ScalarField:
        """
        Read one plane of the image.

        Parameters
        ----------
        index : int
            Plane index, ``0 <= index < plane_count``.

        Raises
        ------
        IndexError
            If ``index`` is out of range.
        """
        pass

    @property
    def width(self) -> int:
        return self.metadata['width']

    @property
    def height(self) -> int:
        return self.metadata['height']

    @property
    def depth(self) -> int:
        """Bits per plane sample."""
        return self.metadata['depth']

    @property
    def plane_count(self) -> int:
        return self.metadata['planes']

    @property
    def dpi(self) -> Tuple[float, float]:
        """Horizontal and vertical resolution in dots per inch."""
        return self.metadata['dpi']

    def planes(self) -> List[ScalarField]:
        """Read every plane, in storage order."""
        return [self.read_plane(i) for i in range(self.plane_count)]

    def read_chip(
        self,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
        planes: Optional[List[int]] = None,
    ) -> List[ScalarField]:
        """
        Read a spatial subset of the selected planes.

        Row and column ends are exclusive. ``planes=None`` reads all.
        """
        indices = range(self.plane_count) if planes is None else planes
        return [
            self.read_plane(i).crop(col_start, row_start,
                                    col_end - col_start, row_end - row_start)
            for i in indices
        ]

    def close(self) -> None:
        """Release resources. The default implementation does nothing."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False


class ImageWriter(ABC):
    """
    Abstract base class for raster writers.

    Attributes
    ----------
    filepath : Path
        Path where the image will be written.
    metadata : Dict[str, Any]
        Metadata to persist alongside the pixels (e.g. ``dpi``).
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        self.filepath = Path(filepath)
        self.metadata = metadata or {}

    @abstractmethod
    def write(self, planes: Sequence[ScalarField]) -> Path:
        """
        Encode ``planes`` and write them to ``filepath``.

        Returns
        -------
        Path
            The path actually written.

        Raises
        ------
        ValidationError
            If the planes cannot be packed into the output format.
        """
        pass

    def close(self) -> None:
        """Release resources. The default implementation does nothing."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
