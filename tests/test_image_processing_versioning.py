# -*- coding: utf-8 -*-
"""
Processor Versioning Tests - @processor_version, @processor_tags, warnings.

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
2026-10-06

Modified
--------
2026-10-12
"""

import warnings

import pytest

from mvil.image_processing import (
    AutoContrast,
    CannyEdgeDetector,
    GaussianBlur,
    HoughCircles,
    MorphologicalFilter,
    PhansalkarThreshold,
    Watershed,
)
from mvil.image_processing.base import ImageProcessor, ImageTransform
from mvil.image_processing.versioning import processor_tags, processor_version
from mvil.vocabulary import ProcessorCategory


def _version_warnings(records):
    return [
        r for r in records
        if issubclass(r.category, UserWarning)
        and 'processor version' in str(r.message).lower()
    ]


# ---------------------------------------------------------------------------
# @processor_version
# ---------------------------------------------------------------------------

class TestProcessorVersion:
    """Test that @processor_version stamps the class."""

    def test_stamps_version(self):
        @processor_version('2.1.0')
        class _Versioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        assert _Versioned.__processor_version__ == '2.1.0'

    def test_returns_same_class(self):
        class _Original(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        assert processor_version('1.0.0')(_Original) is _Original

    def test_works_on_plain_class(self):
        @processor_version('3.0.0')
        class _Plain:
            pass

        assert _Plain.__processor_version__ == '3.0.0'

    def test_missing_version_falls_back(self):
        @processor_version()
        class _Auto:
            pass

        assert isinstance(_Auto.__processor_version__, str)
        assert _Auto.__processor_version__


# ---------------------------------------------------------------------------
# @processor_tags
# ---------------------------------------------------------------------------

class TestProcessorTags:
    """Test capability metadata."""

    def test_stamps_tags(self):
        @processor_tags(category=ProcessorCategory.MATH, description='Identity')
        class _Tagged:
            pass

        assert _Tagged.__processor_tags__ == {
            'category': ProcessorCategory.MATH,
            'description': 'Identity',
        }

    def test_string_category_rejected(self):
        with pytest.raises(TypeError, match="ProcessorCategory"):
            processor_tags(category='filters')

    @pytest.mark.parametrize("cls,category", [
        (GaussianBlur, ProcessorCategory.FILTERS),
        (AutoContrast, ProcessorCategory.ENHANCE),
        (CannyEdgeDetector, ProcessorCategory.EDGES),
        (PhansalkarThreshold, ProcessorCategory.THRESHOLD),
        (MorphologicalFilter, ProcessorCategory.BINARY),
        (Watershed, ProcessorCategory.SEGMENTATION),
        (HoughCircles, ProcessorCategory.FIND_FEATURES),
    ])
    def test_library_transforms_are_tagged(self, cls, category):
        assert cls.__processor_tags__['category'] is category
        assert cls.__processor_version__ == '1.0.0'


# ---------------------------------------------------------------------------
# Version warning at instantiation
# ---------------------------------------------------------------------------

class TestMissingVersionWarning:
    """Unversioned concrete subclasses warn on first instantiation."""

    def test_warns_once(self):
        class _Unversioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        ImageProcessor._version_warned_classes.discard(_Unversioned)

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            _Unversioned()
            _Unversioned()

            found = _version_warnings(w)
            assert len(found) == 1
            assert '_Unversioned' in str(found[0].message)

    def test_no_warning_when_versioned(self):
        @processor_version('1.0.0')
        class _Versioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            _Versioned()
            assert _version_warnings(w) == []

    def test_abstract_subclass_not_instantiable(self):
        from abc import abstractmethod

        class _AbstractMiddle(ImageProcessor):
            @abstractmethod
            def process(self):
                ...

        with pytest.raises(TypeError):
            _AbstractMiddle()
