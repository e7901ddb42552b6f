# -*- coding: utf-8 -*-
"""
MVIL Types - Scalar field and histogram value types.

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
2026-10-05

Modified
--------
2026-10-05
"""

from mvil.types.field import ScalarField
from mvil.types.histogram import Histogram

__all__ = [
    'ScalarField',
    'Histogram',
]
