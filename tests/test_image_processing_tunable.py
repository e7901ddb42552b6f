# -*- coding: utf-8 -*-
"""
Annotated Tunable Parameter Tests.

Tests for the typing.Annotated-based tunable parameter system: constraint
markers (Range, Options, Desc), ParamSpec validation, __init_subclass__
annotation collection, generated __init__, __post_init__ hook and
_resolve_params runtime resolution.

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

import inspect
from typing import Annotated

import pytest

from mvil.exceptions import ValidationError
from mvil.image_processing.base import ImageTransform
from mvil.image_processing.params import (
    Desc,
    Options,
    ParamMeta,
    ParamSpec,
    Range,
    collect_param_specs,
    make_init,
)
from mvil.image_processing.versioning import processor_version


@processor_version('0.1.0')
class _Tunable(ImageTransform):
    """Small transform with one parameter of each flavor."""

    gain: Annotated[float, Range(min=0.0, max=10.0), Desc('Gain')] = 1.0
    mode: Annotated[str, Options('fast', 'exact')] = 'fast'
    count: Annotated[int, Range(min=1)] = 3
    untracked: int = 7

    def apply(self, source, **kwargs):
        return self._resolve_params(kwargs)


# ---------------------------------------------------------------------------
# Constraint markers
# ---------------------------------------------------------------------------

class TestMarkers:
    """Test Range, Options and Desc."""

    def test_range_defaults_none(self):
        r = Range()
        assert r.min is None
        assert r.max is None

    def test_range_repr(self):
        assert 'min=0' in repr(Range(min=0, max=1))

    def test_options_choices(self):
        assert Options('a', 'b').choices == ('a', 'b')

    def test_options_requires_choice(self):
        with pytest.raises(ValueError):
            Options()

    def test_desc(self):
        assert Desc('hello').text == 'hello'

    def test_all_are_param_meta(self):
        for marker in (Range(), Options('x'), Desc('y')):
            assert isinstance(marker, ParamMeta)


# ---------------------------------------------------------------------------
# ParamSpec
# ---------------------------------------------------------------------------

class TestParamSpec:
    """Test value validation."""

    def test_float_accepts_int(self):
        ParamSpec('x', float, default=1.0).validate(2)

    def test_bool_rejected_for_numbers(self):
        with pytest.raises(ValidationError, match="must be float, got bool"):
            ParamSpec('x', float, default=1.0).validate(True)

    def test_wrong_type(self):
        with pytest.raises(ValidationError, match="must be float, got str"):
            ParamSpec('x', float, default=1.0).validate('2')

    def test_below_minimum(self):
        with pytest.raises(ValidationError, match="below minimum"):
            ParamSpec('x', int, default=1, min_value=0).validate(-1)

    def test_above_maximum(self):
        with pytest.raises(ValidationError, match="above maximum"):
            ParamSpec('x', int, default=1, max_value=5).validate(6)

    def test_bounds_inclusive(self):
        spec = ParamSpec('x', int, default=1, min_value=0, max_value=5)
        spec.validate(0)
        spec.validate(5)

    def test_not_one_of(self):
        with pytest.raises(ValidationError, match="not one of"):
            ParamSpec('x', str, default='a', choices=('a', 'b')).validate('c')

    def test_required(self):
        assert ParamSpec('x', int).required
        assert not ParamSpec('x', int, default=0).required


# ---------------------------------------------------------------------------
# Collection and generated __init__
# ---------------------------------------------------------------------------

class TestCollection:
    """Test __init_subclass__ annotation collection."""

    def test_collects_annotated_only(self):
        names = [s.name for s in _Tunable.__param_specs__]
        assert names == ['gain', 'mode', 'count']

    def test_spec_contents(self):
        gain = _Tunable.__param_specs__[0]
        assert gain.param_type is float
        assert gain.default == 1.0
        assert gain.min_value == 0.0
        assert gain.max_value == 10.0
        assert gain.description == 'Gain'

    def test_inheritance_appends(self):
        @processor_version('0.1.0')
        class Child(_Tunable):
            extra: Annotated[float, Desc('Extra')] = 0.0

        assert [s.name for s in Child.__param_specs__] == [
            'gain', 'mode', 'count', 'extra']

    def test_range_and_options_conflict(self):
        class Bad:
            x: Annotated[int, Range(min=0), Options(1, 2)] = 1

        with pytest.raises(TypeError, match="mutually exclusive"):
            collect_param_specs(Bad)

    def test_signature_is_keyword_only(self):
        sig = inspect.signature(_Tunable.__init__)
        assert list(sig.parameters) == ['self', 'gain', 'mode', 'count']
        params = list(sig.parameters.values())[1:]
        assert all(p.kind is inspect.Parameter.KEYWORD_ONLY for p in params)
        assert sig.parameters['gain'].default == 1.0


class TestGeneratedInit:
    """Test the generated keyword-only initializer."""

    def test_defaults(self):
        t = _Tunable()
        assert (t.gain, t.mode, t.count) == (1.0, 'fast', 3)

    def test_overrides(self):
        t = _Tunable(gain=2.5, mode='exact')
        assert t.gain == 2.5
        assert t.mode == 'exact'

    def test_validates(self):
        with pytest.raises(ValidationError, match="above maximum"):
            _Tunable(gain=11.0)

    def test_unexpected_keyword(self):
        with pytest.raises(TypeError, match="unexpected keyword"):
            _Tunable(bogus=1)

    def test_positional_rejected(self):
        with pytest.raises(TypeError):
            _Tunable(2.0)

    def test_missing_required(self):
        @processor_version('0.1.0')
        class NeedsSize(ImageTransform):
            size: Annotated[int, Range(min=1)]

            def apply(self, source, **kwargs):
                return source

        with pytest.raises(TypeError, match="missing required keyword argument: 'size'"):
            NeedsSize()
        assert NeedsSize(size=4).size == 4

    def test_post_init_runs(self):
        @processor_version('0.1.0')
        class Checked(ImageTransform):
            low: Annotated[float, Desc('Low')] = 1.0
            high: Annotated[float, Desc('High')] = 2.0

            def __post_init__(self):
                if self.low > self.high:
                    raise ValidationError("low above high")

            def apply(self, source, **kwargs):
                return source

        with pytest.raises(ValidationError, match="low above high"):
            Checked(low=3.0)

    def test_explicit_init_not_replaced(self):
        @processor_version('0.1.0')
        class Custom(ImageTransform):
            level: Annotated[int, Desc('Level')] = 1

            def __init__(self, level):
                self.level = level * 2

            def apply(self, source, **kwargs):
                return source

        assert Custom(4).level == 8

    def test_make_init_standalone(self):
        spec = ParamSpec('width', int, default=5, min_value=1)

        class Holder:
            __init__ = make_init((spec,))

        assert Holder().width == 5
        assert Holder(width=9).width == 9


# ---------------------------------------------------------------------------
# Runtime resolution
# ---------------------------------------------------------------------------

class TestResolveParams:
    """Test merging instance values with per-call overrides."""

    def test_instance_values(self):
        assert _Tunable(gain=4.0).apply(None) == {
            'gain': 4.0, 'mode': 'fast', 'count': 3}

    def test_override(self):
        resolved = _Tunable().apply(None, count=9)
        assert resolved['count'] == 9

    def test_unknown_keys_ignored(self):
        resolved = _Tunable().apply(None, progress_callback=print, other=1)
        assert set(resolved) == {'gain', 'mode', 'count'}

    def test_override_validated(self):
        with pytest.raises(ValidationError, match="not one of"):
            _Tunable().apply(None, mode='slow')
