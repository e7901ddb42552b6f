# -*- coding: utf-8 -*-
"""
Tunable Parameters - Declarative processor parameters via typing.Annotated.

Processors declare their tunable parameters as class-body annotations
carrying constraint markers::

    class GaussianBlur(ImageTransform):
        sigma: Annotated[float, Range(min=0.1), Desc('Gaussian sigma')] = 1.0
        norm: Annotated[str, Options('l1', 'l2'), Desc('Gradient norm')] = 'l1'

``ImageProcessor.__init_subclass__`` collects these into
``cls.__param_specs__`` and, when the class has no ``__init__`` of its own,
installs a keyword-only ``__init__`` that validates every value.

Violations raise ``ValidationError`` so that a bad value passed at
construction and a bad override passed to ``apply(**kwargs)`` fail the
same way.

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
2026-10-05

Modified
--------
2026-10-09
"""

# Standard library
import inspect
from typing import (
    Annotated,
    Any,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# MVIL internal
from mvil.exceptions import ValidationError

Number = Union[int, float]


class ParamMeta:
    """Marker base class for ``Annotated`` parameter metadata."""

    __slots__ = ()


class Range(ParamMeta):
    """Inclusive numeric bounds. Either end may be omitted."""

    __slots__ = ('min', 'max')

    def __init__(self, min: Optional[Number] = None,
                 max: Optional[Number] = None) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        return f"Range(min={self.min!r}, max={self.max!r})"


class Options(ParamMeta):
    """Closed set of allowed values."""

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


class Desc(ParamMeta):
    """Human-readable description of a parameter."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


_MISSING = object()


class ParamSpec:
    """Resolved declaration of one tunable parameter.

    Attributes
    ----------
    name : str
        Keyword-argument name.
    param_type : type
        Expected type. ``int`` values are accepted for ``float`` params;
        ``bool`` is never accepted for numeric params.
    default : Any
        Default value (``None`` when the parameter is required).
    description : str
        Text from ``Desc``, or ``''``.
    min_value, max_value : int, float or None
        Inclusive bounds from ``Range``.
    choices : tuple or None
        Allowed values from ``Options``.
    """

    __slots__ = ('name', 'param_type', 'default', 'has_default',
                 'description', 'min_value', 'max_value', 'choices')

    def __init__(self, name: str, param_type: type, default: Any = _MISSING,
                 description: str = '', min_value: Optional[Number] = None,
                 max_value: Optional[Number] = None,
                 choices: Optional[Tuple] = None) -> None:
        self.name = name
        self.param_type = param_type
        self.has_default = default is not _MISSING
        self.default = default if self.has_default else None
        self.description = description
        self.min_value = min_value
        self.max_value = max_value
        self.choices = choices

    @property
    def required(self) -> bool:
        return not self.has_default

    def _type_ok(self, value: Any) -> bool:
        if self.param_type is object:
            return True
        if self.param_type in (int, float) and isinstance(value, bool):
            return False
        if self.param_type is float:
            return isinstance(value, (int, float))
        return isinstance(value, self.param_type)

    def validate(self, value: Any) -> None:
        """Check ``value`` against the declared type and constraints.

        Raises
        ------
        ValidationError
            On a type, range or choice violation.
        """
        if not self._type_ok(value):
            raise ValidationError(
                f"Parameter '{self.name}' must be {self.param_type.__name__}, "
                f"got {type(value).__name__}"
            )
        if self.min_value is not None and value < self.min_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} is below "
                f"minimum {self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} is above "
                f"maximum {self.max_value!r}"
            )
        if self.choices is not None and value not in self.choices:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} is not one of "
                f"{self.choices!r}"
            )

    def __repr__(self) -> str:
        return (
            f"ParamSpec(name={self.name!r}, "
            f"param_type={self.param_type.__name__}, "
            f"default={self.default!r}, required={self.required!r})"
        )


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Build the ``ParamSpec`` tuple for ``cls`` from its annotations.

    Parameters are ordered parent-first through the MRO, then by
    declaration order. Only ``Annotated`` fields carrying at least one
    ``ParamMeta`` marker are collected.

    Raises
    ------
    TypeError
        If a field combines ``Range`` and ``Options``.
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return ()

    names = []
    for klass in reversed(cls.__mro__):
        for name in inspect.get_annotations(klass):
            if name in hints and name not in names:
                names.append(name)

    specs = []
    for name in names:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue
        metas = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not metas:
            continue
        rng = next((m for m in metas if isinstance(m, Range)), None)
        opts = next((m for m in metas if isinstance(m, Options)), None)
        desc = next((m for m in metas if isinstance(m, Desc)), None)
        if rng is not None and opts is not None:
            raise TypeError(
                f"Parameter '{name}' on {cls.__qualname__}: "
                f"Range and Options are mutually exclusive."
            )
        specs.append(ParamSpec(
            name=name,
            param_type=hint.__args__[0],
            default=getattr(cls, name, _MISSING),
            description=desc.text if desc else '',
            min_value=rng.min if rng else None,
            max_value=rng.max if rng else None,
            choices=opts.choices if opts else None,
        ))
    return tuple(specs)


def make_init(param_specs: Tuple[ParamSpec, ...]):
    """Create a keyword-only ``__init__`` that validates and stores params.

    The generated initializer calls ``self.__post_init__()`` when the
    class defines one, and carries an ``inspect.Signature`` listing the
    parameters.
    """
    specs = tuple(param_specs)
    known = {s.name for s in specs}

    def __init__(self, **kwargs):
        unexpected = set(kwargs) - known
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected keyword arguments: "
                f"{', '.join(sorted(unexpected))}"
            )
        for spec in specs:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            elif spec.has_default:
                value = spec.default
            else:
                raise TypeError(
                    f"{type(self).__name__}() missing required keyword "
                    f"argument: '{spec.name}'"
                )
            spec.validate(value)
            setattr(self, spec.name, value)
        if hasattr(self, '__post_init__'):
            self.__post_init__()

    params = [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    for spec in specs:
        default = spec.default if spec.has_default else inspect.Parameter.empty
        params.append(inspect.Parameter(
            spec.name, inspect.Parameter.KEYWORD_ONLY, default=default,
        ))
    __init__.__signature__ = inspect.Signature(params)
    __init__.__qualname__ = '__init__'
    return __init__
