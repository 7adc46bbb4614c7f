# filterstag Filters - Base Classes
"""
Base classes for the filter system.

All filters are dataclasses holding only scalar parameters, with JSON
serialization support. Parameters are declared with :func:`param`, which
records their legal range; any assignment outside that range is clamped
(or wrapped, for angles) instead of raising.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields, Field
from typing import Any, ClassVar
import copy
import json
import math
import numbers
import re

import numpy as np

from filterstag.pixel_buffer import PixelBuffer


@dataclass(frozen=True)
class ParamSpec:
    """Legal range and coercion rule of a single filter parameter."""

    default: float
    min_value: float | None = None
    max_value: float | None = None
    step: float | None = None
    integer: bool = False
    wrap: float | None = None  # Modulus for cyclic parameters such as angles
    description: str = ''

    def coerce(self, name: str, value: Any) -> float | int:
        """Bring ``value`` into range. Never raises for numeric input."""
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeError(f"{name} must be a number, got {type(value).__name__}")
        value = float(value)
        if math.isnan(value) or (self.wrap is not None and math.isinf(value)):
            value = float(self.default)
        if self.wrap is not None:
            # Python's modulo is non-negative for a positive modulus
            value = value % self.wrap
            # Tiny negatives round up to the modulus itself
            if value >= self.wrap:
                value -= self.wrap
        if self.min_value is not None:
            value = max(self.min_value, value)
        if self.max_value is not None:
            value = min(self.max_value, value)
        if self.integer:
            # Unbounded infinities have no integer to clamp to
            if math.isinf(value):
                value = float(self.default)
            # Integral bounds keep the rounded value in range
            value = math.floor(value + 0.5)
        return int(value) if self.integer else float(value)


def param(
    default: float,
    min_value: float | None = None,
    max_value: float | None = None,
    *,
    step: float | None = None,
    integer: bool = False,
    wrap: float | None = None,
    description: str = '',
) -> Any:
    """Declare a clamped filter parameter as a dataclass field."""
    spec = ParamSpec(
        default=default,
        min_value=min_value,
        max_value=max_value,
        step=step,
        integer=integer,
        wrap=wrap,
        description=description,
    )
    return field(default=default, metadata={'param': spec})


def _param_spec(cls: type, name: str) -> ParamSpec | None:
    dc_fields: dict[str, Field] = getattr(cls, '__dataclass_fields__', {})
    f = dc_fields.get(name)
    if f is None:
        return None
    return f.metadata.get('param')


@dataclass
class ParameterInfo:
    """Documentation for a single filter parameter.

    Carries everything a host needs to build an input control (slider,
    spin box) for the parameter.
    """

    name: str
    type: str  # 'float' or 'int'
    default: Any
    description: str = ''
    min_value: float | None = None
    max_value: float | None = None
    step: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result = {
            'name': self.name,
            'type': self.type,
            'default': self.default,
        }
        if self.description:
            result['description'] = self.description
        if self.min_value is not None:
            result['min'] = self.min_value
        if self.max_value is not None:
            result['max'] = self.max_value
        if self.step is not None:
            result['step'] = self.step
        return result


@dataclass
class FilterInfo:
    """Documentation for a filter variant."""

    name: str  # Class name
    filter_id: str
    display_name: str
    summary: str  # First line of docstring
    description: str
    parameters: list[ParameterInfo] = field(default_factory=list)
    aliases: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'name': self.name,
            'filter_id': self.filter_id,
            'display_name': self.display_name,
            'summary': self.summary,
            'description': self.description,
            'parameters': [p.to_dict() for p in self.parameters],
            'aliases': self.aliases,
        }

    def to_markdown(self) -> str:
        """Generate markdown documentation."""
        lines = [f'# {self.display_name} (`{self.name}`)', '', self.description, '']

        if self.aliases:
            lines.append('## Aliases')
            lines.append('')
            lines.extend(f'- `{alias}`' for alias in self.aliases)
            lines.append('')

        if self.parameters:
            lines.append('## Parameters')
            lines.append('')
            lines.append('| Name | Type | Default | Range | Description |')
            lines.append('|------|------|---------|-------|-------------|')
            for p in self.parameters:
                if p.min_value is not None or p.max_value is not None:
                    span = f'{p.min_value}..{p.max_value}'
                else:
                    span = ''
                lines.append(f'| `{p.name}` | {p.type} | {p.default} | {span} | {p.description} |')
            lines.append('')

        return '\n'.join(lines)


# Global registries
FILTER_REGISTRY: dict[str, type['Filter']] = {}
FILTER_ALIASES: dict[str, type['Filter'] | tuple[type['Filter'], dict[str, Any]]] = {}


def register_filter(cls: type['Filter']) -> type['Filter']:
    """Decorator to register a filter class.

    The class is reachable by its class name, the lowercase class name and
    its ``filter_id``.
    """
    FILTER_REGISTRY[cls.__name__] = cls
    FILTER_REGISTRY[cls.__name__.lower()] = cls
    FILTER_REGISTRY[cls.filter_id] = cls
    return cls


def register_alias(
    alias: str,
    cls: type['Filter'],
    **default_params: Any
) -> None:
    """Register an alias for a filter class with optional default parameters.

    Examples:
        register_alias('blur', GaussianBlur)  # Simple alias
        register_alias('invert_hue', HueRotate, degrees=180)  # Alias with default params
    """
    if default_params:
        FILTER_ALIASES[alias.lower()] = (cls, default_params)
    else:
        FILTER_ALIASES[alias.lower()] = cls


def lookup_filter(name: str) -> tuple[type['Filter'], dict[str, Any]]:
    """Resolve a registry name or alias to (class, default parameters).

    :raises ValueError: if the name is unknown.
    """
    key = name.strip()
    alias_entry = FILTER_ALIASES.get(key.lower())
    if alias_entry is not None:
        if isinstance(alias_entry, tuple):
            return alias_entry[0], dict(alias_entry[1])
        return alias_entry, {}
    filter_cls = FILTER_REGISTRY.get(key) or FILTER_REGISTRY.get(key.lower())
    if filter_cls is None:
        raise ValueError(f"Unknown filter: {name}")
    return filter_cls, {}


def _instantiate(filter_cls: type['Filter'], kwargs: dict[str, Any]) -> 'Filter':
    """Construct a filter from user-supplied parameters.

    :raises ValueError: for unknown parameter names or non-numeric values.
    """
    try:
        return filter_cls(**kwargs)
    except TypeError as e:
        raise ValueError(f"Invalid parameters for {filter_cls.__name__}: {e}") from e


@dataclass
class Filter(ABC):
    """Base class for all filters.

    Subclasses are dataclasses whose fields are declared with :func:`param`
    and implement :meth:`transform` on an (H, W, 4) uint8 array.

    Example:
        @register_filter
        @dataclass
        class Invert(Filter):
            filter_id: ClassVar[str] = 'invert'
            display_name: ClassVar[str] = 'Invert'

            amount: float = param(1.0, 0.0, 1.0)

            def transform(self, pixels: np.ndarray) -> np.ndarray:
                ...
    """

    filter_id: ClassVar[str] = 'filter'
    display_name: ClassVar[str] = 'Filter'
    description: ClassVar[str] = ''

    # Primary parameter name for legacy string parsing, e.g. 'degrees' for HueRotate
    _primary_param: ClassVar[str | None] = None

    def __setattr__(self, name: str, value: Any) -> None:
        spec = _param_spec(type(self), name)
        if spec is not None:
            value = spec.coerce(name, value)
        object.__setattr__(self, name, value)

    @abstractmethod
    def transform(self, pixels: np.ndarray) -> np.ndarray:
        """Transform a non-empty RGBA uint8 array (H, W, 4).

        Must not modify ``pixels`` and must return an array of the same shape.
        """

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        """Apply the filter and return a new buffer of the same size.

        Zero-area buffers are returned unchanged.
        """
        if buffer.is_empty:
            return buffer
        return PixelBuffer.from_array(self.transform(buffer.array))

    def __call__(self, buffer: PixelBuffer) -> PixelBuffer:
        return self.apply(buffer)

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    @classmethod
    def parameter_names(cls) -> list[str]:
        """Names of the clamped parameters, in declaration order."""
        return [f.name for f in fields(cls) if 'param' in f.metadata]

    @property
    def parameters(self) -> dict[str, float | int]:
        """Current parameter values."""
        return {name: getattr(self, name) for name in self.parameter_names()}

    def get_parameter(self, name: str) -> float | int:
        """Get a parameter value by name."""
        if name not in self.parameter_names():
            raise AttributeError(f"{self.type} has no parameter {name!r}")
        return getattr(self, name)

    def set_parameter(self, name: str, value: float) -> float | int:
        """Set a parameter by name and return the (possibly clamped) stored value."""
        if name not in self.parameter_names():
            raise AttributeError(f"{self.type} has no parameter {name!r}")
        setattr(self, name, value)
        return getattr(self, name)

    def update(self, **params: float) -> Filter:
        """Set several parameters at once (chainable)."""
        for name, value in params.items():
            self.set_parameter(name, value)
        return self

    def reset(self) -> None:
        """Restore every parameter to its default."""
        for f in fields(self):
            if 'param' in f.metadata:
                setattr(self, f.name, f.default)

    def clone(self) -> Filter:
        """Create an independent copy with the same parameters."""
        return copy.deepcopy(self)

    @property
    def type(self) -> str:
        """Filter type name for serialization."""
        return self.__class__.__name__

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize filter to dictionary."""
        data: dict[str, Any] = dict(self.parameters)
        data['type'] = self.type
        return data

    def to_json(self) -> str:
        """Serialize filter to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Filter:
        """Deserialize filter from dictionary.

        :raises ValueError: for unknown filter types or invalid parameters.
        """
        data = data.copy()  # Don't modify original
        filter_type = data.pop('type', cls.__name__)

        filter_cls = FILTER_REGISTRY.get(filter_type) or FILTER_REGISTRY.get(str(filter_type).lower())
        if filter_cls is None:
            raise ValueError(f"Unknown filter type: {filter_type}")

        return _instantiate(filter_cls, data)

    @classmethod
    def from_json(cls, json_str: str) -> Filter:
        """Deserialize filter from JSON string."""
        return cls.from_dict(json.loads(json_str))

    def to_string(self) -> str:
        """Convert filter to the compact string format understood by :meth:`parse`."""
        args = ' '.join(f'{name}={value}' for name, value in self.parameters.items())
        return f'{self.type.lower()} {args}'.strip()

    @classmethod
    def parse(cls, text: str) -> Filter:
        """Parse single filter from compact string format.

        Supports two syntaxes:
        1. Compact syntax (space-separated):
            'blur 5'           -> GaussianBlur(radius=5)
            'blur 3 1.5'       -> GaussianBlur(radius=3, sigma=1.5)
            'gray'             -> GrayscaleContrastBrightness()
            'hue degrees=90'   -> HueRotate(degrees=90)

        2. Legacy syntax (parentheses):
            'hue(90)'
            'sharpen(amount=2)'
        """
        text = text.strip()

        match = re.match(r'^([\w-]+)\(([^)]*)\)$', text)
        if match:
            return cls._parse_legacy(match.group(1), match.group(2))

        parts = _split_filter_args(text)
        if not parts:
            raise ValueError(f"Invalid filter format: {text!r}")

        filter_cls, kwargs = lookup_filter(parts[0])

        positional = []
        for arg in parts[1:]:
            if '=' in arg:
                key, value = arg.split('=', 1)
                kwargs[key.strip()] = _parse_value(value.strip())
            else:
                positional.append(_parse_value(arg))

        if positional:
            kwargs = cls._map_positional_args(filter_cls, positional, kwargs)

        return _instantiate(filter_cls, kwargs)

    @classmethod
    def _parse_legacy(cls, name: str, args_str: str) -> Filter:
        """Parse legacy parentheses syntax."""
        filter_cls, kwargs = lookup_filter(name)

        if args_str:
            for i, arg in enumerate(args_str.split(',')):
                arg = arg.strip()
                if not arg:
                    continue
                if '=' in arg:
                    key, value = arg.split('=', 1)
                    kwargs[key.strip()] = _parse_value(value.strip())
                elif i == 0 and filter_cls._primary_param:
                    kwargs[filter_cls._primary_param] = _parse_value(arg)
                else:
                    raise ValueError(f"Positional arg not supported for {name}: {arg}")

        return _instantiate(filter_cls, kwargs)

    @classmethod
    def _map_positional_args(
        cls,
        filter_cls: type[Filter],
        positional: list[Any],
        kwargs: dict[str, Any]
    ) -> dict[str, Any]:
        """Map positional arguments to parameters in declaration order."""
        param_names = filter_cls.parameter_names()

        for i, value in enumerate(positional):
            if i >= len(param_names):
                raise ValueError(
                    f"Too many positional args for {filter_cls.__name__}: "
                    f"got {len(positional)}, max {len(param_names)}"
                )
            # Explicit keyword args win over positional ones
            kwargs.setdefault(param_names[i], value)

        return kwargs

    # ------------------------------------------------------------------
    # Documentation
    # ------------------------------------------------------------------

    @classmethod
    def get_info(cls) -> FilterInfo:
        """Get documentation for this filter, including one entry per parameter."""
        docstring = (cls.__doc__ or '').strip()
        summary = docstring.split('\n')[0].strip() if docstring else ''

        parameters = []
        for f in fields(cls):
            spec = f.metadata.get('param')
            if spec is None:
                continue
            parameters.append(ParameterInfo(
                name=f.name,
                type='int' if spec.integer else 'float',
                default=spec.default,
                description=spec.description,
                min_value=spec.min_value if spec.wrap is None else 0,
                max_value=spec.max_value if spec.wrap is None else spec.wrap,
                step=spec.step,
            ))

        aliases = []
        for alias, entry in FILTER_ALIASES.items():
            target = entry[0] if isinstance(entry, tuple) else entry
            if target is cls:
                aliases.append(alias)

        return FilterInfo(
            name=cls.__name__,
            filter_id=cls.filter_id,
            display_name=cls.display_name,
            summary=summary,
            description=cls.description or summary,
            parameters=parameters,
            aliases=aliases,
        )


def apply_filter(filter: Filter, buffer: PixelBuffer) -> PixelBuffer:
    """Apply any registered filter variant to a buffer."""
    if not isinstance(filter, Filter):
        raise TypeError(f"Expected a Filter, got {type(filter).__name__}")
    return filter.apply(buffer)


def get_all_filters_info() -> list[FilterInfo]:
    """Documentation for every registered filter class, in registration order."""
    seen: list[type[Filter]] = []
    for filter_cls in FILTER_REGISTRY.values():
        if filter_cls not in seen:
            seen.append(filter_cls)
    return [filter_cls.get_info() for filter_cls in seen]


def _parse_value(s: str) -> int | float:
    """Parse a parameter value: integers (42, -5) or floats (3.14, inf).

    :raises ValueError: if the text is not a number.
    """
    s = s.strip()
    try:
        return int(s)
    except ValueError:
        pass
    try:
        return float(s)
    except ValueError:
        raise ValueError(f"Invalid parameter value: {s!r}") from None


def _split_filter_args(text: str) -> list[str]:
    """Split filter text into name and arguments.

    Examples:
        'blur 5' -> ['blur', '5']
        'hue degrees=90' -> ['hue', 'degrees=90']
    """
    return text.split()
