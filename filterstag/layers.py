# filterstag - Layer Stack
"""
Ordered, independently toggleable filter layers.

A :class:`LayerStack` folds its enabled layers, top to bottom, over a
base buffer::

    output = base
    for layer in stack:
        if layer.enabled:
            output = layer.filter.apply(output)

Order matters: most filter pairs do not commute (blur then sharpen is not
sharpen then blur), so moving a layer changes the result.

Usage:
    from filterstag import LayerStack, GaussianBlur, HueRotate

    stack = LayerStack()
    blur_id = stack.add(GaussianBlur(radius=2))
    stack.add(HueRotate(degrees=90))
    stack.move(blur_id, 'down')
    result = stack.compose(base)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator
import json
import logging
import re
import time
import uuid

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import LayerNotFound
from .filters.base import Filter, apply_filter
from .pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


class MoveDirection(str, Enum):
    """Direction for :meth:`LayerStack.move`."""
    UP = 'up'
    DOWN = 'down'


def generate_layer_id() -> str:
    """Generate an opaque, random layer id."""
    return f"layer-{uuid.uuid4().hex[:12]}"


@dataclass
class FilterLayer:
    """A named, toggleable filter instance inside a stack.

    The filter is owned by the layer; it is never shared with the template
    it was created from.
    """

    id: str
    filter: Filter
    enabled: bool = True
    name: str = ''

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'enabled': self.enabled,
            'filter': self.filter.to_dict(),
        }


class LayerRecord(BaseModel):
    """Serialized form of a single layer."""

    model_config = ConfigDict(extra='ignore')

    id: str | None = None
    name: str = ''
    enabled: bool = True
    filter: dict[str, Any]


class StackDocument(BaseModel):
    """Serialized form of a whole stack (filter configuration only, no pixels)."""

    model_config = ConfigDict(extra='ignore')

    version: int = Field(default=1, ge=1)
    layers: list[LayerRecord] = Field(default_factory=list)


class LayerStack:
    """Ordered sequence of filter layers with a deterministic composition."""

    VERSION = 1

    def __init__(self, layers: list[FilterLayer] | None = None):
        self._layers: list[FilterLayer] = []
        for layer in layers or []:
            self._append(layer)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def layers(self) -> tuple[FilterLayer, ...]:
        """Layers in composition order."""
        return tuple(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[FilterLayer]:
        return iter(tuple(self._layers))

    def __getitem__(self, index: int) -> FilterLayer:
        return self._layers[index]

    def __contains__(self, layer_id: object) -> bool:
        return any(layer.id == layer_id for layer in self._layers)

    def index_of(self, layer_id: str) -> int:
        """Position of a layer in the stack.

        :raises LayerNotFound: if no layer has this id.
        """
        for i, layer in enumerate(self._layers):
            if layer.id == layer_id:
                return i
        raise LayerNotFound(layer_id)

    def get(self, layer_id: str) -> FilterLayer:
        """Get a layer by id.

        :raises LayerNotFound: if no layer has this id.
        """
        return self._layers[self.index_of(layer_id)]

    def enabled_layers(self) -> list[FilterLayer]:
        """Enabled layers in composition order."""
        return [layer for layer in self._layers if layer.enabled]

    def is_empty(self) -> bool:
        return not self._layers

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _append(self, layer: FilterLayer) -> None:
        if layer.id in self:
            raise ValueError(f"Duplicate layer id: {layer.id}")
        self._layers.append(layer)

    def add(self, template: Filter, name: str | None = None, enabled: bool = True) -> str:
        """Add a layer holding a private clone of ``template``.

        :param template: Filter whose current parameters seed the new layer.
            Later changes to the layer never touch the template and vice versa.
        :param name: Display name. Defaults to "<filter name> <position>".
        :returns: The new layer's id.
        """
        layer_id = generate_layer_id()
        while layer_id in self:
            layer_id = generate_layer_id()

        if name is None:
            name = f"{template.display_name} {len(self._layers) + 1}"

        self._layers.append(FilterLayer(
            id=layer_id,
            filter=template.clone(),
            enabled=enabled,
            name=name,
        ))
        logger.debug(f"Added layer {layer_id} ({name})")
        return layer_id

    def remove(self, layer_id: str) -> FilterLayer:
        """Remove a layer and return it.

        :raises LayerNotFound: if no layer has this id.
        """
        layer = self._layers.pop(self.index_of(layer_id))
        logger.debug(f"Removed layer {layer_id}")
        return layer

    def toggle(self, layer_id: str) -> bool:
        """Flip a layer's enabled flag and return the new state.

        :raises LayerNotFound: if no layer has this id.
        """
        layer = self.get(layer_id)
        layer.enabled = not layer.enabled
        logger.debug(f"Layer {layer_id} {'enabled' if layer.enabled else 'disabled'}")
        return layer.enabled

    def move(self, layer_id: str, direction: MoveDirection | str) -> int:
        """Swap a layer with its neighbour above (up) or below (down).

        Moving the first layer up or the last layer down does nothing.

        :returns: The layer's index after the move.
        :raises LayerNotFound: if no layer has this id.
        :raises ValueError: if ``direction`` is not 'up' or 'down'.
        """
        direction = MoveDirection(direction)
        index = self.index_of(layer_id)
        target = index - 1 if direction is MoveDirection.UP else index + 1
        if not 0 <= target < len(self._layers):
            return index

        self._layers[index], self._layers[target] = self._layers[target], self._layers[index]
        logger.debug(f"Moved layer {layer_id} {direction.value} to index {target}")
        return target

    def clear(self) -> None:
        """Remove all layers."""
        self._layers.clear()
        logger.debug("Cleared layer stack")

    def copy(self) -> LayerStack:
        """Deep copy: same ids, names and flags, independent filters."""
        return LayerStack([
            FilterLayer(id=l.id, filter=l.filter.clone(), enabled=l.enabled, name=l.name)
            for l in self._layers
        ])

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def compose(self, base: PixelBuffer) -> PixelBuffer:
        """Fold the enabled layers over ``base`` in stack order.

        Never modifies the stack or ``base``. With no enabled layers the
        base buffer itself is returned.
        """
        active = self.enabled_layers()
        if not active:
            return base

        start = time.perf_counter()
        output = base
        for layer in active:
            output = apply_filter(layer.filter, output)
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug(
            f"Composed {len(active)} layer(s) over {base.width}x{base.height} in {elapsed:.1f} ms"
        )
        return output

    __call__ = compose

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize stack configuration to dictionary."""
        return {
            'version': self.VERSION,
            'layers': [layer.to_dict() for layer in self._layers],
        }

    def to_json(self) -> str:
        """Serialize stack configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LayerStack:
        """Deserialize stack from dictionary.

        :raises pydantic.ValidationError: if the document is malformed.
        :raises ValueError: for unknown filter types or duplicate ids.
        """
        document = StackDocument.model_validate(data)
        stack = cls()
        for record in document.layers:
            layer_filter = Filter.from_dict(record.filter)
            stack._append(FilterLayer(
                id=record.id or generate_layer_id(),
                filter=layer_filter,
                enabled=record.enabled,
                name=record.name or layer_filter.display_name,
            ))
        return stack

    @classmethod
    def from_json(cls, json_str: str) -> LayerStack:
        """Deserialize stack from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def parse(cls, text: str) -> LayerStack:
        """Build a stack from a filter string.

        Examples:
            'gray 0 50|hue 90'
            'blur(3); sharpen amount=0.5'
        """
        stack = cls()
        if not text:
            return stack
        for part in re.split(r'[|;]', text):
            part = part.strip()
            if part:
                stack.add(Filter.parse(part))
        return stack

    def to_string(self) -> str:
        """Enabled layers as a compact filter string."""
        return '|'.join(layer.filter.to_string() for layer in self.enabled_layers())

    def __repr__(self) -> str:
        names = ', '.join(
            f"{l.name}{'' if l.enabled else ' (off)'}" for l in self._layers
        )
        return f"LayerStack([{names}])"
