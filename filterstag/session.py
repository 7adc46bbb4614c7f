# filterstag - Image Session
"""
The "current image" a user is editing: a base buffer, a palette of filter
templates and the layer stack applied to the base.

Hosts that recompute previews in the background can call :meth:`render`
from a worker thread. Every mutation bumps the session revision; a render
that finishes after a newer mutation is still returned to its caller but
is not published as :attr:`ImageSession.latest_preview`, so the last
render whose inputs are current always wins.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading

from .codec import decode, encode
from .filters import Filter, default_palette
from .layers import LayerStack, MoveDirection
from .pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    """Output of a single :meth:`ImageSession.render` call."""
    revision: int
    buffer: PixelBuffer
    current: bool  # False if the session changed while rendering


class ImageSession:
    """Base image, template palette and layer stack of one editing session."""

    def __init__(self, palette: list[Filter] | None = None):
        self.palette: list[Filter] = palette if palette is not None else default_palette()
        self._stack = LayerStack()
        self._base: PixelBuffer | None = None
        self._revision = 0
        self._latest: RenderResult | None = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def base(self) -> PixelBuffer | None:
        return self._base

    @property
    def stack(self) -> LayerStack:
        """The live stack. Mutate it through the session to keep revisions in sync."""
        return self._stack

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def latest_preview(self) -> PixelBuffer | None:
        """Most recent render whose inputs were still current when it finished."""
        return self._latest.buffer if self._latest is not None else None

    def _bump(self) -> int:
        # Caller holds the lock
        self._revision += 1
        return self._revision

    def template(self, filter_id: str) -> Filter:
        """Palette template by filter id, class name or display name."""
        for template in self.palette:
            if filter_id in (template.filter_id, template.type, template.display_name):
                return template
        raise KeyError(f"No filter template {filter_id!r} in palette")

    # ------------------------------------------------------------------
    # Image lifecycle
    # ------------------------------------------------------------------

    def set_base(self, buffer: PixelBuffer) -> None:
        """Replace the base image. The layer stack is emptied."""
        with self._lock:
            self._base = buffer
            self._stack.clear()
            self._latest = None
            self._bump()
        logger.debug(f"Session base set to {buffer.width}x{buffer.height}")

    def load_image(self, data: bytes) -> PixelBuffer:
        """Decode image bytes and make them the new base image."""
        buffer = decode(data)
        self.set_base(buffer)
        return buffer

    def clear_image(self) -> None:
        """Drop the image, empty the stack and reset every palette template."""
        with self._lock:
            self._base = None
            self._stack.clear()
            self._latest = None
            for template in self.palette:
                template.reset()
            self._bump()

    # ------------------------------------------------------------------
    # Stack mutations
    # ------------------------------------------------------------------

    def add_layer(self, template: Filter | str, name: str | None = None) -> str:
        """Add a layer cloned from a filter or from a palette entry by id."""
        if isinstance(template, str):
            template = self.template(template)
        with self._lock:
            layer_id = self._stack.add(template, name=name)
            self._bump()
        return layer_id

    def remove_layer(self, layer_id: str) -> None:
        with self._lock:
            self._stack.remove(layer_id)
            self._bump()

    def toggle_layer(self, layer_id: str) -> bool:
        with self._lock:
            enabled = self._stack.toggle(layer_id)
            self._bump()
        return enabled

    def move_layer(self, layer_id: str, direction: MoveDirection | str) -> int:
        with self._lock:
            index = self._stack.move(layer_id, direction)
            self._bump()
        return index

    def update_layer(self, layer_id: str, **params: float) -> Filter:
        """Change parameters of a layer's filter (values are clamped)."""
        with self._lock:
            layer_filter = self._stack.get(layer_id).filter.update(**params)
            self._bump()
        return layer_filter

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> RenderResult:
        """Compose the stack over the base image.

        The stack is snapshotted under the lock and composed outside it, so
        concurrent mutations never corrupt an in-flight render.

        :raises RuntimeError: if no image is loaded.
        """
        with self._lock:
            if self._base is None:
                raise RuntimeError("No image loaded")
            revision = self._revision
            base = self._base
            snapshot = self._stack.copy()

        buffer = snapshot.compose(base)

        with self._lock:
            current = revision == self._revision
            result = RenderResult(revision=revision, buffer=buffer, current=current)
            if current:
                self._latest = result
        if not current:
            logger.debug(f"Discarded stale render of revision {revision}")
        return result

    def render_encoded(self, format: str | None = None) -> bytes:
        """Render and encode the result for display or export."""
        return encode(self.render().buffer, format)
