"""
Tests for ImageSession: image lifecycle, palette templates and
stale-render handling.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, ClassVar

import numpy as np
import pytest

from filterstag import Filter, ImageSession, PixelBuffer, encode


@dataclass
class HookFilter(Filter):
    """Identity filter that runs a callback while being applied."""

    filter_id: ClassVar[str] = 'hook'
    display_name: ClassVar[str] = 'Hook'

    hook: Callable[[], None] = field(default=lambda: None)

    def transform(self, pixels: np.ndarray) -> np.ndarray:
        self.hook()
        return pixels.copy()


@pytest.fixture
def session(noisy_buffer) -> ImageSession:
    s = ImageSession()
    s.set_base(noisy_buffer)
    return s


class TestLifecycle:

    def test_new_base_clears_stack(self, session, gray_buffer):
        session.add_layer('gaussian-blur')
        session.set_base(gray_buffer)
        assert len(session.stack) == 0
        assert session.base is gray_buffer

    def test_load_image_decodes(self, gray_buffer):
        s = ImageSession()
        s.load_image(encode(gray_buffer))
        assert s.base == gray_buffer

    def test_clear_image_resets_templates(self, session):
        session.template('sharpen').amount = 2.5
        session.add_layer('sharpen')

        session.clear_image()

        assert session.base is None
        assert len(session.stack) == 0
        assert session.template('sharpen').amount == 1.0

    def test_render_without_image(self):
        with pytest.raises(RuntimeError):
            ImageSession().render()


class TestLayers:

    def test_add_from_palette_clones_template(self, session):
        template = session.template('Hue Rotate')
        template.degrees = 45
        layer_id = session.add_layer('hue-rotate')

        session.update_layer(layer_id, degrees=400)

        assert session.stack.get(layer_id).filter.degrees == 40
        assert template.degrees == 45

    def test_unknown_template(self, session):
        with pytest.raises(KeyError):
            session.add_layer('emboss')

    def test_mutations_bump_revision(self, session):
        start = session.revision
        layer_id = session.add_layer('saturation')
        session.toggle_layer(layer_id)
        session.move_layer(layer_id, 'up')
        session.update_layer(layer_id, saturation=0)
        session.remove_layer(layer_id)
        assert session.revision == start + 5

    def test_render_matches_compose(self, session, noisy_buffer):
        session.add_layer('black-and-white')
        session.add_layer('noise-reduction')

        result = session.render()

        assert result.current
        assert result.buffer == session.stack.compose(noisy_buffer)
        assert session.latest_preview is result.buffer

    def test_render_encoded(self, session):
        session.add_layer('sharpen')
        assert session.render_encoded('PNG').startswith(b'\x89PNG')


class TestStaleRenders:

    def test_render_superseded_while_running_is_not_published(self, session):
        published = session.render()
        pending = ['hue-rotate']

        def add_once():
            if pending:
                session.add_layer(pending.pop())

        session.add_layer(HookFilter(hook=add_once))

        stale = session.render()

        assert not stale.current
        assert session.latest_preview is published.buffer

        fresh = session.render()
        assert fresh.current
        assert session.latest_preview is fresh.buffer

    def test_render_uses_snapshot(self, session, noisy_buffer):
        """Parameter changes during a render do not leak into it."""
        layer_id = session.add_layer('sharpen')

        def change():
            session.update_layer(layer_id, amount=3)

        session.add_layer(HookFilter(hook=change))
        session.move_layer(session.stack[1].id, 'up')

        stale = session.render()

        expected = Filter.parse('sharpen 1').apply(noisy_buffer)
        assert stale.buffer == expected

    def test_concurrent_renders_and_mutations(self, session):
        layer_id = session.add_layer('gaussian-blur')

        def mutate(i):
            session.update_layer(layer_id, radius=1 + i % 4)

        with ThreadPoolExecutor(max_workers=4) as pool:
            futures = [pool.submit(session.render) for _ in range(8)]
            futures += [pool.submit(mutate, i) for i in range(8)]
            for f in futures:
                f.result()

        final = session.render()
        assert final.current
        assert final.buffer == session.stack.compose(session.base)
