import pytest

from geoscene import RecordingSurface, parse_scene, render
from geoscene.config import RenderConfig, get_render_config, set_render_config


@pytest.fixture
def restore_config():
    saved = get_render_config()
    yield
    set_render_config(saved)


def test_get_render_config_returns_copy():
    cfg = get_render_config()
    cfg.colors['point'] = 'red'

    assert get_render_config().color('point') == 'yellow'


def test_set_render_config_changes_defaults(restore_config):
    cfg = get_render_config()
    cfg.ray_length = 50
    set_render_config(cfg)

    surface = RecordingSurface()
    render(surface, parse_scene("Point O (0, 0)\nPoint X (2, 0)\nRay r O X"))
    (stroke,) = surface.strokes('white')
    assert stroke[3][1] == ('L', 50.0, 0.0)


def test_explicit_config_wins():
    cfg = RenderConfig(point_radius=9)
    surface = RecordingSurface()
    render(surface, parse_scene("Point A (1, 1)"), config=cfg)
    (disc,) = surface.fills('yellow')
    assert disc[2][0][3] == 9.0


@pytest.mark.parametrize('bad, exc', [(object(), TypeError), (RenderConfig(surface_size=0), ValueError)])
def test_set_render_config_rejects_bad_values(bad, exc):
    with pytest.raises(exc):
        set_render_config(bad)
