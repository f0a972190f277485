import random

import pytest

from pinkdrift.textures import (
    TEXTURE_SIZE,
    Texture,
    asphalt_texture,
    concrete_texture,
    create_textures,
    grass_texture,
)


@pytest.fixture(scope="module")
def textures():
    return create_textures(42)


def _pixels(texture):
    data = texture.data
    return [tuple(data[i:i + 3]) for i in range(0, len(data), 3)]


def test_create_textures_names_and_sizes(textures):
    assert set(textures) == {"asphalt", "grass", "concrete"}
    for texture in textures.values():
        assert texture.width == TEXTURE_SIZE
        assert texture.height == TEXTURE_SIZE
        assert len(texture.data) == TEXTURE_SIZE * TEXTURE_SIZE * 3


def test_create_textures_is_deterministic(textures):
    again = create_textures(42)
    assert again == textures


def test_create_textures_matches_shared_generator_order(textures):
    rng = random.Random(42)
    assert asphalt_texture(rng) == textures["asphalt"]
    assert grass_texture(rng) == textures["grass"]
    assert concrete_texture(rng) == textures["concrete"]


def test_asphalt_is_bluish_grey_within_clamp(textures):
    for r, g, b in _pixels(textures["asphalt"]):
        assert r == g
        assert b == r + 3
        assert 20 <= r <= 130


def test_grass_channels_in_range(textures):
    for r, g, b in _pixels(textures["grass"]):
        assert 55 <= r < 85
        assert 105 <= g < 160
        assert 40 <= b < 65
        assert g > r > b or g > b


def test_concrete_is_grey_within_clamp(textures):
    for r, g, b in _pixels(textures["concrete"]):
        assert r == g
        assert b == r - 5
        assert 100 <= r <= 210


def test_pixel_reads_row_major():
    texture = Texture(2, 1, bytes([1, 2, 3, 4, 5, 6]))
    assert texture.pixel(0, 0) == (1, 2, 3)
    assert texture.pixel(1, 0) == (4, 5, 6)