"""Procedural textures for asphalt, grass and concrete."""

from __future__ import annotations

import random
from dataclasses import dataclass

TEXTURE_SIZE = 256


@dataclass(frozen=True)
class Texture:
    """An RGB image stored row by row, three bytes per pixel."""

    width: int
    height: int
    data: bytes

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Return the RGB triple at column x, row y."""
        offset = (y * self.width + x) * 3
        return tuple(self.data[offset:offset + 3])


def _build(rng: random.Random, shade) -> Texture:
    data = bytearray()
    for _ in range(TEXTURE_SIZE * TEXTURE_SIZE):
        data.extend(shade(rng))
    return Texture(TEXTURE_SIZE, TEXTURE_SIZE, bytes(data))


def _asphalt_pixel(rng: random.Random) -> tuple[int, int, int]:
    v = 48 + rng.randrange(22)
    if rng.randrange(12) == 0:
        v += 28
    if rng.randrange(25) == 0:
        v -= 18
    v = min(max(v, 20), 130)
    return v, v, v + 3


def _grass_pixel(rng: random.Random) -> tuple[int, int, int]:
    r = 55 + rng.randrange(30)
    g = 105 + rng.randrange(55)
    b = 40 + rng.randrange(25)
    return r, g, b


def _concrete_pixel(rng: random.Random) -> tuple[int, int, int]:
    v = 150 + rng.randrange(40)
    if rng.randrange(20) == 0:
        v -= 30
    v = min(max(v, 100), 210)
    return v, v, v - 5


def asphalt_texture(rng: random.Random) -> Texture:
    """Dark grey asphalt with light gravel and dark cracks."""
    return _build(rng, _asphalt_pixel)


def grass_texture(rng: random.Random) -> Texture:
    """Varied green grass."""
    return _build(rng, _grass_pixel)


def concrete_texture(rng: random.Random) -> Texture:
    """Light grey concrete with occasional joints."""
    return _build(rng, _concrete_pixel)


def create_textures(seed: int = 42) -> dict[str, Texture]:
    """Generate all three textures from one seeded generator, in a fixed order."""
    rng = random.Random(seed)
    asphalt = asphalt_texture(rng)
    grass = grass_texture(rng)
    concrete = concrete_texture(rng)
    return {"asphalt": asphalt, "grass": grass, "concrete": concrete}