"""Drawing surface abstraction, solid meshes and a recording canvas."""

from __future__ import annotations

import abc
import itertools
import math
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Sequence

Vec3 = tuple[float, float, float]
MeshVertex = tuple[Vec3, Vec3]
Triangle = tuple[MeshVertex, MeshVertex, MeshVertex]
Matrix = tuple[tuple[float, ...], ...]


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (a[1] * b[2] - a[2] * b[1], a[2] * b[0] - a[0] * b[2], a[0] * b[1] - a[1] * b[0])


def _dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _normalized(v: Vec3) -> Vec3:
    length = math.sqrt(_dot(v, v))
    if length == 0.0:
        return v
    return (v[0] / length, v[1] / length, v[2] / length)


def _oriented(a: MeshVertex, b: MeshVertex, c: MeshVertex, facing: Vec3) -> Triangle:
    """Order a triangle counter-clockwise when seen from the side `facing` points to."""
    face = _cross(_sub(b[0], a[0]), _sub(c[0], a[0]))
    if _dot(face, facing) < 0.0:
        return (a, c, b)
    return (a, b, c)


def _quad(a: MeshVertex, b: MeshVertex, c: MeshVertex, d: MeshVertex) -> list[Triangle]:
    facing = tuple(sum(axis) for axis in zip(a[1], b[1], c[1], d[1]))
    return [_oriented(a, b, c, facing), _oriented(a, c, d, facing)]


_BOX_FACES: tuple[tuple[Vec3, tuple[Vec3, Vec3, Vec3, Vec3]], ...] = (
    ((1.0, 0.0, 0.0), ((1, -1, -1), (1, 1, -1), (1, 1, 1), (1, -1, 1))),
    ((-1.0, 0.0, 0.0), ((-1, -1, -1), (-1, 1, -1), (-1, 1, 1), (-1, -1, 1))),
    ((0.0, 1.0, 0.0), ((-1, 1, -1), (1, 1, -1), (1, 1, 1), (-1, 1, 1))),
    ((0.0, -1.0, 0.0), ((-1, -1, -1), (1, -1, -1), (1, -1, 1), (-1, -1, 1))),
    ((0.0, 0.0, 1.0), ((-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1))),
    ((0.0, 0.0, -1.0), ((-1, -1, -1), (1, -1, -1), (1, 1, -1), (-1, 1, -1))),
)


def box_mesh(sx: float, sy: float, sz: float) -> list[Triangle]:
    """Triangles of a box of the given size centred on the origin."""
    hx, hy, hz = sx * 0.5, sy * 0.5, sz * 0.5
    triangles: list[Triangle] = []
    for normal, corners in _BOX_FACES:
        a, b, c, d = (((cx * hx, cy * hy, cz * hz), normal) for cx, cy, cz in corners)
        triangles.extend(_quad(a, b, c, d))
    return triangles


def sphere_mesh(radius: float, slices: int, stacks: int) -> list[Triangle]:
    """Triangles of a sphere around the origin, poles on the z axis."""

    def vertex(stack: int, slice_: int) -> MeshVertex:
        phi = math.pi * stack / stacks
        theta = 2.0 * math.pi * slice_ / slices
        normal = (math.sin(phi) * math.cos(theta), math.sin(phi) * math.sin(theta), math.cos(phi))
        return (tuple(radius * n for n in normal), normal)

    triangles: list[Triangle] = []
    for i, j in itertools.product(range(stacks), range(slices)):
        triangles.extend(_quad(vertex(i, j), vertex(i + 1, j), vertex(i + 1, j + 1), vertex(i, j + 1)))
    return triangles


def torus_mesh(inner: float, outer: float, sides: int, rings: int) -> list[Triangle]:
    """Triangles of a torus in the xy plane: tube radius inner, ring radius outer."""

    def vertex(ring: int, side: int) -> MeshVertex:
        theta = 2.0 * math.pi * ring / rings
        phi = 2.0 * math.pi * side / sides
        spread = outer + inner * math.cos(phi)
        position = (spread * math.cos(theta), spread * math.sin(theta), inner * math.sin(phi))
        normal = (math.cos(phi) * math.cos(theta), math.cos(phi) * math.sin(theta), math.sin(phi))
        return (position, normal)

    triangles: list[Triangle] = []
    for i, j in itertools.product(range(rings), range(sides)):
        triangles.extend(_quad(vertex(i, j), vertex(i + 1, j), vertex(i + 1, j + 1), vertex(i, j + 1)))
    return triangles


def cone_mesh(base: float, height: float, slices: int, stacks: int) -> list[Triangle]:
    """Triangles of a cone standing on the xy plane with its tip at z = height."""

    def vertex(stack: int, slice_: int) -> MeshVertex:
        theta = 2.0 * math.pi * slice_ / slices
        z = height * stack / stacks
        r = base * (1.0 - stack / stacks)
        normal = _normalized((math.cos(theta) * height, math.sin(theta) * height, base))
        return ((r * math.cos(theta), r * math.sin(theta), z), normal)

    triangles: list[Triangle] = []
    for i, j in itertools.product(range(stacks), range(slices)):
        triangles.extend(_quad(vertex(i, j), vertex(i, j + 1), vertex(i + 1, j + 1), vertex(i + 1, j)))

    down: Vec3 = (0.0, 0.0, -1.0)
    centre: MeshVertex = ((0.0, 0.0, 0.0), down)
    for j in range(slices):
        a = (vertex(0, j)[0], down)
        b = (vertex(0, j + 1)[0], down)
        triangles.append(_oriented(centre, a, b, down))
    return triangles


@dataclass(frozen=True)
class Material:
    """Surface colours and shininess of a lit object."""

    diffuse: tuple[float, float, float, float]
    ambient: tuple[float, float, float, float]
    specular: tuple[float, float, float, float]
    shininess: float

    @classmethod
    def from_color(cls, r: float, g: float, b: float, shininess: float = 30.0) -> "Material":
        """Material whose ambient is a dim copy of the colour, with a fixed grey highlight."""
        return cls(
            diffuse=(r, g, b, 1.0),
            ambient=(r * 0.30, g * 0.30, b * 0.30, 1.0),
            specular=(0.35, 0.35, 0.35, 1.0),
            shininess=shininess,
        )


def _check_count(vertices: Sequence[Vec3], group: int, what: str) -> None:
    if len(vertices) % group:
        raise ValueError(f"{what} need a multiple of {group} vertices, got {len(vertices)}")


class Canvas(abc.ABC):
    """A 3D drawing surface with a transform stack, materials and primitives."""

    @contextmanager
    def transform(self) -> Iterator["Canvas"]:
        """Save the current transform and restore it when the block ends."""
        self._push()
        try:
            yield self
        finally:
            self._pop()

    @abc.abstractmethod
    def _push(self) -> None: ...

    @abc.abstractmethod
    def _pop(self) -> None: ...

    @abc.abstractmethod
    def _apply_material(self, material: Material) -> None: ...

    def set_material(self, r: float, g: float, b: float, shininess: float = 30.0) -> None:
        """Use a material made from an RGB colour for lit drawing."""
        self._apply_material(Material.from_color(r, g, b, shininess))

    @abc.abstractmethod
    def translate(self, x: float, y: float, z: float) -> None:
        """Move the origin."""

    @abc.abstractmethod
    def rotate(self, angle: float, x: float, y: float, z: float) -> None:
        """Rotate by angle degrees about the axis (x, y, z)."""

    @abc.abstractmethod
    def scale(self, x: float, y: float, z: float) -> None:
        """Scale along each axis."""

    @abc.abstractmethod
    def set_color(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        """Colour for unlit drawing."""

    @abc.abstractmethod
    def box(self, sx: float, sy: float, sz: float) -> None:
        """Solid box centred on the origin."""

    @abc.abstractmethod
    def sphere(self, radius: float, slices: int, stacks: int) -> None:
        """Solid sphere centred on the origin."""

    @abc.abstractmethod
    def torus(self, inner: float, outer: float, sides: int, rings: int) -> None:
        """Solid torus around the z axis."""

    @abc.abstractmethod
    def cone(self, base: float, height: float, slices: int, stacks: int) -> None:
        """Solid cone pointing along +z."""

    @abc.abstractmethod
    def quads(self, vertices: Sequence[Vec3]) -> None:
        """Filled quads, four vertices each."""

    @abc.abstractmethod
    def triangles(self, vertices: Sequence[Vec3], normal: Vec3 | None = None) -> None:
        """Filled triangles, three vertices each, sharing one normal if given."""

    @abc.abstractmethod
    def lines(self, vertices: Sequence[Vec3]) -> None:
        """Line segments, two vertices each."""

    @abc.abstractmethod
    def points(self, vertices: Sequence[Vec3], size: float = 1.0) -> None:
        """Points of the given pixel size."""

    @abc.abstractmethod
    def textured_quad(
        self,
        texture: str,
        y: float,
        x1: float,
        z1: float,
        x2: float,
        z2: float,
        s_scale: float,
        t_scale: float,
    ) -> None:
        """Horizontal quad at height y with texture coordinates scaled from world x and z."""

    @abc.abstractmethod
    def lighting(self, enabled: bool) -> None:
        """Turn lighting on or off."""

    @abc.abstractmethod
    def blend(self, enabled: bool) -> None:
        """Turn alpha blending on or off."""


def _identity() -> Matrix:
    return tuple(tuple(1.0 if i == j else 0.0 for j in range(4)) for i in range(4))


def _multiply(a: Matrix, b: Matrix) -> Matrix:
    return tuple(tuple(sum(x * y for x, y in zip(row, col)) for col in zip(*b)) for row in a)


def _rotation(angle: float, x: float, y: float, z: float) -> Matrix:
    length = math.sqrt(x * x + y * y + z * z)
    if length == 0.0:
        return _identity()
    x, y, z = x / length, y / length, z / length
    rad = math.radians(angle)
    c, s = math.cos(rad), math.sin(rad)
    t = 1.0 - c
    return (
        (t * x * x + c, t * x * y - s * z, t * x * z + s * y, 0.0),
        (t * x * y + s * z, t * y * y + c, t * y * z - s * x, 0.0),
        (t * x * z - s * y, t * y * z + s * x, t * z * z + c, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


class _DrawCall(NamedTuple):
    kind: str
    args: tuple
    matrix: Matrix
    material: Material | None
    color: tuple[float, float, float, float]
    lighting: bool
    blend: bool

    def apply(self, point: Vec3) -> Vec3:
        """Map a point from the call's local space to world space."""
        x, y, z = point
        return tuple(row[0] * x + row[1] * y + row[2] * z + row[3] for row in self.matrix[:3])

    @property
    def origin(self) -> Vec3:
        return self.apply((0.0, 0.0, 0.0))


class RecordingCanvas(Canvas):
    """A canvas that records every call together with the state it was made in."""

    def __init__(self) -> None:
        self.calls: list[_DrawCall] = []
        self._matrix: Matrix = _identity()
        self._stack: list[Matrix] = []
        self._material: Material | None = None
        self._color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
        self._lighting = True
        self._blend = False

    @property
    def depth(self) -> int:
        """Number of saved transforms."""
        return len(self._stack)

    def of_kind(self, kind: str) -> list[_DrawCall]:
        """Recorded calls of one kind, in order."""
        return [call for call in self.calls if call.kind == kind]

    def _record(self, kind: str, *args) -> None:
        self.calls.append(
            _DrawCall(kind, args, self._matrix, self._material, self._color, self._lighting, self._blend)
        )

    def _push(self) -> None:
        self._stack.append(self._matrix)

    def _pop(self) -> None:
        if not self._stack:
            raise RuntimeError("transform stack is empty")
        self._matrix = self._stack.pop()

    def _apply_material(self, material: Material) -> None:
        self._material = material
        self._record("material", material)

    def translate(self, x, y, z):
        step = ((1.0, 0.0, 0.0, x), (0.0, 1.0, 0.0, y), (0.0, 0.0, 1.0, z), (0.0, 0.0, 0.0, 1.0))
        self._matrix = _multiply(self._matrix, step)

    def rotate(self, angle, x, y, z):
        self._matrix = _multiply(self._matrix, _rotation(angle, x, y, z))

    def scale(self, x, y, z):
        step = ((x, 0.0, 0.0, 0.0), (0.0, y, 0.0, 0.0), (0.0, 0.0, z, 0.0), (0.0, 0.0, 0.0, 1.0))
        self._matrix = _multiply(self._matrix, step)

    def set_color(self, r, g, b, a=1.0):
        self._color = (r, g, b, a)
        self._record("color", r, g, b, a)

    def box(self, sx, sy, sz):
        self._record("box", sx, sy, sz)

    def sphere(self, radius, slices, stacks):
        self._record("sphere", radius, slices, stacks)

    def torus(self, inner, outer, sides, rings):
        self._record("torus", inner, outer, sides, rings)

    def cone(self, base, height, slices, stacks):
        self._record("cone", base, height, slices, stacks)

    def quads(self, vertices):
        _check_count(vertices, 4, "quads")
        self._record("quads", tuple(vertices))

    def triangles(self, vertices, normal=None):
        _check_count(vertices, 3, "triangles")
        self._record("triangles", tuple(vertices), normal)

    def lines(self, vertices):
        _check_count(vertices, 2, "lines")
        self._record("lines", tuple(vertices))

    def points(self, vertices, size=1.0):
        self._record("points", tuple(vertices), size)

    def textured_quad(self, texture, y, x1, z1, x2, z2, s_scale, t_scale):
        self._record("textured_quad", texture, y, x1, z1, x2, z2, s_scale, t_scale)

    def lighting(self, enabled):
        self._lighting = bool(enabled)
        self._record("lighting", self._lighting)

    def blend(self, enabled):
        self._blend = bool(enabled)
        self._record("blend", self._blend)