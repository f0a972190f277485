"""The game window: camera, lighting, OpenGL drawing and the frame loop."""

from __future__ import annotations

import functools
import math

from pinkdrift.canvas import Canvas, Material, box_mesh, cone_mesh, sphere_mesh, torus_mesh
from pinkdrift.car import draw_car, draw_skid_marks, draw_smoke
from pinkdrift.environment import draw_mountains, draw_night_sky, draw_track
from pinkdrift.hud import ESCAPE, Controls, hud_lines, slider_handle_x, victory_lines
from pinkdrift.physics import update_car
from pinkdrift.state import GameState, World
from pinkdrift.textures import create_textures

WINDOW_WIDTH = 1000
WINDOW_HEIGHT = 550
FRAME_INTERVAL = 0.016
SMOKE_STEP = 0.06

_LEFT_BUTTON = 1
_ESCAPE_SYMBOL = 0xFF1B


def camera_view(world: World):
    """Eye, target and up vectors for the current camera mode."""
    if world.camera_mode == 0:
        return (0.0, 24.0, 26.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)
    if world.camera_mode == 1:
        rad = math.radians(world.car_angle)
        eye = (world.car_x + math.cos(rad) * 9.5, 5.8, world.car_z - math.sin(rad) * 9.5)
        return eye, (world.car_x, 0.9, world.car_z), (0.0, 1.0, 0.0)
    return (0.0, 35.0, 0.1), (0.0, 0.0, 0.0), (0.0, 0.0, -1.0)


def sky_color(night: bool):
    """Clear colour of the sky."""
    return (0.04, 0.05, 0.10, 1.0) if night else (0.55, 0.74, 0.92, 1.0)


def light_parameters(night: bool) -> dict:
    """Position and colours of the single scene light: moon or sun."""
    if night:
        return {
            "position": (8.0, 22.0, -12.0, 1.0),
            "ambient": (0.04, 0.05, 0.10, 1.0),
            "diffuse": (0.35, 0.38, 0.52, 1.0),
            "specular": (0.15, 0.16, 0.25, 1.0),
        }
    return {
        "position": (-9.0, 20.0, 11.0, 1.0),
        "ambient": (0.30, 0.29, 0.24, 1.0),
        "diffuse": (0.96, 0.90, 0.78, 1.0),
        "specular": (0.65, 0.60, 0.50, 1.0),
    }


def _normalize(v):
    length = math.sqrt(sum(c * c for c in v)) or 1.0
    return tuple(c / length for c in v)


def _cross(a, b):
    return (a[1] * b[2] - a[2] * b[1], a[2] * b[0] - a[0] * b[2], a[0] * b[1] - a[1] * b[0])


def _look_at(eye, target, up):
    f = _normalize(tuple(t - e for t, e in zip(target, eye)))
    s = _normalize(_cross(f, up))
    u = _cross(s, f)
    tx = -sum(a * b for a, b in zip(s, eye))
    ty = -sum(a * b for a, b in zip(u, eye))
    tz = sum(a * b for a, b in zip(f, eye))
    return (
        s[0], u[0], -f[0], 0.0,
        s[1], u[1], -f[1], 0.0,
        s[2], u[2], -f[2], 0.0,
        tx, ty, tz, 1.0,
    )


def _perspective(fovy, aspect, near, far):
    f = 1.0 / math.tan(math.radians(fovy) / 2.0)
    return (
        f / aspect, 0.0, 0.0, 0.0,
        0.0, f, 0.0, 0.0,
        0.0, 0.0, (far + near) / (near - far), -1.0,
        0.0, 0.0, 2.0 * far * near / (near - far), 0.0,
    )


@functools.lru_cache(maxsize=None)
def _cached_mesh(kind, *args):
    builders = {"box": box_mesh, "sphere": sphere_mesh, "torus": torus_mesh, "cone": cone_mesh}
    return builders[kind](*args)


class GLCanvas(Canvas):
    """A canvas that draws with fixed-function OpenGL in the current context."""

    def __init__(self) -> None:
        from pyglet import gl

        self._gl = gl
        self._textures = {name: self._upload(tex) for name, tex in create_textures().items()}

    def _floats(self, values):
        return (self._gl.GLfloat * len(values))(*values)

    def _upload(self, texture) -> int:
        gl = self._gl
        ids = (gl.GLuint * 1)()
        gl.glGenTextures(1, ids)
        tex_id = ids[0]
        gl.glBindTexture(gl.GL_TEXTURE_2D, tex_id)
        for param, value in (
            (gl.GL_TEXTURE_WRAP_S, gl.GL_REPEAT),
            (gl.GL_TEXTURE_WRAP_T, gl.GL_REPEAT),
            (gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR),
            (gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR),
        ):
            gl.glTexParameteri(gl.GL_TEXTURE_2D, param, value)
        pixels = bytes(texture.data)
        buffer = (gl.GLubyte * len(pixels)).from_buffer_copy(pixels)
        gl.glTexImage2D(gl.GL_TEXTURE_2D, 0, gl.GL_RGB, texture.width, texture.height, 0,
                        gl.GL_RGB, gl.GL_UNSIGNED_BYTE, buffer)
        return tex_id

    def _push(self):
        self._gl.glPushMatrix()

    def _pop(self):
        self._gl.glPopMatrix()

    def _apply_material(self, material: Material):
        gl = self._gl
        gl.glMaterialfv(gl.GL_FRONT, gl.GL_AMBIENT, self._floats(material.ambient))
        gl.glMaterialfv(gl.GL_FRONT, gl.GL_DIFFUSE, self._floats(material.diffuse))
        gl.glMaterialfv(gl.GL_FRONT, gl.GL_SPECULAR, self._floats(material.specular))
        gl.glMaterialf(gl.GL_FRONT, gl.GL_SHININESS, material.shininess)

    def translate(self, x, y, z):
        self._gl.glTranslatef(x, y, z)

    def rotate(self, angle, x, y, z):
        self._gl.glRotatef(angle, x, y, z)

    def scale(self, x, y, z):
        self._gl.glScalef(x, y, z)

    def set_color(self, r, g, b, a=1.0):
        self._gl.glColor4f(r, g, b, a)

    def _mesh(self, kind, *args):
        gl = self._gl
        gl.glBegin(gl.GL_TRIANGLES)
        for triangle in _cached_mesh(kind, *args):
            for position, normal in triangle:
                gl.glNormal3f(*normal)
                gl.glVertex3f(*position)
        gl.glEnd()

    def box(self, sx, sy, sz):
        self._mesh("box", sx, sy, sz)

    def sphere(self, radius, slices, stacks):
        self._mesh("sphere", radius, slices, stacks)

    def torus(self, inner, outer, sides, rings):
        self._mesh("torus", inner, outer, sides, rings)

    def cone(self, base, height, slices, stacks):
        self._mesh("cone", base, height, slices, stacks)

    def _primitive(self, mode, vertices, normal=None):
        gl = self._gl
        gl.glBegin(mode)
        if normal is not None:
            gl.glNormal3f(*normal)
        for vertex in vertices:
            gl.glVertex3f(*vertex)
        gl.glEnd()

    def quads(self, vertices):
        self._primitive(self._gl.GL_QUADS, vertices)

    def triangles(self, vertices, normal=None):
        self._primitive(self._gl.GL_TRIANGLES, vertices, normal)

    def lines(self, vertices):
        self._primitive(self._gl.GL_LINES, vertices)

    def points(self, vertices, size=1.0):
        self._gl.glPointSize(size)
        self._primitive(self._gl.GL_POINTS, vertices)
        self._gl.glPointSize(1.0)

    def textured_quad(self, texture, y, x1, z1, x2, z2, s_scale, t_scale):
        gl = self._gl
        gl.glEnable(gl.GL_TEXTURE_2D)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self._textures[texture])
        gl.glTexEnvf(gl.GL_TEXTURE_ENV, gl.GL_TEXTURE_ENV_MODE, gl.GL_MODULATE)
        gl.glBegin(gl.GL_QUADS)
        for x, z in ((x1, z1), (x2, z1), (x2, z2), (x1, z2)):
            gl.glTexCoord2f(x * s_scale, z * t_scale)
            gl.glVertex3f(x, y, z)
        gl.glEnd()
        gl.glDisable(gl.GL_TEXTURE_2D)

    def lighting(self, enabled):
        (self._gl.glEnable if enabled else self._gl.glDisable)(self._gl.GL_LIGHTING)

    def blend(self, enabled):
        gl = self._gl
        if enabled:
            gl.glEnable(gl.GL_BLEND)
            gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)
        else:
            gl.glDisable(gl.GL_BLEND)


def _panel(canvas: Canvas, x, y, w, h, color):
    canvas.blend(True)
    canvas.set_color(*color)
    canvas.quads([(x, y, 0.0), (x + w, y, 0.0), (x + w, y + h, 0.0), (x, y + h, 0.0)])
    canvas.blend(False)


class DriftWindow:
    """The game window; wraps a pyglet window and handles its events."""

    def __init__(self, world: World | None = None, window=None) -> None:
        self.world = world if world is not None else World()
        self.controls = Controls(self.world)
        if window is None:
            import pyglet

            window = pyglet.window.Window(WINDOW_WIDTH, WINDOW_HEIGHT,
                                          caption="Pink Drift Racing", resizable=True)
        self.window = window
        self._canvas: GLCanvas | None = None
        window.push_handlers(self)

    def _gl_canvas(self) -> GLCanvas:
        if self._canvas is None:
            self._canvas = GLCanvas()
            gl = self._canvas._gl
            for cap in (gl.GL_DEPTH_TEST, gl.GL_LIGHTING, gl.GL_LIGHT0, gl.GL_NORMALIZE):
                gl.glEnable(cap)
            gl.glShadeModel(gl.GL_SMOOTH)
        return self._canvas

    def _apply_lighting(self, canvas: GLCanvas) -> None:
        gl = canvas._gl
        for name, value in light_parameters(self.world.night_mode).items():
            target = {"position": gl.GL_POSITION, "ambient": gl.GL_AMBIENT,
                      "diffuse": gl.GL_DIFFUSE, "specular": gl.GL_SPECULAR}[name]
            gl.glLightfv(gl.GL_LIGHT0, target, canvas._floats(value))

    def _draw_overlay(self, canvas: GLCanvas) -> list:
        gl = canvas._gl
        world = self.world
        gl.glMatrixMode(gl.GL_PROJECTION)
        gl.glPushMatrix()
        gl.glLoadIdentity()
        gl.glOrtho(0, 1000, 0, 550, -1, 1)
        gl.glMatrixMode(gl.GL_MODELVIEW)
        gl.glPushMatrix()
        gl.glLoadIdentity()
        canvas.lighting(False)
        gl.glDisable(gl.GL_DEPTH_TEST)

        _panel(canvas, 798, 498, 152, 14, (0.12, 0.12, 0.12, 0.85))
        hx = slider_handle_x(world.speed_multiplier)
        canvas.set_color(1.0, 0.78, 0.0)
        canvas.quads([(hx - 6, 494, 0), (hx + 6, 494, 0), (hx + 6, 516, 0), (hx - 6, 516, 0)])

        if world.confetti_active:
            canvas.blend(True)
            for c in world.confetti:
                with canvas.transform():
                    canvas.translate(c.x, c.y, 0.0)
                    canvas.rotate(c.rot, 0, 0, 1)
                    canvas.set_color(c.r, c.g, c.b, 0.92)
                    hw, hh = c.size * 0.5, c.size * 0.3
                    canvas.quads([(-hw, -hh, 0), (hw, -hh, 0), (hw, hh, 0), (-hw, hh, 0)])
            canvas.blend(False)

        if world.game_state is GameState.FINISHED:
            _panel(canvas, 250, 120, 500, 310, (0.0, 0.0, 0.0, 0.72))
            canvas.blend(True)
            canvas.set_color(1.0, 0.20, 0.60, 0.90)
            gl.glLineWidth(3.0)
            corners = [(250, 120, 0), (750, 120, 0), (750, 430, 0), (250, 430, 0)]
            canvas.lines([p for i in range(4) for p in (corners[i], corners[(i + 1) % 4])])
            gl.glLineWidth(1.0)
            canvas.blend(False)
            _panel(canvas, 340, 148, 160, 40, (1.0, 0.20, 0.60, 0.92))
            _panel(canvas, 520, 148, 180, 40, (0.18, 0.18, 0.22, 0.92))

        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glPopMatrix()
        gl.glMatrixMode(gl.GL_PROJECTION)
        gl.glPopMatrix()
        gl.glMatrixMode(gl.GL_MODELVIEW)
        canvas.lighting(True)
        return hud_lines(world) + victory_lines(world)

    def _draw_text(self, lines) -> None:
        import pyglet
        from pyglet import gl

        sx = self.window.width / 1000.0
        sy = self.window.height / 550.0
        gl.glDisable(gl.GL_LIGHTING)
        gl.glDisable(gl.GL_DEPTH_TEST)
        for line in lines:
            r, g, b = line.color
            pyglet.text.Label(
                line.text, font_size=line.font_size * 0.75 * sy,
                x=line.x * sx, y=line.y * sy,
                color=(int(r * 255), int(g * 255), int(b * 255), 255),
            ).draw()
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glEnable(gl.GL_LIGHTING)

    def on_draw(self):
        """Render the scene and overlays."""
        canvas = self._gl_canvas()
        gl = canvas._gl
        world = self.world
        self.on_resize(self.window.width, self.window.height)
        gl.glClearColor(*sky_color(world.night_mode))
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        gl.glMatrixMode(gl.GL_MODELVIEW)
        gl.glLoadIdentity()
        gl.glMultMatrixf(canvas._floats(_look_at(*camera_view(world))))
        self._apply_lighting(canvas)

        draw_night_sky(canvas, world.night_mode)
        draw_track(canvas, world.night_mode)
        draw_mountains(canvas, world.night_mode)
        draw_skid_marks(canvas, world)
        draw_smoke(canvas, world)
        draw_car(canvas, world)

        self._draw_text(self._draw_overlay(canvas))
        return True

    def on_resize(self, width, height):
        """Set a perspective projection for the new window size."""
        from pyglet import gl

        height = height or 1
        gl.glViewport(0, 0, width, height)
        gl.glMatrixMode(gl.GL_PROJECTION)
        gl.glLoadIdentity()
        gl.glMultMatrixf((gl.GLfloat * 16)(*_perspective(50.0, width / height, 0.5, 150.0)))
        gl.glMatrixMode(gl.GL_MODELVIEW)
        return True

    def tick(self, dt):
        """Advance the game by one frame."""
        update_car(self.world)
        self.world.smoke_time += SMOKE_STEP

    def _key(self, symbol):
        if symbol == _ESCAPE_SYMBOL:
            return ESCAPE
        if 32 <= symbol < 256:
            return chr(symbol)
        return symbol

    def on_key_press(self, symbol, modifiers):
        """Forward a key press to the controls; close on Escape."""
        self.controls.key_down(self._key(symbol))
        if self.controls.quit_requested:
            self.window.close()
        return True

    def on_key_release(self, symbol, modifiers):
        """Forward a key release to the controls."""
        self.controls.key_up(self._key(symbol))

    def on_mouse_press(self, x, y, button, modifiers):
        """Start dragging the speed slider if it was clicked."""
        if button == _LEFT_BUTTON:
            w, h = self.window.width, self.window.height
            self.controls.mouse_button(True, x, h - y, w, h)

    def on_mouse_release(self, x, y, button, modifiers):
        """Stop dragging the slider."""
        if button == _LEFT_BUTTON:
            w, h = self.window.width, self.window.height
            self.controls.mouse_button(False, x, h - y, w, h)

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        """Move the slider while dragging."""
        self.controls.mouse_drag(x, self.window.width)


def main(argv=None):
    """Open the game window and run until it is closed."""
    import pyglet

    game = DriftWindow()
    pyglet.clock.schedule_interval(game.tick, FRAME_INTERVAL)
    pyglet.app.run()
    return 0