"""Heads-up display text, victory overlay text and input handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from pinkdrift.state import GameState, World

ORTHO_WIDTH = 1000.0
ORTHO_HEIGHT = 550.0

SLIDER_LEFT = 800.0
SLIDER_WIDTH = 150.0
SLIDER_MIN = 0.5
SLIDER_RANGE = 1.5

ESCAPE = "\x1b"
NO_TIME = "--:--.--"

CONTROLS_HELP = (
    "W/S = gas/rem   A/D = steer   SPACE = drift   C = camera   "
    "N = siang/malam   0 = reset"
)


class _Text(NamedTuple):
    x: float
    y: float
    font_size: int
    color: tuple[float, float, float]
    text: str


def format_time(seconds: float) -> str:
    """Format seconds as mm:ss.hh."""
    minutes = int(seconds / 60)
    secs = int(seconds) % 60
    hundredths = int((seconds - int(seconds)) * 100.0)
    return f"{minutes:02d}:{secs:02d}.{hundredths:02d}"


def _best(world: World) -> str:
    return NO_TIME if world.best_time is None else format_time(world.best_time)


def hud_lines(world: World) -> list[_Text]:
    """Text lines of the in-race HUD, in 1000x550 screen coordinates."""
    lines = []
    if world.is_drifting:
        lines.append(_Text(30, 515, 18, (1.0, 0.2, 0.8), "DRIFT MODE!"))
    lines.append(_Text(30, 490, 12, (0.9, 0.9, 0.9), CONTROLS_HELP))

    kmh = int(abs(world.car_speed) * 650.0)
    lines.append(
        _Text(
            30,
            465,
            12,
            (1.0, 1.0, 1.0),
            "Speed: %d km/h   Drift Score: %.0f   Combo: x%.1f"
            % (kmh, world.drift_score, world.combo_multiplier),
        )
    )
    lines.append(
        _Text(
            30,
            440,
            12,
            (1.0, 1.0, 1.0),
            "Lap: %d   Checkpoint: %d/4   Time: %s   Best: %s   Cam: %d   [%s]"
            % (
                world.lap_count,
                world.next_checkpoint + 1,
                format_time(world.race_time),
                _best(world),
                world.camera_mode + 1,
                "Malam" if world.night_mode else "Siang",
            ),
        )
    )
    lines.append(
        _Text(800, 524, 12, (1.0, 1.0, 1.0), "Speed/Handling: %.1fx" % world.speed_multiplier)
    )
    return lines


def victory_lines(world: World) -> list[_Text]:
    """Text of the victory overlay; empty while the race is still running."""
    if world.game_state is not GameState.FINISHED:
        return []
    stats = (0.95, 0.95, 0.95)
    lines = [_Text(328, 385, 24, (1.0, 0.22, 0.62), "V I C T O R Y !")]
    if world.is_new_record:
        lines.append(_Text(358, 355, 18, (1.0, 0.90, 0.10), "*** NEW RECORD! ***"))
    lines.extend(
        [
            _Text(295, 320, 18, stats, "Waktu Tempuh  :  %s" % format_time(world.race_time)),
            _Text(295, 292, 18, stats, "Best Time     :  %s" % _best(world)),
            _Text(295, 264, 18, stats, "Drift Score   :  %.0f" % world.drift_score),
            _Text(295, 236, 18, stats, "Max Combo     :  %.0fx" % world.combo_multiplier),
            _Text(365, 163, 18, (1.0, 1.0, 1.0), "R = Restart"),
            _Text(545, 163, 18, (0.88, 0.88, 0.88), "0 = Full Reset"),
        ]
    )
    return lines


def slider_value(ortho_x: float) -> float:
    """Speed multiplier selected by the slider at horizontal screen position ortho_x."""
    t = min(max((ortho_x - SLIDER_LEFT) / SLIDER_WIDTH, 0.0), 1.0)
    return SLIDER_MIN + t * SLIDER_RANGE


def slider_handle_x(multiplier: float) -> float:
    """Horizontal screen position of the slider handle for a multiplier."""
    t = min(max((multiplier - SLIDER_MIN) / SLIDER_RANGE, 0.0), 1.0)
    return SLIDER_LEFT + t * SLIDER_WIDTH


def window_to_ortho(x: float, y: float, width: float, height: float) -> tuple[float, float]:
    """Map window pixels (origin top-left) to 1000x550 screen space (origin bottom-left)."""
    return x / width * ORTHO_WIDTH, ORTHO_HEIGHT - (y / height * ORTHO_HEIGHT)


def _on_slider(ox: float, oy: float) -> bool:
    return 780.0 <= ox <= 972.0 and 480.0 <= oy <= 532.0


@dataclass
class Controls:
    """Keyboard and mouse handling that acts on a World."""

    world: World
    quit_requested: bool = False

    def key_down(self, key: str | int) -> None:
        """Handle a key press: a character, or an int for a special key."""
        world = self.world
        if isinstance(key, int):
            world.special_keys.add(key)
            return
        world.normal_keys.add(key)
        if key == "0":
            world.reset()
        elif key in ("r", "R"):
            if world.game_state is GameState.FINISHED:
                world.restart()
        elif key in ("c", "C"):
            world.camera_mode = (world.camera_mode + 1) % 3
        elif key in ("n", "N"):
            world.night_mode = not world.night_mode
        elif key == ESCAPE:
            self.quit_requested = True

    def key_up(self, key: str | int) -> None:
        """Handle a key release."""
        if isinstance(key, int):
            self.world.special_keys.discard(key)
        else:
            self.world.normal_keys.discard(key)

    def mouse_button(self, pressed: bool, x: float, y: float, width: float, height: float) -> None:
        """Handle the left mouse button at window pixel (x, y), origin top-left."""
        if not pressed:
            self.world.dragging_slider = False
            return
        ox, oy = window_to_ortho(x, y, width, height)
        if _on_slider(ox, oy):
            self.world.dragging_slider = True
            self.world.speed_multiplier = slider_value(ox)

    def mouse_drag(self, x: float, width: float) -> None:
        """Move the slider while it is being dragged."""
        if not self.world.dragging_slider:
            return
        ox = x / width * ORTHO_WIDTH
        self.world.speed_multiplier = slider_value(ox)