# pinkdrift

A small 3D drift racing game. You drive a pink car around a rectangular
circuit and pass the checkpoints in order to set a lap time. If you hold the
handbrake at speed, the car drifts. The longer the drift lasts, the higher the
combo multiplier and the faster the drift score climbs.

## Installing

    pip install .

The game draws with OpenGL through pyglet. It needs a display and working
OpenGL drivers.

## Playing

    pinkdrift

The window opens at 1000 x 550 and can be resized.

| Key       | Action                                        |
|-----------|-----------------------------------------------|
| W / S     | accelerate / brake and reverse                |
| A / D     | steer left / right                            |
| Space     | handbrake (drift, only above a minimum speed) |
| C         | switch camera: fixed, chase, top-down         |
| N         | toggle day / night                            |
| R         | restart the race after finishing              |
| 0         | full reset, which also clears the best time   |
| Esc       | quit                                          |

The slider in the top-right corner sets the speed and handling multiplier,
from 0.5x to 2.0x. Drag it with the left mouse button.

Some HUD and victory-screen labels are in Indonesian, for example
"Siang"/"Malam" (day/night) and "Waktu Tempuh" (elapsed time).

### The race

The car starts on the south straight, facing west. Checkpoints count only in
their set order, and the HUD shows which checkpoint is next. The order is
north, east, then the chequered start/finish line on the south straight.
Crossing that line starts the lap and the timer. Then pass west, north and
east, and cross the finish line again to end the race.

When the race ends, confetti falls and a victory screen shows four values:

- the race time
- the best time
- the drift score
- the combo multiplier

If the race time is the best so far, a "NEW RECORD" banner also appears.

Hitting a wall ends the current drift and resets the combo. If the car was
driving into the wall, it also loses most of its speed.

## Using the pieces

The simulation does not depend on a window.

- `pinkdrift.state.World` holds the whole game state. Use `World.reset()` to
  reset everything, or `World.restart()` to keep the best time.
- `pinkdrift.physics.update_car(world)` advances the game by one frame of
  16 ms. It reads the held keys from `world.normal_keys`.
- `pinkdrift.physics.checkpoint_zone(x, z)` returns the checkpoint zone at a
  position.
- `pinkdrift.track.clamp_to_track(x, z)` keeps a position inside the circuit.
  It returns a `Collision` with the wall normal that was hit.
- `pinkdrift.hud.Controls` turns key presses, key releases and slider drags
  into changes to a `World`.
- `pinkdrift.hud.format_time` formats seconds as `mm:ss.hh`.
- `pinkdrift.textures.create_textures(seed)` generates the asphalt, grass and
  concrete textures. The same seed always gives the same images.

The drawing functions in `pinkdrift.environment` and `pinkdrift.car` send
their commands to a `pinkdrift.canvas.Canvas`. A
`pinkdrift.canvas.RecordingCanvas` keeps those commands in `calls`, together
with the transform, material, colour and blend state of each one, so you can
inspect them without OpenGL.

## What it does not do

- The best time lives only in memory. It is lost when the game closes.
- The game has no sound.
- Each race is a single lap, driven by one player.