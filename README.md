# cubed

A small first-person raycaster. It reads a `.cub` scene file. The file names
four XPM wall textures, a floor colour, a ceiling colour and a grid map. The
program then opens a 640x480 pygame window in which you can walk through the
maze.

## Installing

```
pip install .
```

## Running

```
cubed path/to/level.cub
```

The command takes exactly one argument, a file whose name ends in `.cub`. If
the arguments are wrong, the scene is malformed or a texture cannot be read,
it prints an error on standard error and exits with status 1.

### Controls

| Key         | Action            |
|-------------|-------------------|
| W / S       | move forward/back |
| A / D       | strafe left/right |
| Left/Right  | turn              |
| Escape      | quit              |

Closing the window also quits. Moving forward and sideways at the same time
uses half the normal speed. Walls block movement separately on each axis.

## Scene files

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm

F 220,100,0
C 225,30,0

        1111111111111
        1000000000001
        1000N00000001
        1111111111111
```

- `NO`, `SO`, `WE` and `EA` each appear exactly once. Each gives the path of
  an XPM texture.
- `F` (floor) and `C` (ceiling) each appear exactly once. Each gives three
  comma-separated components from 0 to 255.
- The map follows the six elements, and blank lines before it are skipped. It
  may use `1` (wall), `0` (floor), a space (void) and exactly one player spawn
  inside the map. The spawn is `N`, `S`, `E` or `W`, the direction the player
  faces.
- The map must be closed. No floor cell may lie on its outer edge or next to
  a void cell.

## What it does not do

Wall textures must be XPM images; no other image format is read. The game
has walls, a floor colour and a ceiling colour only. It has no sprites, doors,
minimap, mouse control or sound.

## Using it as a library

The parts can also be used on their own:

- `cubed.scene.load_scene(path)` and `parse_scene(text)` return a `Scene`
  with `textures`, `ceiling`, `floor` and `grid`. They raise `MapError` when
  the scene is invalid.
- `cubed.xpm.load_xpm(path)` and `parse_xpm(text)` decode XPM images into a
  `Texture`. They raise `XpmError` when the data is invalid.
- `cubed.colornames.lookup_color(name)` resolves X11 colour names,
  ignoring case.
- `cubed.texture.Texture` is a 32-bit pixel buffer. It has `get_pixel`,
  `put_pixel`, `fill_background` and `rows`.
- `cubed.player.Player.from_grid(grid)` places the player at the spawn cell.
  `key_pressed`, `key_released` and `update` drive the movement.
- `cubed.raycaster.cast_ray(grid, pos_x, pos_y, ray_dir_x, ray_dir_y)` returns
  a `RayHit`. `render_frame(frame, textures, grid, player, colors)` draws the
  ceiling, the floor and the textured walls into a `Texture`.
- `cubed.game.Game.load(path)` builds a whole game. `tick()` renders one frame
  and advances the player. `run()` opens the window.

## Tests

```
pip install .[test]
pytest
```