# cubraycast

A small first-person raycasting viewer. It reads a `.cub` scene file that
names four XPM wall textures, gives floor and ceiling colours and draws a tile
map, and shows the scene in a 1280×720 pygame window.

## Installing

```
pip install .
```

## Running

```
cubraycast path/to/scene.cub
```

The command takes exactly one argument, and the file name has to end in `.cub`
with something before the extension. Errors are printed to standard error as
`Error` followed by a one-line description:

- a wrong number of arguments, or a name without the `.cub` ending, prints a
  message and exits with status 0;
- a scene that cannot be opened or is invalid, or a texture that cannot be
  loaded, prints a message and exits with status 1.

### Controls

| Key          | Action                  |
|--------------|-------------------------|
| W / S        | move forward / backward |
| A / D        | strafe left / right     |
| ← / →        | turn left / right       |
| Esc          | quit                    |

Closing the window also quits. Movement stops a short distance before walls.

## The `.cub` format

The file begins with six configuration lines. They may come in any order, and
empty lines between them are skipped:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

`NO`, `SO`, `WE` and `EA`, each followed by a space, name XPM texture files.
`F` and `C` give the floor and ceiling colours as exactly three
comma-separated values from 0 to 255. Any other line among the first six is
an error.

The map follows. It uses `1` for walls, `0` for open floor and spaces for
emptiness; shorter lines are padded with spaces. There must be exactly one
player start, written as `N`, `S`, `E` or `W`, which is the direction the
player faces. Empty lines inside the map are ignored. The map must be closed:
no floor or player tile may lie on the edge of the map or next to a space.

```
111111
100101
101001
1100N1
111111
```

## Using it as a library

```python
from cubraycast.scene import load_scene
from cubraycast.player import spawn_player
from cubraycast.raycast import cast_ray

scene = load_scene("maps/simple.cub")
player = spawn_player(scene)
ray = cast_ray(player, scene.grid, 640)
print(ray.perp_wall_dist, ray.tex_num)
```

The modules:

- `cubraycast.scene` — `load_scene`, `parse_scene`, `check_map`,
  `find_player`, `pad_grid`; the `Scene` dataclass, the `Direction` enum and
  `SceneError`.
- `cubraycast.player` — the `Player` dataclass with its movement and rotation
  methods, `spawn_player`, and `KeyState` for held keys.
- `cubraycast.raycast` — `cast_ray` (raises `ValueError` if a ray leaves the
  map without meeting a wall), `render_frame`, the `Ray` result and the
  `Frame` pixel buffer.
- `cubraycast.xpm` — `load_xpm` and `parse_xpm` decode XPM images into a
  `Texture` without needing a display; `XpmError` on failure.
- `cubraycast.colors` — `color_by_name` looks up X11 colour names such as
  `"steelblue"`, ignoring case.
- `cubraycast.textutil` — small parsing helpers used by the scene reader.
- `cubraycast.app` — `load_textures` and the `main` command.

## What it does not do

The viewer only walks through static walls: there are no sprites, doors,
minimap, mouse look or sound, and textures can only be read from XPM files.

## Tests

```
pip install .[test]
pytest
```