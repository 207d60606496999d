# cube3d

A small first-person maze explorer. It reads a `.cub` scene file that
names wall textures (XPM images), gives floor and ceiling colours and
draws a grid map, then renders the maze with a textured raycaster in an
800×600 window (shown with pygame).

## Installing

```
pip install .
```

## Running

```
cube3d path/to/level.cub
```

The command opens the window first, then expects exactly one argument:
a file name ending in `cub` whose base name is longer than four
characters. If anything goes wrong it prints `Error`, then `CODE : <n>`,
and exits with status 1. The codes are those of `cube3d.scene.ErrorKind`:

| Code | Meaning                                             |
|------|-----------------------------------------------------|
| 1    | the window could not be opened                      |
| 2    | wrong number of arguments                           |
| 3    | the file name does not end in `cub`                 |
| 4    | the file could not be opened                        |
| 5    | the scene is malformed or has no starting position  |

### Controls

| Key    | Action              |
|--------|---------------------|
| `W`    | move forward        |
| `S`    | move backward       |
| `A`    | turn left           |
| `D`    | turn right          |
| `Esc`  | quit                |

Closing the window also quits. Moving slides along walls rather than
passing through them.

## Scene files

A scene file starts with texture and colour lines in any order, each given
once. Blank lines may separate them:

```
NO assets/north.xpm
SO assets/south.xpm
EA assets/east.xpm
WE assets/west.xpm
F 220,100,0
C 225,30,0

111111
100001
1000N1
111111
```

* `NO`, `SO`, `EA`, `WE` name XPM images used for the walls; all four are
  required.
* `F` and `C` give the floor and ceiling colours as `R,G,B`, each from 0
  to 255; both are required.
* The first line that is none of the above starts the map. It uses `1`
  for walls, `0` for open floor, a space for empty space and at most one
  of `N`, `S`, `E`, `W` for the starting position. `N` and `E` face their
  own way; `S` and `W` both face west. Every open cell must be bordered by
  walls or floor, there must be at least one open cell, and blank lines
  may not appear inside the map.
* Map lines must be shorter than 40 characters, and the map may have at
  most 40 rows.

## Using it as a library

```python
from cube3d.scene import load_scene
from cube3d.xpm import load_xpm
from cube3d.image import Image
from cube3d.raycaster import render

scene = load_scene("level.cub", load_xpm)
frame = Image(800, 600)
render(scene, frame)
print(hex(frame.get_pixel(400, 300)))
```

* `cube3d.scene.parse_scene` does the same as `load_scene` from an
  iterable of lines; both take any texture loader, a callable from a path
  to an object with a `sample(u, v)` method. Failures raise
  `cube3d.scene.SceneError`, whose `kind` is an `ErrorKind`.
* `cube3d.xpm.parse_xpm_text` and `cube3d.xpm.load_xpm` read XPM images
  into `cube3d.image.Image`; malformed data raises `cube3d.xpm.XpmError`.
* `cube3d.raycaster.cast_ray` follows one screen column's ray and returns
  a `RayHit`; `draw_column` paints that column.
* `cube3d.game.Game` holds a scene and its frame; `Game.key_press` takes
  the key codes listed above and returns False on `Esc`.

## What it does not do

There are no sprites, doors, sound, mouse control or minimap, and no
built-in textures: every wall texture must be given in the scene file.

## Running the tests

```
pip install .[test]
pytest
```