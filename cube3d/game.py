"""Game state, key handling and the command entry point."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from cube3d.display import Window
from cube3d.image import Image
from cube3d.player import Player
from cube3d.raycaster import HEIGHT, WIDTH, render
from cube3d.scene import ErrorKind, Scene, SceneError, load_scene

KEY_ESCAPE = 65307
KEY_FORWARD = 119
KEY_BACKWARD = 115
KEY_LEFT = 97
KEY_RIGHT = 100

TITLE = "cube3d"


class Game:
    """A loaded scene together with the frame it is rendered into."""

    def __init__(self, scene: Scene) -> None:
        if scene.player is None:
            raise SceneError(ErrorKind.MAP_ERROR, "map has no spawn point")
        self.scene = scene
        self.frame = Image(WIDTH, HEIGHT)

    @property
    def player(self) -> Player:
        return self.scene.player

    def key_press(self, keycode: int) -> bool:
        """Apply a key and redraw; return False when the game should end."""
        if keycode == KEY_ESCAPE:
            return False
        if keycode == KEY_FORWARD:
            self.player.move_forward(self.scene.grid)
        elif keycode == KEY_BACKWARD:
            self.player.move_backward(self.scene.grid)
        elif keycode == KEY_LEFT:
            self.player.rotate_left()
        elif keycode == KEY_RIGHT:
            self.player.rotate_right()
        self.render()
        return True

    def render(self) -> Image:
        """Draw the player's view into the frame and return it."""
        return render(self.scene, self.frame)


def _report(kind: ErrorKind) -> int:
    print(f"Error\nCODE : {int(kind)}")
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Open the window, load the scene named on the command line and play."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        window = Window(WIDTH, HEIGHT, TITLE)
    except RuntimeError:
        return _report(ErrorKind.INITIALIZATION_ERROR)
    with window:
        if len(args) != 1:
            return _report(ErrorKind.WRONG_ARG_NUMBER)
        try:
            game = Game(load_scene(args[0]))
        except SceneError as exc:
            return _report(exc.kind)
        window.show(game.render())
        while not window.closed:
            for key in window.poll_keys():
                if not game.key_press(key):
                    return 0
                window.show(game.frame)
    return 0