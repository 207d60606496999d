import pytest

from cube3d.game import Game, main
from cube3d.image import Image, get_color
from cube3d.player import MOVE_SPEED
from cube3d.raycaster import HEIGHT, WIDTH
from cube3d.scene import ErrorKind, SceneError, parse_scene

TEXTURES = {
    "north.xpm": 0x101010,
    "south.xpm": 0x202020,
    "west.xpm": 0x303030,
    "east.xpm": 0x404040,
}
HEADER = [
    "NO north.xpm\n",
    "SO south.xpm\n",
    "WE west.xpm\n",
    "EA east.xpm\n",
    "F 10,20,30\n",
    "C 40,50,60\n",
    "\n",
]
MAP = ["111111\n", "100001\n", "10N001\n", "100001\n", "111111\n"]


def _loader(path):
    image = Image(1, 1)
    image.put_pixel(0, 0, TEXTURES[path])
    return image


def _game(map_lines=MAP):
    return Game(parse_scene(HEADER + list(map_lines), _loader))


@pytest.fixture
def dummy_display(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")


def test_render_draws_sky_wall_and_floor():
    game = _game()
    frame = game.render()
    assert frame is game.frame
    assert frame.get_pixel(WIDTH // 2, 0) == get_color(40, 50, 60)
    assert frame.get_pixel(WIDTH // 2, HEIGHT - 1) == get_color(10, 20, 30)
    assert frame.get_pixel(WIDTH // 2, HEIGHT // 2) == TEXTURES["north.xpm"]


def test_forward_and_backward_keys_move_player():
    game = _game()
    start_x, start_y = game.player.x, game.player.y
    assert game.key_press(119) is True
    assert game.player.x == pytest.approx(start_x + MOVE_SPEED)
    assert game.player.y == pytest.approx(start_y)
    assert game.key_press(115) is True
    assert game.player.x == pytest.approx(start_x)


def test_left_then_right_restores_direction():
    game = _game()
    before = (game.player.dir_x, game.player.dir_y, game.player.plane_x, game.player.plane_y)
    game.key_press(97)
    assert game.player.dir_x != pytest.approx(before[0])
    game.key_press(100)
    after = (game.player.dir_x, game.player.dir_y, game.player.plane_x, game.player.plane_y)
    assert after == pytest.approx(before)


def test_escape_ends_game_without_moving():
    game = _game()
    before = (game.player.x, game.player.y)
    assert game.key_press(65307) is False
    assert (game.player.x, game.player.y) == before


def test_other_key_only_redraws():
    game = _game()
    before = (game.player.x, game.player.y, game.player.dir_x)
    assert game.key_press(32) is True
    assert (game.player.x, game.player.y, game.player.dir_x) == before
    assert game.frame.get_pixel(0, 0) == get_color(40, 50, 60)


def test_scene_without_spawn_is_rejected():
    lines = ["111111\n", "100001\n", "100001\n", "111111\n"]
    scene = parse_scene(HEADER + lines, _loader)
    with pytest.raises(SceneError) as info:
        Game(scene)
    assert info.value.kind is ErrorKind.MAP_ERROR


def test_main_wrong_argument_count(dummy_display, capsys):
    assert main([]) == 1
    assert capsys.readouterr().out == "Error\nCODE : 2\n"


def test_main_wrong_map_name(dummy_display, capsys):
    assert main(["map.txt"]) == 1
    assert capsys.readouterr().out == "Error\nCODE : 3\n"


def test_main_missing_file(dummy_display, capsys, tmp_path):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert capsys.readouterr().out == "Error\nCODE : 4\n"


def test_main_bad_map(dummy_display, capsys, tmp_path):
    path = tmp_path / "broken.cub"
    path.write_text("X\n")
    assert main([str(path)]) == 1
    assert capsys.readouterr().out == "Error\nCODE : 5\n"