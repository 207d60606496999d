import pytest

from cube3d.image import get_color
from cube3d.player import Direction, spawn_player
from cube3d.scene import (
    MAX_MAP_WIDTH,
    ErrorKind,
    SceneError,
    SceneParser,
    is_map_name_valid,
    is_valid_map,
    load_scene,
    parse_color,
    parse_scene,
)

HEADER = (
    "NO ./north.xpm  \n"
    "SO ./south.xpm\n"
    "WE ./west.xpm\n"
    "EA ./east.xpm\n"
    "\n"
    "F 220,100,0\n"
    "C 225,30,0\n"
    "\n"
)
MAP = "111111\n100001\n1000N1\n111111"
VALID = HEADER + MAP


def fake_loader(path):
    return f"tex:{path}"


def failing_loader(path):
    raise OSError("no such texture")


def lines(text):
    return text.splitlines(keepends=True)


def expect_map_error(text, loader=fake_loader):
    with pytest.raises(SceneError) as info:
        parse_scene(lines(text), loader)
    assert info.value.kind is ErrorKind.MAP_ERROR


def test_valid_scene_colours_and_textures():
    scene = parse_scene(lines(VALID), fake_loader)
    assert scene.floor_color == get_color(220, 100, 0)
    assert scene.sky_color == get_color(225, 30, 0)
    assert scene.textures[Direction.NORTH] == "tex:./north.xpm"
    assert scene.textures[Direction.WEST] == "tex:./west.xpm"
    assert len(scene.textures) == 4


def test_valid_scene_grid_and_player():
    scene = parse_scene(lines(VALID), fake_loader)
    assert scene.grid[0][:6] == list("111111")
    assert scene.grid[2][:6] == list("1000N1")
    assert scene.grid[0][6] == " "
    assert scene.grid[4][0] == " "
    assert scene.player == spawn_player("N", 4, 2)


def test_parser_can_be_reused():
    parser = SceneParser(fake_loader)
    first = parser.parse(lines(VALID))
    second = parser.parse(lines(VALID))
    assert first == second


def test_single_trailing_blank_line_is_accepted():
    scene = parse_scene(lines(VALID + "\n\n"), fake_loader)
    assert scene.grid[3][:6] == list("111111")


def test_two_trailing_blank_lines_are_rejected():
    expect_map_error(VALID + "\n\n\n")


def test_blank_line_inside_map_is_rejected():
    expect_map_error(HEADER + "111111\n100001\n\n1000N1\n111111")


def test_duplicate_texture_is_rejected():
    expect_map_error("NO ./again.xpm\n" + VALID)


def test_duplicate_floor_is_rejected():
    expect_map_error("F 1,2,3\n" + VALID)


def test_missing_ceiling_is_rejected():
    expect_map_error(VALID.replace("C 225,30,0\n", ""))


def test_missing_texture_is_rejected():
    expect_map_error(VALID.replace("EA ./east.xpm\n", ""))


def test_bad_colour_is_rejected():
    expect_map_error(VALID.replace("F 220,100,0", "F 220,100"))


def test_texture_load_failure_is_map_error():
    expect_map_error(VALID, failing_loader)


def test_open_map_is_rejected():
    expect_map_error(VALID.replace("100001", "100 01"))


def test_two_spawn_points_are_rejected():
    expect_map_error(VALID.replace("100001", "1S0001"))


def test_invalid_map_character_is_rejected():
    expect_map_error(VALID.replace("1000N1", "1000X1"))


def test_too_long_map_row_is_rejected():
    long_row = "1" * (MAX_MAP_WIDTH - 1) + "\n"
    expect_map_error(HEADER + long_row + MAP)


def test_configuration_after_map_start_is_rejected():
    expect_map_error(VALID + "\nF 1,2,3\n")


@pytest.mark.parametrize(
    "text, rgb",
    [(" 1,2,3\n", (1, 2, 3)), ("0,0,0", (0, 0, 0)), ("\t255,255,255\n", (255, 255, 255))],
)
def test_parse_color_accepts(text, rgb):
    assert parse_color(text) == get_color(*rgb)


@pytest.mark.parametrize(
    "text", ["256,0,0\n", "1,2\n", "1,2,3,4\n", "a,b,c\n", "1,2,3 \n", "1, 2,3\n", "\n"]
)
def test_parse_color_rejects(text):
    with pytest.raises(SceneError) as info:
        parse_color(text)
    assert info.value.kind is ErrorKind.MAP_ERROR


@pytest.mark.parametrize(
    "name, valid",
    [
        ("maps/level.cub", True),
        ("a.cub", True),
        (".cub", False),
        ("maps/.cub", False),
        ("level.txt", False),
        ("level.cube", False),
    ],
)
def test_is_map_name_valid(name, valid):
    assert is_map_name_valid(name) is valid


def test_is_valid_map_enclosed_floor():
    assert is_valid_map(["111", "101", "111"]) is True


def test_is_valid_map_needs_a_floor_cell():
    assert is_valid_map(["111", "1N1", "111"]) is False


def test_is_valid_map_floor_on_edge():
    assert is_valid_map(["101", "101", "111"]) is False


def test_is_valid_map_floor_next_to_space():
    assert is_valid_map(["1111", "10 1", "1111"]) is False


def test_load_scene_from_file(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text(VALID)
    scene = load_scene(path, fake_loader)
    assert scene.player == spawn_player("N", 4, 2)


def test_load_scene_wrong_name(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text(VALID)
    with pytest.raises(SceneError) as info:
        load_scene(path, fake_loader)
    assert info.value.kind is ErrorKind.WRONG_MAP_NAME


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(SceneError) as info:
        load_scene(tmp_path / "absent.cub", fake_loader)
    assert info.value.kind is ErrorKind.OPEN_ERROR


def test_raised_errors_carry_reported_codes(tmp_path):
    wrong_name = tmp_path / "level.txt"
    wrong_name.write_text(VALID)
    codes = []
    for path in (wrong_name, tmp_path / "absent.cub"):
        with pytest.raises(SceneError) as info:
            load_scene(path, fake_loader)
        codes.append(info.value.kind.value)
    with pytest.raises(SceneError) as info:
        parse_scene(lines(VALID + "\n\n\n"), fake_loader)
    codes.append(info.value.kind.value)
    assert codes == [3, 4, 5]