import pytest

from cubraycast.scene import (
    ERR_CONFIG,
    ERR_FILE,
    ERR_MAP,
    Direction,
    SceneError,
    check_map,
    find_player,
    is_player,
    load_scene,
    pad_grid,
    parse_scene,
)
from cubraycast.textutil import rgb_to_int

CONFIG = [
    "NO ./n.xpm",
    "SO ./s.xpm",
    "",
    "WE ./w.xpm",
    "EA ./e.xpm",
    "F 220,100,0",
    "C 225,30,0",
    "",
]

MAP = [
    "111111",
    "100001",
    "10N001",
    "111111",
]


def scene_lines(map_lines=MAP, config=CONFIG):
    return list(config) + list(map_lines)


def test_parse_scene_reads_configuration():
    scene = parse_scene(scene_lines())
    assert scene.textures[Direction.NORTH] == "./n.xpm"
    assert scene.textures[Direction.SOUTH] == "./s.xpm"
    assert scene.textures[Direction.WEST] == "./w.xpm"
    assert scene.textures[Direction.EAST] == "./e.xpm"
    assert scene.floor_color == rgb_to_int(220, 100, 0)
    assert scene.ceiling_color == rgb_to_int(225, 30, 0)


def test_parse_scene_locates_player_and_clears_marker():
    scene = parse_scene(scene_lines())
    assert (scene.player_x, scene.player_y, scene.player_dir) == (2, 2, "N")
    assert scene.grid[2] == "100001"
    assert scene.width == len(MAP[0])
    assert scene.height == len(MAP)


def test_parse_scene_pads_ragged_map():
    scene = parse_scene(scene_lines(["1111", "10E1", "111"]))
    assert scene.grid == ["1111", "1001", "111 "]
    assert scene.player_dir == "E"


def test_texture_path_strips_leading_spaces_only():
    config = ["NO    ./tex.xpm  "] + CONFIG[1:]
    scene = parse_scene(scene_lines(config=config))
    assert scene.textures[Direction.NORTH] == "./tex.xpm  "


def test_duplicate_entries_count_towards_six():
    config = ["NO a"] * 6
    scene = parse_scene(scene_lines(config=config))
    assert scene.textures[Direction.NORTH] == "a"
    assert scene.textures[Direction.SOUTH] is None
    assert scene.floor_color == -1
    assert scene.ceiling_color == -1


def test_color_tolerates_empty_fields():
    config = CONFIG[:5] + ["F 1,,2,3", "C 0,0,0"]
    scene = parse_scene(scene_lines(config=config))
    assert scene.floor_color == rgb_to_int(1, 2, 3)


@pytest.mark.parametrize(
    "color_line",
    ["F 256,0,0", "F -1,0,0", "F 1,2", "F 1,2,3,4", "F ", "C 0,0,300"],
)
def test_bad_colors_are_rejected(color_line):
    config = CONFIG[:5] + [color_line, "C 0,0,0"]
    with pytest.raises(SceneError) as excinfo:
        parse_scene(scene_lines(config=config))
    assert str(excinfo.value) == ERR_CONFIG


@pytest.mark.parametrize("bad", ["XX foo", "NO", " NO ./n.xpm", "F"])
def test_unknown_config_line_is_rejected(bad):
    config = [bad] + CONFIG[1:]
    with pytest.raises(SceneError) as excinfo:
        parse_scene(scene_lines(config=config))
    assert str(excinfo.value) == ERR_CONFIG


def test_truncated_config_is_rejected():
    with pytest.raises(SceneError) as excinfo:
        parse_scene(CONFIG[:4])
    assert str(excinfo.value) == ERR_CONFIG


def test_missing_map_is_rejected():
    with pytest.raises(SceneError) as excinfo:
        parse_scene(CONFIG + ["", ""])
    assert str(excinfo.value) == ERR_MAP


@pytest.mark.parametrize(
    "map_lines",
    [
        ["1111", "10N1", "1101"],
        ["1111", "10N1", "11 1", "1111"],
        ["1111", "1XN1", "1111"],
        ["1111", "1001", "1111"],
        ["11111", "1NS01", "11111"],
        ["1111", "N001", "1111"],
    ],
)
def test_invalid_maps_are_rejected(map_lines):
    with pytest.raises(SceneError) as excinfo:
        parse_scene(scene_lines(map_lines))
    assert str(excinfo.value) == ERR_MAP


def test_blank_lines_inside_map_are_skipped():
    scene = parse_scene(scene_lines(["1111", "", "10W1", "", "1111"]))
    assert scene.height == 3
    assert scene.player_dir == "W"


def test_is_player():
    assert all(is_player(c) for c in "NSEW")
    assert not any(is_player(c) for c in "01 x")
    assert not is_player("")


def test_pad_grid_makes_equal_widths():
    grid = pad_grid(["1", "111", "11"])
    assert {len(row) for row in grid} == {3}
    assert [row.rstrip(" ") for row in grid] == ["1", "111", "11"]


def test_check_map_accepts_spaces_outside_walls():
    grid = pad_grid([" 111", "1101", "1001", "1111"])
    check_map(grid)
    assert grid[0] == " 111"


def test_check_map_rejects_floor_next_to_space():
    with pytest.raises(SceneError):
        check_map(["11111", "10 01", "11111"])


def test_find_player_returns_position_and_cleared_grid():
    x, y, direction, grid = find_player(["111", "1S1", "111"])
    assert (x, y, direction) == (1, 1, "S")
    assert grid == ["111", "101", "111"]


def test_find_player_requires_exactly_one():
    with pytest.raises(SceneError):
        find_player(["111", "101", "111"])
    with pytest.raises(SceneError):
        find_player(["1111", "1NW1", "1111"])


def test_load_scene_from_file(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text("\n".join(scene_lines()) + "\n", encoding="latin-1")
    scene = load_scene(path)
    assert scene.player_dir == "N"
    assert scene.grid == parse_scene(scene_lines()).grid


def test_load_scene_rejects_carriage_returns(tmp_path):
    path = tmp_path / "level.cub"
    path.write_bytes(("\r\n".join(scene_lines()) + "\r\n").encode("latin-1"))
    with pytest.raises(SceneError):
        load_scene(path)


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(SceneError) as excinfo:
        load_scene(tmp_path / "absent.cub")
    assert str(excinfo.value) == ERR_FILE