import pytest

from cubraycast.app import load_textures, main
from cubraycast.scene import Direction, Scene
from cubraycast.xpm import XpmError

XPM_TEXT = (
    "static char *tex[] = {\n"
    '"2 2 2 1",\n'
    '"a c #FF0000",\n'
    '"b c #0000FF",\n'
    '"ab",\n'
    '"ba"\n'
    "};\n"
)


def _scene_with(paths):
    return Scene(grid=["1"], player_x=0, player_y=0, player_dir="N", textures=paths)


def _cub_text(texture_path, map_text="111\n1N1\n111\n"):
    return (
        f"NO {texture_path}\nSO {texture_path}\nWE {texture_path}\n"
        f"EA {texture_path}\nF 0,0,0\nC 255,255,255\n\n{map_text}"
    )


def test_load_textures_reads_all_four(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(XPM_TEXT)
    textures = load_textures(_scene_with({d: str(path) for d in Direction}))
    assert set(textures) == set(Direction)
    for texture in textures.values():
        assert texture.pixel(0, 0) == 0xFF0000
        assert texture.pixel(1, 0) == 0x0000FF


def test_load_textures_missing_file(tmp_path):
    paths = {d: str(tmp_path / "missing.xpm") for d in Direction}
    with pytest.raises(XpmError, match="Could not load texture."):
        load_textures(_scene_with(paths))


def test_load_textures_unset_path(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(XPM_TEXT)
    paths = {d: str(path) for d in Direction}
    paths[Direction.WEST] = None
    with pytest.raises(XpmError):
        load_textures(_scene_with(paths))


def test_main_rejects_wrong_argument_count(capsys):
    assert main([]) == 0
    assert "Error\nInvalid arguments" in capsys.readouterr().err
    assert main(["a.cub", "b.cub"]) == 0
    assert "Invalid arguments" in capsys.readouterr().err


def test_main_rejects_wrong_extension(capsys):
    assert main(["map.txt"]) == 0
    assert "Error\nCould not open file." in capsys.readouterr().err


def test_main_reports_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert "Could not open file." in capsys.readouterr().err


def test_main_reports_invalid_map(tmp_path, capsys):
    scene_path = tmp_path / "open.cub"
    scene_path.write_text(_cub_text(tmp_path / "w.xpm", "111\n1N \n111\n"))
    assert main([str(scene_path)]) == 1
    assert "Invalid map." in capsys.readouterr().err


def test_main_reports_missing_texture(tmp_path, capsys):
    scene_path = tmp_path / "room.cub"
    scene_path.write_text(_cub_text(tmp_path / "missing.xpm"))
    assert main([str(scene_path)]) == 1
    assert "Error\nCould not load texture." in capsys.readouterr().err