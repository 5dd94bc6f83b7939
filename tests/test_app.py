import pytest

from baudoedit.app import main, parse_args
from baudoedit.bem import Mesh, save_bem, write_meshes
from baudoedit.transform import ModelTransformation


def test_parse_args_defaults():
    args = parse_args(["scene.bem", "meshes.vao"])
    assert args.scene == "scene.bem"
    assert args.meshes == "meshes.vao"
    assert args.shader_dir == "shader"
    assert args.save == "test.bem"


def test_parse_args_options():
    args = parse_args(["a.bem", "b.vao", "--shader-dir", "glsl", "--save", "out.bem"])
    assert args.shader_dir == "glsl"
    assert args.save == "out.bem"


def test_parse_args_requires_both_files():
    with pytest.raises(SystemExit):
        parse_args(["only.bem"])


def test_main_missing_scene(tmp_path, capsys):
    scene = tmp_path / "missing.bem"
    assert main([str(scene), str(tmp_path / "m.vao")]) == 1
    assert "missing.bem" in capsys.readouterr().err


def test_main_short_scene(tmp_path, capsys):
    scene = tmp_path / "short.bem"
    scene.write_bytes(b"\x01\x00\x00\x00")
    assert main([str(scene), str(tmp_path / "m.vao")]) == 1
    assert "too short" in capsys.readouterr().err


def test_main_scene_without_groups(tmp_path, capsys):
    scene = tmp_path / "empty.bem"
    save_bem(scene, [])
    assert main([str(scene), str(tmp_path / "m.vao")]) == 1
    assert "no groups" in capsys.readouterr().err


def test_main_too_few_meshes(tmp_path, capsys):
    scene = tmp_path / "scene.bem"
    meshes = tmp_path / "meshes.vao"
    save_bem(scene, [[ModelTransformation()]])
    write_meshes(meshes, [])
    assert main([str(scene), str(meshes)]) == 1
    assert "error" in capsys.readouterr().err


def test_main_missing_shaders(tmp_path, capsys):
    scene = tmp_path / "scene.bem"
    meshes = tmp_path / "meshes.vao"
    save_bem(scene, [[ModelTransformation()]])
    write_meshes(meshes, [Mesh()])
    shader_dir = tmp_path / "nowhere"
    assert main([str(scene), str(meshes), "--shader-dir", str(shader_dir)]) == 1
    assert "standard.vert" in capsys.readouterr().err