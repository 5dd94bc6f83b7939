import math

import numpy as np
import pytest

from baudoedit.bem import read_bem
from baudoedit.editor import Camera, EditMode, Editor
from baudoedit.transform import ModelTransformation, model_matrix


def _editor():
    return Editor(
        [
            [ModelTransformation(pos=[1, 2, 3]), ModelTransformation(pos=[4, 5, 6])],
            [ModelTransformation()],
            [ModelTransformation(scale=[2, 2, 2]), ModelTransformation(), ModelTransformation()],
        ]
    )


def test_selected_starts_at_first_model():
    editor = _editor()
    assert editor.selected().pos == [1.0, 2.0, 3.0]


def test_cycle_group_wraps_both_ways():
    editor = _editor()
    editor.cycle_group(-1)
    assert editor.group_index == 2
    editor.cycle_group(1)
    assert editor.group_index == 0
    editor.cycle_group(1)
    assert editor.group_index == 1


def test_cycle_model_wraps_both_ways():
    editor = _editor()
    editor.cycle_model(1)
    assert editor.selected().pos == [4.0, 5.0, 6.0]
    editor.cycle_model(1)
    assert editor.model_index == 0
    editor.cycle_model(-1)
    assert editor.model_index == 1


def test_nudge_translate():
    editor = _editor()
    editor.nudge(EditMode.TRANSLATE, (1, -1, 0))
    assert editor.selected().pos == [2.0, 1.0, 3.0]


def test_nudge_rotate_uses_quarter_turns():
    editor = _editor()
    model = editor.nudge(EditMode.ROTATE, (0, 1, -1))
    assert model.rotation == pytest.approx([0.0, math.pi / 2, -math.pi / 2])


def test_nudge_scale():
    editor = _editor()
    editor.nudge(EditMode.SCALE, (0, 0, 1))
    assert editor.selected().scale == [1.0, 1.0, 2.0]


def test_nudge_rejects_wrong_length():
    with pytest.raises(ValueError):
        _editor().nudge(EditMode.SCALE, (1, 0))


def test_shift_x():
    editor = _editor()
    editor.shift_x(-2)
    assert editor.selected().pos == [-1.0, 2.0, 3.0]


def test_remove_selected_moves_last_into_place():
    editor = _editor()
    removed = editor.remove_selected()
    assert removed.pos == [1.0, 2.0, 3.0]
    assert len(editor.groups[0]) == 1
    assert editor.selected().pos == [4.0, 5.0, 6.0]


def test_remove_last_keeps_selection_in_range():
    editor = _editor()
    editor.cycle_model(1)
    editor.remove_selected()
    assert editor.model_index < len(editor.groups[0])


def test_remove_from_empty_group_raises():
    editor = Editor([[]])
    with pytest.raises(IndexError):
        editor.remove_selected()


def test_add_model_appends_default():
    editor = _editor()
    editor.cycle_group(1)
    model = editor.add_model()
    assert editor.groups[1][-1] is model
    assert len(editor.groups[1]) == 2
    assert model.scale == [1.0, 1.0, 1.0]
    assert model.pos == [0.0, 0.0, 0.0]


def test_model_matrices_follow_groups():
    editor = _editor()
    matrices = editor.model_matrices()
    assert [len(group) for group in matrices] == [2, 1, 3]
    assert np.allclose(matrices[2][0], model_matrix(editor.groups[2][0]))


def test_save_round_trip(tmp_path):
    editor = _editor()
    editor.nudge(EditMode.TRANSLATE, (0, 1, 0))
    path = tmp_path / "scene.bem"
    editor.save(path)
    assert read_bem(path) == editor.groups


def test_camera_look_without_motion_faces_x():
    camera = Camera()
    camera.look(0, 0)
    assert camera.center == pytest.approx([1.0, 0.0, 0.0])


@pytest.mark.parametrize("dx", [-50, -200, -350, -550, 100, 1000, -5000])
def test_camera_look_direction_matches_yaw(dx):
    camera = Camera()
    camera.look(dx, 0)
    assert 0 <= camera.yaw < 2 * math.pi
    assert camera.center[0] == pytest.approx(math.cos(camera.yaw))
    assert camera.center[2] == pytest.approx(-math.sin(camera.yaw))


def test_camera_pitch_is_clamped():
    camera = Camera()
    camera.look(0, 1000)
    assert camera.pitch == pytest.approx(math.pi - 0.01)
    camera.look(0, -1000)
    assert camera.pitch == pytest.approx(0.001)
    assert camera.center[1] > 0


def test_camera_move_forward_and_up():
    camera = Camera()
    camera.move(1, 0, 1)
    assert camera.pos == pytest.approx([0.0, 0.1, -2.9])


def test_camera_move_right_is_perpendicular():
    camera = Camera()
    camera.look(-30, 0)
    before = list(camera.pos)
    camera.move(0, 1, 0)
    step = np.subtract(camera.pos, before)
    assert step[0] * camera.center[0] + step[2] * camera.center[2] == pytest.approx(0.0)
    assert step[1] == 0.0


def test_camera_view_matrix_maps_eye_and_direction():
    camera = Camera()
    camera.look(-40, 20)
    view = camera.view_matrix()
    eye = np.array([*camera.pos, 1.0])
    assert np.allclose(view @ eye, [0.0, 0.0, 0.0, 1.0])
    target = np.array([p + c for p, c in zip(camera.pos, camera.center)] + [1.0])
    mapped = view @ target
    assert np.allclose(mapped[:2], [0.0, 0.0])
    assert mapped[2] < 0