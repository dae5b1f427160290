import pytest
from genma.workbench.canvas.path import (
    PathMode,
    PathRecorder,
    build_path,
    format_number,
)


def test_points_are_normalized_to_bounding_box():
    geometry = build_path([(120, 80), (140, 60), (160, 90)])
    assert (geometry.x, geometry.y) == (120, 60)
    assert (geometry.width, geometry.height) == (40, 30)
    assert geometry.points == ((0, 20), (20, 0), (40, 30))
    assert geometry.commands == "M 0 20 L 20 0 L 40 30"


def test_local_points_stay_within_size():
    geometry = build_path([(-5.5, 3), (10, -7.25), (2, 2)])
    for px, py in geometry.points:
        assert 0 <= px <= geometry.width
        assert 0 <= py <= geometry.height


@pytest.mark.parametrize("points", [[], [(10, 10)]])
def test_too_few_points(points):
    assert build_path(points) is None


def test_straight_line_has_minimum_extent():
    geometry = build_path([(0, 5), (30, 5)])
    assert (geometry.width, geometry.height) == (30, 1)


@pytest.mark.parametrize(
    "value, text",
    [(20.0, "20"), (12.5, "12.5"), (0, "0"), (-3.25, "-3.25"),
     (1 / 3, "0.3333")],
)
def test_format_number(value, text):
    assert format_number(value) == text


def test_click_mode_skips_repeated_point():
    recorder = PathRecorder(PathMode.CLICK)
    recorder.append(0, 0)
    recorder.append(10, 0)
    recorder.append(10, 0)
    assert len(recorder) == 2


def test_continuous_mode_keeps_every_sample():
    recorder = PathRecorder(PathMode.CONTINUOUS)
    recorder.append(1, 1)
    recorder.append(1, 1)
    assert len(recorder) == 2


def test_preview_is_in_canvas_units():
    recorder = PathRecorder(PathMode.CONTINUOUS)
    recorder.append(100, 50)
    recorder.append(110.5, 60)
    assert recorder.preview() == "M 100 50 L 110.5 60"
    assert recorder.build().commands == "M 0 0 L 10.5 10"
