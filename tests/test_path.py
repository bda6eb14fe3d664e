"""Tests for PathModel."""

import pytest
import numpy as np

from curveblur.core import PathModel, rotate_points


POINTS = [(40, 160), (100, 40), (160, 160)]


class TestRotation:
    @pytest.mark.parametrize("theta", [0.0, 37.5, 90.0, -123.0, 720.0])
    def test_view_is_rotated_canonical(self, theta):
        path = PathModel(POINTS, frame_size=200, rotation=theta)
        expected = rotate_points(np.array(POINTS, dtype=float), theta, (100, 100))

        assert np.allclose(path.view_points, expected)
        assert np.allclose(rotate_points(path.view_points, -theta, (100, 100)), POINTS)

    def test_rotate_quarter_turn(self):
        out = rotate_points(np.array([[200.0, 100.0]]), 90.0, (100, 100))
        assert np.allclose(out, [[100.0, 200.0]])

    def test_set_rotation_keeps_canonical(self):
        path = PathModel(POINTS)
        path.set_rotation(30)
        path.set_rotation(30)

        assert np.allclose(path.canonical_points, POINTS)
        assert np.allclose(path.view_points, rotate_points(np.array(POINTS, float), 30, (100, 100)))


class TestInsert:
    def test_insert_too_close(self):
        path = PathModel(POINTS)
        assert path.insert_point((105, 45)) is False
        assert len(path) == 3

    def test_insert_on_nearest_segment(self):
        path = PathModel(POINTS)
        assert path.insert_point((130, 100)) is True
        assert len(path) == 4
        assert np.allclose(path.canonical_points[2], (130, 100))

    def test_insert_first_segment(self):
        path = PathModel(POINTS)
        assert path.insert_point((70, 100))
        assert np.allclose(path.canonical_points[1], (70, 100))

    def test_insert_rotated_writes_canonical(self):
        path = PathModel(POINTS, rotation=90)
        view_target = rotate_points(np.array([[130.0, 100.0]]), 90, (100, 100))[0]

        assert path.insert_point(view_target)
        assert np.allclose(path.canonical_points[2], (130, 100))
        assert np.allclose(path.view_points[2], view_target)

    def test_insert_tie_picks_first_segment(self):
        # (100, 40) is equidistant from both segments of a symmetric zigzag
        path = PathModel([(0, 0), (100, 100), (200, 0)])
        assert path.insert_point((100, 40))
        assert np.allclose(path.canonical_points[1], (100, 40))


class TestRemoveMove:
    def test_remove_two_point_path(self):
        path = PathModel([(0, 0), (10, 10)])
        assert path.remove_point(0) is False
        assert len(path) == 2

    def test_remove(self):
        path = PathModel(POINTS)
        assert path.remove_point(1) is True
        assert np.allclose(path.canonical_points, [(40, 160), (160, 160)])

    def test_remove_out_of_range(self):
        path = PathModel(POINTS)
        assert path.remove_point(5) is False
        assert len(path) == 3

    def test_move_clamps_to_frame(self):
        path = PathModel(POINTS)
        path.move_point(0, (-50, 250))
        assert np.allclose(path.canonical_points[0], (0, 200))

    def test_move_rotated(self):
        path = PathModel(POINTS, rotation=45)
        target = rotate_points(np.array([[60.0, 70.0]]), 45, (100, 100))[0]
        assert path.move_point(1, target) is True

        assert np.allclose(path.canonical_points[1], (60, 70))
        assert np.allclose(path.view_points[1], target)

    @pytest.mark.parametrize("index", [7, 3, -1])
    def test_move_out_of_range(self, index):
        path = PathModel(POINTS)

        assert path.move_point(index, (10, 10)) is False
        assert np.allclose(path.canonical_points, POINTS)


class TestFindNearest:
    def test_box_hit(self):
        path = PathModel(POINTS)
        # Euclidean distance ~9.9 but inside the 8-unit box on each axis
        assert path.find_nearest((107, 47), 8) == 1

    def test_miss(self):
        path = PathModel(POINTS)
        assert path.find_nearest((100, 100), 8) is None

    def test_reset_needs_two_points(self):
        with pytest.raises(ValueError):
            PathModel([(0, 0)])
