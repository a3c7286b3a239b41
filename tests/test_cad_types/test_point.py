import pytest

from profilepath.cad_types import Direction, Point


class TestPoint:
    def test_of_tuple(self):
        point = Point.of((1, 2))
        assert point == Point(1.0, 2.0)
        assert isinstance(point.x, float)

    def test_of_point_is_identity(self):
        point = Point(1, 2)
        assert Point.of(point) is point

    def test_arithmetic(self):
        a = Point(1, 2)
        b = Point(3, 5)
        assert a + b == Point(4, 7)
        assert b - a == Point(2, 3)
        assert a * 2 == Point(2, 4)
        assert 2 * a == Point(2, 4)
        assert b / 2 == Point(1.5, 2.5)

    def test_unpacking(self):
        x, y = Point(3, 4)
        assert (x, y) == (3, 4)

    def test_distance(self):
        assert Point(0, 0).distance_to(Point(3, 4)) == pytest.approx(5.0)

    def test_isclose(self):
        assert Point(1, 1).isclose(Point(1 + 1e-10, 1))
        assert Point(1, 1).isclose((1, 1))
        assert not Point(1, 1).isclose(Point(1.001, 1))

    def test_points_are_hashable(self):
        assert len({Point(1, 2), Point(1, 2), Point(2, 1)}) == 2

    def test_json(self):
        point = Point(1.5, -2)
        assert point.to_json() == {"x": 1.5, "y": -2.0}
        assert Point.from_json(point.to_json()) == point


class TestDirection:
    def test_from_string(self):
        assert Direction("clockwise") is Direction.CLOCKWISE

    def test_is_negative(self):
        assert Direction.CLOCKWISE.is_negative
        assert not Direction.COUNTERCLOCKWISE.is_negative
