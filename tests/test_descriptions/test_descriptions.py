import pytest

from profilepath.cad_types import Angle, Direction, Point
from profilepath.descriptions import Arc, Connector, Fillet, Line
from profilepath.errors import NoIntersectionError


class TestLine:
    def test_points_are_converted(self):
        line = Line(start=(0, 0), end=(1, 2))
        assert line.start == Point(0, 0)
        assert line.end == Point(1, 2)
        assert line.is_completely_defined

    def test_heading_only_is_incomplete(self):
        assert not Line(heading=Angle(degrees=45)).is_completely_defined
        assert not Line(end=(1, 1)).is_completely_defined

    def test_reversed(self):
        line = Line(start=(0, 0), end=(1, 2), heading=Angle(degrees=30)).reversed
        assert line.start == Point(1, 2)
        assert line.end == Point(0, 0)
        assert line.heading.degrees == pytest.approx(210.0)

    def test_reversed_without_heading(self):
        assert Line(end=(3, 3)).reversed.heading is None


class TestArc:
    def test_radius_from_center_and_start(self):
        arc = Arc(center=(0, 0), start=(3, 4))
        assert arc.radius == pytest.approx(5.0)
        assert arc.is_completely_defined

    def test_radius_from_center_and_end(self):
        assert Arc(center=(1, 1), end=(1, 3)).radius == pytest.approx(2.0)

    def test_radius_required(self):
        with pytest.raises(ValueError):
            Arc()
        with pytest.raises(ValueError):
            Arc(center=(0, 0))

    def test_non_positive_radius_rejected(self):
        with pytest.raises(ValueError):
            Arc(radius=-1)

    def test_direction(self):
        assert Arc(1).direction is Direction.COUNTERCLOCKWISE
        assert Arc(1, "clockwise").direction is Direction.CLOCKWISE
        assert Arc(1, Direction.CLOCKWISE).negative_direction

    def test_radius_only_is_incomplete(self):
        assert not Arc(radius=2).is_completely_defined

    def test_from_heading_counterclockwise(self):
        arc = Arc(2, from_heading=Angle(degrees=0))
        assert arc.start_angle.isclose(Angle(degrees=270))

    def test_from_heading_clockwise(self):
        arc = Arc(2, Direction.CLOCKWISE, from_heading=Angle(degrees=0))
        assert arc.start_angle.isclose(Angle(degrees=90))

    def test_to_heading(self):
        arc = Arc(2, to_heading=Angle(degrees=90))
        assert arc.end_angle.isclose(Angle(degrees=0))

    def test_reversed(self):
        arc = Arc(
            2,
            center=(0, 0),
            start=(2, 0),
            end=(0, 2),
            start_angle=Angle(degrees=0),
            end_angle=Angle(degrees=90),
            from_x=2,
            to_x=0,
            center_y=0,
        ).reversed
        assert arc.direction is Direction.CLOCKWISE
        assert arc.start == Point(0, 2)
        assert arc.end == Point(2, 0)
        assert arc.start_angle.degrees == pytest.approx(90.0)
        assert arc.end_angle.degrees == pytest.approx(0.0)
        assert (arc.from_x, arc.to_x) == (0, 2)
        assert arc.center_y == 0

    def test_repr_lists_given_fields(self):
        text = repr(Arc(2, to_x=5))
        assert "to_x=5" in text
        assert "center=" not in text


class TestArcEndPoint:
    def test_counterclockwise(self):
        end = Arc.end_point(Point(0, 0), 5, Point(5, 0), 0, False)
        assert end.isclose(Point(0, 5))

    def test_clockwise(self):
        end = Arc.end_point(Point(0, 0), 5, Point(5, 0), 0, True)
        assert end.isclose(Point(0, -5))

    def test_nearer_target_wins(self):
        end = Arc.end_point(Point(0, 0), 5, Point(0, 5), 3, False)
        assert end.isclose(Point(3, -4))
        end = Arc.end_point(Point(0, 0), 5, Point(0, 5), 3, True)
        assert end.isclose(Point(3, 4))

    def test_out_of_reach(self):
        with pytest.raises(NoIntersectionError):
            Arc.end_point(Point(0, 0), 5, Point(5, 0), 6, False)


class TestFillet:
    def test_is_connector(self):
        fillet = Fillet(radius=2)
        assert isinstance(fillet, Connector)
        assert not fillet.is_completely_defined
        assert fillet.reversed is fillet

    def test_non_positive_radius_rejected(self):
        with pytest.raises(ValueError):
            Fillet(radius=0)
