import numpy as np
import pytest

from profilepath import Angle, Arc, Fillet, Line, Path, Point
from profilepath.errors import ProfilePathError, ProfilePathWarning
from profilepath.primitives import ArcElement, LineElement


class TestPath:
    @pytest.fixture
    def filleted_corner(self):
        return Path(
            Line((10, 10), (20, 10)),
            Fillet(radius=5),
            Line((20, 10), (20, 20)),
        )

    def test_elements(self, filleted_corner):
        assert len(filleted_corner) == 3
        assert isinstance(filleted_corner[1], ArcElement)
        assert [type(e) for e in filleted_corner] == [LineElement, ArcElement, LineElement]
        assert isinstance(filleted_corner.elements, tuple)
        assert filleted_corner.diagnostics == ()

    def test_end_points(self, filleted_corner):
        assert filleted_corner.start_point == Point(10, 10)
        assert filleted_corner.end_point == Point(20, 20)
        assert filleted_corner.is_continuous()

    def test_profile(self, filleted_corner):
        points = filleted_corner.profile(0.5)
        assert points[0] == Point(10, 10)
        assert points[-1] == Point(20, 20)
        assert max(a.distance_to(b) for a, b in zip(points, points[1:])) <= 0.5 + 1e-9

    def test_profile_array(self, filleted_corner):
        array = filleted_corner.profile_array(0.5)
        assert array.shape == (len(filleted_corner.profile(0.5)), 2)
        np.testing.assert_allclose(array[0], [10, 10])
        np.testing.assert_allclose(array[-1], [20, 20])

    def test_resample(self, filleted_corner):
        points = filleted_corner.resample(0.25)
        assert max(a.distance_to(b) for a, b in zip(points, points[1:])) <= 0.25 + 1e-9

    def test_invalid_resolution(self, filleted_corner):
        with pytest.raises(ValueError):
            filleted_corner.profile(0)

    def test_discontinuous_path(self):
        path = Path(Line((0, 0), (10, 0)), Line((0, 5), (10, 5)))
        assert not path.is_continuous()
        assert [d.code for d in path.diagnostics] == ["trim_failed"]

    def test_open_end(self):
        with pytest.warns(ProfilePathWarning):
            path = Path(Line((0, 0), (10, 0)), Line(heading=Angle(degrees=45)))
        assert path.end_point is None
        assert path.is_continuous()
        assert [d.code for d in path.diagnostics] == ["open_end"]

    def test_strict(self):
        with pytest.raises(ProfilePathError):
            Path(Line((0, 0), (10, 0)), Line((0, 5), (10, 5)), strict=True)

    def test_empty_path(self):
        path = Path()
        assert len(path) == 0
        assert path.start_point is None
        assert path.profile(0.1) == []
        assert path.profile_array(0.1).shape == (0, 2)

    def test_arc_profile_stays_on_circle(self):
        path = Path(
            Line((0, 0), (10, 0)),
            Arc(radius=2, from_heading=Angle(degrees=0)),
            Line((4, 2), (4, 10)),
        )
        arc = path[1]
        points = path.profile(0.1)
        on_arc = [p for p in points if 2 < p.x < 4 and p.y < 2]
        assert on_arc
        for point in on_arc:
            assert point.distance_to(arc.center) == pytest.approx(2.0)


class TestPathRendering:
    def test_to_png(self, tmp_path):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")

        path = Path(Line((0, 0), (10, 0)), Fillet(radius=2), Line((10, 0), (10, 10)))
        file_name = tmp_path / "profile.png"
        path.to_png(str(file_name), resolution=0.5)
        assert file_name.exists()
        assert file_name.stat().st_size > 0

    def test_to_png_empty_path(self):
        with pytest.raises(ValueError):
            Path().to_png("unused.png")
