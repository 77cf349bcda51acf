import math

import numpy as np
import pytest

from colavision.geometry import (
    ArcPlane,
    CircleFit2D,
    Line3D,
    PlaneFrame,
    dbscan,
    fit_circle_2d,
    fit_plane_pca,
    get_arc_steel_bars,
    get_intersection_points,
    largest_arc_coverage,
    lift_from_plane_2d,
    orthogonal_lsq,
    project_to_plane_2d,
)


def _circle(cx, cy, r, n, start=0.0, span=2 * math.pi, endpoint=False):
    t = np.linspace(start, start + span, n, endpoint=endpoint)
    return np.column_stack([cx + r * np.cos(t), cy + r * np.sin(t)])


def test_orthogonal_lsq_recovers_line():
    direction = np.array([1.0, 2.0, 2.0]) / 3.0
    base = np.array([4.0, -1.0, 7.0])
    pts = [base + s * direction for s in np.linspace(-10, 10, 21)]
    line, eigenvalue = orthogonal_lsq(pts)
    assert np.allclose(line.point, np.mean(pts, axis=0))
    assert abs(abs(line.direction @ direction) - 1.0) < 1e-9
    assert eigenvalue > 0


def test_orthogonal_lsq_identical_points_gives_zero():
    _, eigenvalue = orthogonal_lsq([[1.0, 2.0, 3.0]] * 4)
    assert eigenvalue == pytest.approx(0.0, abs=1e-12)


def test_orthogonal_lsq_empty_raises():
    with pytest.raises(ValueError):
        orthogonal_lsq([])


def test_fit_circle_recovers_parameters():
    fit = fit_circle_2d(_circle(3.0, -2.0, 5.0, 40))
    assert fit.ok
    assert fit.cx == pytest.approx(3.0)
    assert fit.cy == pytest.approx(-2.0)
    assert fit.r == pytest.approx(5.0)
    assert fit.mean_abs_res == pytest.approx(0.0, abs=1e-9)


def test_fit_circle_too_few_points():
    assert fit_circle_2d([[0, 0], [1, 1]]) == CircleFit2D()


def test_fit_circle_collinear_points_fail():
    fit = fit_circle_2d([[0, 0], [1, 0], [2, 0], [3, 0]])
    assert fit.ok is False


def test_arc_coverage_few_points():
    assert largest_arc_coverage([[1.0, 0.0]], 0.0, 0.0) == 0.0


def test_arc_coverage_full_circle_bounded():
    cov = largest_arc_coverage(_circle(0, 0, 1, 36), 0.0, 0.0)
    assert cov <= 2 * math.pi
    assert cov == pytest.approx(2 * math.pi - 2 * math.pi / 36)


def test_fit_plane_pca_fallback_for_few_points():
    frame = fit_plane_pca([[1, 2, 3], [4, 5, 6]])
    assert np.allclose(frame.origin, 0.0)
    assert np.allclose(frame.n, [0, 0, 1])


def test_fit_plane_pca_horizontal_plane():
    rng = np.random.default_rng(1)
    xy = rng.uniform(-10, 10, size=(50, 2))
    pts = np.column_stack([xy, np.full(50, 3.0)])
    frame = fit_plane_pca(pts)
    assert np.allclose(frame.origin, pts.mean(axis=0))
    assert abs(abs(frame.n[2]) - 1.0) < 1e-9
    assert abs(frame.ex @ frame.ey) < 1e-9
    assert np.linalg.norm(frame.ex) == pytest.approx(1.0)
    assert np.allclose(np.cross(frame.ex, frame.ey), frame.n)


def test_project_and_lift_round_trip():
    rng = np.random.default_rng(2)
    pts = rng.normal(size=(30, 3)) * [5, 5, 0.0] + [1, 2, 3]
    frame = fit_plane_pca(pts)
    planar = project_to_plane_2d(pts, frame)
    assert planar.shape == (30, 2)
    assert np.allclose(lift_from_plane_2d(planar, frame), pts)
    assert np.allclose(lift_from_plane_2d(planar[0], frame), pts[0])


def test_dbscan_labels_clusters_and_noise():
    pts = [[0, 0, 0], [0.5, 0, 0], [0, 0.5, 0],
           [10, 10, 10], [10.5, 10, 10], [10, 10.5, 10],
           [50, 50, 50]]
    labels = dbscan(pts, 1.0, 3)
    assert labels.tolist() == [0, 0, 0, 1, 1, 1, -1]


def test_dbscan_empty():
    assert len(dbscan([], 1.0, 3)) == 0


def test_get_arc_steel_bars_empty():
    assert get_arc_steel_bars([]) == []


def test_get_arc_steel_bars_finds_semicircle():
    planar = _circle(0.0, 0.0, 500.0, 300, span=math.pi, endpoint=True)
    pts = np.column_stack([planar, np.full(300, 100.0)])
    arcs = get_arc_steel_bars(pts)
    assert len(arcs) == 1
    arc = arcs[0]
    assert arc.radius == pytest.approx(500.0, rel=1e-6)
    assert np.allclose(arc.center3d, [0.0, 0.0, 100.0], atol=1e-6)
    assert abs(abs(arc.normal[2]) - 1.0) < 1e-9


def test_get_arc_steel_bars_ignores_small_clusters():
    planar = _circle(0.0, 0.0, 500.0, 100, span=math.pi, endpoint=True)
    pts = np.column_stack([planar, np.zeros(100)])
    assert get_arc_steel_bars(pts) == []


def test_intersection_with_plane():
    arc = ArcPlane(0, np.array([0.0, 0.0, 5.0]), np.array([0.0, 0.0, 1.0]), 1.0, 0.0, 0.0)
    line = Line3D([1.0, 2.0, 0.0], [0.0, 0.0, 1.0])
    result = get_intersection_points([line], [arc])
    assert len(result) == 1
    assert np.allclose(result[0], [1.0, 2.0, 5.0])


def test_intersection_skips_parallel():
    arc = ArcPlane(0, np.array([0.0, 0.0, 5.0]), np.array([0.0, 0.0, 1.0]), 1.0, 0.0, 0.0)
    line = Line3D([0.0, 0.0, 0.0], [1.0, 0.0, 0.0])
    assert get_intersection_points([line], [arc]) == []


def test_plane_frame_defaults_are_identity():
    frame = PlaneFrame()
    assert np.allclose(np.cross(frame.ex, frame.ey), frame.n)