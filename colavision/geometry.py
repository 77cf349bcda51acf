"""Line, plane and arc fitting on 3D point clouds, and line/plane intersections."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field

import numpy as np
from scipy.spatial import cKDTree

# Parameters of the arc detection
ARC_CLUSTER_EPS = 55.0
ARC_CLUSTER_MIN_POINTS = 5
ARC_MIN_CLUSTER_SIZE = 280
ARC_RESIDUAL_TOLERANCE = 18.0
ARC_SEMICIRCLE_TOLERANCE_DEG = 60.0

_PARALLEL_EPS = 1e-8
_SINGULAR_EPS = 1e-12


def _vec(values) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _points3(points) -> np.ndarray:
    return np.asarray(points, dtype=float).reshape(-1, 3)


@dataclass(eq=False)
class Line3D:
    """A straight line given by a point on it and a direction."""

    point: np.ndarray
    direction: np.ndarray

    def __post_init__(self) -> None:
        self.point = _vec(self.point)
        self.direction = _vec(self.direction)


@dataclass(eq=False)
class ArcPlane:
    """A circular arc found in a point cluster, with the plane it lies in."""

    cluster_id: int
    center3d: np.ndarray
    normal: np.ndarray
    radius: float
    coverage_rad: float
    residual_px: float


@dataclass
class CircleFit2D:
    """Result of a least-squares circle fit in the plane."""

    cx: float = 0.0
    cy: float = 0.0
    r: float = 0.0
    mean_abs_res: float = 0.0
    ok: bool = False


@dataclass(eq=False)
class PlaneFrame:
    """A plane with an orthonormal in-plane basis ``ex``, ``ey`` and unit normal ``n``."""

    origin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    ex: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.0, 0.0]))
    ey: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    n: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 1.0]))


def orthogonal_lsq(points) -> tuple[Line3D, float]:
    """Fit a line by orthogonal least squares.

    Returns the line through the mean of the points along the principal
    direction, and the largest eigenvalue of the scatter matrix (0 when
    all points coincide).
    """
    pts = _points3(points)
    if len(pts) == 0:
        raise ValueError("cannot fit a line to an empty point set")
    anchor = pts.mean(axis=0)
    centered = pts - anchor
    scatter = centered.T @ centered
    eigenvalues, eigenvectors = np.linalg.eigh(scatter)
    return Line3D(anchor, eigenvectors[:, 2].copy()), float(eigenvalues[2])


def fit_circle_2d(points) -> CircleFit2D:
    """Fit a circle to 2D points; ``ok`` is false when no fit is possible."""
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    out = CircleFit2D()
    if len(pts) < 3:
        return out

    centroid = pts.mean(axis=0)
    u = pts[:, 0] - centroid[0]
    v = pts[:, 1] - centroid[1]
    uu, vv = u * u, v * v
    suu, svv, suv = uu.sum(), vv.sum(), (u * v).sum()
    suuu, svvv = (uu * u).sum(), (vv * v).sum()
    suvv, svuu = (u * vv).sum(), (v * uu).sum()

    m = np.array([[suu, suv], [suv, svv]])
    b = np.array([0.5 * (suuu + suvv), 0.5 * (svvv + svuu)])
    if abs(np.linalg.det(m)) < _SINGULAR_EPS:
        return out

    uc, vc = np.linalg.solve(m, b)
    out.cx = float(uc + centroid[0])
    out.cy = float(vc + centroid[1])
    distances = np.hypot(pts[:, 0] - out.cx, pts[:, 1] - out.cy)
    out.r = float(distances.mean())
    out.mean_abs_res = float(np.abs(distances - out.r).mean())
    out.ok = all(math.isfinite(x) for x in (out.cx, out.cy, out.r))
    return out


def largest_arc_coverage(points, cx: float, cy: float) -> float:
    """Return the widest angular span, at most 2*pi, covered by points around a centre."""
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    n = len(pts)
    if n < 2:
        return 0.0
    two_pi = 2.0 * math.pi
    angles = np.sort(np.arctan2(pts[:, 1] - cy, pts[:, 0] - cx))
    ext = np.concatenate([angles, angles + two_pi])

    best = 0.0
    j = 0
    for i, start in enumerate(angles):
        while j + 1 < i + n and ext[j + 1] - start <= two_pi:
            j += 1
        best = max(best, float(ext[j] - start))
    return min(best, two_pi)


def fit_plane_pca(points) -> PlaneFrame:
    """Fit a plane through the points by principal component analysis.

    Fewer than three points give the identity frame at the origin.
    """
    pts = _points3(points)
    if len(pts) < 3:
        return PlaneFrame()

    centroid = pts.mean(axis=0)
    d = pts - centroid
    covariance = (d.T @ d) / len(pts)
    try:
        _, eigenvectors = np.linalg.eigh(covariance)
    except np.linalg.LinAlgError:
        return PlaneFrame(origin=centroid)

    normal = eigenvectors[:, 0].copy()
    length = np.linalg.norm(normal)
    normal = normal / length if length > 0.0 else np.array([0.0, 0.0, 1.0])

    axis = np.array([0.0, 0.0, 1.0]) if abs(normal[2]) < 0.9 else np.array([1.0, 0.0, 0.0])
    ex = axis - axis.dot(normal) * normal
    ex /= np.linalg.norm(ex)
    ey = np.cross(normal, ex)
    ey /= np.linalg.norm(ey)
    return PlaneFrame(origin=centroid, ex=ex, ey=ey, n=normal)


def project_to_plane_2d(point, frame: PlaneFrame) -> np.ndarray:
    """Return the in-plane coordinates of one point or of an array of points."""
    d = np.asarray(point, dtype=float) - frame.origin
    return np.stack([d @ frame.ex, d @ frame.ey], axis=-1)


def lift_from_plane_2d(point, frame: PlaneFrame) -> np.ndarray:
    """Return the 3D position of in-plane coordinates."""
    p = np.asarray(point, dtype=float)
    return frame.origin + p[..., 0:1] * frame.ex + p[..., 1:2] * frame.ey if p.ndim > 1 else (
        frame.origin + p[0] * frame.ex + p[1] * frame.ey
    )


def dbscan(points, eps: float, min_points: int) -> np.ndarray:
    """Cluster points by density.

    A point with at least ``min_points`` neighbours within ``eps`` (itself
    included) is a core point. Returns one label per point: clusters are
    numbered from 0 in order of discovery, noise is -1.
    """
    pts = _points3(points)
    labels = np.full(len(pts), -1, dtype=int)
    if len(pts) == 0:
        return labels

    neighbours = cKDTree(pts).query_ball_point(pts, eps)
    visited = np.zeros(len(pts), dtype=bool)
    cluster = 0
    for index, own in enumerate(neighbours):
        if visited[index]:
            continue
        visited[index] = True
        if len(own) < min_points:
            continue
        labels[index] = cluster
        queue = deque(own)
        while queue:
            j = queue.popleft()
            if labels[j] == -1:
                labels[j] = cluster
            if visited[j]:
                continue
            visited[j] = True
            labels[j] = cluster
            if len(neighbours[j]) >= min_points:
                queue.extend(neighbours[j])
        cluster += 1
    return labels


def get_arc_steel_bars(points) -> list[ArcPlane]:
    """Find circular arcs (semicircles or full circles) among dense clusters of points."""
    pts = _points3(points)
    if len(pts) == 0:
        return []

    labels = dbscan(pts, ARC_CLUSTER_EPS, ARC_CLUSTER_MIN_POINTS)
    if labels.max() < 0:
        return []

    tolerance = math.radians(ARC_SEMICIRCLE_TOLERANCE_DEG)
    arcs: list[ArcPlane] = []
    for cid in np.unique(labels[labels >= 0]):
        cluster = pts[labels == cid]
        if len(cluster) < ARC_MIN_CLUSTER_SIZE:
            continue

        frame = fit_plane_pca(cluster)
        planar = project_to_plane_2d(cluster, frame)
        fit = fit_circle_2d(planar)
        if not fit.ok or fit.r <= 0:
            continue

        coverage = largest_arc_coverage(planar, fit.cx, fit.cy)
        is_arc = (
            abs(coverage - math.pi) <= tolerance or abs(coverage - 2.0 * math.pi) <= tolerance
        )
        if is_arc and fit.mean_abs_res <= ARC_RESIDUAL_TOLERANCE:
            arcs.append(
                ArcPlane(
                    cluster_id=int(cid),
                    center3d=lift_from_plane_2d([fit.cx, fit.cy], frame),
                    normal=frame.n.copy(),
                    radius=fit.r,
                    coverage_rad=coverage,
                    residual_px=fit.mean_abs_res,
                )
            )
    return arcs


def get_intersection_points(lines, arcs) -> list[np.ndarray]:
    """Intersect every line with the plane of every arc; parallel pairs are skipped."""
    planes = [
        (_vec(arc.normal), -float(np.dot(arc.normal, arc.center3d))) for arc in arcs
    ]
    intersections = []
    for line in lines:
        point, direction = _vec(line.point), _vec(line.direction)
        for normal, offset in planes:
            denom = float(normal @ direction)
            if abs(denom) < _PARALLEL_EPS:
                continue
            t = -(float(normal @ point) + offset) / denom
            intersections.append(point + direction * t)
    return intersections