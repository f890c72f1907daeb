# =============================================================================
# L4 Perception - Depth Grid Quantizer
# =============================================================================
# Buckets a point cloud into a fixed grid of angular cells. Each cell holds
# the generalized mean of the radial distances of the points it contains.
# =============================================================================

import logging
import numpy as np

from .types import Bijection
from .averaging import RECIPROCAL
from .transforms import spherical_of_cartesian, angle_to_index, cell_angles

from .config import (
    HORIZ_ANGULAR_SPAN,
    VERT_ANGULAR_SPAN,
    HORIZ_RES,
    VERT_RES,
    POINT_BUFFER_STRIDE
)

logger = logging.getLogger(__name__)


def as_point_array(points, num_points: int = None) -> np.ndarray:
    """
    Normalize a frame to an (N, 3) array of cartesian points.

    Args:
        points: (N, >=3) array, or a flat buffer of (x, y, z, confidence)
        num_points: Number of points to read (default: all)

    Returns:
        (N, 3) float array
    """
    arr = np.asarray(points, dtype=float)
    if arr.ndim == 1:
        if arr.size % POINT_BUFFER_STRIDE != 0:
            raise ValueError(
                f"Flat point buffer length {arr.size} is not a multiple of "
                f"{POINT_BUFFER_STRIDE}"
            )
        arr = arr.reshape(-1, POINT_BUFFER_STRIDE)
    if arr.ndim != 2 or (arr.shape[0] > 0 and arr.shape[1] < 3):
        raise ValueError(f"Expected points of shape (N, >=3), got {arr.shape}")
    if num_points is not None:
        arr = arr[:num_points]
    return arr[:, :3] if arr.size else np.empty((0, 3))


class DepthQuantizer:
    """
    Computes a quantized version of a point cloud.

    The grid has shape (horiz_res, vert_res); grid[i, j] covers the i-th
    horizontal and j-th vertical angular sub-span. Cells without points
    are +inf (maximally far).
    """

    def __init__(self,
                 horiz_res: int = HORIZ_RES,
                 vert_res: int = VERT_RES,
                 horiz_span: float = HORIZ_ANGULAR_SPAN,
                 vert_span: float = VERT_ANGULAR_SPAN,
                 transform: Bijection = RECIPROCAL):
        """
        Initialize the quantizer.

        Args:
            horiz_res: Number of horizontal cells
            vert_res: Number of vertical cells
            horiz_span: Horizontal field of view (radians)
            vert_span: Vertical field of view (radians)
            transform: Bijection used to average distances within a cell
        """
        self.horiz_res = horiz_res
        self.vert_res = vert_res
        self.horiz_span = horiz_span
        self.vert_span = vert_span
        self.transform = transform

        self.depth_matrix = np.full((horiz_res, vert_res), np.inf)
        self.counts = np.zeros((horiz_res, vert_res), dtype=int)

        # Statistics of the last frame
        self.num_points = 0
        self.num_dropped = 0
        self.num_clamped = 0

    def quantize(self, points, num_points: int = None) -> np.ndarray:
        """
        Quantize one frame.

        Args:
            points: (N, >=3) array or flat (x, y, z, c) buffer
            num_points: Number of points to read (default: all)

        Returns:
            (horiz_res, vert_res) grid of aggregated distances
        """
        xyz = as_point_array(points, num_points)
        sums = np.zeros((self.horiz_res, self.vert_res))
        counts = np.zeros((self.horiz_res, self.vert_res), dtype=int)

        r, theta, phi = spherical_of_cartesian(xyz[:, 0], xyz[:, 1], xyz[:, 2])

        # Singular samples (r = 0, or x = z = 0) have no direction
        valid = np.isfinite(r) & np.isfinite(theta) & np.isfinite(phi)
        self.num_points = int(xyz.shape[0])
        self.num_dropped = int(np.count_nonzero(~valid))
        r, theta, phi = r[valid], theta[valid], phi[valid]

        cols, col_clamped = angle_to_index(theta, self.horiz_res, self.horiz_span)
        rows, row_clamped = angle_to_index(phi, self.vert_res, self.vert_span)
        self.num_clamped = int(np.count_nonzero(col_clamped | row_clamped))

        if self.num_dropped or self.num_clamped:
            logger.debug("Quantizer: %d points dropped, %d clamped (of %d)",
                         self.num_dropped, self.num_clamped, self.num_points)

        np.add.at(sums, (cols, rows), self.transform.forward(r))
        np.add.at(counts, (cols, rows), 1)

        grid = np.full((self.horiz_res, self.vert_res), np.inf)
        occupied = counts > 0
        grid[occupied] = self.transform.inverse(sums[occupied] / counts[occupied])

        self.depth_matrix = grid
        self.counts = counts
        return grid

    def cell_angles(self):
        """
        Angles associated with each grid index.

        Returns:
            Tuple (thetas per column, phis per row)
        """
        return (cell_angles(self.horiz_res, self.horiz_span),
                cell_angles(self.vert_res, self.vert_span))

    def get_statistics(self) -> dict:
        """Get statistics of the last quantized frame."""
        return {
            "num_points": self.num_points,
            "dropped_points": self.num_dropped,
            "clamped_points": self.num_clamped,
            "occupied_cells": int(np.count_nonzero(self.counts)),
        }
