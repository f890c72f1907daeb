# =============================================================================
# L4 Perception - Blob Extraction
# =============================================================================
# Segments the depth grid into 4-connected components of near cells and
# keeps the nearest ones.
# =============================================================================

import heapq
import logging
import numpy as np
from typing import List
from scipy import ndimage

from .types import Blob, Bijection
from .averaging import RECIPROCAL
from .transforms import cell_angles

from .config import (
    HORIZ_ANGULAR_SPAN,
    VERT_ANGULAR_SPAN,
    MAX_CELL_DISTANCE,
    MIN_BLOB_SIZE,
    MAX_BLOB_DISTANCE,
    MAX_NUM_BLOBS
)

logger = logging.getLogger(__name__)

# Up/down/left/right neighbourhood
FOUR_CONNECTIVITY = ndimage.generate_binary_structure(2, 1)


def find_blobs(grid: np.ndarray,
               transform: Bijection = RECIPROCAL,
               max_cell_dist: float = MAX_CELL_DISTANCE,
               min_size: int = MIN_BLOB_SIZE,
               max_blob_dist: float = MAX_BLOB_DISTANCE,
               max_num: int = MAX_NUM_BLOBS,
               horiz_span: float = HORIZ_ANGULAR_SPAN,
               vert_span: float = VERT_ANGULAR_SPAN) -> List[Blob]:
    """
    Find all blobs made up of at least min_size grid cells, each cell at
    most max_cell_dist away, such that the averaged distance of the blob
    is at most max_blob_dist.

    The order of blobs with equal distance is unspecified.

    Args:
        grid: (horiz_res, vert_res) depth grid
        transform: Bijection used to average cell distances
        max_cell_dist: Distance ceiling for a cell to join a blob
        min_size: Minimum number of cells
        max_blob_dist: Maximum aggregated blob distance
        max_num: Maximum number of blobs returned
        horiz_span: Horizontal span covered by the grid (radians)
        vert_span: Vertical span covered by the grid (radians)

    Returns:
        Up to max_num blobs, nearest first
    """
    grid = np.asarray(grid, dtype=float)
    if max_num <= 0 or grid.size == 0:
        return []

    labels, num_components = ndimage.label(grid <= max_cell_dist,
                                           structure=FOUR_CONNECTIVITY)
    if num_components == 0:
        return []

    thetas = cell_angles(grid.shape[0], horiz_span)
    phis = cell_angles(grid.shape[1], vert_span)

    candidates = []
    for component, cells in enumerate(ndimage.find_objects(labels), start=1):
        mask = labels[cells] == component
        cols, rows = np.nonzero(mask)
        cols = cols + cells[0].start
        rows = rows + cells[1].start

        if cols.size < min_size:
            continue

        blob = Blob.from_cells(grid[cols, rows], thetas[cols], phis[rows], transform)
        if blob.average_r <= max_blob_dist:
            candidates.append(blob)

    logger.debug("Blob extraction: %d components, %d candidates",
                 num_components, len(candidates))

    return heapq.nsmallest(max_num, candidates, key=lambda b: b.average_r)


class BlobExtractor:
    """
    Blob extraction bound to a fixed configuration.
    """

    def __init__(self,
                 transform: Bijection = RECIPROCAL,
                 max_cell_dist: float = MAX_CELL_DISTANCE,
                 min_size: int = MIN_BLOB_SIZE,
                 max_blob_dist: float = MAX_BLOB_DISTANCE,
                 max_num: int = MAX_NUM_BLOBS,
                 horiz_span: float = HORIZ_ANGULAR_SPAN,
                 vert_span: float = VERT_ANGULAR_SPAN):
        self.transform = transform
        self.max_cell_dist = max_cell_dist
        self.min_size = min_size
        self.max_blob_dist = max_blob_dist
        self.max_num = max_num
        self.horiz_span = horiz_span
        self.vert_span = vert_span

    def extract(self, grid: np.ndarray) -> List[Blob]:
        """Find the nearest blobs of grid."""
        return find_blobs(grid, self.transform, self.max_cell_dist,
                          self.min_size, self.max_blob_dist, self.max_num,
                          self.horiz_span, self.vert_span)
