# =============================================================================
# L4 Perception - Perception Layer
# =============================================================================
# Quantization followed by blob extraction for one point-cloud frame.
# =============================================================================

import numpy as np
from typing import List, Optional

from .types import Blob, Bijection
from .averaging import RECIPROCAL
from .quantizer import DepthQuantizer
from .blobs import BlobExtractor

from .config import (
    HORIZ_ANGULAR_SPAN,
    VERT_ANGULAR_SPAN,
    HORIZ_RES,
    VERT_RES,
    MAX_CELL_DISTANCE,
    MIN_BLOB_SIZE,
    MAX_BLOB_DISTANCE,
    MAX_NUM_BLOBS
)


class PerceptionLayer:
    """
    Complete L4 Perception Layer.

    Pipeline:
    1. Quantize the point cloud into a depth grid
    2. Extract the nearest blobs from the grid

    Provides the ranked Blob list for the L5 sonification layer.
    """

    def __init__(self,
                 transform: Bijection = RECIPROCAL,
                 horiz_res: int = HORIZ_RES,
                 vert_res: int = VERT_RES,
                 horiz_span: float = HORIZ_ANGULAR_SPAN,
                 vert_span: float = VERT_ANGULAR_SPAN,
                 max_cell_dist: float = MAX_CELL_DISTANCE,
                 min_blob_size: int = MIN_BLOB_SIZE,
                 max_blob_dist: float = MAX_BLOB_DISTANCE,
                 max_num_blobs: int = MAX_NUM_BLOBS):
        self.quantizer = DepthQuantizer(horiz_res, vert_res,
                                        horiz_span, vert_span, transform)
        self.extractor = BlobExtractor(transform, max_cell_dist, min_blob_size,
                                       max_blob_dist, max_num_blobs,
                                       horiz_span, vert_span)
        self.last_grid: Optional[np.ndarray] = None
        self.last_blobs: List[Blob] = []

    def process_point_cloud(self, points, num_points: int = None) -> List[Blob]:
        """
        Process a point cloud and return the ranked blobs.

        Args:
            points: (N, >=3) array or flat (x, y, z, c) buffer
            num_points: Number of points to read (default: all)

        Returns:
            Blobs, nearest first
        """
        grid = self.quantizer.quantize(points, num_points)
        return self.process_grid(grid)

    def process_grid(self, grid: np.ndarray) -> List[Blob]:
        """Extract blobs from an already quantized grid."""
        self.last_grid = grid
        self.last_blobs = self.extractor.extract(grid)
        return self.last_blobs

    def get_statistics(self) -> dict:
        stats = self.quantizer.get_statistics()
        stats["num_blobs"] = len(self.last_blobs)
        return stats
