# =============================================================================
# L4 Perception - Types and Data Structures
# =============================================================================
# Common data structures for quantization and blob extraction.
# =============================================================================

import numpy as np
from dataclasses import dataclass
from typing import Callable, Tuple

from .transforms import cartesian_of_spherical


# =============================================================================
# Averaging Transform
# =============================================================================

@dataclass(frozen=True)
class Bijection:
    """
    An invertible function used for generalized f-means.

    Both callables must accept scalars and numpy arrays.
    """
    forward: Callable
    inverse: Callable
    name: str = "custom"


# =============================================================================
# Blob
# =============================================================================

@dataclass(frozen=True)
class Blob:
    """
    Aggregate of contiguous grid cells representing one physical object.

    Equality covers every field. Sorting orders blobs by average_r only
    (nearer first); the order among blobs at the same distance is arbitrary.
    """
    average_r: float         # Generalized-mean radial distance
    size: int                # Number of grid cells
    average_theta: float     # Mean horizontal angle (radians)
    average_phi: float       # Mean vertical angle (radians)

    def __lt__(self, other: "Blob") -> bool:
        if not isinstance(other, Blob):
            return NotImplemented
        return self.average_r < other.average_r

    @classmethod
    def from_cells(cls, rs, thetas, phis, transform: Bijection) -> "Blob":
        """
        Build a blob from the (distance, theta, phi) triples of its cells.

        Args:
            rs: Cell distances
            thetas: Cell horizontal angles
            phis: Cell vertical angles
            transform: Bijection used to average the distances

        Returns:
            Blob with generalized-mean distance and arithmetic-mean angles
        """
        from .averaging import generalized_average

        thetas = np.asarray(thetas, dtype=float)
        phis = np.asarray(phis, dtype=float)
        return cls(
            average_r=generalized_average(rs, transform),
            size=int(thetas.size),
            average_theta=float(np.mean(thetas)),
            average_phi=float(np.mean(phis)),
        )

    def cartesian(self) -> np.ndarray:
        """Centroid of the blob as [x, y, z]."""
        return np.array(cartesian_of_spherical(
            self.average_r, self.average_theta, self.average_phi
        ), dtype=float)

    def distance_sq_to(self, other: "Blob") -> float:
        """Square of the euclidean distance between both centroids."""
        diff = self.cartesian() - other.cartesian()
        return float(diff @ diff)

    def spherical(self) -> Tuple[float, float, float]:
        return self.average_r, self.average_theta, self.average_phi
