"""
Builders shared by the test modules.
"""
import numpy as np

from L4_perception import Blob, spherical_of_cartesian, cartesian_of_spherical


def blob_at(x, y, z, size=60):
    """Blob whose centroid is the cartesian point (x, y, z)."""
    r, theta, phi = spherical_of_cartesian(x, y, z)
    return Blob(average_r=float(r), size=size,
                average_theta=float(theta), average_phi=float(phi))


def points_in_cell(i, j, distances, res=64, span=np.pi):
    """Points along the centre direction of grid cell (i, j), one per distance."""
    theta = (i + 0.5) * span / res - span / 2
    phi = (j + 0.5) * span / res - span / 2
    x, y, z = cartesian_of_spherical(np.asarray(distances, dtype=float), theta, phi)
    return np.column_stack([x, y, z])
