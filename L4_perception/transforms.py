# =============================================================================
# L4 Perception - Coordinate Transforms
# =============================================================================
# Conversions between the sensor's cartesian frame and spherical coordinates.
#
# Frame: x to the right, y downwards, z along the optical axis.
#   r     - radial distance
#   theta - longitude, signed angle from the z axis in the xz-plane
#   phi   - latitude, signed angle measured upwards from the xz-plane
#
# theta is computed with atan (not atan2), so points behind the sensor
# (z < 0) fold onto the front hemisphere.
# =============================================================================

import numpy as np


def spherical_of_cartesian(x, y, z):
    """
    Get spherical coordinates of (x, y, z) as (r, theta, phi).

    Works element-wise on numpy arrays. Undefined inputs are not
    rejected: z = 0 gives theta = +/-pi/2 (NaN when x = 0 too) and
    r = 0 gives phi = NaN.

    Args:
        x: Lateral coordinate
        y: Vertical coordinate (pointing down)
        z: Depth coordinate

    Returns:
        Tuple (r, theta, phi)
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    z = np.asarray(z, dtype=float)
    with np.errstate(divide='ignore', invalid='ignore'):
        r = np.sqrt(x * x + y * y + z * z)
        theta = np.arctan(x / z)
        phi = np.arcsin(-y / r)
    return r, theta, phi


def cartesian_of_spherical(r, theta, phi):
    """
    Get cartesian coordinates of (r, theta, phi) as (x, y, z).

    z is evaluated as r * cos(phi) * cos(theta), which equals
    x / tan(theta) wherever the latter is defined and stays finite on
    the optical axis (theta = 0).

    Args:
        r: Radial distance
        theta: Longitude (radians)
        phi: Latitude (radians)

    Returns:
        Tuple (x, y, z)
    """
    r = np.asarray(r, dtype=float)
    theta = np.asarray(theta, dtype=float)
    phi = np.asarray(phi, dtype=float)
    y = -r * np.sin(phi)
    x = r * np.cos(phi) * np.sin(theta)
    z = r * np.cos(phi) * np.cos(theta)
    return x, y, z


def cell_angles(res: int, span: float) -> np.ndarray:
    """
    Angle of the lower edge of every cell along one grid axis.

    Args:
        res: Number of cells
        span: Total angular span (radians)

    Returns:
        Array of res angles in [-span/2, span/2)
    """
    return np.arange(res) * span / res - span / 2.0


def angle_to_index(angles, res: int, span: float):
    """
    Map angles to cell indices, clamped to [0, res).

    Args:
        angles: Angles (radians)
        res: Number of cells
        span: Total angular span (radians)

    Returns:
        Tuple (indices, clamped_mask)
    """
    raw = np.floor((np.asarray(angles, dtype=float) + span / 2.0) * res / span)
    clamped = (raw < 0) | (raw >= res)
    indices = np.clip(raw, 0, res - 1).astype(int)
    return indices, clamped
