# =============================================================================
# L3 Sensor - Depth Sensor Simulator
# =============================================================================

import numpy as np
from typing import List

from .scene import SceneObject
from .config import (
    SENSOR_H_FOV,
    SENSOR_V_FOV,
    SENSOR_H_RAYS,
    SENSOR_V_RAYS,
    SENSOR_MAX_RANGE,
    SENSOR_NOISE_STD
)


class DepthSensorSimulator:
    """
    Depth sensor simulator producing point clouds.
    Emulates a camera-frame depth sensor (x right, y down, z forward)
    casting a regular angular pattern of rays against spheres.
    """

    def __init__(self, h_fov: float = SENSOR_H_FOV, v_fov: float = SENSOR_V_FOV,
                 h_rays: int = SENSOR_H_RAYS, v_rays: int = SENSOR_V_RAYS,
                 max_range: float = SENSOR_MAX_RANGE,
                 noise_std: float = SENSOR_NOISE_STD,
                 rng: np.random.Generator = None):
        """
        Initialize the depth sensor simulator.

        Args:
            h_fov: Horizontal field of view in degrees
            v_fov: Vertical field of view in degrees
            h_rays: Number of rays horizontally
            v_rays: Number of rays vertically
            max_range: Maximum range in meters
            noise_std: Range noise standard deviation
            rng: Random generator for the noise
        """
        self.h_fov = np.deg2rad(h_fov)
        self.v_fov = np.deg2rad(v_fov)
        self.max_range = max_range
        self.noise_std = noise_std
        self.rng = rng or np.random.default_rng()

        thetas = np.linspace(-self.h_fov / 2, self.h_fov / 2, h_rays)
        phis = np.linspace(-self.v_fov / 2, self.v_fov / 2, v_rays)
        theta, phi = np.meshgrid(thetas, phis, indexing='ij')
        theta, phi = theta.ravel(), phi.ravel()

        # Unit ray directions, (num_rays, 3)
        self.directions = np.stack([
            np.cos(phi) * np.sin(theta),
            -np.sin(phi),
            np.cos(phi) * np.cos(theta)
        ], axis=1)

    def scan(self, objects: List[SceneObject]) -> np.ndarray:
        """
        Perform a depth scan.

        Args:
            objects: Spheres in the sensor frame

        Returns:
            (N, 4) array of hits as (x, y, z, confidence)
        """
        ranges = np.full(len(self.directions), np.inf)

        for obj in objects:
            proj = self.directions @ obj.center
            dist_sq = obj.center @ obj.center - obj.radius ** 2
            disc = proj ** 2 - dist_sq
            hit = disc >= 0
            t = np.full_like(proj, np.inf)
            t[hit] = proj[hit] - np.sqrt(disc[hit])
            t[t <= 0] = np.inf
            ranges = np.minimum(ranges, t)

        valid = ranges < self.max_range
        ranges = ranges[valid]
        if self.noise_std > 0:
            ranges = ranges + self.rng.normal(0, self.noise_std, ranges.shape)
        ranges = np.clip(ranges, 1e-3, self.max_range)

        xyz = self.directions[valid] * ranges[:, None]
        confidence = np.ones((xyz.shape[0], 1))
        return np.hstack([xyz, confidence])
