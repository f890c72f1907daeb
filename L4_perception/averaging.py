# =============================================================================
# L4 Perception - Generalized Mean
# =============================================================================
# f-means over radial distances. The reciprocal transform yields the
# harmonic mean, which weights near points more than far ones.
# =============================================================================

import numpy as np

from .types import Bijection


def _reciprocal(x):
    with np.errstate(divide='ignore'):
        return 1.0 / np.asarray(x, dtype=float)


RECIPROCAL = Bijection(forward=_reciprocal, inverse=_reciprocal, name="reciprocal")
IDENTITY = Bijection(forward=lambda x: np.asarray(x, dtype=float),
                     inverse=lambda y: np.asarray(y, dtype=float),
                     name="identity")
LOGARITHM = Bijection(forward=np.log, inverse=np.exp, name="logarithm")


def generalized_average(values, transform: Bijection = RECIPROCAL) -> float:
    """
    Compute a generalized f-mean where transform represents the function f.

    With RECIPROCAL a zero value drives the mean to 0, which is the limit
    of the harmonic mean.

    Args:
        values: Sequence of scalars
        transform: Bijection (forward, inverse)

    Returns:
        transform.inverse(mean(transform.forward(values)))

    Raises:
        ValueError: If values is empty
    """
    values = np.asarray(values, dtype=float).ravel()
    if values.size == 0:
        raise ValueError("generalized_average requires at least one value")
    mean = np.mean(transform.forward(values))
    return float(transform.inverse(mean))
