"""
Vector math helpers shared by the simulation
"""

from __future__ import annotations
import math
import random
from typing import Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def angle_between(x1: float, y1: float, x2: float, y2: float) -> float:
    """Angle (radians) of the ray from (x1, y1) towards (x2, y2)"""
    return math.atan2(y2 - y1, x2 - x1)


def circle_collide(x1, y1, r1, x2, y2, r2, tolerance: float = 0.0) -> bool:
    """Check if two circles touch, allowing a small gap of `tolerance`"""
    return distance(x1, y1, x2, y2) - r1 - r2 < tolerance


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
