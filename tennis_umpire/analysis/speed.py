"""
Ball speed from consecutive ball centres.

Pixel displacement per second times a placeholder scale factor; there is
no camera calibration behind the number, so treat it as relative only.
"""
from __future__ import annotations
from typing import Optional
import math

from ..models.objects import ObjectPosition
from .. import config


class BallSpeedEstimator:
    """Estimates ball speed from successive ball positions."""

    def __init__(self, scale: float = config.BALL_SPEED_SCALE):
        self.scale = scale
        self._prev: Optional[ObjectPosition] = None

    def update(self, ball: Optional[ObjectPosition]) -> Optional[float]:
        """
        Feed the latest ball position.

        Returns the scaled speed, or None when there is no previous sample,
        the time delta is not positive, or the point is not finite.
        """
        if ball is None or not (math.isfinite(ball.x) and math.isfinite(ball.y)):
            return None

        prev, self._prev = self._prev, ball
        if prev is None:
            return None

        dt = ball.timestamp - prev.timestamp
        if not dt > 0:
            return None
        dist = math.hypot(ball.x - prev.x, ball.y - prev.y)
        return dist / dt * self.scale

    def reset(self) -> None:
        self._prev = None
