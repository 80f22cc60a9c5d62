"""
Phase 2 – Position analysis.

Judges a ball centre or a player's hip/ankles against the current court
regions. All thresholds are calibration constants for the assumed camera
framing and err towards Unknown / OK rather than a false call.
"""
from __future__ import annotations
from typing import Optional
import math

from ..models.court    import CourtModel, CourtRegions
from ..models.judgment import (PositionJudgment, CourtPosition, InOut,
                               ServingBox, CourtSide, FaultStatus)
from ..models.objects  import Keypoint
from .. import config


class PositionAnalyzer:
    """Ball in/out + service box calls, player zone + foot-fault calls."""

    def __init__(
        self,
        net_distance_px:      float = config.NET_DISTANCE_PX,
        baseline_distance_px: float = config.BASELINE_DISTANCE_PX,
        hip_min_confidence:   float = config.HIP_MIN_CONF,
        ankle_min_confidence: float = config.ANKLE_MIN_CONF,
    ):
        self.net_distance_px      = net_distance_px
        self.baseline_distance_px = baseline_distance_px
        self.hip_min_confidence   = hip_min_confidence
        self.ankle_min_confidence = ankle_min_confidence

    # ── Ball ───────────────────────────────────────────────────────────────────

    def judge_ball(
        self,
        x: float, y: float,
        model: CourtModel,
        regions: Optional[CourtRegions],
    ) -> PositionJudgment:
        if not _usable(model, regions) or not _finite(x, y):
            return PositionJudgment.unknown()

        bounds = regions.court_bounds
        in_out = InOut.IN if bounds.contains(x, y) else InOut.OUT

        # deuce first: a ball on the centre line is a deuce-box ball
        if regions.deuce_service_box.contains(x, y):
            return PositionJudgment(CourtPosition.DEUCE_BOX, in_out, ServingBox.DEUCE)
        if regions.ad_service_box.contains(x, y):
            return PositionJudgment(CourtPosition.AD_BOX, in_out, ServingBox.AD)

        if y < bounds.min_y:
            label = CourtPosition.BACKCOURT
        elif y > bounds.max_y:
            label = CourtPosition.FORECOURT
        else:
            label = CourtPosition.MIDCOURT
        return PositionJudgment(label, in_out, ServingBox.UNKNOWN)

    # ── Player ─────────────────────────────────────────────────────────────────

    def judge_player(
        self,
        hip: Optional[Keypoint],
        model: CourtModel,
        regions: Optional[CourtRegions],
        left_ankle: Optional[Keypoint] = None,
        right_ankle: Optional[Keypoint] = None,
    ) -> PositionJudgment:
        if not _usable(model, regions) or hip is None:
            return PositionJudgment.unknown()
        if not hip.confidence > self.hip_min_confidence or not _finite(hip.x, hip.y):
            return PositionJudgment.unknown()

        net_y = regions.net_y
        dist = abs(hip.y - net_y)
        if dist < self.net_distance_px:
            label = CourtPosition.NET
        elif dist > self.baseline_distance_px:
            label = CourtPosition.BASELINE
        else:
            label = CourtPosition.MIDCOURT
        side = CourtSide.NEAR if hip.y < net_y else CourtSide.FAR

        fault = FaultStatus.OK
        if label is CourtPosition.BASELINE and self._ankles_reliable(left_ankle, right_ankle):
            line_y = regions.service_line_top_y
            if left_ankle.y < line_y or right_ankle.y < line_y:
                fault = FaultStatus.FOOT_FAULT

        return PositionJudgment(label=label, court_side=side, fault_status=fault)

    def _ankles_reliable(self, left: Optional[Keypoint],
                         right: Optional[Keypoint]) -> bool:
        return (left is not None and right is not None
                and left.confidence > self.ankle_min_confidence
                and right.confidence > self.ankle_min_confidence
                and _finite(left.x, left.y) and _finite(right.x, right.y))


def _usable(model: CourtModel, regions: Optional[CourtRegions]) -> bool:
    return model is not None and model.detected and regions is not None


def _finite(x: float, y: float) -> bool:
    try:
        return math.isfinite(x) and math.isfinite(y)
    except TypeError:
        return False
