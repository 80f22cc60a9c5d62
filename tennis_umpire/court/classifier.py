"""
Phase 1c – Court line classifier: assigns roles to line candidates.

Roles are assigned by position, never by line shape. A generic line
detector cannot tell a service line from a baseline, so with the camera
looking down the court length we rely on ordering instead:

  - horizontals sorted top→bottom: baseline, service line, …, service line, baseline
  - verticals sorted left→right:  left sideline, …, right sideline
  - net / centre service line: the candidate closest to the frame centre band

Limits: extra horizontal candidates (ad boards, net cord, shadows) shift
the ordinal roles. Confidence only measures how much line evidence exists,
not whether the roles are right.
"""
from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
import math

from ..models.court import CourtModel, DetectedLine
from .. import config


class CourtLineClassifier:
    """Turns a list of DetectedLine candidates into a CourtModel."""

    def __init__(
        self,
        angle_tolerance:  float = config.LINE_ANGLE_TOL,
        center_tolerance: float = config.CENTER_TOL_RATIO,
        min_candidates:   int   = config.MIN_COURT_LINES,
        full_confidence:  int   = config.FULL_CONFIDENCE_LINES,
    ):
        self.angle_tolerance  = angle_tolerance
        self.center_tolerance = center_tolerance
        self.min_candidates   = min_candidates
        self.full_confidence  = full_confidence

    # ── Public API ─────────────────────────────────────────────────────────────

    def classify(self, lines: Sequence[DetectedLine],
                 width: int, height: int) -> CourtModel:
        """Classify candidates detected on a width×height analysis frame."""
        h_lines, v_lines = self.split(lines)
        slots = {}

        if len(h_lines) >= 3:
            slots["baseline_top"]        = h_lines[0].coords
            slots["service_line_top"]    = h_lines[1].coords
            slots["service_line_bottom"] = h_lines[-2].coords
            slots["baseline_bottom"]     = h_lines[-1].coords

        net = _near_center(h_lines, axis=1, center=height / 2,
                           tol=height * self.center_tolerance)
        if net is not None:
            slots["net"] = net.coords

        if len(v_lines) >= 2:
            slots["sideline_left"]  = v_lines[0].coords
            slots["sideline_right"] = v_lines[-1].coords

        center = _near_center(v_lines, axis=0, center=width / 2,
                              tol=width * self.center_tolerance)
        if center is not None:
            slots["center_service_line"] = center.coords

        n = len(lines)
        return CourtModel(
            detected=n >= self.min_candidates,
            confidence=min(1.0, n / self.full_confidence),
            candidate_count=n,
            **slots,
        )

    def split(self, lines: Sequence[DetectedLine]
              ) -> Tuple[List[DetectedLine], List[DetectedLine]]:
        """Near-horizontal lines sorted by mean y, near-vertical by mean x."""
        tol = self.angle_tolerance
        h = [l for l in lines
             if l.angle < tol or abs(l.angle - math.pi) < tol]
        v = [l for l in lines if abs(l.angle - math.pi / 2) < tol]
        h.sort(key=lambda l: l.midpoint[1])
        v.sort(key=lambda l: l.midpoint[0])
        return h, v


def _near_center(lines: List[DetectedLine], axis: int,
                 center: float, tol: float) -> Optional[DetectedLine]:
    """First line (in sorted order) whose midpoint lies within tol of center."""
    for ln in lines:
        if abs(ln.midpoint[axis] - center) < tol:
            return ln
    return None
