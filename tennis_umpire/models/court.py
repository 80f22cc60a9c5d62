"""
Court-related data models.
"""
from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Optional, Tuple
import math
import numpy as np

from .. import config

LineCoords = Tuple[float, float, float, float]     # x1, y1, x2, y2


@dataclass(frozen=True)
class DetectedLine:
    """A Hough line candidate clipped to the frame."""
    x1: float
    y1: float
    x2: float
    y2: float
    angle: float             # direction angle in radians, [0, π); 0 = horizontal
    strength: int = 0        # accumulator votes

    @classmethod
    def from_points(cls, x1: float, y1: float, x2: float, y2: float,
                    strength: int = 0) -> "DetectedLine":
        angle = math.atan2(y2 - y1, x2 - x1) % math.pi
        return cls(x1, y1, x2, y2, angle, strength)

    @property
    def coords(self) -> LineCoords:
        return (self.x1, self.y1, self.x2, self.y2)

    @property
    def midpoint(self) -> Tuple[float, float]:
        return ((self.x1 + self.x2) / 2, (self.y1 + self.y2) / 2)

    @property
    def length(self) -> float:
        return float(np.hypot(self.x2 - self.x1, self.y2 - self.y1))


# Role slots in overlay drawing order.
SLOT_NAMES = (
    "baseline_top", "service_line_top", "net",
    "service_line_bottom", "baseline_bottom",
    "sideline_left", "sideline_right", "center_service_line",
)


@dataclass(frozen=True)
class CourtModel:
    """
    Role-tagged court lines for one analysed frame.

    Replaced whole on every analysis; never mutated in place. Line
    coordinates are in the (possibly downscaled) analysis resolution.
    """
    detected: bool = False
    confidence: float = 0.0
    candidate_count: int = 0
    baseline_top:        Optional[LineCoords] = None
    baseline_bottom:     Optional[LineCoords] = None
    service_line_top:    Optional[LineCoords] = None
    service_line_bottom: Optional[LineCoords] = None
    sideline_left:       Optional[LineCoords] = None
    sideline_right:      Optional[LineCoords] = None
    center_service_line: Optional[LineCoords] = None
    net:                 Optional[LineCoords] = None

    @classmethod
    def undetected(cls) -> "CourtModel":
        return cls()

    @property
    def populated_slots(self) -> int:
        return sum(1 for name in SLOT_NAMES if getattr(self, name) is not None)

    def summary(self) -> str:
        parts = []
        for name in SLOT_NAMES:
            ln = getattr(self, name)
            if ln:
                parts.append(f"  {name:<20} ({ln[0]:.0f},{ln[1]:.0f})"
                             f"-({ln[2]:.0f},{ln[3]:.0f})")
            else:
                parts.append(f"  {name:<20} —")
        return "\n".join(parts)

    def to_dict(self) -> dict:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        for name in SLOT_NAMES:
            if d[name] is not None:
                d[name] = [round(float(v), 1) for v in d[name]]
        d["confidence"] = round(self.confidence, 3)
        return d


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; containment is closed on every side."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_corners(cls, xa: float, ya: float, xb: float, yb: float) -> "Rect":
        return cls(min(xa, xb), min(ya, yb), max(xa, xb), max(ya, yb))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def intersection_area(self, other: "Rect") -> float:
        w = min(self.max_x, other.max_x) - max(self.min_x, other.min_x)
        h = min(self.max_y, other.max_y) - max(self.min_y, other.min_y)
        return max(w, 0.0) * max(h, 0.0)

    def is_within(self, other: "Rect") -> bool:
        return (other.min_x <= self.min_x and self.max_x <= other.max_x and
                other.min_y <= self.min_y and self.max_y <= other.max_y)

    def to_dict(self) -> dict:
        return {
            "x": round(self.min_x, 1), "y": round(self.min_y, 1),
            "width": round(self.width, 1), "height": round(self.height, 1),
        }


@dataclass(frozen=True)
class CourtRegions:
    """
    Playable regions in full-resolution frame coordinates.

    `valid` is False while the regions are the explicit fallbacks built
    before any court has been detected.
    """
    deuce_service_box: Rect
    ad_service_box: Rect
    court_bounds: Rect
    net_y: float
    center_x: float
    service_line_top_y: float
    service_line_bottom_y: float
    net_height_cm: float = config.NET_HEIGHT_CM
    valid: bool = False

    @classmethod
    def build(cls, left_x: float, right_x: float, center_x: float,
              net_y: float, service_top_y: float, service_bottom_y: float,
              valid: bool) -> "CourtRegions":
        """
        Service boxes run from the service line to the net on either side
        of the centre line; the bounds span the sidelines and every
        horizontal (both service lines and the net).

        The centre line is clamped between the sidelines and the net is
        folded into the bounds, so the boxes never overlap each other and
        never leave the bounds, whatever order the lines were found in.
        """
        lo_x, hi_x = min(left_x, right_x), max(left_x, right_x)
        center_x = min(max(center_x, lo_x), hi_x)
        return cls(
            deuce_service_box=Rect.from_corners(center_x, service_top_y,
                                                right_x, net_y),
            ad_service_box=Rect.from_corners(left_x, service_top_y,
                                             center_x, net_y),
            court_bounds=Rect(
                lo_x, min(service_top_y, service_bottom_y, net_y),
                hi_x, max(service_top_y, service_bottom_y, net_y),
            ),
            net_y=net_y,
            center_x=center_x,
            service_line_top_y=service_top_y,
            service_line_bottom_y=service_bottom_y,
            valid=valid,
        )

    @classmethod
    def defaults(cls, width: float, height: float,
                 service_fallback: float = config.SERVICE_FALLBACK_PX) -> "CourtRegions":
        """Fallback regions centred on the frame, used before detection."""
        net_y = height / 2
        return cls.build(
            left_x=0.0, right_x=float(width), center_x=width / 2,
            net_y=net_y,
            service_top_y=net_y - service_fallback,
            service_bottom_y=net_y + service_fallback,
            valid=False,
        )

    def to_dict(self) -> dict:
        b = self.court_bounds
        return {
            "deuce_service_box": self.deuce_service_box.to_dict(),
            "ad_service_box": self.ad_service_box.to_dict(),
            "court_bounds": {
                "min_x": round(b.min_x, 1), "max_x": round(b.max_x, 1),
                "min_y": round(b.min_y, 1), "max_y": round(b.max_y, 1),
            },
            "net_y": round(self.net_y, 1),
            "net_height_cm": self.net_height_cm,
            "valid": self.valid,
        }
