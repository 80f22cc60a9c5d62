"""
Phase 1d – Court region mapper.

Derives the service boxes and overall court bounds from a CourtModel,
scaling line coordinates back to full frame resolution when the edge map
was computed on a downscaled frame.

Missing roles fall back to explicit defaults (frame centre for the net and
centre line, frame edges for the sidelines, ±50 px around the net for the
service lines) so point tests degrade instead of calling everything out.
"""
from __future__ import annotations
from typing import Optional

from ..models.court import CourtModel, CourtRegions
from .. import config


class CourtRegionMapper:
    """CourtModel → CourtRegions in full-resolution frame coordinates."""

    def __init__(self, service_fallback: float = config.SERVICE_FALLBACK_PX):
        self.service_fallback = service_fallback

    def update(
        self,
        model: CourtModel,
        width: float,
        height: float,
        scale: float = 1.0,
        current: Optional[CourtRegions] = None,
    ) -> CourtRegions:
        """
        Compute regions for a freshly classified model.

        Args:
            model:   Classified court lines (analysis resolution).
            width:   Full-resolution frame width.
            height:  Full-resolution frame height.
            scale:   Scale used during edge extraction.
            current: Regions currently in use.

        Returns:
            New regions, or `current` unchanged when the model is not
            detected (defaults if there is nothing current yet).
        """
        if not model.detected:
            if current is not None:
                return current
            return self.defaults(width, height)

        k = 1.0 / scale if scale > 0 else 1.0

        net_y = ((model.net[1] + model.net[3]) / 2 * k
                 if model.net else height / 2)
        left_x = model.sideline_left[0] * k if model.sideline_left else 0.0
        right_x = model.sideline_right[0] * k if model.sideline_right else float(width)
        center_x = (model.center_service_line[0] * k
                    if model.center_service_line else width / 2)
        service_top_y = (model.service_line_top[1] * k
                         if model.service_line_top else net_y - self.service_fallback)
        service_bottom_y = (model.service_line_bottom[1] * k
                            if model.service_line_bottom else net_y + self.service_fallback)

        return CourtRegions.build(
            left_x=left_x, right_x=right_x, center_x=center_x,
            net_y=net_y,
            service_top_y=service_top_y,
            service_bottom_y=service_bottom_y,
            valid=True,
        )

    def defaults(self, width: float, height: float) -> CourtRegions:
        return CourtRegions.defaults(width, height, self.service_fallback)
