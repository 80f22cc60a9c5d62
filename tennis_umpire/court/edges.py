"""
Phase 1a – Court edge extraction.

Strategy:
1. Expand grayscale frames to three equal channels; optionally downscale
   (low-power mode).
2. Build a luminance field where painted-line pixels are forced to 255.
   Plain grayscale is unreliable when white paint sits on a court surface
   of similar brightness; forcing paint to full white makes it a hard edge.
3. 3×3 Sobel on that field → gradient magnitude.
4. Threshold the magnitude into a binary edge map.
"""
from __future__ import annotations
import logging
import cv2
import numpy as np

from ..models.frame import EdgeMap, Frame
from .. import config

logger = logging.getLogger(__name__)


class EdgeExtractor:
    """Converts an RGB frame into a binary edge map biased to white paint."""

    def __init__(
        self,
        threshold:   float = config.EDGE_MAG_THRESHOLD,
        white_min:   int   = config.WHITE_MIN_CHANNEL,
        white_delta: int   = config.WHITE_MAX_DELTA,
        white_red:   int   = config.WHITE_MIN_RED,
    ):
        self.threshold   = threshold
        self.white_min   = white_min
        self.white_delta = white_delta
        self.white_red   = white_red

    # ── Public API ─────────────────────────────────────────────────────────────

    def extract(self, frame: Frame, scale: float = 1.0) -> EdgeMap:
        """
        Run edge extraction on one frame.

        Args:
            frame: RGB input frame.
            scale: Downscale factor in (0, 1]; 0.5 halves both dimensions.

        Returns:
            EdgeMap sized to the scaled frame. Malformed or zero-area
            frames yield a zeroed map instead of an error.
        """
        if not 0.0 < scale <= 1.0:
            logger.warning("[Edges] scale %.3f outside (0, 1] – using 1.0", scale)
            scale = 1.0

        w = int(frame.width * scale)
        h = int(frame.height * scale)
        if not frame.is_valid or w <= 0 or h <= 0:
            logger.debug("[Edges] invalid frame %sx%s", frame.width, frame.height)
            return EdgeMap.empty(w, h)

        if frame.is_gray:
            gray = frame.pixels.reshape(frame.height, frame.width).astype(np.uint8)
            rgb = cv2.cvtColor(gray, cv2.COLOR_GRAY2RGB)
        else:
            rgb = np.ascontiguousarray(frame.pixels[:, :, :3])
        if scale < 1.0:
            rgb = cv2.resize(rgb, (w, h), interpolation=cv2.INTER_AREA)

        if w < 3 or h < 3:
            return EdgeMap.empty(w, h)     # no interior pixels

        lum = self.luminance(rgb)
        gx = cv2.Sobel(lum, cv2.CV_32F, 1, 0, ksize=3)
        gy = cv2.Sobel(lum, cv2.CV_32F, 0, 1, ksize=3)
        magnitude = cv2.magnitude(gx, gy)

        edges = np.where(magnitude > self.threshold, 255, 0).astype(np.uint8)
        edges[0, :] = edges[-1, :] = 0
        edges[:, 0] = edges[:, -1] = 0
        return EdgeMap(width=w, height=h, data=edges)

    def white_mask(self, rgb: np.ndarray) -> np.ndarray:
        """Boolean mask of pixels that look like painted court lines."""
        px = rgb.astype(np.int16)
        r, g, b = px[:, :, 0], px[:, :, 1], px[:, :, 2]
        bright = (r > self.white_min) & (g > self.white_min) & (b > self.white_min)
        greyish = ((np.abs(r - g) < self.white_delta) &
                   (np.abs(g - b) < self.white_delta) &
                   (r > self.white_red))
        return bright | greyish

    def luminance(self, rgb: np.ndarray) -> np.ndarray:
        """Mean-channel luminance with painted-line pixels forced to 255."""
        mean = rgb.astype(np.float32).sum(axis=2) / 3.0
        return np.where(self.white_mask(rgb), np.float32(255.0), mean).astype(np.float32)
