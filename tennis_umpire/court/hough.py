"""
Phase 1b – Line candidate detection (Hough voting).

Every edge pixel votes for all (rho, theta) lines through it. Cells whose
vote count clears a resolution-scaled threshold become long line
candidates clipped to the frame.

This is a candidate generator, not a line fitter: one painted line
usually produces a small cluster of neighbouring peaks. The classifier
recovers precision from order statistics over the whole set.
"""
from __future__ import annotations
from typing import List, Tuple
import logging
import math
import numpy as np

from ..models.court import DetectedLine
from ..models.frame import EdgeMap
from .. import config

logger = logging.getLogger(__name__)


class LineCandidateDetector:
    """Voting line detector over a binary edge map."""

    def __init__(
        self,
        rho_step:     float = config.HOUGH_RHO_STEP,
        theta_step:   float = config.HOUGH_THETA_STEP,
        min_votes:    int   = config.HOUGH_MIN_VOTES,
        vote_density: float = config.HOUGH_VOTE_DENSITY,
        extent:       float = config.HOUGH_LINE_EXTENT,
        chunk_pixels: int   = config.HOUGH_CHUNK_PIXELS,
    ):
        self.rho_step     = rho_step
        self.theta_step   = theta_step
        self.min_votes    = min_votes
        self.vote_density = vote_density
        self.extent       = extent
        self.chunk_pixels = chunk_pixels
        self.n_theta      = int(round(math.pi / theta_step))

    # ── Public API ─────────────────────────────────────────────────────────────

    def detect(self, edges: EdgeMap) -> List[DetectedLine]:
        """Return every accumulator peak above threshold as a DetectedLine."""
        W, H = edges.width, edges.height
        if W <= 0 or H <= 0 or edges.edge_count == 0:
            return []

        acc, offset = self.accumulate(edges)
        threshold = self.vote_threshold(W, H)

        rho_idx, theta_idx = np.nonzero(acc > threshold)
        lines = [
            self._to_line(int(ri) - offset, int(ti), int(acc[ri, ti]), W, H)
            for ri, ti in zip(rho_idx, theta_idx)
        ]
        logger.debug("[Hough] %d edge px → %d candidates (threshold %.1f)",
                     edges.edge_count, len(lines), threshold)
        return lines

    def vote_threshold(self, width: int, height: int) -> float:
        return max(self.min_votes, width * height * self.vote_density)

    def accumulate(self, edges: EdgeMap) -> Tuple[np.ndarray, int]:
        """
        Fill the (rho, theta) accumulator.

        Returns (acc, offset) where acc has shape (n_rho, n_theta) and
        row `offset` holds rho index 0 (negative rho sits above it).
        """
        W, H = edges.width, edges.height
        offset = int(math.ceil(math.hypot(W, H) / self.rho_step))
        n_rho = 2 * offset + 1
        acc = np.zeros(n_rho * self.n_theta, np.int64)

        thetas = np.arange(self.n_theta) * self.theta_step
        cos_t, sin_t = np.cos(thetas), np.sin(thetas)
        cols = np.arange(self.n_theta)

        ys, xs = np.nonzero(edges.data)
        for start in range(0, len(xs), self.chunk_pixels):
            x = xs[start:start + self.chunk_pixels, None].astype(np.float64)
            y = ys[start:start + self.chunk_pixels, None].astype(np.float64)
            rho = x * cos_t + y * sin_t
            # round half up, as the rho bins are centred on multiples of rho_step
            ri = np.floor(rho / self.rho_step + 0.5).astype(np.int64) + offset
            acc += np.bincount((ri * self.n_theta + cols).ravel(),
                               minlength=acc.size)

        return acc.reshape(n_rho, self.n_theta), offset

    # ── Internals ──────────────────────────────────────────────────────────────

    def _to_line(self, rho_index: int, theta_index: int, votes: int,
                 W: int, H: int) -> DetectedLine:
        rho = rho_index * self.rho_step
        theta = theta_index * self.theta_step
        cos_t, sin_t = math.cos(theta), math.sin(theta)

        x0, y0 = cos_t * rho, sin_t * rho
        x1 = _round(x0 - self.extent * sin_t)
        y1 = _round(y0 + self.extent * cos_t)
        x2 = _round(x0 + self.extent * sin_t)
        y2 = _round(y0 - self.extent * cos_t)

        return DetectedLine(
            x1=_clamp(x1, 0, W), y1=_clamp(y1, 0, H),
            x2=_clamp(x2, 0, W), y2=_clamp(y2, 0, H),
            angle=(theta + math.pi / 2) % math.pi,
            strength=votes,
        )


def _round(v: float) -> float:
    return float(math.floor(v + 0.5))


def _clamp(v: float, lo: float, hi: float) -> float:
    return float(max(lo, min(hi, v)))
