"""
Court tracking session – orchestrates calibration and analysis per frame.

Per frame:
  frame → EdgeExtractor → LineCandidateDetector → CourtLineClassifier
        → CourtRegionMapper (replaces the retained model/regions)
  then for each tracked object:
        → PositionAnalyzer (reads current regions)
        → CoverageAccumulator (player hips only)

The session is the single owner of CourtModel, CourtRegions and the
coverage heatmaps. Models and regions are frozen dataclasses and heatmap
reads return copies, so readers never alias live state.
"""
from __future__ import annotations
from typing import Dict, Iterable, Optional
import logging
import time

from .models import (Frame, FrameAnalysis, SessionStats, CourtModel,
                     CourtRegions, PositionJudgment, FaultStatus,
                     DetectedObject, Keypoint, Pose, ObjectPosition, HIP_NAMES)
from .court    import (EdgeExtractor, LineCandidateDetector,
                       CourtLineClassifier, CourtRegionMapper)
from .analysis import PositionAnalyzer, CoverageAccumulator, BallSpeedEstimator
from . import config

logger = logging.getLogger(__name__)


class CourtTrackingSession:
    """Framework-free owner of court geometry and per-session analysis state."""

    def __init__(
        self,
        low_power:      bool = False,
        scale:          Optional[float] = None,
        frame_interval: Optional[int]   = None,
        ball_min_conf:  float = config.BALL_MIN_CONF,
        ball_class:     str   = config.BALL_CLASS_NAME,
        edge_extractor: Optional[EdgeExtractor]         = None,
        line_detector:  Optional[LineCandidateDetector] = None,
        classifier:     Optional[CourtLineClassifier]   = None,
        region_mapper:  Optional[CourtRegionMapper]     = None,
        analyzer:       Optional[PositionAnalyzer]      = None,
        cell_size:      int = config.COVERAGE_CELL_PX,
    ):
        self.ball_min_conf = ball_min_conf
        self.ball_class    = ball_class
        self.cell_size     = cell_size
        self._scale_override    = scale
        self._interval_override = frame_interval
        self.set_low_power(low_power)

        self._edges      = edge_extractor or EdgeExtractor()
        self._lines      = line_detector or LineCandidateDetector()
        self._classifier = classifier or CourtLineClassifier()
        self._mapper     = region_mapper or CourtRegionMapper()
        self._analyzer   = analyzer or PositionAnalyzer()
        self._speed      = BallSpeedEstimator()

        self._model: CourtModel = CourtModel.undetected()
        self._regions: Optional[CourtRegions] = None
        self._heatmaps: Dict[int, CoverageAccumulator] = {}
        self._frame_index = 0
        self.stats = SessionStats()

    # ── Configuration ─────────────────────────────────────────────────────────

    def set_low_power(self, enabled: bool) -> None:
        """Low power: analyse 1 in N frames on half-resolution edge maps."""
        self.low_power = enabled
        if self._scale_override is not None:
            self.scale = self._scale_override
        else:
            self.scale = config.LOW_POWER_SCALE if enabled else 1.0
        if self._interval_override is not None:
            self.frame_interval = max(1, self._interval_override)
        else:
            self.frame_interval = config.LOW_POWER_FRAME_INTERVAL if enabled else 1

    # ── Snapshots ─────────────────────────────────────────────────────────────

    @property
    def court_model(self) -> CourtModel:
        return self._model

    @property
    def regions(self) -> Optional[CourtRegions]:
        return self._regions

    def heatmap(self, player_id: int = 0) -> Dict[tuple, int]:
        acc = self._heatmaps.get(player_id)
        return acc.snapshot() if acc else {}

    def coverage(self, player_id: int = 0) -> CoverageAccumulator:
        if player_id not in self._heatmaps:
            self._heatmaps[player_id] = CoverageAccumulator(self.cell_size)
        return self._heatmaps[player_id]

    # ── Calibration ───────────────────────────────────────────────────────────

    def ingest_frame(self, frame: Frame) -> CourtModel:
        """
        Re-derive court geometry from one frame.

        Frames skipped by low-power mode return the retained model.
        Regions are only replaced when the new model is detected.
        """
        index = self._frame_index
        self._frame_index += 1
        self.stats.frames_ingested += 1
        if index % self.frame_interval != 0:
            return self._model

        edges = self._edges.extract(frame, self.scale)
        lines = self._lines.detect(edges)
        model = self._classifier.classify(lines, edges.width, edges.height)
        self.stats.frames_analysed += 1

        if model.detected != self._model.detected:
            if model.detected:
                logger.info("[Court] court acquired: %d candidates, conf=%.2f",
                            model.candidate_count, model.confidence)
            else:
                logger.info("[Court] court lost: %d candidates",
                            model.candidate_count)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("[Court] frame %d: %d lines\n%s",
                         index, len(lines), model.summary())

        self._regions = self._mapper.update(model, frame.width, frame.height,
                                            self.scale, current=self._regions)
        self._model = model
        return model

    # ── Analysis ──────────────────────────────────────────────────────────────

    def judge_position(self, point: ObjectPosition,
                       kind: Optional[str] = None) -> PositionJudgment:
        """
        Judge a single point without touching session state.

        `kind` defaults to `point.kind`. A ball gets in/out and service box
        calls; a hip joint (see HIP_NAMES) gets zone and side calls. Any
        other joint is Unknown.
        """
        kind = kind or point.kind
        if kind == "ball":
            return self._analyzer.judge_ball(point.x, point.y,
                                             self._model, self._regions)
        if kind not in HIP_NAMES:
            logger.debug("[Umpire] no position call for joint %r", kind)
            return PositionJudgment.unknown()
        hip = Keypoint(kind, point.x, point.y, 1.0)
        return self._analyzer.judge_player(hip, self._model, self._regions)

    def judge_ball(self, ball: ObjectPosition) -> PositionJudgment:
        """Judge the ball and update the running ball statistics."""
        judgment = self.judge_position(ball, "ball")
        self.stats.ball_in_out = judgment.in_out
        self.stats.serving_box = judgment.serving_box
        return judgment

    def judge_pose(self, pose: Pose) -> PositionJudgment:
        """Judge a player pose, counting foot faults and court coverage."""
        hip = pose.hip
        judgment = self._analyzer.judge_player(
            hip, self._model, self._regions,
            left_ankle=pose.left_ankle, right_ankle=pose.right_ankle,
        )
        if not judgment.is_known:
            return judgment

        self.stats.player_position = judgment.label
        self.stats.court_side = judgment.court_side
        self.stats.fault_status = judgment.fault_status
        if judgment.fault_status is FaultStatus.FOOT_FAULT:
            self.stats.foot_faults += 1
            logger.info("[Umpire] foot fault, player %d", pose.track_id)
        self.coverage(pose.track_id).record(hip.x, hip.y, judgment)
        return judgment

    def select_ball(self, objects: Iterable[DetectedObject],
                    timestamp: float = 0.0) -> Optional[ObjectPosition]:
        """Most confident ball detection above the confidence floor."""
        balls = [o for o in objects
                 if o.class_name == self.ball_class and o.confidence >= self.ball_min_conf]
        if not balls:
            return None
        best = max(balls, key=lambda o: o.confidence)
        cx, cy = best.center
        return ObjectPosition(cx, cy, "ball", timestamp)

    def process(
        self,
        frame: Frame,
        objects: Iterable[DetectedObject] = (),
        poses: Iterable[Pose] = (),
        timestamp: Optional[float] = None,
    ) -> FrameAnalysis:
        """Run the full per-frame flow for one frame and its detections."""
        if timestamp is None:
            timestamp = time.monotonic()
        number = self._frame_index
        analysed_before = self.stats.frames_analysed

        model = self.ingest_frame(frame)
        result = FrameAnalysis(
            frame_number=number,
            timestamp=timestamp,
            analysed=self.stats.frames_analysed > analysed_before,
            court=model,
        )

        ball = self.select_ball(objects, timestamp)
        if ball is not None:
            self.stats.rally_length += 1
            result.ball = ball
            result.ball_judgment = self.judge_ball(ball)
            result.ball_speed = self._speed.update(ball)
            if result.ball_speed is not None:
                self.stats.ball_speed = result.ball_speed

        for pose in poses:
            result.players[pose.track_id] = self.judge_pose(pose)

        return result

    # ── Session boundaries ────────────────────────────────────────────────────

    def reset_coverage(self) -> None:
        for acc in self._heatmaps.values():
            acc.reset()

    def reset(self) -> None:
        """Forget geometry, statistics and coverage."""
        self._model = CourtModel.undetected()
        self._regions = None
        self._heatmaps.clear()
        self._speed.reset()
        self._frame_index = 0
        self.stats = SessionStats()

    def summary(self) -> dict:
        return {
            "stats": self.stats.to_dict(),
            "court": self._model.to_dict(),
            "regions": self._regions.to_dict() if self._regions else None,
            "coverage": {
                str(pid): {
                    "cells_visited": acc.cells_visited,
                    "coverage_area_px": acc.coverage_area_px,
                    "samples": acc.total,
                }
                for pid, acc in self._heatmaps.items()
            },
        }
