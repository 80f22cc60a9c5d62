"""
Tennis Umpire – court geometry + line-call analysis core.

Public API:  all major components are importable directly from `tennis_umpire`.

    from tennis_umpire import CourtTrackingSession
    from tennis_umpire import EdgeExtractor, LineCandidateDetector
    from tennis_umpire import CourtLineClassifier, CourtRegionMapper
    from tennis_umpire import PositionAnalyzer, CoverageAccumulator, BallSpeedEstimator
    from tennis_umpire.models import Frame, CourtModel, CourtRegions, PositionJudgment
"""

# ── Session (top-level entry point) ──────────────────────────────────────────
from .session import CourtTrackingSession

# ── Phase 1: Court geometry ──────────────────────────────────────────────────
from .court.edges      import EdgeExtractor
from .court.hough      import LineCandidateDetector
from .court.classifier import CourtLineClassifier
from .court.regions    import CourtRegionMapper

# ── Phase 2/3: Analysis ──────────────────────────────────────────────────────
from .analysis.position import PositionAnalyzer
from .analysis.coverage import CoverageAccumulator
from .analysis.speed    import BallSpeedEstimator

# ── Host utilities ───────────────────────────────────────────────────────────
from .detector     import YoloDetector
from .video.loader import VideoLoader

# ── Models (data classes) ────────────────────────────────────────────────────
from .models import (
    Frame, EdgeMap, FrameAnalysis, SessionStats, VideoMetadata,
    DetectedLine, CourtModel, CourtRegions, Rect,
    PositionJudgment, CourtPosition, InOut, ServingBox, CourtSide, FaultStatus,
    DetectedObject, Keypoint, Pose, ObjectPosition,
)

__version__ = "0.1.0"

__all__ = [
    # Session
    "CourtTrackingSession",
    # Court
    "EdgeExtractor", "LineCandidateDetector",
    "CourtLineClassifier", "CourtRegionMapper",
    # Analysis
    "PositionAnalyzer", "CoverageAccumulator", "BallSpeedEstimator",
    # Host utilities
    "YoloDetector", "VideoLoader",
    # Models
    "Frame", "EdgeMap", "FrameAnalysis", "SessionStats", "VideoMetadata",
    "DetectedLine", "CourtModel", "CourtRegions", "Rect",
    "PositionJudgment", "CourtPosition", "InOut", "ServingBox",
    "CourtSide", "FaultStatus",
    "DetectedObject", "Keypoint", "Pose", "ObjectPosition",
]
