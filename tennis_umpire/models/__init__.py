"""
Core data models for Tennis Umpire.
Split across sub-modules; this __init__ re-exports everything.
"""
from .frame    import Frame, EdgeMap, FrameAnalysis, SessionStats, VideoMetadata
from .court    import DetectedLine, CourtModel, CourtRegions, Rect, SLOT_NAMES
from .judgment import (PositionJudgment, CourtPosition, InOut,
                       ServingBox, CourtSide, FaultStatus)
from .objects  import DetectedObject, Keypoint, Pose, ObjectPosition, HIP_NAMES

__all__ = [
    "Frame", "EdgeMap", "FrameAnalysis", "SessionStats", "VideoMetadata",
    "DetectedLine", "CourtModel", "CourtRegions", "Rect", "SLOT_NAMES",
    "PositionJudgment", "CourtPosition", "InOut",
    "ServingBox", "CourtSide", "FaultStatus",
    "DetectedObject", "Keypoint", "Pose", "ObjectPosition", "HIP_NAMES",
]
