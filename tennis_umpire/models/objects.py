"""
Detector / pose-estimator output consumed by the analysis core.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

HIP_NAMES = ("left_hip", "right_hip", "hip")     # joints a player position is read from


@dataclass(frozen=True)
class DetectedObject:
    """One object-detector box; bbox is (x, y, width, height)."""
    class_name: str
    bbox: Tuple[float, float, float, float]
    confidence: float

    @property
    def center(self) -> Tuple[float, float]:
        x, y, w, h = self.bbox
        return (x + w / 2, y + h / 2)


@dataclass(frozen=True)
class Keypoint:
    """A named pose joint, e.g. "left_hip"."""
    name: str
    x: float
    y: float
    confidence: float


@dataclass
class Pose:
    """All keypoints of one detected person."""
    keypoints: List[Keypoint] = field(default_factory=list)
    track_id: int = 0

    def get(self, name: str) -> Optional[Keypoint]:
        for kp in self.keypoints:
            if kp.name == name:
                return kp
        return None

    @property
    def hip(self) -> Optional[Keypoint]:
        """The more confident of the two hips."""
        hips = [kp for kp in (self.get("left_hip"), self.get("right_hip"))
                if kp is not None]
        if not hips:
            return None
        return max(hips, key=lambda kp: kp.confidence)

    @property
    def left_ankle(self) -> Optional[Keypoint]:
        return self.get("left_ankle")

    @property
    def right_ankle(self) -> Optional[Keypoint]:
        return self.get("right_ankle")


@dataclass(frozen=True)
class ObjectPosition:
    """A single tracked point handed to the analyser."""
    x: float
    y: float
    kind: str = "ball"            # "ball" or one of HIP_NAMES
    timestamp: float = 0.0        # seconds
