"""
Frame-level models: the input frame, its edge map, and per-frame /
per-session analysis results.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional
import cv2
import numpy as np

from .court    import CourtModel
from .judgment import (PositionJudgment, CourtPosition, InOut,
                       ServingBox, CourtSide, FaultStatus)
from .objects  import ObjectPosition


@dataclass(frozen=True, eq=False)
class Frame:
    """
    One video frame supplied by the host.

    `pixels` is an (H, W, 3) uint8 array in RGB order, or an (H, W) or
    (H, W, 1) grayscale array. The core reads it during a single call and
    never keeps a reference.
    """
    width: int
    height: int
    pixels: Optional[np.ndarray]

    @classmethod
    def from_rgb(cls, image: np.ndarray) -> "Frame":
        h, w = image.shape[:2]
        return cls(width=w, height=h, pixels=image)

    @classmethod
    def from_gray(cls, image: np.ndarray) -> "Frame":
        """Wrap a single-channel luminance image."""
        return cls.from_rgb(image)

    @classmethod
    def from_bgr(cls, image: np.ndarray) -> "Frame":
        """Wrap an OpenCV (BGR) image."""
        if image is None or image.size == 0:
            return cls(width=0, height=0, pixels=None)
        rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        return cls.from_rgb(rgb)

    @classmethod
    def from_bytes(cls, width: int, height: int, buf: Optional[bytes]) -> "Frame":
        """Wrap a flat `width*height*3` RGB byte buffer."""
        if buf is None or width <= 0 or height <= 0 or len(buf) != width * height * 3:
            return cls(width=max(width, 0), height=max(height, 0), pixels=None)
        arr = np.frombuffer(buf, dtype=np.uint8).reshape(height, width, 3)
        return cls(width=width, height=height, pixels=arr)

    @property
    def is_valid(self) -> bool:
        px = self.pixels
        return (
            px is not None
            and self.width > 0 and self.height > 0
            and (px.ndim == 2 or (px.ndim == 3 and px.shape[2] in (1, 3, 4)))
            and px.shape[0] == self.height and px.shape[1] == self.width
        )

    @property
    def is_gray(self) -> bool:
        px = self.pixels
        return px is not None and (px.ndim == 2 or (px.ndim == 3 and px.shape[2] == 1))


@dataclass(frozen=True, eq=False)
class EdgeMap:
    """Binary edge image (0 or 255), same size as the analysed frame."""
    width: int
    height: int
    data: np.ndarray

    @classmethod
    def empty(cls, width: int, height: int) -> "EdgeMap":
        w, h = max(int(width), 0), max(int(height), 0)
        return cls(width=w, height=h, data=np.zeros((h, w), np.uint8))

    @property
    def edge_count(self) -> int:
        return int(np.count_nonzero(self.data))


@dataclass
class FrameAnalysis:
    """Everything the session judged for one frame."""
    frame_number: int
    timestamp: float
    analysed: bool = False                   # court geometry refreshed this frame
    court: CourtModel = field(default_factory=CourtModel.undetected)
    ball: Optional[ObjectPosition] = None
    ball_judgment: Optional[PositionJudgment] = None
    ball_speed: Optional[float] = None
    players: Dict[int, PositionJudgment] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "frame": self.frame_number,
            "timestamp_s": round(self.timestamp, 3),
            "analysed": self.analysed,
            "court_detected": self.court.detected,
            "court_confidence": round(self.court.confidence, 3),
            "ball": [round(self.ball.x, 1), round(self.ball.y, 1)] if self.ball else None,
            "ball_judgment": self.ball_judgment.to_dict() if self.ball_judgment else None,
            "ball_speed": round(self.ball_speed, 2) if self.ball_speed is not None else None,
            "players": {str(tid): j.to_dict() for tid, j in self.players.items()},
        }


@dataclass
class SessionStats:
    """Running umpiring statistics for a tracking session."""
    frames_ingested: int = 0
    frames_analysed: int = 0
    foot_faults: int = 0
    rally_length: int = 0                    # frames with a ball in view
    ball_in_out: InOut = InOut.UNKNOWN
    serving_box: ServingBox = ServingBox.UNKNOWN
    ball_speed: float = 0.0
    player_position: CourtPosition = CourtPosition.UNKNOWN
    court_side: CourtSide = CourtSide.UNKNOWN
    fault_status: FaultStatus = FaultStatus.OK

    def to_dict(self) -> dict:
        return {
            "frames_ingested": self.frames_ingested,
            "frames_analysed": self.frames_analysed,
            "foot_faults": self.foot_faults,
            "rally_length": self.rally_length,
            "ball_in_out": self.ball_in_out.value,
            "serving_box": self.serving_box.value,
            "ball_speed": round(self.ball_speed, 2),
            "player_position": self.player_position.value,
            "court_side": self.court_side.value,
            "fault_status": self.fault_status.value,
        }


@dataclass
class VideoMetadata:
    """Properties of a recorded match replayed by the host."""
    width: int
    height: int
    fps: float
    total_frames: int
    duration_s: float
    path: str = ""

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "width": self.width,
            "height": self.height,
            "fps": self.fps,
            "total_frames": self.total_frames,
            "duration_s": round(self.duration_s, 2),
        }

    @classmethod
    def from_capture(cls, capture: cv2.VideoCapture, path: str = "",
                     default_fps: float = 30.0) -> "VideoMetadata":
        """Read size, rate and length from an opened capture; fps 0 means unknown."""
        fps = capture.get(cv2.CAP_PROP_FPS) or default_fps
        total = max(int(capture.get(cv2.CAP_PROP_FRAME_COUNT)), 0)
        return cls(
            width=int(capture.get(cv2.CAP_PROP_FRAME_WIDTH)),
            height=int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT)),
            fps=fps,
            total_frames=total,
            duration_s=total / fps,
            path=path,
        )
