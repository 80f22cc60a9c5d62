"""
YOLO adapter – turns ultralytics results into the core's input types.

The analysis core never imports ultralytics; only this host-side adapter
does. Models are loaded on first use so that building a session (or
running the tests) does not pull in torch.
"""
from __future__ import annotations
from typing import List, Optional
import logging
import numpy as np

from .models.objects import DetectedObject, Keypoint, Pose
from . import config

logger = logging.getLogger(__name__)

# COCO-17 keypoint order used by the YOLOv8 pose models
COCO_KEYPOINTS = (
    "nose", "left_eye", "right_eye", "left_ear", "right_ear",
    "left_shoulder", "right_shoulder", "left_elbow", "right_elbow",
    "left_wrist", "right_wrist", "left_hip", "right_hip",
    "left_knee", "right_knee", "left_ankle", "right_ankle",
)


class YoloDetector:
    """Ball detection + player pose estimation with YOLOv8."""

    def __init__(
        self,
        object_model: str = config.OBJECT_MODEL,
        pose_model:   str = config.POSE_MODEL,
        confidence:   float = config.DETECTION_CONF,
        device:       Optional[str] = None,
    ):
        self.object_model_name = object_model
        self.pose_model_name   = pose_model
        self.confidence        = confidence
        self.device            = device
        self._objects = None
        self._poses   = None

    # ── Public API ─────────────────────────────────────────────────────────────

    def detect_objects(self, frame: np.ndarray) -> List[DetectedObject]:
        """Sports-ball detections in a BGR frame."""
        if self._objects is None:
            self._objects = self._load(self.object_model_name)
        results = self._objects.predict(
            frame,
            conf=self.confidence,
            classes=[config.SPORTS_BALL_CLASS],
            device=self.device,
            verbose=False,
        )
        return self.objects_from_result(results[0]) if results else []

    def detect_poses(self, frame: np.ndarray) -> List[Pose]:
        """One Pose per detected person in a BGR frame."""
        if self._poses is None:
            self._poses = self._load(self.pose_model_name)
        results = self._poses.predict(
            frame,
            conf=self.confidence,
            device=self.device,
            verbose=False,
        )
        return self.poses_from_result(results[0]) if results else []

    # ── Result conversion ──────────────────────────────────────────────────────

    @staticmethod
    def objects_from_result(result) -> List[DetectedObject]:
        """Convert one ultralytics result's boxes (xyxy) to DetectedObjects."""
        boxes = result.boxes
        if boxes is None or len(boxes) == 0:
            return []

        xyxy  = _numpy(boxes.xyxy)
        confs = _numpy(boxes.conf)
        cls   = _numpy(boxes.cls).astype(int)
        names = result.names or {}

        objects = []
        for (x1, y1, x2, y2), conf, cid in zip(xyxy, confs, cls):
            objects.append(DetectedObject(
                class_name=names.get(int(cid), str(int(cid))),
                bbox=(float(x1), float(y1), float(x2 - x1), float(y2 - y1)),
                confidence=float(conf),
            ))
        return objects

    @staticmethod
    def poses_from_result(result) -> List[Pose]:
        """
        Convert one ultralytics pose result to Poses.

        Track ids come from the boxes when the tracker assigned them,
        otherwise from detection order.
        """
        kps = result.keypoints
        if kps is None or len(kps) == 0:
            return []

        xy   = _numpy(kps.xy)
        conf = _numpy(kps.conf) if kps.conf is not None else np.ones(xy.shape[:2])

        ids = None
        boxes = getattr(result, "boxes", None)
        if boxes is not None and getattr(boxes, "id", None) is not None:
            ids = _numpy(boxes.id).astype(int)

        poses = []
        for i in range(xy.shape[0]):
            keypoints = [
                Keypoint(name, float(xy[i, j, 0]), float(xy[i, j, 1]), float(conf[i, j]))
                for j, name in enumerate(COCO_KEYPOINTS[:xy.shape[1]])
            ]
            tid = int(ids[i]) if ids is not None and i < len(ids) else i
            poses.append(Pose(keypoints=keypoints, track_id=tid))
        return poses

    # ── Internals ──────────────────────────────────────────────────────────────

    @staticmethod
    def _load(name: str):
        from ultralytics import YOLO
        logger.info("[Detector] loading %s", name)
        return YOLO(name)


def _numpy(t) -> np.ndarray:
    """torch tensor or array-like → numpy array."""
    if hasattr(t, "cpu"):
        t = t.cpu().numpy()
    return np.asarray(t)
