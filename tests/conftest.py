"""
Pytest fixtures for tennis umpire tests.
"""
from typing import Iterable, List

import cv2
import numpy as np
import pytest

from tennis_umpire.court import CourtLineClassifier
from tennis_umpire.models import (CourtModel, CourtRegions, DetectedLine,
                                  Frame, Keypoint, Pose)

WIDTH, HEIGHT = 600, 400
SURFACE_RGB = (40, 110, 60)            # hard-court green
LINE_RGB    = (255, 255, 255)


def full_court_model(scale: float = 1.0) -> CourtModel:
    """Detected model for a 600×400 frame, optionally in downscaled coords."""
    def s(*coords):
        return tuple(c * scale for c in coords)
    return CourtModel(
        detected=True, confidence=0.8, candidate_count=8,
        baseline_top=s(0, 40, 600, 40),
        service_line_top=s(0, 120, 600, 120),
        net=s(0, 200, 600, 200),
        service_line_bottom=s(0, 280, 600, 280),
        baseline_bottom=s(0, 360, 600, 360),
        sideline_left=s(60, 0, 60, 400),
        sideline_right=s(540, 0, 540, 400),
        center_service_line=s(300, 0, 300, 400),
    )


class ScriptedClassifier(CourtLineClassifier):
    """Returns a fixed sequence of models; the last one repeats."""

    def __init__(self, models: Iterable[CourtModel]):
        super().__init__()
        self.models: List[CourtModel] = list(models)
        self.calls = 0

    def classify(self, lines, width, height):
        model = self.models[min(self.calls, len(self.models) - 1)]
        self.calls += 1
        return model


def make_pose(hip_y, hip_x=300.0, hip_conf=0.9, ankle_y=None,
              ankle_conf=0.8, track_id=0) -> Pose:
    kps = [
        Keypoint("left_hip", hip_x - 10, hip_y, hip_conf),
        Keypoint("right_hip", hip_x + 10, hip_y, hip_conf - 0.1),
    ]
    if ankle_y is not None:
        kps += [
            Keypoint("left_ankle", hip_x - 10, ankle_y, ankle_conf),
            Keypoint("right_ankle", hip_x + 10, ankle_y, ankle_conf),
        ]
    return Pose(keypoints=kps, track_id=track_id)


@pytest.fixture
def blank_frame():
    """Uniform court surface with no lines."""
    image = np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)
    image[:] = SURFACE_RGB
    return Frame.from_rgb(image)


@pytest.fixture
def court_image():
    """600×400 RGB image with painted baselines, service lines, net and sidelines."""
    image = np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)
    image[:] = SURFACE_RGB
    for y in (40, 120, 200, 280, 360):
        cv2.line(image, (0, y), (WIDTH - 1, y), LINE_RGB, 3)
    for x in (60, 540):
        cv2.line(image, (x, 0), (x, HEIGHT - 1), LINE_RGB, 3)
    cv2.line(image, (300, 120), (300, 280), LINE_RGB, 3)
    return image


@pytest.fixture
def court_frame(court_image):
    return Frame.from_rgb(court_image)


@pytest.fixture
def horizontal_line_frame():
    """Single painted horizontal line at y=200."""
    image = np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)
    image[:] = SURFACE_RGB
    cv2.line(image, (0, 200), (WIDTH - 1, 200), LINE_RGB, 3)
    return Frame.from_rgb(image)


@pytest.fixture
def scenario_a_lines():
    """Three horizontals and two sidelines on a 600×400 frame."""
    return [
        DetectedLine.from_points(0, 50, 600, 50),
        DetectedLine.from_points(0, 200, 600, 200),
        DetectedLine.from_points(0, 350, 600, 350),
        DetectedLine.from_points(60, 0, 60, 400),
        DetectedLine.from_points(540, 0, 540, 400),
    ]


@pytest.fixture
def detected_model():
    return full_court_model()


@pytest.fixture
def regions():
    """Regions matching `full_court_model`: centre 300, net 200, service 120/280."""
    return CourtRegions.build(
        left_x=60, right_x=540, center_x=300,
        net_y=200, service_top_y=120, service_bottom_y=280,
        valid=True,
    )


@pytest.fixture
def pose_factory():
    return make_pose


@pytest.fixture
def court_model_factory():
    return full_court_model


@pytest.fixture
def scripted_classifier():
    return ScriptedClassifier
