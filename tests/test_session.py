"""
Tests for the court tracking session.
"""
import logging

import pytest

from tennis_umpire import CourtTrackingSession
from tennis_umpire.analysis import PositionAnalyzer
from tennis_umpire.models import (CourtModel, CourtPosition, CourtSide, DetectedObject,
                                  FaultStatus, Frame, InOut, ObjectPosition, ServingBox)


def _ball(x, y, conf=0.9):
    return DetectedObject("sports ball", (x - 5, y - 5, 10, 10), conf)


@pytest.fixture
def session(scripted_classifier, court_model_factory):
    """Session whose classifier always reports the full 600×400 court."""
    return CourtTrackingSession(classifier=scripted_classifier([court_model_factory()]))


class TestIngestFrame:

    def test_initial_state(self):
        s = CourtTrackingSession()
        assert not s.court_model.detected
        assert s.regions is None
        assert s.heatmap() == {}

    def test_painted_court_is_acquired(self, court_frame, caplog):
        s = CourtTrackingSession()
        with caplog.at_level(logging.INFO, logger="tennis_umpire.session"):
            model = s.ingest_frame(court_frame)
        assert model.detected
        assert s.court_model is model
        assert s.regions.valid
        assert "court acquired" in caplog.text

    def test_blank_frame_gives_default_regions(self, blank_frame):
        s = CourtTrackingSession()
        model = s.ingest_frame(blank_frame)
        assert not model.detected
        assert model.confidence == 0.0
        b = s.regions.court_bounds
        assert (b.min_x, b.max_x, b.min_y, b.max_y) == (0, 600, 150, 250)
        assert not s.regions.valid

    def test_invalid_frame_does_not_raise(self):
        s = CourtTrackingSession()
        model = s.ingest_frame(Frame(width=0, height=0, pixels=None))
        assert not model.detected

    def test_lost_court_keeps_regions(self, blank_frame, scripted_classifier,
                                      court_model_factory, caplog):
        s = CourtTrackingSession(classifier=scripted_classifier(
            [court_model_factory(), CourtModel.undetected()]))
        s.ingest_frame(blank_frame)
        regions = s.regions
        with caplog.at_level(logging.INFO, logger="tennis_umpire.session"):
            model = s.ingest_frame(blank_frame)
        assert not model.detected
        assert s.regions is regions
        assert "court lost" in caplog.text
        # geometry is retained but not trusted for calls
        assert not s.judge_position(ObjectPosition(400, 150)).is_known

    def test_low_power_skips_frames(self, blank_frame, scripted_classifier,
                                    court_model_factory):
        classifier = scripted_classifier([court_model_factory(scale=0.5)])
        s = CourtTrackingSession(low_power=True, classifier=classifier)
        assert s.scale == 0.5
        assert s.frame_interval == 3
        for _ in range(4):
            s.ingest_frame(blank_frame)
        assert s.stats.frames_ingested == 4
        assert s.stats.frames_analysed == 2
        assert classifier.calls == 2
        # half-resolution lines are mapped back to full resolution
        assert s.regions.court_bounds.max_x == pytest.approx(540)
        assert s.regions.net_y == pytest.approx(200)

    def test_set_low_power_toggles(self):
        s = CourtTrackingSession()
        assert (s.scale, s.frame_interval) == (1.0, 1)
        s.set_low_power(True)
        assert (s.scale, s.frame_interval) == (0.5, 3)
        s.set_low_power(False)
        assert (s.scale, s.frame_interval) == (1.0, 1)

    def test_explicit_overrides(self):
        s = CourtTrackingSession(low_power=True, scale=0.25, frame_interval=5)
        assert (s.scale, s.frame_interval) == (0.25, 5)


class TestJudgePosition:

    def test_unknown_before_any_frame(self):
        s = CourtTrackingSession()
        j = s.judge_position(ObjectPosition(300, 200))
        assert not j.is_known
        assert j.in_out is InOut.UNKNOWN

    def test_ball(self, session, blank_frame):
        session.ingest_frame(blank_frame)
        j = session.judge_position(ObjectPosition(400, 150))
        assert j.serving_box is ServingBox.DEUCE
        assert j.in_out is InOut.IN

    def test_joint_kind(self, session, blank_frame):
        session.ingest_frame(blank_frame)
        j = session.judge_position(ObjectPosition(300, 250, kind="left_hip"))
        assert j.label is CourtPosition.NET
        assert j.court_side is CourtSide.FAR

    def test_kind_override(self, session, blank_frame):
        session.ingest_frame(blank_frame)
        j = session.judge_position(ObjectPosition(300, 250), kind="right_hip")
        assert j.label is CourtPosition.NET

    def test_generic_hip_kind(self, session, blank_frame):
        session.ingest_frame(blank_frame)
        j = session.judge_position(ObjectPosition(300, 250, kind="hip"))
        assert j.label is CourtPosition.NET

    @pytest.mark.parametrize("kind", ["left_ankle", "nose", "right_wrist"])
    def test_non_hip_joint_is_unknown(self, session, blank_frame, kind):
        session.ingest_frame(blank_frame)
        j = session.judge_position(ObjectPosition(300, 250, kind=kind))
        assert not j.is_known
        assert j.label is CourtPosition.UNKNOWN

    def test_does_not_touch_stats(self, session, blank_frame):
        session.ingest_frame(blank_frame)
        session.judge_position(ObjectPosition(400, 150))
        assert session.stats.ball_in_out is InOut.UNKNOWN
        assert session.heatmap() == {}


class TestProcess:

    def test_ball_selection(self, session):
        objects = [
            DetectedObject("person", (0, 0, 50, 100), 0.99),
            _ball(100, 250, conf=0.6),
            _ball(400, 150, conf=0.8),
            _ball(200, 150, conf=0.4),
        ]
        ball = session.select_ball(objects, timestamp=1.5)
        assert (ball.x, ball.y) == (400, 150)
        assert ball.timestamp == 1.5

    def test_low_confidence_ball_ignored(self, session):
        assert session.select_ball([_ball(400, 150, conf=0.49)]) is None

    def test_frame_with_ball(self, session, blank_frame):
        result = session.process(blank_frame, [_ball(400, 150)], timestamp=0.0)
        assert result.analysed
        assert result.court.detected
        assert result.ball_judgment.serving_box is ServingBox.DEUCE
        assert result.ball_speed is None
        assert session.stats.rally_length == 1
        assert session.stats.ball_in_out is InOut.IN
        assert session.stats.serving_box is ServingBox.DEUCE

    def test_ball_speed_across_frames(self, session, blank_frame):
        session.process(blank_frame, [_ball(400, 150)], timestamp=0.0)
        result = session.process(blank_frame, [_ball(430, 190)], timestamp=0.5)
        assert result.ball_speed == pytest.approx(10.0)
        assert session.stats.ball_speed == pytest.approx(10.0)
        assert session.stats.rally_length == 2

    def test_frame_without_ball(self, session, blank_frame):
        result = session.process(blank_frame, [], timestamp=0.0)
        assert result.ball is None
        assert result.ball_judgment is None
        assert session.stats.rally_length == 0

    def test_player_coverage_per_track(self, session, blank_frame, pose_factory):
        poses = [pose_factory(hip_y=250, track_id=1), pose_factory(hip_y=380, track_id=2)]
        result = session.process(blank_frame, poses=poses, timestamp=0.0)
        assert result.players[1].label is CourtPosition.NET
        assert result.players[2].label is CourtPosition.MIDCOURT
        assert session.heatmap(1) == {(280, 240): 1}
        assert session.heatmap(2) == {(280, 380): 1}
        assert session.heatmap(0) == {}

    def test_unknown_player_not_recorded(self, session, blank_frame, pose_factory):
        session.process(blank_frame, poses=[pose_factory(hip_y=250, hip_conf=0.2)],
                        timestamp=0.0)
        assert session.heatmap() == {}

    def test_foot_fault_counted(self, blank_frame, scripted_classifier,
                                court_model_factory, pose_factory):
        s = CourtTrackingSession(
            classifier=scripted_classifier([court_model_factory()]),
            analyzer=PositionAnalyzer(baseline_distance_px=140),
        )
        pose = pose_factory(hip_y=50, ankle_y=110)
        result = s.process(blank_frame, poses=[pose], timestamp=0.0)
        assert result.players[0].fault_status is FaultStatus.FOOT_FAULT
        assert s.stats.foot_faults == 1
        assert s.stats.fault_status is FaultStatus.FOOT_FAULT
        assert s.stats.court_side is CourtSide.NEAR

    def test_to_dict(self, session, blank_frame, pose_factory):
        result = session.process(blank_frame, [_ball(400, 150)],
                                 [pose_factory(hip_y=250)], timestamp=0.25)
        d = result.to_dict()
        assert d["frame"] == 0
        assert d["ball"] == [400.0, 150.0]
        assert d["ball_judgment"]["serving_box"] == "deuce"
        assert d["players"]["0"]["label"] == "net"


class TestSessionBoundaries:

    def test_reset_coverage(self, session, blank_frame, pose_factory):
        session.process(blank_frame, poses=[pose_factory(hip_y=250)], timestamp=0.0)
        session.reset_coverage()
        assert session.heatmap() == {}
        assert session.court_model.detected

    def test_reset(self, session, blank_frame):
        session.process(blank_frame, [_ball(400, 150)], timestamp=0.0)
        session.reset()
        assert not session.court_model.detected
        assert session.regions is None
        assert session.stats.frames_ingested == 0

    def test_summary(self, session, blank_frame, pose_factory):
        session.process(blank_frame, poses=[pose_factory(hip_y=250)], timestamp=0.0)
        summary = session.summary()
        assert summary["stats"]["frames_analysed"] == 1
        assert summary["court"]["detected"] is True
        assert summary["regions"]["valid"] is True
        assert summary["coverage"]["0"]["cells_visited"] == 1
