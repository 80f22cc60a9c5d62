from .position import PositionAnalyzer
from .coverage import CoverageAccumulator
from .speed    import BallSpeedEstimator

__all__ = ["PositionAnalyzer", "CoverageAccumulator", "BallSpeedEstimator"]
