from .edges      import EdgeExtractor
from .hough      import LineCandidateDetector
from .classifier import CourtLineClassifier
from .regions    import CourtRegionMapper

__all__ = [
    "EdgeExtractor", "LineCandidateDetector",
    "CourtLineClassifier", "CourtRegionMapper",
]
