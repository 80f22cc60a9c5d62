"""
Position judgment models.
"""
from dataclasses import dataclass
from enum import Enum


class CourtPosition(Enum):
    UNKNOWN      = "unknown"
    BASELINE     = "baseline"
    MIDCOURT     = "midcourt"
    NET          = "net"
    DEUCE_BOX    = "deuce_service_box"
    AD_BOX       = "ad_service_box"
    BACKCOURT    = "backcourt"
    FORECOURT    = "forecourt"


class InOut(Enum):
    UNKNOWN = "unknown"
    IN      = "in"
    OUT     = "out"


class ServingBox(Enum):
    UNKNOWN = "unknown"
    DEUCE   = "deuce"
    AD      = "ad"


class CourtSide(Enum):
    UNKNOWN = "unknown"
    NEAR    = "near"
    FAR     = "far"


class FaultStatus(Enum):
    OK         = "ok"
    FOOT_FAULT = "foot_fault"


@dataclass(frozen=True)
class PositionJudgment:
    """Umpiring call for one point against the current court regions."""
    label: CourtPosition = CourtPosition.UNKNOWN
    in_out: InOut = InOut.UNKNOWN
    serving_box: ServingBox = ServingBox.UNKNOWN
    court_side: CourtSide = CourtSide.UNKNOWN
    fault_status: FaultStatus = FaultStatus.OK

    @classmethod
    def unknown(cls) -> "PositionJudgment":
        return cls()

    @property
    def is_known(self) -> bool:
        return self.label is not CourtPosition.UNKNOWN

    def to_dict(self) -> dict:
        return {
            "label": self.label.value,
            "in_out": self.in_out.value,
            "serving_box": self.serving_box.value,
            "court_side": self.court_side.value,
            "fault_status": self.fault_status.value,
        }
