"""
Configuration for Tennis Umpire.

Every threshold here is a calibration constant for the assumed camera
framing (broadcast-style view looking down the court length). Components
take these as keyword-argument defaults, so a host can override any of
them per session.
"""
import math

# ── Edge extraction ───────────────────────────────────────────────────────────
EDGE_MAG_THRESHOLD   = 100        # Sobel magnitude above which a pixel is an edge
WHITE_MIN_CHANNEL    = 200        # all three channels above this → white paint
WHITE_MAX_DELTA      = 30         # R/G and G/B deltas below this → greyish ...
WHITE_MIN_RED        = 150        # ... and bright enough to count as paint

# ── Hough voting ──────────────────────────────────────────────────────────────
HOUGH_RHO_STEP       = 2                  # px per rho bin
HOUGH_THETA_STEP     = math.pi / 180      # 1 degree
HOUGH_MIN_VOTES      = 20                 # absolute floor on peak votes
HOUGH_VOTE_DENSITY   = 0.0001             # votes per pixel of frame area
HOUGH_LINE_EXTENT    = 1000               # px either side of the closest point
HOUGH_CHUNK_PIXELS   = 4096               # edge pixels voted per numpy batch

# ── Line classification ──────────────────────────────────────────────────────
LINE_ANGLE_TOL       = 0.2        # radians around 0/π (horizontal) or π/2 (vertical)
CENTER_TOL_RATIO     = 0.1        # net / centre line must sit within 10% of frame centre
MIN_COURT_LINES      = 6          # candidates needed before the court counts as detected
FULL_CONFIDENCE_LINES = 10        # candidates at which confidence saturates at 1.0

# ── Court regions ─────────────────────────────────────────────────────────────
SERVICE_FALLBACK_PX  = 50         # service line default distance from the net
NET_HEIGHT_CM        = 91.4       # net height at the centre strap

# ── Position analysis ─────────────────────────────────────────────────────────
NET_DISTANCE_PX      = 100        # hip closer than this to the net → "Net"
BASELINE_DISTANCE_PX = 200        # hip farther than this from the net → "Baseline"
HIP_MIN_CONF         = 0.3
ANKLE_MIN_CONF       = 0.5
BALL_MIN_CONF        = 0.5
BALL_CLASS_NAME      = "sports ball"

# ── Coverage heatmap ─────────────────────────────────────────────────────────
COVERAGE_CELL_PX     = 20

# ── Ball speed ────────────────────────────────────────────────────────────────
# Placeholder px/s → mph factor; no real camera calibration behind it.
BALL_SPEED_SCALE     = 0.1

# ── Session / low-power mode ─────────────────────────────────────────────────
LOW_POWER_FRAME_INTERVAL = 3      # analyse 1 in N frames
LOW_POWER_SCALE          = 0.5    # half-resolution edge maps

# ── Detector host (ultralytics) ──────────────────────────────────────────────
OBJECT_MODEL        = "yolov8n.pt"
POSE_MODEL          = "yolov8n-pose.pt"
DETECTION_CONF      = 0.25
SPORTS_BALL_CLASS   = 32          # COCO class id for sports ball
