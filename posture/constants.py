# /posture/constants.py

"""
Tuned constants for the posture pipeline.

These values were calibrated by hand against webcam sessions.
Sensitivity-dependent thresholds live in ``thresholds.py``.
"""

# --- Visibility gate ---
MIN_LANDMARKS = 13
FRAME_BOUND_MIN = -0.05
FRAME_BOUND_MAX = 1.05
MIN_KEYPOINT_VISIBILITY = 0.5
MIN_SHOULDER_SPAN = 0.02

# --- Neck angle ---
VIRTUAL_POINT_OFFSET = 0.1          # Height of the reference point above the ear midpoint
TILT_PENALTY_SCALE = 0.6            # Degrees removed per degree of ear-line tilt
CHIN_DOWN_RATIO = 0.45              # Nose drop / ear-to-shoulder span that starts the penalty
CHIN_DOWN_GAIN = 60.0               # Degrees removed per unit of ratio above CHIN_DOWN_RATIO

# --- Head orientation ---
HEAD_TURNED_EAR_RATIO = 0.3         # Ear x-spread / shoulder span below this = head turned

# --- Stricter slouch margin ---
SLOUCH_STRICT_SENSITIVITY = 6
SLOUCH_STRICT_TURNED_SENSITIVITY = 5
SLOUCH_STRICT_SCALE = 0.7

# --- Overrides ---
STAND_UP_TORSO_RATIO = 1.12         # Torso extent vs. baseline torso extent
STAND_UP_HIP_RISE = 0.05            # Upward hip-centre movement (normalized y)
MOVED_AWAY_SPAN_RATIO = 0.62        # Shoulder span vs. baseline span

# --- Screen distance estimate ---
SHOULDER_WIDTH_CM = 40.0
CAMERA_HFOV_DEG = 60.0

# --- Sensitivity ---
MIN_SENSITIVITY = 1
MAX_SENSITIVITY = 10
