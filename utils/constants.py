# =========================
# HAND LANDMARKS (MediaPipe indices)
# =========================
LANDMARK_COUNT = 21
THUMB_TIP = 4
INDEX_TIP = 8
MIDDLE_MCP = 9          # pointer reference, steadier than any fingertip

PINCH_THRESHOLD = 0.05  # thumb↔index distance in normalized landmark units

# =========================
# MODE / ROTATION
# =========================
BLEND_RATE = 2.5                 # k in 1 - exp(-k·dt)
GESTURE_ROTATION_RATE = 5.0      # velocity smoothing while the hand steers
IDLE_ROTATION_RATE = 1.0         # velocity smoothing when idle
IDLE_ANGULAR_VELOCITY = 0.2      # rad/s
MAX_ANGULAR_VELOCITY = 2.0       # |(x - 0.5) · 4| at the frame edges
POINTER_GAIN = 4.0

# =========================
# TREE SHAPE
# =========================
TREE_HEIGHT = 18.0
TREE_RADIUS = 6.0
ORNAMENT_RADIUS_FACTOR = 0.9     # ornaments sit slightly inside the leaves
RIBBON_TURNS = 3.5
RIBBON_OFFSET = 0.5              # ribbon sits slightly outside the cone
RIBBON_JITTER = 0.2

LEAF_COUNT = 5000
ORNAMENT_COUNT = 1000
RIBBON_COUNT = 1500

LEAF_SPHERE_RADIUS = 25.0
ORNAMENT_SPHERE_RADIUS = 30.0
RIBBON_SPHERE_RADIUS = 35.0

# (low, high) for uniform sampling
LEAF_SCALE = (0.1, 0.4)
ORNAMENT_SCALE = (0.2, 0.6)
RIBBON_SCALE = (0.05, 0.2)

HOT_PINK = (255, 105, 180)
LIGHT_PINK = (255, 183, 197)
LAVENDER = (230, 230, 250)
WHITE = (255, 255, 255)

# =========================
# ANIMATION
# =========================
NOISE_FREQUENCY = 0.5
LEAF_NOISE_AMPLITUDE = 0.2
DEFAULT_NOISE_AMPLITUDE = 0.1
SPIN_X = 0.5
SPIN_Y = 0.3
EXPLODED_SPIN_BOOST = 5.0        # spin = 1 + boost·blend → 6x when exploded
EXPLODED_SCALE = 0.5

# =========================
# SCENE
# =========================
GROUP_OFFSET = (0.0, -4.0, 0.0)
CAMERA_POSITION = (0.0, 2.0, 25.0)
CAMERA_FOV = 50.0
CAMERA_MIN_DISTANCE = 10.0
CAMERA_MAX_DISTANCE = 40.0
CAMERA_ZOOM_STEP = 1.1           # distance factor per mouse-wheel notch

STAR_HEIGHT = 9.5
STAR_BOB_AMPLITUDE = 0.2
STAR_IDLE_SPIN = 0.5
STAR_EXPLODED_PITCH_SPIN = 2.0
STAR_EXPLODED_YAW_SPIN = 5.0
STAR_PITCH_RELAX_RATE = 2.0

SNOW_COUNT = 300
SNOW_SPREAD = (60.0, 40.0, 40.0)
SNOW_DEPTH_OFFSET = -10.0
SNOW_WRAP = 20.0
SNOW_SWAY = 0.5
SNOW_FADE_START = 15.0

# background star shells: (radius, depth, count, size factor, saturation)
BACKDROP_LAYERS = (
    (100.0, 60.0, 2000, 3.0, 0.0),   # dim dust
    (120.0, 50.0, 500, 6.0, 0.9),    # brighter, coloured
)
BACKDROP_LIGHTNESS = 0.9
