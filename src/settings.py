# All config in one place

# Push-up: elbow angle (shoulder-elbow-wrist), degrees
PUSHUP_MIN_CONFIDENCE = 0.26    # mean arm visibility needed to trust a frame
PUSHUP_DOWN_THRESHOLD = 112     # "DOWN" (arm bent)
PUSHUP_UP_THRESHOLD = 155       # "UP" (arm extended)
PUSHUP_MIN_REP_GAP_MS = 450     # debounce between two awarded reps

# Squat: knee angle (hip-knee-ankle), degrees
SQUAT_MIN_CONFIDENCE = 0.24
SQUAT_DOWN_THRESHOLD = 108      # knees bent
SQUAT_UP_THRESHOLD = 165        # standing
SQUAT_MIN_REP_GAP_MS = 500

# A landmark at or below this visibility drops its whole side
MIN_LANDMARK_VISIBILITY = 0.01

# Detector timestamp unit: "auto" (guess from magnitude), "ms", "s" or "ns"
TIMESTAMP_UNIT = "auto"

# Tokens
TOKENS_PER_REP = 10

# Sessions
DEFAULT_TARGET_REPS = 10
MIN_TARGET_REPS = 1
MAX_TARGET_REPS = 100
MAX_DISPLAY_FPS = 120

# Shop: (platform, title, token cost, minutes)
SHOP_PLATFORMS = ("tiktok", "instagram", "youtube")
SHOP_ITEMS = (
    ("tiktok", "TikTok 10 min", 50, 10),
    ("instagram", "Instagram 10 min", 50, 10),
    ("youtube", "YouTube 10 min", 50, 10),
)

# Video
CAM_INDEX = 0                   # webcam index
TARGET_FPS = 30                 # frames handed to the detector per second
MIN_DETECTION_CONFIDENCE = 0.6
MIN_TRACKING_CONFIDENCE = 0.6

# Audio
BEEP_ON_REP = True              # beep on each rep
BEEP_ON_TARGET = True           # beep when the target is reached
REP_TONE = (990, 100)           # (Hz, ms)
TARGET_TONE = (660, 180)
