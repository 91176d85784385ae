# config.py
"""
Configuration settings for the hero reel.
"""
FPS = 60

# Longest frame time fed to the tween engine; a stalled frame counts as this
MAX_FRAME_DT = 2.0 / FPS

# ── Basic Application Settings ──────────────────────────────────────────────

SHOW_OVERLAYS = False

# Display settings
FULLSCREEN = False
WINDOWED_SIZE = (1280, 720)

# Page length in viewport heights (hero frame is the first screen)
PAGE_SCREENS = 3

# Pixels scrolled per mouse-wheel notch / arrow key
SCROLL_STEP = 80

# ── Media ──────────────────────────────────────────────────────────────────

# Directory holding hero-1.mp4 … hero-N.mp4
VIDEOS_PATH = "videos"
VIDEO_NAME_FMT = "hero-{index}.mp4"

# Number of looping clips in the cycle
TOTAL_VIDEOS = 4

# Ambient loop toggled from the nav bar
AUDIO_PATH = "audio/loop.mp3"

# ── Tween targets ──────────────────────────────────────────────────────────

FRAME_TARGET      = "video-frame"
TRANSITION_TARGET = "next-video"
PREVIEW_TARGET    = "current-video"
NAV_TARGET        = "nav"

# ── Hero transition ────────────────────────────────────────────────────────

PREVIEW_SIZE         = 256     # px, square preview / transition start size
GROW_DURATION        = 1.0     # seconds for the queued clip to fill the frame
SHRINK_DURATION      = 1.5     # seconds for the preview to scale back in from 0
TRANSITION_EASE      = "power1.inOut"

# ── Frame mask (scroll-linked) ─────────────────────────────────────────────

FRAME_MASK_POLYGON   = "polygon(14% 0%, 72% 0%, 90% 90%, 0% 100%)"
FRAME_MASK_RADIUS    = "0 0 40% 10%"
FRAME_FULL_POLYGON   = "polygon(0% 0%, 100% 0%, 100% 100%, 0% 100%)"
FRAME_FULL_RADIUS    = "0 0 0 0"
FRAME_MASK_EASE      = "power1.inOut"
FRAME_MASK_START     = ("center", "center")   # (element anchor, viewport anchor)
FRAME_MASK_END       = ("bottom", "center")

# ── Navigation ─────────────────────────────────────────────────────────────

NAV_ITEMS            = ["Nexus", "Vault", "Prologue", "About", "Contact"]
NAV_HEIGHT           = 64
NAV_TOP              = 16
NAV_HIDDEN_Y         = -100
NAV_TWEEN_DURATION   = 0.2
AUDIO_BARS           = 4
AUDIO_BAR_DELAY      = 0.1     # stagger between indicator bars (s)

# ── Logging ────────────────────────────────────────────────────────────────

LOG_FILE  = "runtime.log"
LOG_LEVEL = "INFO"
