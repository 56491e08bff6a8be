"""Layout constants and color definitions."""

# Timing
FPS = 60

# Layout dimensions
SCREEN_W = 960
SCREEN_H = 540
LINE_Y = SCREEN_H // 2
STATUS_H = 36

# Shapes
DOT_RADIUS = 12
LINE_WIDTH = 4
GOAL_H = 28

# Colors
BG_COLOR = (20, 20, 30)
LINE_COLOR = (90, 90, 110)
GOAL_COLOR = (60, 140, 220)
ZONE_DIVIDER = (35, 35, 50)
DOT_IDLE = (200, 200, 210)
DOT_MOVING = (255, 255, 255)
DOT_HIGHLIGHT = (60, 220, 80)
STATUS_BG = (35, 35, 50)
TEXT_COLOR = (200, 200, 210)
TEXT_DIM = (120, 120, 140)
WIN_COLOR = (60, 220, 80)
MISS_COLOR = (230, 80, 70)
