# ============================================================================
# MATCHING & SCORING
# ============================================================================
MIN_MATCH_SIZE = 3
POINTS_PER_TILE = 10
MAX_COMBO_MULTIPLIER = 5
# Combos at or above this count raise the combo bonus signal (audio + burst).
COMBO_BONUS_THRESHOLD = 3

# ============================================================================
# TIMING
# ============================================================================
# Delay between clearing a group and compacting the board.
SETTLE_DELAY_MS = 150.0
# Upper bound for a single simulation step; protects against catch-up jumps after a stall.
MAX_TICK_SECONDS = 0.05
UPDATE_RATE = 1 / 60

# ============================================================================
# LOSS DETECTION
# ============================================================================
OVERFLOW_OCCUPANCY = 0.9

# ============================================================================
# HEX LAYOUT (multiples of the hex size)
# ============================================================================
HEX_COL_SPACING = 1.55
HEX_ROW_SPACING = 1.75
HEX_ODD_COL_OFFSET = 0.875
# Squared hit radius for nearest-cell lookup, in units of size**2.
HEX_HIT_RADIUS_SQ = 1.5
HEX_MAX_SIZE = 32.0
# Drawn hexes are slightly smaller than the cell so neighbours do not touch.
HEX_DRAW_SCALE = 0.8

# ============================================================================
# WINDOW & EFFECTS
# ============================================================================
WINDOW_WIDTH = 480
WINDOW_HEIGHT = 720
HUD_HEIGHT = 64
TILE_CLEAR_EFFECT_SECONDS = 0.4
COMBO_BURST_SECONDS = 0.8
