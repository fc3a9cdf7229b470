from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere else alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds, already clamped)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_POINTER = "pointer"                          # payload: x, y, gesture=str ('tap' | 'hover_move')
EVENT_TILE_CLICK = "tile_click"                    # payload: col, row
EVENT_TILE_HOVER = "tile_hover"                    # payload: col, row (None when off-grid)


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(c,r),...], color_index=int, points=int, combo=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=list[GravityMove]
EVENT_ROW_INSERTED = "row_inserted"                # payload: new_tiles=[(c,r),...]


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=str ('fade' | 'combo_burst'), items=list, meta=...
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, items=list


# ============================================================================
# FEEDBACK (audio / haptics collaborators)
# ============================================================================
EVENT_TILE_MATCH = "tile_match"                    # payload: size=int
EVENT_COMBO_BONUS = "combo_bonus"                  # payload: combo=int, centroid=(x,y)
EVENT_LEVEL_COMPLETE = "level_complete"            # payload: level=int, score=int
EVENT_GAME_OVER = "game_over"                      # payload: level=int, score=int, reason=str


# ============================================================================
# FLOW & PROGRESSION
# ============================================================================
EVENT_SCREEN_CHANGED = "screen_changed"            # payload: previous_screen, new_screen
EVENT_LEVEL_STARTED = "level_started"              # payload: level=int
EVENT_PROGRESS_SAVED = "progress_saved"            # payload: progress=PersistentProgress, ok=bool
