from __future__ import annotations

import logging

from esper import World

from hexstack.components.game_state import GameState, Screen
from hexstack.events.bus import EVENT_SCREEN_CHANGED, EventBus

logger = logging.getLogger(__name__)


def get_game_state(world: World) -> GameState | None:
    for _, state in world.get_component(GameState):
        return state
    return None


def current_screen(world: World) -> Screen | None:
    state = get_game_state(world)
    return state.screen if state is not None else None


def set_screen(world: World, event_bus: EventBus, screen: Screen) -> None:
    """Update the global screen and emit a change event when it differs."""

    state = get_game_state(world)
    if state is None:
        world.create_entity(GameState(screen=screen))
        logger.debug("Screen initialised to %s", screen.value)
        event_bus.emit(EVENT_SCREEN_CHANGED, previous_screen=None, new_screen=screen)
        return
    previous = state.screen
    if previous == screen:
        return
    state.screen = screen
    logger.debug("Screen %s -> %s", previous.value, screen.value)
    event_bus.emit(EVENT_SCREEN_CHANGED, previous_screen=previous, new_screen=screen)
