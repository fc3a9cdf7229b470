import random

from esper import World

from hexstack.components.game_state import GameState, Screen
from hexstack.components.hex_layout import HexLayout
from hexstack.components.run_state import RunState
from hexstack.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    initial_screen: Screen = Screen.MENU,
    *,
    rng: random.Random | None = None,
) -> World:
    """Build the simulation context: screen, run state and layout singletons.

    The board itself is installed when a level starts.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    world.create_entity(GameState(screen=initial_screen))
    world.create_entity(RunState())
    world.create_entity(HexLayout())
    return world


def get_hex_layout(world: World) -> HexLayout:
    for _, layout in world.get_component(HexLayout):
        return layout
    layout = HexLayout()
    world.create_entity(layout)
    return layout
