"""Wiring for a complete game session: world, systems and the driving loop."""
from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path

from esper import World

from hexstack.components.game_state import Screen
from hexstack.constants import SETTLE_DELAY_MS
from hexstack.events.bus import EventBus
from hexstack.loop import GameLoop
from hexstack.storage import JsonProgressStore
from hexstack.systems.animation import AnimationSystem
from hexstack.systems.fill_system import FillSystem
from hexstack.systems.game_flow_system import GameFlowSystem
from hexstack.systems.input import InputSystem
from hexstack.systems.match import MatchSystem
from hexstack.systems.match_resolution import MatchResolutionSystem
from hexstack.systems.progress_system import ProgressSystem
from hexstack.world import create_world


@dataclass
class Game:
    event_bus: EventBus
    world: World
    loop: GameLoop
    progress: ProgressSystem
    flow: GameFlowSystem
    input: InputSystem
    match: MatchSystem
    match_resolution: MatchResolutionSystem
    fill: FillSystem
    animation: AnimationSystem


def create_game(
    event_bus: EventBus | None = None,
    *,
    store: JsonProgressStore | None = None,
    save_path: Path | None = None,
    rng: random.Random | None = None,
    settle_delay_ms: float = SETTLE_DELAY_MS,
) -> Game:
    """Build a world with every core system subscribed, starting on the menu.

    Subscription order matters for a tick: the settle countdown runs before
    the fill timer, so a clear that settles on this tick unblocks a fill due
    on the same tick.
    """
    bus = event_bus or EventBus()
    world = create_world(bus, Screen.MENU, rng=rng)
    progress = ProgressSystem(world, bus, store=store, save_path=save_path)
    flow = GameFlowSystem(world, bus, progress=progress)
    input_system = InputSystem(world, bus)
    match = MatchSystem(world, bus, settle_delay_ms=settle_delay_ms)
    match_resolution = MatchResolutionSystem(world, bus)
    fill = FillSystem(world, bus)
    animation = AnimationSystem(world, bus)
    return Game(
        event_bus=bus,
        world=world,
        loop=GameLoop(bus),
        progress=progress,
        flow=flow,
        input=input_system,
        match=match,
        match_resolution=match_resolution,
        fill=fill,
        animation=animation,
    )
