from esper import World

from hexstack.components.run_state import RunState
from hexstack.levels import LevelDef


def get_or_create_run_state(world: World) -> RunState:
    """Return the shared RunState component, creating it if absent."""
    existing = list(world.get_component(RunState))
    if existing:
        return existing[0][1]
    world.create_entity(RunState())
    return list(world.get_component(RunState))[0][1]


def reset_run_state(world: World, level: LevelDef) -> RunState:
    """Replace the RunState with a fresh record for ``level``."""
    fresh = RunState(
        level=level.id,
        target_score=level.target_score,
        fill_interval_ms=float(level.fill_interval_ms),
    )
    for entity, _ in list(world.get_component(RunState)):
        world.add_component(entity, fresh)
        return fresh
    world.create_entity(fresh)
    return fresh
