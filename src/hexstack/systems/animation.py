from esper import World

from hexstack.components.animation_fade import FadeAnimation
from hexstack.components.combo_burst import ComboBurst
from hexstack.components.duration import Duration
from hexstack.components.game_state import Screen
from hexstack.constants import COMBO_BURST_SECONDS, TILE_CLEAR_EFFECT_SECONDS
from hexstack.events.bus import EVENT_ANIMATION_COMPLETE, EVENT_ANIMATION_START, EVENT_TICK, EventBus
from hexstack.utils.game_state import current_screen


class AnimationSystem:
    """Drives the lifetime of transient visual effects; each effect is its own entity.

    Effects only age while the game is being played, so a pause freezes them.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_ANIMATION_START, self.on_animation_start)

    def on_animation_start(self, sender, **kwargs):
        kind = kwargs.get('kind'); items = kwargs.get('items', [])
        if kind == 'fade':
            for pos, color_index in items:
                self.world.create_entity(
                    FadeAnimation(pos=tuple(pos), color_index=color_index),
                    Duration(TILE_CLEAR_EFFECT_SECONDS),
                )
        elif kind == 'combo_burst':
            meta = kwargs.get('meta') or {}
            palette = tuple(meta.get('palette', ()))
            for center in items:
                self.world.create_entity(
                    ComboBurst(center=tuple(center), palette=palette),
                    Duration(COMBO_BURST_SECONDS),
                )

    def on_tick(self, sender, **kwargs):
        if current_screen(self.world) != Screen.PLAYING:
            return
        dt = kwargs.get('dt', 1/60)
        # Fade progression
        fades = list(self.world.get_component(FadeAnimation))
        if fades:
            for ent, fade in fades:
                if fade.alpha > 0.0:
                    d = self.world.component_for_entity(ent, Duration)
                    fade.alpha -= dt / d.value
                    if fade.alpha < 0.0:
                        fade.alpha = 0.0
            if all(fade.alpha <= 0.0 for _, fade in fades):
                positions = [fade.pos for _, fade in fades]
                for ent, _ in fades:
                    self.world.delete_entity(ent, immediate=True)
                self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind='fade', items=positions)
        # Burst progression
        bursts = list(self.world.get_component(ComboBurst))
        finished = []
        for ent, burst in bursts:
            d = self.world.component_for_entity(ent, Duration)
            burst.linear += dt / d.value
            if burst.linear >= 1.0:
                burst.linear = 1.0
                finished.append((ent, burst.center))
        for ent, _ in finished:
            self.world.delete_entity(ent, immediate=True)
        if finished:
            self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind='combo_burst', items=[center for _, center in finished])
