from __future__ import annotations

from typing import TYPE_CHECKING

from hexstack.components.game_state import Screen

if TYPE_CHECKING:
    from hexstack.components.progress import PersistentProgress
    from hexstack.rendering.context import RenderContext

BAR_HEIGHT = 4
BAR_TRACK = (255, 255, 255, 26)
BAR_CALM = (78, 205, 196)
BAR_WARN = (249, 202, 36)
BAR_DANGER = (255, 107, 107)
OVERLAY = (0, 0, 0, 170)

_SCREEN_TITLES = {
    Screen.MENU: "HEX STACK",
    Screen.LEVEL_SELECT: "Select Level",
    Screen.SETTINGS: "Settings",
    Screen.HIGH_SCORE: "High Score",
    Screen.PAUSED: "Paused",
    Screen.LEVEL_COMPLETE: "Level Complete!",
    Screen.GAME_OVER: "Game Over",
}

_SCREEN_HINTS = {
    Screen.MENU: "ENTER play   L levels   S settings   H high score",
    Screen.LEVEL_SELECT: "1-9, 0, -, = start level   ESC back",
    Screen.SETTINGS: "M toggle sound   R reset progress   ESC back",
    Screen.HIGH_SCORE: "ESC back",
    Screen.PAUSED: "SPACE resume   ESC menu",
    Screen.LEVEL_COMPLETE: "ENTER next level   ESC menu",
    Screen.GAME_OVER: "ENTER retry   ESC menu",
}


def fill_bar_color(progress: float):
    if progress > 0.8:
        return BAR_DANGER
    if progress > 0.5:
        return BAR_WARN
    return BAR_CALM


class HudRenderer:
    """Score line, fill timer bar and the text overlay for non-playing screens."""

    def render(self, arcade, ctx: RenderContext, progress: PersistentProgress | None, width: float, height: float) -> None:
        if ctx.screen in (Screen.PLAYING, Screen.PAUSED):
            self._render_hud(arcade, ctx, width, height)
        if ctx.screen is None or ctx.screen == Screen.PLAYING:
            return
        if ctx.screen != Screen.MENU:
            arcade.draw_lrbt_rectangle_filled(0, width, 0, height, OVERLAY)
        title = _SCREEN_TITLES.get(ctx.screen, "")
        arcade.draw_text(title, width / 2, height * 0.62, arcade.color.WHITE, 28, anchor_x="center")
        detail = self._detail_line(ctx, progress)
        if detail:
            arcade.draw_text(detail, width / 2, height * 0.52, arcade.color.LIGHT_GRAY, 16, anchor_x="center")
        hint = _SCREEN_HINTS.get(ctx.screen, "")
        arcade.draw_text(hint, width / 2, height * 0.40, arcade.color.SILVER, 12, anchor_x="center")

    def _render_hud(self, arcade, ctx: RenderContext, width: float, height: float) -> None:
        bar_w = width * 0.8
        left = (width - bar_w) / 2
        top = height - 6
        arcade.draw_lrbt_rectangle_filled(left, left + bar_w, top - BAR_HEIGHT, top, BAR_TRACK)
        if ctx.fill_progress > 0:
            arcade.draw_lrbt_rectangle_filled(
                left, left + bar_w * ctx.fill_progress, top - BAR_HEIGHT, top, fill_bar_color(ctx.fill_progress)
            )
        arcade.draw_text(
            f"{ctx.level_name}  {ctx.score} / {ctx.target_score}",
            12,
            height - 34,
            ctx.accent_color,
            14,
        )
        if ctx.combo >= 2:
            arcade.draw_text(f"x{min(ctx.combo, 5)} combo", width - 12, height - 34, arcade.color.WHITE, 14, anchor_x="right")

    @staticmethod
    def _detail_line(ctx: RenderContext, progress: PersistentProgress | None) -> str:
        if ctx.screen in (Screen.LEVEL_COMPLETE, Screen.GAME_OVER):
            return f"Score {ctx.score}"
        if progress is None:
            return ""
        if ctx.screen == Screen.HIGH_SCORE:
            return f"Best {progress.high_score}   Highest level {progress.highest_level_reached}"
        if ctx.screen == Screen.SETTINGS:
            return "Sound on" if progress.sound_enabled else "Sound off"
        if ctx.screen == Screen.LEVEL_SELECT:
            unlocked = ", ".join(str(level) for level in sorted(progress.unlocked_level_ids))
            return f"Unlocked: {unlocked}"
        return ""
