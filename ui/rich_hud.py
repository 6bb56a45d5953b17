# -*- coding: utf-8 -*-
"""
Rich HUD Module
Renders match snapshots and engine results with the 'rich' library.
The HUD never touches engine state: it only reads snapshots and results.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.box import DOUBLE, ROUNDED
from rich.console import Console, Group
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from i18n import element_name, reason_text
from i18n import t as _t

if TYPE_CHECKING:
    from battle.combatant import CombatantSnapshot
    from battle.engine import MatchSnapshot, PlayResult, TurnReport

ELEMENT_COLORS = {
    "fire": "red",
    "water": "blue",
    "nature": "green",
}


def _bar(value: int, maximum: int, width: int = 20) -> str:
    filled = 0 if maximum <= 0 else round(width * value / maximum)
    return "█" * filled + "░" * (width - filled)


def _hp_style(value: int, maximum: int) -> str:
    ratio = value / maximum if maximum else 0
    if ratio > 0.5:
        return "green"
    if ratio > 0.25:
        return "yellow"
    return "bold red"


def describe_play(result: PlayResult) -> list[str]:
    """Turn a PlayResult into battle-log lines."""
    if not result.success:
        return [_t("log.rejected", reason=reason_text(result.reason))]
    lines: list[str] = []
    outcome = result.outcome
    if outcome is not None:
        line = _t(
            "log.played",
            card=outcome.card_name,
            damage=outcome.damage,
            healing=outcome.healing,
        )
        if outcome.critical:
            line += " " + _t("log.crit")
        lines.append(line)
        if outcome.detonated:
            lines.append(
                _t("log.detonated", effect=outcome.card_name, damage=outcome.explosion_damage)
            )
    if result.turn_report is not None:
        lines.extend(describe_turn(result.turn_report))
    if result.game_over is not None and result.game_over.is_over:
        lines.append(result.game_over.message)
    return lines


def describe_turn(report: TurnReport) -> list[str]:
    """Battle-log lines for one enemy phase."""
    lines: list[str] = []
    attack = report.enemy_attack
    if attack is not None:
        if attack.skipped_reason == "stunned":
            lines.append(_t("log.enemy_stunned", name=attack.attacker))
        elif not attack.skipped:
            line = _t(
                "log.enemy_attack",
                name=attack.attacker,
                damage=attack.hp_lost,
                absorbed=attack.absorbed,
            )
            if attack.critical:
                line += " " + _t("log.crit")
            lines.append(line)
            if attack.poisoned:
                lines.append(_t("log.poisoned"))
    for tick in report.ticks:
        if tick.skipped_reason:
            continue
        if tick.erupted:
            lines.append(
                _t("log.erupted", effect=tick.effect_name, target=tick.combatant, amount=tick.amount)
            )
            continue
        if tick.amount:
            lines.append(
                _t("log.tick", target=tick.combatant, effect=tick.effect_name, amount=tick.amount)
            )
        if tick.expired:
            lines.append(_t("log.expired", target=tick.combatant, effect=tick.effect_name))
    lines.append(_t("log.turn_end", turn=report.turn_number))
    return lines


class BattleHUD:
    """
    Rich HUD
    Header, both combatants, the hand and a scrolling battle log.
    """

    def __init__(self, console: Console | None = None, max_log_lines: int = 12):
        self.console = console or Console(highlight=False)
        self.layout = Layout()
        self.log_messages: list[str] = []
        self.max_log_lines = max_log_lines
        self._init_layout()

    def _init_layout(self) -> None:
        self.layout.split(
            Layout(name="header", size=3),
            Layout(name="main", ratio=1),
            Layout(name="hand", size=14),
        )
        self.layout["main"].split_row(
            Layout(name="combatants", ratio=3),
            Layout(name="logs", ratio=2),
        )
        self.layout["combatants"].split(
            Layout(name="enemy"),
            Layout(name="player"),
        )

    def log(self, message: str) -> None:
        self.log_messages.append(message)

    def log_many(self, messages: list[str]) -> None:
        self.log_messages.extend(messages)

    # --- Rendering ---

    def render_header(self, snapshot: MatchSnapshot) -> Panel:
        grid = Table.grid(expand=True)
        grid.add_column(justify="left", ratio=1)
        grid.add_column(justify="center", ratio=1)
        grid.add_column(justify="right", ratio=1)
        grid.add_row(
            _t("hud.title"),
            _t("hud.turn", turn=snapshot.turn_number, max=snapshot.max_turns),
            _t("hud.piles", draw=snapshot.draw_pile, discard=snapshot.discard_pile),
        )
        return Panel(grid, style="white on blue")

    def render_combatant(self, combatant: CombatantSnapshot, border: str) -> Panel:
        body = Table.grid(padding=(0, 1))
        body.add_column(style="bold")
        body.add_column()
        hp_style = _hp_style(combatant.hp, combatant.max_hp)
        body.add_row(
            _t("hud.hp"),
            Text(f"{_bar(combatant.hp, combatant.max_hp)} {combatant.hp}/{combatant.max_hp}", style=hp_style),
        )
        if combatant.max_resource:
            body.add_row(
                _t("hud.mana"),
                Text(
                    f"{_bar(combatant.resource, combatant.max_resource)} "
                    f"{combatant.resource}/{combatant.max_resource}",
                    style="cyan",
                ),
            )
        body.add_row(_t("hud.defense"), str(combatant.defense))

        effects = Text()
        if not combatant.effects:
            effects.append(_t("hud.no_effects"), style="dim")
        for view in combatant.effects:
            label = f"{view.emoji}{view.name}"
            if view.stacks > 1:
                label += f" x{view.stacks}"
            effects.append(f"{label} ({view.turns_remaining})  ")
        body.add_row(_t("hud.effects"), effects)
        return Panel(body, title=f"{combatant.emoji} {combatant.name}", border_style=border, box=ROUNDED)

    def render_hand(self, snapshot: MatchSnapshot) -> Panel:
        table = Table(box=ROUNDED, show_edge=False, expand=True)
        table.add_column(_t("hud.col.index"), justify="right", width=3)
        table.add_column(_t("hud.col.card"))
        table.add_column(_t("hud.col.cost"), justify="right")
        table.add_column(_t("hud.col.element"))
        table.add_column(_t("hud.col.description"), ratio=1)
        for i, card in enumerate(snapshot.hand, 1):
            color = ELEMENT_COLORS.get(card.element, "white")
            name = Text(f"{card.emoji} {card.name}", style=f"bold {color}")
            if not card.playable:
                name.stylize("dim")
                description = Text(reason_text(card.reason), style="dim italic")
            else:
                description = Text(card.description)
            table.add_row(str(i), name, str(card.cost), element_name(card.element), description)
        return Panel(table, title=_t("hud.hand"), border_style="magenta")

    def render_logs(self) -> Panel:
        text = Text()
        for msg in self.log_messages[-self.max_log_lines:]:
            text.append(msg + "\n")
        return Panel(text, title=_t("hud.log"), border_style="cyan")

    def render(self, snapshot: MatchSnapshot) -> Layout:
        self.layout["header"].update(self.render_header(snapshot))
        self.layout["enemy"].update(self.render_combatant(snapshot.enemy, "red"))
        self.layout["player"].update(self.render_combatant(snapshot.player, "green"))
        self.layout["logs"].update(self.render_logs())
        self.layout["hand"].update(self.render_hand(snapshot))
        return self.layout

    def show(self, snapshot: MatchSnapshot) -> None:
        self.console.clear()
        self.console.print(self.render(snapshot))

    def show_game_over(self, snapshot: MatchSnapshot, summary: str = "") -> None:
        body = Group(Text(snapshot.message, style="bold yellow"), Text(summary))
        self.console.print(Panel(body, box=DOUBLE, title=_t("hud.title")))

    def prompt(self) -> str:
        return self.console.input(f"[bold]{_t('hud.prompt')}[/bold] > ").strip().lower()
