"""English translation table."""

STRINGS: dict[str, str] = {
    # ── General ──
    "ui.invalid_choice": "Invalid choice",
    "ui.wait_continue": "Press Enter to continue...",

    # ── Exceptions ──
    "exc.data_integrity": "Incomplete data",
    "exc.unknown_archetype": "Unknown card archetype: {kind}",
    "exc.catalog_load": "Failed to load the card catalog",
    "exc.config_error": "Configuration error",
    "exc.battle_state": "Invalid match state",
    "exc.match_not_started": "The match has not started",
    "exc.invalid_phase": "Action not allowed in the current phase",

    # ── Match outcome ──
    "outcome.player_win": "Victory! {name} has been defeated",
    "outcome.player_loss": "Defeat... {name} has fallen",
    "outcome.turn_limit": "The {limit}-turn limit was reached",
    "outcome.time_limit": "Turn timed out ({limit}s)",
    "outcome.not_finished": "Match in progress",

    # ── Failure reasons ──
    "reason.no_target": "No valid target",
    "reason.full_health": "Already at full health",
    "reason.full_resource": "Mana is already full",
    "reason.insufficient_resource": "Not enough mana",
    "reason.unknown_card": "No such card",
    "reason.not_in_hand": "That card is not in your hand",
    "reason.on_cooldown": "Card is on cooldown",
    "reason.already_active": "That effect is already active",
    "reason.already_stunned": "The target is already stunned",
    "reason.nothing_to_cleanse": "Nothing to cleanse",
    "reason.not_player_turn": "It is not your turn",
    "reason.game_over": "The match is over",

    # ── Elements ──
    "element.fire": "Fire",
    "element.water": "Water",
    "element.nature": "Nature",

    # ── HUD ──
    "hud.title": "Emoji Card Battle",
    "hud.turn": "Turn {turn}/{max}",
    "hud.hp": "HP",
    "hud.mana": "Mana",
    "hud.defense": "DEF",
    "hud.effects": "Effects",
    "hud.no_effects": "none",
    "hud.hand": "Hand",
    "hud.piles": "Deck {draw} · Discard {discard}",
    "hud.col.index": "#",
    "hud.col.card": "Card",
    "hud.col.cost": "Cost",
    "hud.col.element": "Element",
    "hud.col.description": "Description",
    "hud.log": "Battle Log",
    "hud.prompt": "Card number to play, e to end turn, q to quit",

    # ── Battle log ──
    "log.played": "Played {card}: {damage} damage, {healing} healing",
    "log.crit": "Critical hit!",
    "log.rejected": "Cannot play: {reason}",
    "log.enemy_attack": "{name} attacks for {damage} damage ({absorbed} absorbed)",
    "log.enemy_stunned": "{name} is stunned and cannot act",
    "log.poisoned": "You have been poisoned!",
    "log.tick": "{target}'s {effect}: {amount}",
    "log.expired": "{effect} on {target} wore off",
    "log.erupted": "{effect} erupts! {amount} damage to {target}",
    "log.detonated": "{effect} detonates for {damage} extra damage!",
    "log.turn_end": "-- End of turn {turn} --",

    # ── Main ──
    "main.goodbye": "Goodbye!",
    "main.stats": "Record: {wins}W {losses}L, streak {streak}, best {best}",
}
