"""简体中文翻译表（默认语言）。"""

STRINGS: dict[str, str] = {
    # ── 通用 ──
    "ui.invalid_choice": "无效选择",
    "ui.wait_continue": "按回车继续...",

    # ── 异常 ──
    "exc.data_integrity": "数据不完整",
    "exc.unknown_archetype": "未知的卡牌原型: {kind}",
    "exc.catalog_load": "卡牌目录加载失败",
    "exc.config_error": "配置错误",
    "exc.battle_state": "对局状态错误",
    "exc.match_not_started": "对局尚未开始",
    "exc.invalid_phase": "当前阶段不允许该操作",

    # ── 对局结果 ──
    "outcome.player_win": "胜利！{name} 被击败了",
    "outcome.player_loss": "失败……{name} 倒下了",
    "outcome.turn_limit": "已达到 {limit} 回合上限，对局结束",
    "outcome.time_limit": "回合超时（{limit} 秒），对局结束",
    "outcome.not_finished": "对局进行中",

    # ── 出牌失败原因 ──
    "reason.no_target": "没有可攻击的目标",
    "reason.full_health": "生命值已满",
    "reason.full_resource": "法力值已满",
    "reason.insufficient_resource": "法力不足",
    "reason.unknown_card": "没有这张牌",
    "reason.not_in_hand": "这张牌不在手牌中",
    "reason.on_cooldown": "卡牌冷却中",
    "reason.already_active": "该效果已在生效",
    "reason.already_stunned": "目标已被眩晕",
    "reason.nothing_to_cleanse": "没有可以净化的减益",
    "reason.not_player_turn": "现在不是你的回合",
    "reason.game_over": "对局已结束",

    # ── 元素 ──
    "element.fire": "火",
    "element.water": "水",
    "element.nature": "自然",

    # ── 界面 ──
    "hud.title": "Emoji 卡牌对战",
    "hud.turn": "回合 {turn}/{max}",
    "hud.hp": "生命",
    "hud.mana": "法力",
    "hud.defense": "防御",
    "hud.effects": "效果",
    "hud.no_effects": "无",
    "hud.hand": "手牌",
    "hud.piles": "牌堆 {draw} · 弃牌 {discard}",
    "hud.col.index": "#",
    "hud.col.card": "卡牌",
    "hud.col.cost": "消耗",
    "hud.col.element": "元素",
    "hud.col.description": "说明",
    "hud.log": "战斗日志",
    "hud.prompt": "输入卡牌编号出牌，e 结束回合，q 退出",

    # ── 战斗日志 ──
    "log.played": "打出 {card}：伤害 {damage}，治疗 {healing}",
    "log.crit": "暴击！",
    "log.rejected": "无法打出：{reason}",
    "log.enemy_attack": "{name} 发动攻击，造成 {damage} 点伤害（护盾吸收 {absorbed}）",
    "log.enemy_stunned": "{name} 被眩晕，无法行动",
    "log.poisoned": "你中毒了！",
    "log.tick": "{target} 的 {effect}：{amount}",
    "log.expired": "{target} 的 {effect} 消失了",
    "log.erupted": "{effect} 爆发！对 {target} 造成 {amount} 点伤害",
    "log.detonated": "{effect} 引爆！额外造成 {damage} 点伤害",
    "log.turn_end": "—— 第 {turn} 回合结束 ——",

    # ── 主程序 ──
    "main.goodbye": "再见！",
    "main.stats": "战绩：{wins} 胜 {losses} 负，当前连胜 {streak}，最佳连胜 {best}",
}
