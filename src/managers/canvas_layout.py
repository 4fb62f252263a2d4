"""コラボレーションキャンバスの配置計算。

表示モードに応じてノードサイズ・接続線の色・ゾーンを決める。
"""

import logging

from src.models.agent import Agent, AgentStatus, find_agent
from src.models.canvas import (
    AgentNode,
    AgentTooltip,
    CanvasLayout,
    CanvasMode,
    CanvasZone,
    ConnectionLine,
)
from src.models.interaction import (
    AgentInteraction,
    InteractionPriority,
    InteractionStatus,
    InteractionType,
)

logger = logging.getLogger(__name__)

COLOR_GREEN = "#10B981"
COLOR_AMBER = "#F59E0B"
COLOR_GRAY = "#6B7280"
COLOR_BLUE = "#3B82F6"
COLOR_RED = "#EF4444"

STATUS_COLORS: dict[AgentStatus, str] = {
    AgentStatus.ACTIVE: COLOR_GREEN,
    AgentStatus.BUSY: COLOR_AMBER,
    AgentStatus.IDLE: COLOR_GRAY,
    AgentStatus.COLLABORATING: COLOR_BLUE,
    AgentStatus.PROBLEM_SOLVING: COLOR_RED,
}

# (モード, インタラクション種別) で色が決まる組み合わせ
MODE_TYPE_COLORS: dict[tuple[CanvasMode, InteractionType], str] = {
    (CanvasMode.CONFLICT, InteractionType.CONFLICT_RESOLUTION): COLOR_RED,
    (CanvasMode.COLLABORATION, InteractionType.COLLABORATION): COLOR_GREEN,
}

PERFORMANCE_PRIORITY_COLORS: dict[InteractionPriority, str] = {
    InteractionPriority.HIGH: COLOR_AMBER,
    InteractionPriority.MEDIUM: COLOR_GRAY,
    InteractionPriority.LOW: COLOR_GRAY,
}

# ゾーンを描くモードと対象インタラクション種別
ZONE_RULES: dict[CanvasMode, tuple[InteractionType, str]] = {
    CanvasMode.COLLABORATION: (InteractionType.COLLABORATION, COLOR_GREEN),
    CanvasMode.CONFLICT: (InteractionType.CONFLICT_RESOLUTION, COLOR_RED),
}

MAX_COLLABORATION_MODIFIER = 1.5


def parse_canvas_mode(value: CanvasMode | str | None) -> CanvasMode | None:
    """表示モード文字列を解釈する（不正値は None）。"""
    if value is None:
        return None
    try:
        return CanvasMode(value)
    except ValueError:
        logger.debug(f"未知のキャンバスモードを無視します: {value}")
        return None


def size_modifier(
    agent: Agent,
    interactions: list[AgentInteraction],
    mode: CanvasMode | str | None,
) -> float:
    """モード別のノード拡大率を返す。

    - performance: 0.75 + efficiency/100 × 0.5（0.75〜1.25）
    - collaboration: min(1.5, 1 + 0.1 × 関与インタラクション数)
    - それ以外: 1
    """
    mode = parse_canvas_mode(mode)
    if mode == CanvasMode.PERFORMANCE:
        return 0.75 + (agent.efficiency / 100) * 0.5
    if mode == CanvasMode.COLLABORATION:
        count = sum(1 for i in interactions if i.involves(agent.id))
        return min(MAX_COLLABORATION_MODIFIER, 1 + 0.1 * count)
    return 1.0


def connection_color(
    interaction: AgentInteraction, mode: CanvasMode | str | None
) -> str:
    """接続線の色を返す。"""
    mode = parse_canvas_mode(mode)
    if mode is None:
        return COLOR_BLUE
    if mode == CanvasMode.PERFORMANCE:
        return PERFORMANCE_PRIORITY_COLORS[InteractionPriority(interaction.priority)]
    return MODE_TYPE_COLORS.get((mode, InteractionType(interaction.type)), COLOR_BLUE)


def build_node(
    agent: Agent,
    interactions: list[AgentInteraction],
    mode: CanvasMode | None,
    base_size: float,
) -> AgentNode:
    """エージェント 1 名分のノードを計算する。"""
    modifier = size_modifier(agent, interactions, mode)
    size = base_size * modifier
    return AgentNode(
        agent_id=agent.id,
        center_x=agent.location.x,
        center_y=agent.location.y,
        x=agent.location.x - size / 2,
        y=agent.location.y - size / 2,
        size=size,
        size_modifier=modifier,
        color=STATUS_COLORS[AgentStatus(agent.status)],
        tooltip=AgentTooltip(
            name=agent.name,
            role=agent.role,
            status=agent.status,
            workload=round(agent.workload, 1),
            efficiency=round(agent.efficiency, 1),
            current_task=agent.current_task,
        ),
    )


def build_lines(
    agents: list[Agent],
    interactions: list[AgentInteraction],
    mode: CanvasMode | None,
) -> list[ConnectionLine]:
    """インタラクションごとの接続線を計算する（端点が解決できないものは除外）。"""
    lines = []
    for interaction in interactions:
        source = find_agent(agents, interaction.from_agent)
        target = find_agent(agents, interaction.to_agent)
        if source is None or target is None:
            continue
        lines.append(
            ConnectionLine(
                interaction_id=interaction.id,
                from_x=source.location.x,
                from_y=source.location.y,
                to_x=target.location.x,
                to_y=target.location.y,
                color=connection_color(interaction, mode),
                dashed=interaction.status == InteractionStatus.PENDING,
                type=interaction.type,
                status=interaction.status,
                priority=interaction.priority,
            )
        )
    return lines


def build_zones(
    agents: list[Agent],
    interactions: list[AgentInteraction],
    mode: CanvasMode | None,
    radii: dict[CanvasMode, float],
) -> list[CanvasZone]:
    """モードに応じたゾーンを計算する。"""
    rule = ZONE_RULES.get(mode) if mode is not None else None
    if rule is None:
        return []
    zone_type, color = rule
    participants = set()
    for interaction in interactions:
        if interaction.type == zone_type:
            participants.update((interaction.from_agent, interaction.to_agent))
    return [
        CanvasZone(
            agent_id=agent.id,
            center_x=agent.location.x,
            center_y=agent.location.y,
            radius=radii[mode],
            color=color,
        )
        for agent in agents
        if agent.id in participants
    ]


def compute_canvas_layout(
    agents: list[Agent],
    interactions: list[AgentInteraction],
    mode: CanvasMode | str | None,
    base_size: float = 60.0,
    collaboration_radius: float = 150.0,
    conflict_radius: float = 100.0,
    width: int = 1200,
    height: int = 800,
) -> CanvasLayout:
    """キャンバス全体の配置を計算する。

    不正なモードは None として扱い、拡大率 1・既定色で描画する。
    """
    resolved = parse_canvas_mode(mode)
    radii = {
        CanvasMode.COLLABORATION: collaboration_radius,
        CanvasMode.CONFLICT: conflict_radius,
    }
    return CanvasLayout(
        mode=resolved,
        width=width,
        height=height,
        nodes=[build_node(agent, interactions, resolved, base_size) for agent in agents],
        lines=build_lines(agents, interactions, resolved),
        zones=build_zones(agents, interactions, resolved, radii),
    )
