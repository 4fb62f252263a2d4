"""インタラクション生成。

ティックごとに一定確率で active なエージェント 2 名の間にやり取りを追加する。
ログは新しい順に保持し、上限を超えた古いエントリは黙って捨てる。
"""

import logging
import random
import uuid
from datetime import datetime, timedelta

from src.models.agent import Agent, AgentStatus, find_agent
from src.models.interaction import (
    AgentInteraction,
    InteractionPriority,
    InteractionStatus,
    InteractionType,
)

logger = logging.getLogger(__name__)


CONTENT_TEMPLATES: dict[InteractionType, str] = {
    InteractionType.HANDOFF: "{source} is handing off work to {target}",
    InteractionType.COLLABORATION: "{source} is collaborating with {target}",
    InteractionType.REVIEW: "{source} is reviewing deliverables from {target}",
    InteractionType.FEEDBACK: "{source} is sharing feedback with {target}",
    InteractionType.CONFLICT_RESOLUTION: "{source} is resolving a conflict with {target}",
}

# 状態遷移（pending → in_progress → completed）
_NEXT_STATUS: dict[str, InteractionStatus] = {
    InteractionStatus.PENDING.value: InteractionStatus.IN_PROGRESS,
    InteractionStatus.IN_PROGRESS.value: InteractionStatus.COMPLETED,
}


def new_interaction_id() -> str:
    """インタラクションIDを生成する。"""
    return f"interaction-{uuid.uuid4().hex[:12]}"


def append_interaction(
    interactions: list[AgentInteraction],
    interaction: AgentInteraction,
    limit: int,
) -> list[AgentInteraction]:
    """先頭に追加し、直後に新しい順 limit 件へ切り詰めた新しいリストを返す。"""
    return [interaction, *interactions][:limit]


def generate_interaction_tick(
    agents: list[Agent],
    interactions: list[AgentInteraction],
    rng: random.Random,
    now: datetime,
    probability: float = 0.3,
    limit: int = 10,
) -> list[AgentInteraction]:
    """1 ティック分のインタラクション生成を行う。

    Args:
        agents: 現在のエージェント一覧
        interactions: 現在のログ（新しい順）
        rng: 乱数ソース
        now: 現在時刻
        probability: 生成確率
        limit: ログの保持件数

    Returns:
        更新後のログ（生成しなかった場合は入力と同じ内容）
    """
    if rng.random() >= probability:
        return list(interactions)

    active_agents = [a for a in agents if a.status == AgentStatus.ACTIVE]
    if len(active_agents) < 2:
        logger.debug("active なエージェントが 2 名未満のためインタラクション生成をスキップ")
        return list(interactions)

    source, target = rng.sample(active_agents, 2)
    interaction_type = rng.choice(list(InteractionType))
    interaction = AgentInteraction(
        id=new_interaction_id(),
        from_agent=source.id,
        to_agent=target.id,
        type=interaction_type,
        content=CONTENT_TEMPLATES[interaction_type].format(
            source=source.name, target=target.name
        ),
        timestamp=now,
        status=InteractionStatus.IN_PROGRESS,
        priority=rng.choice(list(InteractionPriority)),
    )
    logger.debug(
        f"インタラクションを生成しました: {source.id} -> {target.id} ({interaction_type.value})"
    )
    return append_interaction(interactions, interaction, limit)


def create_interaction(
    agents: list[Agent],
    from_agent: str,
    to_agent: str,
    interaction_type: InteractionType | str,
    now: datetime,
    content: str | None = None,
    priority: InteractionPriority | str = InteractionPriority.MEDIUM,
    status: InteractionStatus | str = InteractionStatus.PENDING,
) -> AgentInteraction:
    """ユーザー操作によるインタラクションを作成する。

    ロスターにない ID も受け付ける（表示時に "unknown" と解決される）。

    Raises:
        ValueError: 送信元と宛先が同じ場合、または種類・優先度が不正な場合
    """
    interaction_type = InteractionType(interaction_type)
    if content is None:
        source = find_agent(agents, from_agent)
        target = find_agent(agents, to_agent)
        content = CONTENT_TEMPLATES[interaction_type].format(
            source=source.name if source else "unknown",
            target=target.name if target else "unknown",
        )
    return AgentInteraction(
        id=new_interaction_id(),
        from_agent=from_agent,
        to_agent=to_agent,
        type=interaction_type,
        content=content,
        timestamp=now,
        status=InteractionStatus(status),
        priority=InteractionPriority(priority),
    )


def advance_interaction(
    interactions: list[AgentInteraction], interaction_id: str
) -> tuple[list[AgentInteraction], bool]:
    """指定インタラクションの状態を 1 段階進める。

    Returns:
        (更新後のログ, 進めた場合 True)
    """
    updated = []
    advanced = False
    for interaction in interactions:
        next_status = _NEXT_STATUS.get(interaction.status)
        if interaction.id == interaction_id and next_status is not None:
            interaction = interaction.model_copy(update={"status": next_status.value})
            advanced = True
        updated.append(interaction)
    return updated, advanced


def create_seed_interactions(now: datetime) -> list[AgentInteraction]:
    """初期表示用のサンプルインタラクションを返す（新しい順）。"""
    return [
        AgentInteraction(
            id="int-3",
            from_agent="agent-qa_engineer",
            to_agent="agent-frontend_developer",
            type=InteractionType.FEEDBACK,
            content="Found UI inconsistency in navigation component",
            timestamp=now - timedelta(minutes=5),
            status=InteractionStatus.PENDING,
            priority=InteractionPriority.MEDIUM,
        ),
        AgentInteraction(
            id="int-2",
            from_agent="agent-product_manager",
            to_agent="agent-backend_developer",
            type=InteractionType.COLLABORATION,
            content="API requirements for user authentication",
            timestamp=now - timedelta(minutes=15),
            status=InteractionStatus.IN_PROGRESS,
            priority=InteractionPriority.HIGH,
        ),
        AgentInteraction(
            id="int-1",
            from_agent="agent-ui_designer",
            to_agent="agent-frontend_developer",
            type=InteractionType.HANDOFF,
            content="Design mockups ready for implementation",
            timestamp=now - timedelta(minutes=30),
            status=InteractionStatus.COMPLETED,
            priority=InteractionPriority.MEDIUM,
        ),
    ]
