"""エージェント状態シミュレーター。

ティックごとにワークロード・効率・ステータスを範囲内で揺らす。
初期ロスターの生成もここで行う。
"""

import logging
import random
from datetime import datetime

from src.config.agent_catalog import AGENT_DEFINITIONS, DEFAULT_TASK, agent_id_for_role
from src.models.agent import Agent, AgentStatus, Location, clamp

logger = logging.getLogger(__name__)

# 初期化時に active で起動するエージェント数（残りは idle）
INITIAL_ACTIVE_AGENTS = 6

# グリッド配置
GRID_COLUMNS = 4
GRID_SPACING = 200
GRID_OFFSET = 100


def create_initial_agents(rng: random.Random, now: datetime) -> list[Agent]:
    """役割カタログから初期ロスターを生成する。

    Args:
        rng: 乱数ソース
        now: 現在時刻

    Returns:
        カタログ順のエージェントリスト
    """
    agents = []
    for index, (role, definition) in enumerate(AGENT_DEFINITIONS.items()):
        tasks = definition.tasks or [DEFAULT_TASK]
        agents.append(
            Agent(
                id=agent_id_for_role(role),
                name=definition.name,
                role=role,
                status=AgentStatus.ACTIVE if index < INITIAL_ACTIVE_AGENTS else AgentStatus.IDLE,
                workload=rng.randint(20, 99),
                efficiency=rng.randint(70, 99),
                expertise=rng.randint(70, 99),
                location=Location(
                    x=(index % GRID_COLUMNS) * GRID_SPACING + GRID_OFFSET,
                    y=(index // GRID_COLUMNS) * GRID_SPACING + GRID_OFFSET,
                ),
                personality=definition.personality.model_copy(deep=True),
                capabilities=list(definition.capabilities),
                total_tasks_completed=rng.randint(10, 59),
                average_task_time=rng.randint(30, 149),
                last_active=now,
                current_task=rng.choice(tasks),
            )
        )
    logger.debug(f"初期エージェントを {len(agents)} 名生成しました")
    return agents


def simulate_status_tick(
    agents: list[Agent],
    rng: random.Random,
    now: datetime,
    workload_delta: float = 10.0,
    efficiency_delta: float = 5.0,
    status_change_probability: float = 0.2,
) -> list[Agent]:
    """全エージェントの状態を 1 ティック分揺らした新しいリストを返す。

    - workload は ±workload_delta、efficiency は ±efficiency_delta の範囲で変動し、
      いずれも [0, 100] に収める
    - status_change_probability の確率でステータスを一様ランダムに入れ替える
    - last_active はティック開始時点で active だったエージェントのみ更新する

    入力リストとその要素は変更しない。
    """
    statuses = list(AgentStatus)
    updated = []
    for agent in agents:
        workload = clamp(agent.workload + rng.uniform(-workload_delta, workload_delta))
        efficiency = clamp(agent.efficiency + rng.uniform(-efficiency_delta, efficiency_delta))
        status = agent.status
        if rng.random() < status_change_probability:
            status = rng.choice(statuses).value
        updated.append(
            agent.model_copy(
                update={
                    "workload": workload,
                    "efficiency": efficiency,
                    "status": status,
                    "last_active": now if agent.is_active else agent.last_active,
                }
            )
        )
    return updated
