"""エージェントのパフォーマンス評価。"""

from src.models.agent import Agent

# (下限スコア, 評価) の降順テーブル
GRADE_TABLE: list[tuple[int, str]] = [
    (90, "A+"),
    (85, "A"),
    (80, "B+"),
    (75, "B"),
    (70, "C+"),
]


def personality_score(agent: Agent) -> int:
    """性格設定の有効度スコア（0-100）を計算する。"""
    personality = agent.personality
    traits = len(personality.traits) * 15
    communication = 20
    collaboration = 25 if personality.collaboration == "leader" else 20
    adaptability = 25 if len(personality.stress_responses) < 3 else 15
    return min(100, traits + communication + collaboration + adaptability)


def performance_grade(score: float) -> str:
    """スコアを評価記号に変換する。"""
    for lower, grade in GRADE_TABLE:
        if score >= lower:
            return grade
    return "C"


def overall_performance(agent: Agent) -> float:
    """効率と専門性の平均。"""
    return (agent.efficiency + agent.expertise) / 2


def top_performers(agents: list[Agent], limit: int = 3) -> list[dict]:
    """総合パフォーマンス上位のエージェントを返す。

    Returns:
        agent_id, name, score, grade を持つ辞書のリスト（降順）
    """
    ranked = sorted(agents, key=overall_performance, reverse=True)
    return [
        {
            "agent_id": agent.id,
            "name": agent.name,
            "score": round(overall_performance(agent), 1),
            "grade": performance_grade(overall_performance(agent)),
        }
        for agent in ranked[:limit]
    ]


def agent_performance(agent: Agent) -> dict:
    """エージェント 1 名分のパフォーマンス概要を返す。"""
    score = overall_performance(agent)
    return {
        "agent_id": agent.id,
        "name": agent.name,
        "efficiency": round(agent.efficiency, 1),
        "expertise": round(agent.expertise, 1),
        "overall_score": round(score, 1),
        "grade": performance_grade(score),
        "personality_score": personality_score(agent),
        "total_tasks_completed": agent.total_tasks_completed,
        "average_task_time": agent.average_task_time,
    }
