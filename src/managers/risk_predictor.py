"""リスク予測。

固定カタログのリスクに乱数ノイズを加えて再計算し、
総合スコア・傾向・次のリスク発現時期を導出する。
"""

import logging
import random
from dataclasses import dataclass, field

from src.models.agent import Agent
from src.models.risk import (
    RISK_STATUS_ORDER,
    ProjectRisk,
    RiskPredictionMetrics,
    RiskSeverity,
    RiskStatus,
    RiskType,
    TrendDirection,
    round_half_up,
)

logger = logging.getLogger(__name__)

# 傾向判定の閾値（スコアがこの値より大きい / 小さい場合）
TREND_INCREASING_ABOVE = 60
TREND_DECREASING_BELOW = 40


class InvalidRiskTransitionError(ValueError):
    """許可されないリスク状態遷移。"""


@dataclass
class RiskTemplate:
    """リスクカタログのエントリ。"""

    id: str
    type: RiskType
    probability: int
    """基準の発生確率"""

    impact: int
    """基準の影響度"""

    description: str
    affected_agents: list[str] = field(default_factory=list)
    mitigation: list[str] = field(default_factory=list)
    early_warnings: list[str] = field(default_factory=list)
    timeline: str = ""
    status: RiskStatus = RiskStatus.IDENTIFIED


RISK_CATALOG: list[RiskTemplate] = [
    RiskTemplate(
        id="risk-scope-creep",
        type=RiskType.SCOPE_CREEP,
        probability=78,
        impact=65,
        description="Multiple feature requests detected outside original scope",
        affected_agents=["agent-product_manager", "agent-visionary"],
        mitigation=[
            "Schedule stakeholder alignment meeting",
            "Review and lock feature scope",
            "Set up change request process",
        ],
        early_warnings=[
            "Increased communication volume between stakeholders",
            "New requirements appearing in backlog",
            "Product Manager showing stress patterns",
        ],
        timeline="2-3 days",
    ),
    RiskTemplate(
        id="risk-technical-debt",
        type=RiskType.TECHNICAL_DEBT,
        probability=85,
        impact=80,
        description="Rapid development pace creating technical debt accumulation",
        affected_agents=[
            "agent-frontend_developer",
            "agent-backend_developer",
            "agent-qa_engineer",
        ],
        mitigation=[
            "Schedule refactoring sprint",
            "Implement code review checkpoints",
            "Add automated testing coverage",
        ],
        early_warnings=[
            "Increasing bug reports from QA",
            "Slower development velocity",
            "Developer frustration indicators",
        ],
        timeline="1-2 weeks",
        status=RiskStatus.MITIGATING,
    ),
    RiskTemplate(
        id="risk-team-burnout",
        type=RiskType.TEAM_BURNOUT,
        probability=45,
        impact=90,
        description="Extended work periods may lead to team fatigue",
        affected_agents=["agent-frontend_developer", "agent-ui_designer"],
        mitigation=[
            "Distribute workload more evenly",
            "Schedule team wellness check",
            "Consider timeline adjustments",
        ],
        early_warnings=[
            "Decreased efficiency in UI Designer",
            "Longer response times to requests",
            "Reduced collaboration frequency",
        ],
        timeline="1 week",
    ),
]


def severity_for_score(score: int) -> RiskSeverity:
    """リスクスコアから深刻度を決める。"""
    if score >= 75:
        return RiskSeverity.CRITICAL
    if score >= 60:
        return RiskSeverity.HIGH
    if score >= 45:
        return RiskSeverity.MEDIUM
    return RiskSeverity.LOW


def _jitter(base: int, rng: random.Random, noise: int) -> int:
    """基準値に ±noise の整数ノイズを加えて [0, 100] に収める。"""
    if noise <= 0:
        return base
    return max(0, min(100, base + rng.randint(-noise, noise)))


def _later_status(current: str, carried: str | None) -> str:
    """2 つの状態のうち遷移が進んでいる方を返す。"""
    if carried is None:
        return current
    return carried if RISK_STATUS_ORDER[carried] > RISK_STATUS_ORDER[current] else current


def predict_risks(
    agents: list[Agent],
    rng: random.Random,
    noise: int = 5,
    previous: list[ProjectRisk] | None = None,
) -> list[ProjectRisk]:
    """リスク一覧を丸ごと再計算する。

    カタログ値は入力のエージェントから導出したものではなく、デモ用の固定値に
    乱数ノイズを加えたもの。ユーザーが進めた状態（mitigating / resolved）は
    同じ ID のリスクに引き継ぎ、自動で戻すことはない。

    Args:
        agents: エージェント一覧（影響エージェントの参照先）
        rng: 乱数ソース
        noise: 発生確率・影響度の最大ノイズ
        previous: 前回の分析結果

    Returns:
        カタログ順のリスク一覧
    """
    carried = {risk.id: risk.status for risk in previous or []}
    known_ids = {agent.id for agent in agents}

    risks = []
    for template in RISK_CATALOG:
        probability = _jitter(template.probability, rng, noise)
        impact = _jitter(template.impact, rng, noise)
        score = round_half_up(probability * impact / 100)
        missing = [a for a in template.affected_agents if a not in known_ids]
        if missing:
            logger.debug(f"{template.id}: ロスターにないエージェントを参照しています: {missing}")
        risks.append(
            ProjectRisk(
                id=template.id,
                type=template.type,
                severity=severity_for_score(score),
                probability=probability,
                impact=impact,
                description=template.description,
                affected_agents=list(template.affected_agents),
                mitigation=list(template.mitigation),
                early_warnings=list(template.early_warnings),
                timeline=template.timeline,
                status=_later_status(template.status.value, carried.get(template.id)),
            )
        )
    return risks


def trend_for_score(score: int) -> TrendDirection:
    """総合スコアから傾向を判定する（60 超: 増加、40 未満: 減少）。"""
    if score > TREND_INCREASING_ABOVE:
        return TrendDirection.INCREASING
    if score < TREND_DECREASING_BELOW:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def risk_window_for_score(score: int) -> str:
    """総合スコアから次のリスク発現時期のラベルを返す。"""
    if score > 70:
        return "1-2 days"
    if score > 50:
        return "3-5 days"
    return "1-2 weeks"


def overall_risk_score(risks: list[ProjectRisk]) -> int:
    """平均発生確率 × 平均影響度 / 100 を四捨五入した総合スコア。"""
    if not risks:
        return 0
    avg_probability = sum(r.probability for r in risks) / len(risks)
    avg_impact = sum(r.impact for r in risks) / len(risks)
    return round_half_up(avg_probability * avg_impact / 100)


def compute_risk_metrics(risks: list[ProjectRisk], rng: random.Random) -> RiskPredictionMetrics:
    """リスク一覧から予測メトリクスを計算する。"""
    score = overall_risk_score(risks)
    return RiskPredictionMetrics(
        overall_risk_score=score,
        trend_direction=trend_for_score(score),
        next_risk_window=risk_window_for_score(score),
        confidence_level=round_half_up(85 + rng.random() * 10),
    )


def transition_risk_status(
    risks: list[ProjectRisk],
    risk_id: str,
    new_status: RiskStatus | str,
) -> list[ProjectRisk]:
    """リスクの状態を進めた新しいリストを返す。

    identified → mitigating → resolved の前進のみ許可する（段階の飛ばしは可）。

    Raises:
        InvalidRiskTransitionError: 未知の ID、未知の状態、後退・同一状態への遷移の場合
    """
    try:
        target = RiskStatus(new_status).value
    except ValueError as e:
        raise InvalidRiskTransitionError(f"不正なリスク状態です: {new_status}") from e

    updated = []
    found = False
    for risk in risks:
        if risk.id == risk_id:
            found = True
            if RISK_STATUS_ORDER[target] <= RISK_STATUS_ORDER[risk.status]:
                raise InvalidRiskTransitionError(
                    f"リスク {risk_id} を {risk.status} から {target} へは遷移できません"
                )
            risk = risk.model_copy(update={"status": target})
        updated.append(risk)

    if not found:
        raise InvalidRiskTransitionError(f"リスク {risk_id} が見つかりません")

    logger.info(f"リスク {risk_id} の状態を {target} に更新しました")
    return updated
