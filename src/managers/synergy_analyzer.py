"""プロジェクト横断シナジーとリソース配分の分析。"""

import asyncio
import logging
import random
from dataclasses import dataclass
from itertools import combinations

from src.models.agent import Agent, clamp
from src.models.project import (
    BottleneckRisk,
    CrossProjectSynergy,
    ImplementationEffort,
    Project,
    ProjectShare,
    ProjectStatus,
    ResourceAllocation,
    SynergyType,
    synergy_key,
)
from src.models.risk import round_half_up

logger = logging.getLogger(__name__)

# ボトルネック判定の効率閾値（未満で medium）
BOTTLENECK_EFFICIENCY_THRESHOLD = 75

# 1 エージェントあたりの最大担当プロジェクト数
MAX_PROJECTS_PER_AGENT = 3


@dataclass
class SynergyRule:
    """シナジー種別ごとの判定ルール。"""

    threshold: int
    """採用するアフィニティの下限"""

    weight: float
    """インパクト算出時の重み（閾値が厳しい種別ほど大きい）"""

    effort: ImplementationEffort
    description: str


SYNERGY_RULES: dict[SynergyType, SynergyRule] = {
    SynergyType.KNOWLEDGE_TRANSFER: SynergyRule(
        threshold=70,
        weight=0.7,
        effort=ImplementationEffort.LOW,
        description="Share learnings and best practices between projects",
    ),
    SynergyType.RESOURCE_SHARING: SynergyRule(
        threshold=60,
        weight=0.6,
        effort=ImplementationEffort.MEDIUM,
        description="Optimize agent allocation across multiple projects",
    ),
    SynergyType.COMPONENT_REUSE: SynergyRule(
        threshold=80,
        weight=0.9,
        effort=ImplementationEffort.LOW,
        description="Reuse components and solutions from other projects",
    ),
    SynergyType.TECHNICAL_ALIGNMENT: SynergyRule(
        threshold=75,
        weight=0.8,
        effort=ImplementationEffort.HIGH,
        description="Align technical standards and architectures",
    ),
}

EFFORT_TIMELINES: dict[ImplementationEffort, str] = {
    ImplementationEffort.LOW: "1-2 weeks",
    ImplementationEffort.MEDIUM: "2-4 weeks",
    ImplementationEffort.HIGH: "1-2 months",
    ImplementationEffort.COMPLETED: "done",
}


def project_affinity(first: Project, second: Project) -> int:
    """2 プロジェクト間のアフィニティ（0-100）を計算する。

    同種別 +40、進捗の近さで最大 +30、両方 active で +15、優先度一致で +15。
    """
    score = 0.0
    if first.type and first.type == second.type:
        score += 40
    score += 30 * (1 - abs(first.progress - second.progress) / 100)
    if first.status == ProjectStatus.ACTIVE and second.status == ProjectStatus.ACTIVE:
        score += 15
    if first.priority == second.priority:
        score += 15
    return round_half_up(clamp(score))


def analyze_synergies(projects: list[Project]) -> list[CrossProjectSynergy]:
    """プロジェクト一覧からシナジー機会を抽出する。

    完了・保留中のプロジェクトは対象外。ペアごとにアフィニティを求め、
    閾値を満たす種別のうちインパクトが最大のもの 1 件を機会として返す
    （同点は SYNERGY_RULES の定義順）。キーはプロジェクト組ごとに一意になる。
    """
    candidates = [p for p in projects if p.is_assignable]
    synergies = []
    for first, second in combinations(candidates, 2):
        affinity = project_affinity(first, second)
        passing = [
            (round_half_up(affinity * rule.weight), synergy_type, rule)
            for synergy_type, rule in SYNERGY_RULES.items()
            if affinity >= rule.threshold
        ]
        if not passing:
            continue

        impact, synergy_type, rule = max(passing, key=lambda item: item[0])
        synergies.append(
            CrossProjectSynergy(
                project_ids=[first.id, second.id],
                synergy_type=synergy_type,
                opportunity=rule.description,
                benefit=(
                    f"{first.name} and {second.name} can benefit from "
                    f"{synergy_type.value.replace('_', ' ')}"
                ),
                impact_score=impact,
                implementation_effort=rule.effort,
                timeline=EFFORT_TIMELINES[rule.effort],
            )
        )
    logger.debug(f"シナジー機会を {len(synergies)} 件抽出しました")
    return synergies


def mark_synergy_completed(
    synergies: list[CrossProjectSynergy], key: str
) -> tuple[list[CrossProjectSynergy], bool]:
    """連結プロジェクトIDが key に一致するシナジーを completed にする。

    Returns:
        (更新後のリスト, 一致するものがあった場合 True)
    """
    updated = []
    matched = False
    for synergy in synergies:
        if synergy_key(synergy.project_ids) == key:
            synergy = synergy.model_copy(
                update={
                    "implementation_effort": ImplementationEffort.COMPLETED.value,
                    "timeline": EFFORT_TIMELINES[ImplementationEffort.COMPLETED],
                }
            )
            matched = True
        updated.append(synergy)
    return updated, matched


async def implement_synergy(
    synergies: list[CrossProjectSynergy],
    key: str,
    delay_seconds: float = 1.5,
) -> tuple[list[CrossProjectSynergy], bool]:
    """擬似的な待ち時間のあとシナジーを実施済みにする。

    Args:
        synergies: 現在のシナジー一覧
        key: 連結プロジェクトID
        delay_seconds: 擬似処理時間（0 で待たない）

    Returns:
        (更新後のリスト, 実施した場合 True)
    """
    if delay_seconds > 0:
        await asyncio.sleep(delay_seconds)
    updated, matched = mark_synergy_completed(synergies, key)
    if matched:
        logger.info(f"シナジーを実施しました: {key}")
    else:
        logger.warning(f"該当するシナジーがありません: {key}")
    return updated, matched


def normalize_distribution(weights: list[float]) -> list[int]:
    """重みを合計がちょうど 100 になる整数配分に変換する（最大剰余法）。"""
    if not weights:
        return []
    total = sum(weights)
    if total <= 0:
        weights = [1.0] * len(weights)
        total = float(len(weights))

    raw = [w / total * 100 for w in weights]
    shares = [int(r) for r in raw]
    remainder = 100 - sum(shares)
    order = sorted(range(len(raw)), key=lambda i: raw[i] - shares[i], reverse=True)
    for i in order[:remainder]:
        shares[i] += 1
    return shares


def allocate_resources(
    agents: list[Agent],
    projects: list[Project],
    rng: random.Random,
) -> list[ResourceAllocation]:
    """エージェントごとのリソース配分推奨を計算する。

    project_distribution は割り当て可能なプロジェクトから 1〜3 件を選び、
    合計がちょうど 100 になるよう正規化する（対象がなければ空）。
    """
    assignable = [p for p in projects if p.is_assignable]
    allocations = []
    for agent in agents:
        current = round_half_up(clamp(agent.workload))
        recommended = round_half_up(clamp(current + rng.uniform(-10, 10)))
        efficiency = round(clamp(agent.efficiency + rng.uniform(-5, 5)), 1)
        utilization = min(100, round_half_up(current / max(recommended, 1) * 100))

        distribution: list[ProjectShare] = []
        if assignable:
            count = rng.randint(1, min(MAX_PROJECTS_PER_AGENT, len(assignable)))
            chosen = rng.sample(assignable, count)
            shares = normalize_distribution([rng.uniform(0.1, 1.0) for _ in chosen])
            distribution = [
                ProjectShare(project_id=project.id, percentage=share)
                for project, share in zip(chosen, shares)
            ]

        allocations.append(
            ResourceAllocation(
                agent_id=agent.id,
                current_allocation=current,
                recommended_allocation=recommended,
                efficiency=efficiency,
                utilization=utilization,
                bottleneck_risk=(
                    BottleneckRisk.MEDIUM
                    if efficiency < BOTTLENECK_EFFICIENCY_THRESHOLD
                    else BottleneckRisk.LOW
                ),
                project_distribution=distribution,
            )
        )
    return allocations
