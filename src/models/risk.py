"""プロジェクトリスクモデル。"""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


def round_half_up(value: float) -> int:
    """0.5 を切り上げる四捨五入（銀行丸めを使わない）。"""
    return int(math.floor(value + 0.5))


class RiskType(str, Enum):
    """リスクの種類。"""

    SCOPE_CREEP = "scope_creep"
    TEAM_BURNOUT = "team_burnout"
    TECHNICAL_DEBT = "technical_debt"
    STAKEHOLDER_ALIGNMENT = "stakeholder_alignment"
    TIMELINE_SLIP = "timeline_slip"
    QUALITY_DEGRADATION = "quality_degradation"
    RESOURCE_CONFLICT = "resource_conflict"
    DEPENDENCY_BLOCK = "dependency_block"


class RiskSeverity(str, Enum):
    """リスクの深刻度。"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RiskStatus(str, Enum):
    """リスクの対応状況。

    identified → mitigating → resolved の順にのみ進む。
    """

    IDENTIFIED = "identified"
    MITIGATING = "mitigating"
    RESOLVED = "resolved"


RISK_STATUS_ORDER: dict[str, int] = {
    RiskStatus.IDENTIFIED.value: 0,
    RiskStatus.MITIGATING.value: 1,
    RiskStatus.RESOLVED.value: 2,
}


class TrendDirection(str, Enum):
    """リスクの傾向。"""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class ProjectRisk(BaseModel):
    """予測されたプロジェクトリスク。"""

    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(..., description="リスクID")
    type: RiskType = Field(..., description="リスク種別")
    severity: RiskSeverity = Field(..., description="深刻度")
    probability: int = Field(..., ge=0, le=100, description="発生確率（0-100）")
    impact: int = Field(..., ge=0, le=100, description="影響度（0-100）")
    description: str = Field(default="", description="説明")
    affected_agents: list[str] = Field(default_factory=list, description="影響を受けるエージェントID")
    mitigation: list[str] = Field(default_factory=list, description="緩和策（順序付き）")
    early_warnings: list[str] = Field(default_factory=list, description="予兆シグナル（順序付き）")
    timeline: str = Field(default="", description="想定時期")
    status: RiskStatus = Field(default=RiskStatus.IDENTIFIED, description="対応状況")

    @computed_field
    @property
    def score(self) -> int:
        """リスクスコア（probability × impact / 100 を四捨五入）。"""
        return round_half_up(self.probability * self.impact / 100)


class RiskPredictionMetrics(BaseModel):
    """リスク予測の集計値。"""

    model_config = ConfigDict(use_enum_values=True)

    overall_risk_score: int = Field(default=0, description="総合リスクスコア")
    trend_direction: TrendDirection = Field(
        default=TrendDirection.STABLE, description="傾向"
    )
    next_risk_window: str = Field(default="3-5 days", description="次のリスク発現時期")
    confidence_level: int = Field(default=85, description="予測信頼度（%）")
