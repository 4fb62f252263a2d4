"""プロジェクト・シナジー・リソース配分モデル。"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ProjectStatus(str, Enum):
    """プロジェクトの状態。"""

    ACTIVE = "active"
    PLANNING = "planning"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"


class ProjectPriority(str, Enum):
    """プロジェクトの優先度。"""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Project(BaseModel):
    """プロジェクト情報。"""

    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(..., description="プロジェクトID")
    name: str = Field(..., description="プロジェクト名")
    status: ProjectStatus = Field(default=ProjectStatus.PLANNING, description="状態")
    progress: int = Field(default=0, ge=0, le=100, description="進捗率（0-100）")
    priority: ProjectPriority = Field(default=ProjectPriority.MEDIUM, description="優先度")
    agents_assigned: int = Field(default=0, ge=0, description="割り当てエージェント数")
    deadline: str = Field(default="", description="期限")
    type: str = Field(default="", description="プロジェクト種別（web_app など）")

    @property
    def is_assignable(self) -> bool:
        """エージェントを割り当て可能な状態か（完了・保留以外）。"""
        return self.status in (ProjectStatus.ACTIVE, ProjectStatus.PLANNING)


class SynergyType(str, Enum):
    """シナジーの種類。"""

    KNOWLEDGE_TRANSFER = "knowledge_transfer"
    RESOURCE_SHARING = "resource_sharing"
    COMPONENT_REUSE = "component_reuse"
    TECHNICAL_ALIGNMENT = "technical_alignment"


class ImplementationEffort(str, Enum):
    """シナジー実施の工数区分。"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    COMPLETED = "completed"


def synergy_key(project_ids: list[str]) -> str:
    """シナジーの自然キー（プロジェクトIDの連結）を返す。"""
    return "-".join(project_ids)


class CrossProjectSynergy(BaseModel):
    """プロジェクト横断のシナジー機会。"""

    model_config = ConfigDict(use_enum_values=True)

    project_ids: list[str] = Field(..., min_length=2, description="対象プロジェクトID")
    synergy_type: SynergyType = Field(..., description="シナジー種別")
    opportunity: str = Field(default="", description="機会の説明")
    benefit: str = Field(default="", description="期待効果")
    impact_score: int = Field(default=0, ge=0, le=100, description="インパクト（0-100）")
    implementation_effort: ImplementationEffort = Field(
        default=ImplementationEffort.MEDIUM, description="工数区分"
    )
    timeline: str = Field(default="", description="想定期間")

    @computed_field
    @property
    def key(self) -> str:
        """自然キー。"""
        return synergy_key(self.project_ids)


class BottleneckRisk(str, Enum):
    """ボトルネックリスク。"""

    LOW = "low"
    MEDIUM = "medium"


class ProjectShare(BaseModel):
    """エージェントのプロジェクト別配分。"""

    project_id: str = Field(..., description="プロジェクトID")
    percentage: int = Field(..., ge=0, le=100, description="配分率（%）")


class ResourceAllocation(BaseModel):
    """エージェント 1 名分のリソース配分推奨。"""

    model_config = ConfigDict(use_enum_values=True)

    agent_id: str = Field(..., description="エージェントID")
    current_allocation: int = Field(..., ge=0, le=100, description="現在の配分")
    recommended_allocation: int = Field(..., ge=0, le=100, description="推奨配分")
    efficiency: float = Field(..., ge=0, le=100, description="効率の推定値")
    utilization: int = Field(..., ge=0, le=100, description="稼働率（%）")
    bottleneck_risk: BottleneckRisk = Field(..., description="ボトルネックリスク")
    project_distribution: list[ProjectShare] = Field(
        default_factory=list, description="プロジェクト別配分（合計 100 または空）"
    )
