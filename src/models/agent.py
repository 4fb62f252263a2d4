"""エージェントモデル定義。"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AgentRole(str, Enum):
    """エージェントの役割。"""

    VISIONARY = "visionary"
    """ビジョン・戦略方針の策定"""

    PRODUCT_MANAGER = "product_manager"
    """ロードマップとステークホルダー要件の管理"""

    UI_DESIGNER = "ui_designer"
    """ビジュアルデザイン・UI 作成"""

    UX_DESIGNER = "ux_designer"
    """体験設計・インタラクションフロー"""

    FRONTEND_DEVELOPER = "frontend_developer"
    """UI 実装とクライアントサイドロジック"""

    BACKEND_DEVELOPER = "backend_developer"
    """サーバーサイドロジックとデータベース"""

    QA_ENGINEER = "qa_engineer"
    """品質テストと不具合検出"""

    DEVOPS_ENGINEER = "devops_engineer"
    """デプロイとインフラ管理"""

    PROJECT_MANAGER = "project_manager"
    """スケジュール調整とリソース管理"""

    MARKETING_SPECIALIST = "marketing_specialist"
    """マーケティング戦略とキャンペーン"""

    DATA_ANALYST = "data_analyst"
    """データ分析とインサイト提供"""


class AgentStatus(str, Enum):
    """エージェントの状態。"""

    ACTIVE = "active"
    """稼働中"""

    BUSY = "busy"
    """作業中（手が離せない）"""

    IDLE = "idle"
    """待機中"""

    COLLABORATING = "collaborating"
    """他エージェントと協働中"""

    PROBLEM_SOLVING = "problem_solving"
    """問題解決中"""


class Location(BaseModel):
    """キャンバス上の座標。"""

    x: float = Field(description="X 座標（px）")
    y: float = Field(description="Y 座標（px）")


class AgentPersonality(BaseModel):
    """エージェントの性格設定。"""

    traits: list[str] = Field(default_factory=list, description="性格特性")
    communication_style: str = Field(description="コミュニケーションスタイル")
    working_style: str = Field(description="作業スタイル")
    collaboration: str = Field(description="協働時の役割（leader, mediator など）")
    decision_making: str = Field(description="意思決定スタイル")
    stress_responses: list[str] = Field(default_factory=list, description="ストレス時の反応")


class Agent(BaseModel):
    """エージェント情報。"""

    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(description="エージェントの一意識別子")
    name: str = Field(description="表示名")
    role: AgentRole = Field(description="エージェントの役割")
    status: AgentStatus = Field(default=AgentStatus.IDLE, description="エージェントの状態")
    workload: float = Field(default=0.0, ge=0, le=100, description="ワークロード（0-100）")
    efficiency: float = Field(default=0.0, ge=0, le=100, description="効率（0-100）")
    expertise: float = Field(default=0.0, ge=0, le=100, description="専門性（0-100）")
    location: Location = Field(description="キャンバス上の位置")
    personality: AgentPersonality = Field(description="性格設定")
    capabilities: list[str] = Field(default_factory=list, description="保有スキル")
    total_tasks_completed: int = Field(default=0, ge=0, description="完了タスク数")
    average_task_time: float = Field(default=0.0, ge=0, description="平均タスク時間（分）")
    last_active: datetime = Field(description="最終活動日時")
    current_task: str | None = Field(default=None, description="現在実行中のタスク")

    @property
    def is_active(self) -> bool:
        """稼働中かどうか。"""
        return self.status == AgentStatus.ACTIVE


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """値を [lower, upper] に収める。"""
    return max(lower, min(upper, value))


def find_agent(agents: list[Agent], agent_id: str | None) -> Agent | None:
    """ID からエージェントを検索する（見つからなければ None）。"""
    if not agent_id:
        return None
    for agent in agents:
        if agent.id == agent_id:
            return agent
    return None


def resolve_agent_name(agents: list[Agent], agent_id: str | None) -> str:
    """エージェント ID を表示名に解決する。

    ロスターに存在しない ID は例外にせず "unknown" を返す。
    """
    agent = find_agent(agents, agent_id)
    return agent.name if agent else "unknown"
