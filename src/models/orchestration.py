"""オーケストレーション状態・統計・エクスポートモデル。"""

from datetime import datetime

from pydantic import BaseModel, Field

from .agent import Agent
from .canvas import CanvasMode
from .interaction import AgentInteraction
from .project import CrossProjectSynergy, Project, ResourceAllocation
from .risk import ProjectRisk, RiskPredictionMetrics
from .voice import VoiceCommand


class OrchestrationStats(BaseModel):
    """ダッシュボードの集計値。"""

    active_agents: int = Field(default=0, description="稼働中エージェント数")
    completed_tasks: int = Field(default=0, description="完了タスク総数")
    efficiency: int = Field(default=0, description="平均効率（四捨五入）")
    collaboration_score: int = Field(default=0, description="協働スコア（0-100）")


class OrchestrationState(BaseModel):
    """エンジンが所有する状態ストア。

    更新は全コレクションの置き換えとして行う。
    """

    agents: list[Agent] = Field(default_factory=list)
    interactions: list[AgentInteraction] = Field(
        default_factory=list, description="インタラクションログ（新しい順）"
    )
    risks: list[ProjectRisk] = Field(default_factory=list)
    risk_metrics: RiskPredictionMetrics = Field(default_factory=RiskPredictionMetrics)
    projects: list[Project] = Field(default_factory=list)
    synergies: list[CrossProjectSynergy] = Field(default_factory=list)
    allocations: list[ResourceAllocation] = Field(default_factory=list)
    voice_commands: list[VoiceCommand] = Field(
        default_factory=list, description="音声コマンド履歴（新しい順）"
    )
    canvas_mode: CanvasMode = Field(default=CanvasMode.COLLABORATION)
    selected_agent_id: str | None = None
    tick_count: int = Field(default=0, description="実行済みティック数（全タスク合計）")


class OrchestrationSnapshot(BaseModel):
    """レポート出力用のスナップショット。"""

    agents: list[Agent] = Field(default_factory=list)
    interactions: list[AgentInteraction] = Field(default_factory=list)
    risks: list[ProjectRisk] = Field(default_factory=list)
    stats: OrchestrationStats = Field(default_factory=OrchestrationStats)
    timestamp: datetime = Field(default_factory=datetime.now, description="出力日時")
