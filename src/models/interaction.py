"""エージェント間インタラクションモデル。"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class InteractionType(str, Enum):
    """インタラクションの種類。"""

    HANDOFF = "handoff"  # 作業の引き継ぎ
    COLLABORATION = "collaboration"  # 協働
    REVIEW = "review"  # レビュー
    FEEDBACK = "feedback"  # フィードバック
    CONFLICT_RESOLUTION = "conflict_resolution"  # 対立の解消


class InteractionStatus(str, Enum):
    """インタラクションの状態。"""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class InteractionPriority(str, Enum):
    """インタラクションの優先度。"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AgentInteraction(BaseModel):
    """エージェント間のやり取り 1 件。"""

    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(..., description="インタラクションID")
    from_agent: str = Field(..., description="送信元エージェントID")
    to_agent: str = Field(..., description="宛先エージェントID")
    type: InteractionType = Field(..., description="種類")
    content: str = Field(default="", description="内容")
    timestamp: datetime = Field(default_factory=datetime.now, description="発生日時")
    status: InteractionStatus = Field(
        default=InteractionStatus.PENDING, description="状態"
    )
    priority: InteractionPriority = Field(
        default=InteractionPriority.MEDIUM, description="優先度"
    )

    @model_validator(mode="after")
    def validate_distinct_agents(self) -> "AgentInteraction":
        """送信元と宛先が異なることを検証する。"""
        if self.from_agent == self.to_agent:
            raise ValueError(
                f"送信元と宛先に同じエージェントは指定できません: {self.from_agent}"
            )
        return self

    def involves(self, agent_id: str) -> bool:
        """指定エージェントが関与しているかどうか。"""
        return self.from_agent == agent_id or self.to_agent == agent_id
