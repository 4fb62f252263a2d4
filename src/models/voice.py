"""音声コマンドモデル。"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class VoiceIntent(str, Enum):
    """音声コマンドの意図。"""

    SHOW_AGENT_STATUS = "show_agent_status"
    SCHEDULE_HANDOFF = "schedule_handoff"
    CHECK_PROGRESS = "check_progress"
    RESOLVE_CONFLICT = "resolve_conflict"
    UNKNOWN = "unknown"


class VoiceCommand(BaseModel):
    """解釈済みの音声コマンド。"""

    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(..., description="コマンドID")
    transcript: str = Field(..., description="書き起こしテキスト")
    intent: VoiceIntent = Field(default=VoiceIntent.UNKNOWN, description="意図")
    entities: list[str] = Field(default_factory=list, description="言及されたエージェントID")
    confidence: float = Field(default=0.5, ge=0, le=1, description="信頼度（0-1）")
    timestamp: datetime = Field(default_factory=datetime.now, description="受信日時")
    response: str = Field(default="", description="応答テキスト")
