"""コラボレーションキャンバスの描画用ジオメトリモデル。"""

from enum import Enum

from pydantic import BaseModel, Field


class CanvasMode(str, Enum):
    """キャンバスの表示モード。"""

    COLLABORATION = "collaboration"
    """協働関係を強調"""

    CONFLICT = "conflict"
    """対立の解消を強調"""

    PERFORMANCE = "performance"
    """効率・優先度を強調"""


class AgentTooltip(BaseModel):
    """ノードのツールチップ表示データ。"""

    name: str
    role: str
    status: str
    workload: float
    efficiency: float
    current_task: str | None = None


class AgentNode(BaseModel):
    """エージェント 1 名分のノード配置。"""

    agent_id: str = Field(..., description="エージェントID")
    center_x: float = Field(..., description="中心 X 座標")
    center_y: float = Field(..., description="中心 Y 座標")
    x: float = Field(..., description="バウンディングボックス左上 X")
    y: float = Field(..., description="バウンディングボックス左上 Y")
    size: float = Field(..., description="一辺の長さ（px）")
    size_modifier: float = Field(..., description="モード別の拡大率")
    color: str = Field(..., description="ステータス色")
    tooltip: AgentTooltip = Field(..., description="ツールチップ")


class ConnectionLine(BaseModel):
    """インタラクション 1 件分の接続線。"""

    interaction_id: str
    from_x: float
    from_y: float
    to_x: float
    to_y: float
    color: str
    dashed: bool = False
    type: str
    status: str
    priority: str


class CanvasZone(BaseModel):
    """エージェントを中心とする半透明ゾーン。"""

    agent_id: str
    center_x: float
    center_y: float
    radius: float
    color: str
    opacity: float = 0.1


class CanvasLayout(BaseModel):
    """キャンバス全体の配置結果。"""

    mode: CanvasMode | None = Field(default=None, description="適用モード（不正値は None）")
    width: int
    height: int
    nodes: list[AgentNode] = Field(default_factory=list)
    lines: list[ConnectionLine] = Field(default_factory=list)
    zones: list[CanvasZone] = Field(default_factory=list)
