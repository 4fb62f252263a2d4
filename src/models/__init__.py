"""データモデルモジュール。"""

from .agent import Agent, AgentPersonality, AgentRole, AgentStatus, Location
from .canvas import AgentNode, CanvasLayout, CanvasMode, CanvasZone, ConnectionLine
from .interaction import (
    AgentInteraction,
    InteractionPriority,
    InteractionStatus,
    InteractionType,
)
from .orchestration import OrchestrationSnapshot, OrchestrationState, OrchestrationStats
from .project import (
    CrossProjectSynergy,
    ImplementationEffort,
    Project,
    ResourceAllocation,
    SynergyType,
)
from .risk import ProjectRisk, RiskPredictionMetrics, RiskSeverity, RiskStatus, RiskType
from .voice import VoiceCommand, VoiceIntent

__all__ = [
    "Agent",
    "AgentInteraction",
    "AgentNode",
    "AgentPersonality",
    "AgentRole",
    "AgentStatus",
    "CanvasLayout",
    "CanvasMode",
    "CanvasZone",
    "ConnectionLine",
    "CrossProjectSynergy",
    "ImplementationEffort",
    "InteractionPriority",
    "InteractionStatus",
    "InteractionType",
    "Location",
    "OrchestrationSnapshot",
    "OrchestrationState",
    "OrchestrationStats",
    "Project",
    "ProjectRisk",
    "ResourceAllocation",
    "RiskPredictionMetrics",
    "RiskSeverity",
    "RiskStatus",
    "RiskType",
    "SynergyType",
    "VoiceCommand",
    "VoiceIntent",
]
