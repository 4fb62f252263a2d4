"""マネージャーモジュール。"""

from .orchestration_daemon import (
    is_orchestration_daemon_running,
    start_orchestration_daemon,
    stop_orchestration_daemon,
)
from .orchestration_manager import OrchestrationManager, VoiceCommandOutcome
from .risk_predictor import InvalidRiskTransitionError

__all__ = [
    "InvalidRiskTransitionError",
    "OrchestrationManager",
    "VoiceCommandOutcome",
    "is_orchestration_daemon_running",
    "start_orchestration_daemon",
    "stop_orchestration_daemon",
]
