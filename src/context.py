"""アプリケーションコンテキストの定義。"""

import asyncio
from dataclasses import dataclass, field

from src.config.settings import Settings
from src.managers.orchestration_manager import OrchestrationManager


@dataclass
class AppContext:
    """アプリケーションコンテキスト。"""

    settings: Settings
    manager: OrchestrationManager

    # --- 常駐ループ ---
    orchestration_daemon_tasks: dict[str, asyncio.Task] = field(default_factory=dict)
    """定期タスク名 → asyncio タスク"""
    orchestration_daemon_stop_event: asyncio.Event | None = None
    orchestration_daemon_lock: asyncio.Lock | None = None
