"""pytest設定とフィクスチャ。"""

import random
import tempfile
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.config.settings import Settings
from src.context import AppContext
from src.managers.orchestration_daemon import stop_orchestration_daemon
from src.managers.orchestration_manager import OrchestrationManager
from src.managers.status_simulator import create_initial_agents
from src.models.agent import Agent, AgentPersonality, AgentRole, AgentStatus, Location

FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def temp_dir():
    """一時ディレクトリを作成する。"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fixed_now():
    """テスト用の固定時刻。"""
    return FIXED_NOW


@pytest.fixture
def rng():
    """シード固定の乱数ソース。"""
    return random.Random(42)


@pytest.fixture
def settings(temp_dir):
    """テスト用の設定を作成する（擬似待ち時間なし）。"""
    return Settings(
        _env_file=None,
        random_seed=42,
        analysis_delay_seconds=0,
        synergy_delay_seconds=0,
        export_dir=str(temp_dir / "reports"),
    )


@pytest.fixture
def make_agent(fixed_now):
    """テスト用エージェントを作成するファクトリ。"""

    def _make_agent(
        agent_id: str = "agent-test",
        name: str = "Test Agent",
        role: AgentRole = AgentRole.FRONTEND_DEVELOPER,
        status: AgentStatus = AgentStatus.ACTIVE,
        workload: float = 50.0,
        efficiency: float = 80.0,
        expertise: float = 80.0,
        x: float = 100.0,
        y: float = 100.0,
        traits: list[str] | None = None,
        collaboration: str = "team-player",
        stress_responses: list[str] | None = None,
        total_tasks_completed: int = 10,
    ) -> Agent:
        return Agent(
            id=agent_id,
            name=name,
            role=role,
            status=status,
            workload=workload,
            efficiency=efficiency,
            expertise=expertise,
            location=Location(x=x, y=y),
            personality=AgentPersonality(
                traits=traits if traits is not None else ["detail-oriented", "pragmatic"],
                communication_style="direct",
                working_style="iterative",
                collaboration=collaboration,
                decision_making="data-driven",
                stress_responses=(
                    stress_responses if stress_responses is not None else ["focuses harder"]
                ),
            ),
            capabilities=["testing"],
            total_tasks_completed=total_tasks_completed,
            average_task_time=60,
            last_active=fixed_now,
            current_task="Working on assigned tasks",
        )

    return _make_agent


@pytest.fixture
def sample_agents(rng, fixed_now):
    """役割カタログから生成した初期ロスター。"""
    return create_initial_agents(rng, fixed_now)


@pytest.fixture
def manager(settings, fixed_now):
    """OrchestrationManagerインスタンスを作成する。"""
    return OrchestrationManager(settings, rng=random.Random(7), clock=lambda: fixed_now)


@pytest.fixture
async def app_ctx(settings, manager):
    """テスト用のAppContextを作成する。テスト後に daemon を停止する。"""
    ctx = AppContext(settings=settings, manager=manager)
    try:
        yield ctx
    finally:
        await stop_orchestration_daemon(ctx)


@pytest.fixture
def mock_mcp_context(app_ctx):
    """MCPツールのContextをモックする。"""
    mock_ctx = MagicMock()
    mock_ctx.request_context.lifespan_context = app_ctx
    return mock_ctx


@pytest.fixture
def get_tool():
    """register_tools で登録したツール関数を名前で取得する関数を返す。"""
    from mcp.server.fastmcp import FastMCP

    def _get_tool(register_tools, name: str):
        mcp = FastMCP("test")
        register_tools(mcp)
        for tool in mcp._tool_manager._tools.values():
            if tool.name == name:
                return tool.fn
        raise KeyError(name)

    return _get_tool
