"""server モジュールのテスト。"""

import pytest

EXPECTED_TOOLS = {
    "start_orchestration",
    "stop_orchestration",
    "get_orchestration_status",
    "advance_simulation",
    "reset_orchestration",
    "export_orchestration_report",
    "list_agents",
    "select_agent",
    "get_orchestration_stats",
    "list_interactions",
    "create_interaction",
    "advance_interaction",
    "get_agent_performance",
    "analyze_risks",
    "list_risks",
    "update_risk_status",
    "list_synergies",
    "implement_synergy",
    "get_resource_allocation",
    "set_canvas_mode",
    "get_canvas_layout",
    "submit_voice_command",
    "list_voice_commands",
}


def test_all_tools_registered():
    """全ツールがサーバーに登録されていることをテスト。"""
    from src import server

    names = {tool.name for tool in server.mcp._tool_manager._tools.values()}
    assert names == EXPECTED_TOOLS


@pytest.mark.asyncio
async def test_app_lifespan_stops_daemon(monkeypatch, temp_dir):
    """サーバー終了時に常駐ループが停止することをテスト。"""
    from src import server
    from src.managers.orchestration_daemon import (
        is_orchestration_daemon_running,
        start_orchestration_daemon,
    )

    monkeypatch.setenv("ORCH_EXPORT_DIR", str(temp_dir))
    monkeypatch.setenv("ORCH_RANDOM_SEED", "3")

    async with server.app_lifespan(server.mcp) as app_ctx:
        assert app_ctx.settings.random_seed == 3
        assert len(app_ctx.manager.state.agents) > 0
        assert await start_orchestration_daemon(app_ctx)
        assert is_orchestration_daemon_running(app_ctx)

    assert not is_orchestration_daemon_running(app_ctx)
    assert app_ctx.orchestration_daemon_tasks == {}
