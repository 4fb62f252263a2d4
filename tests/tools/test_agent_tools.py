"""エージェント・インタラクション管理ツールのテスト。"""

import pytest

from src.tools.agent import register_tools


class TestListAgentsTool:
    """list_agentsのテスト。"""

    @pytest.mark.asyncio
    async def test_list_all(self, mock_mcp_context, get_tool):
        """全エージェントを取得できることをテスト。"""
        list_agents = get_tool(register_tools, "list_agents")
        result = await list_agents(ctx=mock_mcp_context)
        assert result["success"] is True
        assert result["count"] == 11
        assert result["agents"][0]["id"] == "agent-visionary"

    @pytest.mark.asyncio
    async def test_filter_by_status(self, mock_mcp_context, get_tool):
        """ステータスで絞り込めることをテスト。"""
        list_agents = get_tool(register_tools, "list_agents")
        result = await list_agents(status="idle", ctx=mock_mcp_context)
        assert result["count"] == 5
        assert all(a["status"] == "idle" for a in result["agents"])


class TestSelectAgentTool:
    """select_agentのテスト。"""

    @pytest.mark.asyncio
    async def test_select(self, mock_mcp_context, get_tool):
        """エージェントを選択できることをテスト。"""
        select = get_tool(register_tools, "select_agent")
        result = await select(agent_id="agent-qa_engineer", ctx=mock_mcp_context)
        assert result["success"] is True
        assert result["agent"]["name"] == "QA Engineer"

    @pytest.mark.asyncio
    async def test_select_unknown(self, mock_mcp_context, get_tool):
        """未知のエージェントがエラー結果になることをテスト。"""
        select = get_tool(register_tools, "select_agent")
        result = await select(agent_id="agent-ghost", ctx=mock_mcp_context)
        assert result["success"] is False

    @pytest.mark.asyncio
    async def test_clear_selection(self, mock_mcp_context, get_tool):
        """選択を解除できることをテスト。"""
        select = get_tool(register_tools, "select_agent")
        result = await select(ctx=mock_mcp_context)
        assert result["success"] is True
        assert result["agent"] is None


class TestStatsTool:
    """get_orchestration_statsのテスト。"""

    @pytest.mark.asyncio
    async def test_stats(self, mock_mcp_context, get_tool):
        """集計値と上位エージェントを取得できることをテスト。"""
        get_stats = get_tool(register_tools, "get_orchestration_stats")
        result = await get_stats(ctx=mock_mcp_context)
        assert result["success"] is True
        assert set(result["stats"]) == {
            "active_agents",
            "completed_tasks",
            "efficiency",
            "collaboration_score",
        }
        assert len(result["top_performers"]) == 3


class TestInteractionTools:
    """インタラクション関連ツールのテスト。"""

    @pytest.mark.asyncio
    async def test_list_resolves_names(self, mock_mcp_context, get_tool):
        """エージェント名が解決されることをテスト。"""
        list_interactions = get_tool(register_tools, "list_interactions")
        result = await list_interactions(ctx=mock_mcp_context)
        assert result["count"] == 3
        first = result["interactions"][0]
        assert first["from_name"] == "QA Engineer"
        assert first["to_name"] == "Frontend Developer"

    @pytest.mark.asyncio
    async def test_unknown_agent_name(self, mock_mcp_context, get_tool):
        """ロスターにないエージェントが "unknown" と表示されることをテスト。"""
        create = get_tool(register_tools, "create_interaction")
        list_interactions = get_tool(register_tools, "list_interactions")
        await create(
            from_agent="agent-visionary",
            to_agent="agent-ghost",
            interaction_type="review",
            ctx=mock_mcp_context,
        )
        result = await list_interactions(ctx=mock_mcp_context)
        assert result["interactions"][0]["to_name"] == "unknown"

    @pytest.mark.asyncio
    async def test_create(self, mock_mcp_context, get_tool):
        """インタラクションを作成できることをテスト。"""
        create = get_tool(register_tools, "create_interaction")
        result = await create(
            from_agent="agent-visionary",
            to_agent="agent-product_manager",
            interaction_type="collaboration",
            priority="high",
            ctx=mock_mcp_context,
        )
        assert result["success"] is True
        assert result["interaction"]["status"] == "pending"
        assert result["interaction"]["priority"] == "high"

    @pytest.mark.asyncio
    async def test_create_invalid(self, mock_mcp_context, get_tool):
        """不正な入力がエラー結果になることをテスト。"""
        create = get_tool(register_tools, "create_interaction")
        same = await create(
            from_agent="agent-visionary",
            to_agent="agent-visionary",
            interaction_type="review",
            ctx=mock_mcp_context,
        )
        bad_type = await create(
            from_agent="agent-visionary",
            to_agent="agent-qa_engineer",
            interaction_type="gossip",
            ctx=mock_mcp_context,
        )
        assert same["success"] is False
        assert bad_type["success"] is False

    @pytest.mark.asyncio
    async def test_advance_interaction(self, mock_mcp_context, get_tool):
        """インタラクションの状態を進められることをテスト。"""
        advance = get_tool(register_tools, "advance_interaction")
        assert (await advance(interaction_id="int-3", ctx=mock_mcp_context))["success"] is True
        assert (await advance(interaction_id="int-1", ctx=mock_mcp_context))["success"] is False


class TestPerformanceTool:
    """get_agent_performanceのテスト。"""

    @pytest.mark.asyncio
    async def test_all_agents(self, mock_mcp_context, get_tool):
        """全エージェントの評価を取得できることをテスト。"""
        get_performance = get_tool(register_tools, "get_agent_performance")
        result = await get_performance(ctx=mock_mcp_context)
        assert len(result["performance"]) == 11

    @pytest.mark.asyncio
    async def test_single_agent(self, mock_mcp_context, get_tool):
        """1 名分の評価を取得できることをテスト。"""
        get_performance = get_tool(register_tools, "get_agent_performance")
        result = await get_performance(agent_id="agent-visionary", ctx=mock_mcp_context)
        assert result["success"] is True
        assert result["performance"]["personality_score"] == 100

    @pytest.mark.asyncio
    async def test_unknown_agent(self, mock_mcp_context, get_tool):
        """未知のエージェントがエラー結果になることをテスト。"""
        get_performance = get_tool(register_tools, "get_agent_performance")
        result = await get_performance(agent_id="agent-ghost", ctx=mock_mcp_context)
        assert result["success"] is False
