"""エージェント・インタラクション管理ツール。"""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from src.context import AppContext
from src.managers.performance_analyzer import agent_performance, top_performers
from src.models.agent import find_agent, resolve_agent_name


def register_tools(mcp: FastMCP) -> None:
    """エージェント管理ツールを登録する。"""

    @mcp.tool()
    async def list_agents(
        status: str | None = None,
        ctx: Context = None,
    ) -> dict[str, Any]:
        """エージェント一覧を取得する。

        Args:
            status: 絞り込むステータス（省略時は全件）

        Returns:
            エージェント一覧（success, agents, count, selected_agent_id）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        state = app_ctx.manager.state
        agents = [a for a in state.agents if status is None or a.status == status]
        return {
            "success": True,
            "agents": [a.model_dump(mode="json") for a in agents],
            "count": len(agents),
            "selected_agent_id": state.selected_agent_id,
        }

    @mcp.tool()
    async def select_agent(
        agent_id: str | None = None,
        ctx: Context = None,
    ) -> dict[str, Any]:
        """エージェントを選択する（省略時は選択解除）。

        Args:
            agent_id: 選択するエージェントID

        Returns:
            選択結果（success, agent または error）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        manager = app_ctx.manager
        if not manager.select_agent(agent_id):
            return {
                "success": False,
                "error": f"エージェント {agent_id} が見つかりません",
            }

        agent = find_agent(manager.state.agents, agent_id)
        return {
            "success": True,
            "agent": agent.model_dump(mode="json") if agent else None,
        }

    @mcp.tool()
    async def get_orchestration_stats(ctx: Context = None) -> dict[str, Any]:
        """ダッシュボードの集計値を取得する。

        Returns:
            集計値（success, stats, top_performers）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        manager = app_ctx.manager
        return {
            "success": True,
            "stats": manager.compute_stats().model_dump(),
            "top_performers": top_performers(manager.state.agents),
        }

    @mcp.tool()
    async def list_interactions(ctx: Context = None) -> dict[str, Any]:
        """インタラクションログを新しい順に取得する。

        ロスターにないエージェントIDは "unknown" と表示する。

        Returns:
            インタラクション一覧（success, interactions, count）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        state = app_ctx.manager.state
        interactions = []
        for interaction in state.interactions:
            data = interaction.model_dump(mode="json")
            data["from_name"] = resolve_agent_name(state.agents, interaction.from_agent)
            data["to_name"] = resolve_agent_name(state.agents, interaction.to_agent)
            interactions.append(data)
        return {
            "success": True,
            "interactions": interactions,
            "count": len(interactions),
        }

    @mcp.tool()
    async def create_interaction(
        from_agent: str,
        to_agent: str,
        interaction_type: str,
        content: str | None = None,
        priority: str = "medium",
        ctx: Context = None,
    ) -> dict[str, Any]:
        """エージェント間のインタラクションを作成する。

        Args:
            from_agent: 送信元エージェントID
            to_agent: 宛先エージェントID
            interaction_type: 種類（handoff/collaboration/review/feedback/conflict_resolution）
            content: 内容（省略時は種類から生成）
            priority: 優先度（low/medium/high）

        Returns:
            作成結果（success, interaction または error）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        try:
            interaction = await app_ctx.manager.add_interaction(
                from_agent, to_agent, interaction_type, content=content, priority=priority
            )
        except ValueError as e:
            return {"success": False, "error": str(e)}

        return {
            "success": True,
            "interaction": interaction.model_dump(mode="json"),
        }

    @mcp.tool()
    async def advance_interaction(interaction_id: str, ctx: Context = None) -> dict[str, Any]:
        """インタラクションの状態を 1 段階進める（pending → in_progress → completed）。

        Args:
            interaction_id: インタラクションID

        Returns:
            実行結果（success または error）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        if not await app_ctx.manager.advance_interaction(interaction_id):
            return {
                "success": False,
                "error": f"インタラクション {interaction_id} は進められません",
            }
        return {"success": True, "interaction_id": interaction_id}

    @mcp.tool()
    async def get_agent_performance(
        agent_id: str | None = None,
        ctx: Context = None,
    ) -> dict[str, Any]:
        """エージェントのパフォーマンス評価を取得する。

        Args:
            agent_id: 対象エージェントID（省略時は全員）

        Returns:
            評価結果（success, performance または error）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        agents = app_ctx.manager.state.agents
        if agent_id is None:
            return {
                "success": True,
                "performance": [agent_performance(a) for a in agents],
            }

        agent = find_agent(agents, agent_id)
        if agent is None:
            return {
                "success": False,
                "error": f"エージェント {agent_id} が見つかりません",
            }
        return {
            "success": True,
            "performance": agent_performance(agent),
        }
