"""プロジェクト横断シナジー・リソース配分ツール。"""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from src.context import AppContext


def register_tools(mcp: FastMCP) -> None:
    """シナジー関連ツールを登録する。"""

    @mcp.tool()
    async def list_synergies(ctx: Context = None) -> dict[str, Any]:
        """プロジェクト横断のシナジー機会を取得する。

        Returns:
            シナジー一覧（success, synergies, projects）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        state = app_ctx.manager.state
        return {
            "success": True,
            "synergies": [s.model_dump(mode="json") for s in state.synergies],
            "projects": [p.model_dump(mode="json") for p in state.projects],
        }

    @mcp.tool()
    async def implement_synergy(key: str, ctx: Context = None) -> dict[str, Any]:
        """シナジーを実施済みにする。

        Args:
            key: 連結プロジェクトID（例: "proj-1-proj-2"）

        Returns:
            実行結果（success, key または error）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        if not await app_ctx.manager.implement_synergy(key):
            return {
                "success": False,
                "error": f"シナジー {key} が見つかりません",
            }
        return {"success": True, "key": key}

    @mcp.tool()
    async def get_resource_allocation(
        refresh: bool = False,
        ctx: Context = None,
    ) -> dict[str, Any]:
        """エージェントごとのリソース配分推奨を取得する。

        Args:
            refresh: True の場合は現在のロスターで再計算する

        Returns:
            配分一覧（success, allocations）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        manager = app_ctx.manager
        if refresh:
            await manager.refresh_resource_allocation()
        return {
            "success": True,
            "allocations": [a.model_dump(mode="json") for a in manager.state.allocations],
        }
