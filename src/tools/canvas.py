"""コラボレーションキャンバスツール。"""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from src.context import AppContext
from src.models.canvas import CanvasMode


def register_tools(mcp: FastMCP) -> None:
    """キャンバス関連ツールを登録する。"""

    @mcp.tool()
    async def set_canvas_mode(mode: str, ctx: Context = None) -> dict[str, Any]:
        """キャンバスの表示モードを切り替える。

        Args:
            mode: 表示モード（collaboration/conflict/performance）

        Returns:
            切り替え結果（success, mode または error）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        manager = app_ctx.manager
        if not manager.set_canvas_mode(mode):
            return {
                "success": False,
                "error": f"不正な表示モードです: {mode}。"
                f"有効な値: {[m.value for m in CanvasMode]}",
                "mode": manager.state.canvas_mode.value,
            }
        return {"success": True, "mode": manager.state.canvas_mode.value}

    @mcp.tool()
    async def get_canvas_layout(
        mode: str | None = None,
        ctx: Context = None,
    ) -> dict[str, Any]:
        """キャンバスのノード・接続線・ゾーンを計算する。

        Args:
            mode: 表示モード（省略時は現在のモード、不正値はモードなし扱い）

        Returns:
            配置（success, layout）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        layout = app_ctx.manager.get_canvas_layout(mode)
        return {
            "success": True,
            "layout": layout.model_dump(mode="json"),
        }
