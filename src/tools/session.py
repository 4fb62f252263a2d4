"""セッション管理ツール。"""

import logging
from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from src.context import AppContext
from src.managers.orchestration_daemon import (
    is_orchestration_daemon_running,
    start_orchestration_daemon,
    stop_orchestration_daemon,
)

logger = logging.getLogger(__name__)


def register_tools(mcp: FastMCP) -> None:
    """セッション管理ツールを登録する。"""

    @mcp.tool()
    async def start_orchestration(ctx: Context = None) -> dict[str, Any]:
        """定期シミュレーション（状態・インタラクション・リスク）を開始する。

        Returns:
            開始結果（success, started, message）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        started = await start_orchestration_daemon(app_ctx)
        return {
            "success": True,
            "started": started,
            "message": (
                "シミュレーションを開始しました"
                if started
                else "シミュレーションは既に実行中です"
            ),
        }

    @mcp.tool()
    async def stop_orchestration(ctx: Context = None) -> dict[str, Any]:
        """定期シミュレーションを停止する。

        停止後はいずれの定期タスクも発火しない。

        Returns:
            停止結果（success, stopped, message）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        stopped = await stop_orchestration_daemon(app_ctx)
        return {
            "success": True,
            "stopped": stopped,
            "message": (
                "シミュレーションを停止しました"
                if stopped
                else "シミュレーションは実行されていません"
            ),
        }

    @mcp.tool()
    async def get_orchestration_status(ctx: Context = None) -> dict[str, Any]:
        """シミュレーションの状態を取得する。

        Returns:
            状態（success, running, tick_count, agent_count, interaction_count,
            risk_count, canvas_mode, selected_agent_id, tick_intervals）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        state = app_ctx.manager.state
        return {
            "success": True,
            "running": is_orchestration_daemon_running(app_ctx),
            "tick_count": state.tick_count,
            "agent_count": len(state.agents),
            "interaction_count": len(state.interactions),
            "risk_count": len(state.risks),
            "canvas_mode": state.canvas_mode.value,
            "selected_agent_id": state.selected_agent_id,
            "tick_intervals": app_ctx.settings.get_tick_intervals(),
        }

    @mcp.tool()
    async def advance_simulation(seconds: float, ctx: Context = None) -> dict[str, Any]:
        """シミュレーション時間を指定秒数進める。

        常駐ループとは独立に、期限の来たティックを即座に実行する。

        Args:
            seconds: 進める秒数

        Returns:
            実行結果（success, fired, tick_count または error）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        try:
            fired = await app_ctx.manager.advance(seconds)
        except ValueError as e:
            return {"success": False, "error": str(e)}

        return {
            "success": True,
            "fired": fired,
            "tick_count": app_ctx.manager.state.tick_count,
        }

    @mcp.tool()
    async def reset_orchestration(ctx: Context = None) -> dict[str, Any]:
        """状態を初期化し直す（常駐ループは停止する）。

        Returns:
            実行結果（success, message）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        await stop_orchestration_daemon(app_ctx)
        await app_ctx.manager.reset()
        return {
            "success": True,
            "message": "オーケストレーション状態を初期化しました",
        }

    @mcp.tool()
    async def export_orchestration_report(
        path: str | None = None,
        ctx: Context = None,
    ) -> dict[str, Any]:
        """エージェント・インタラクション・リスク・統計を JSON で出力する。

        Args:
            path: 出力先ファイルパス（省略時は export_dir 配下）

        Returns:
            出力結果（success, path または error）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        try:
            written = app_ctx.manager.export_snapshot(path)
        except OSError as e:
            logger.warning(f"レポートの出力に失敗しました: {e}")
            return {
                "success": False,
                "error": f"レポートの出力に失敗しました: {e}",
            }

        return {
            "success": True,
            "path": str(written),
        }
