"""リスク予測ツール。"""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from src.context import AppContext
from src.managers.risk_predictor import InvalidRiskTransitionError


def _risk_payload(risk) -> dict[str, Any]:
    """リスクを score 付きの辞書に変換する。"""
    return risk.model_dump(mode="json")


def register_tools(mcp: FastMCP) -> None:
    """リスク予測ツールを登録する。"""

    @mcp.tool()
    async def analyze_risks(ctx: Context = None) -> dict[str, Any]:
        """リスク分析を実行する（擬似的な分析時間を待ってから再計算する）。

        Returns:
            分析結果（success, risks, metrics）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        manager = app_ctx.manager
        risks = await manager.run_risk_analysis()
        return {
            "success": True,
            "risks": [_risk_payload(r) for r in risks],
            "metrics": manager.state.risk_metrics.model_dump(mode="json"),
        }

    @mcp.tool()
    async def list_risks(
        severity: str | None = None,
        ctx: Context = None,
    ) -> dict[str, Any]:
        """現在のリスク一覧を取得する。

        Args:
            severity: 絞り込む深刻度（省略時は全件）

        Returns:
            リスク一覧（success, risks, metrics）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        state = app_ctx.manager.state
        risks = [r for r in state.risks if severity is None or r.severity == severity]
        return {
            "success": True,
            "risks": [_risk_payload(r) for r in risks],
            "metrics": state.risk_metrics.model_dump(mode="json"),
        }

    @mcp.tool()
    async def update_risk_status(
        risk_id: str,
        status: str,
        ctx: Context = None,
    ) -> dict[str, Any]:
        """リスクの対応状況を進める（identified → mitigating → resolved）。

        Args:
            risk_id: リスクID
            status: 新しい状態

        Returns:
            更新結果（success, risk または error）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        try:
            risk = await app_ctx.manager.update_risk_status(risk_id, status)
        except InvalidRiskTransitionError as e:
            return {"success": False, "error": str(e)}

        return {
            "success": True,
            "risk": _risk_payload(risk),
        }
