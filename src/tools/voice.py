"""音声コマンドツール。"""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from src.context import AppContext


def register_tools(mcp: FastMCP) -> None:
    """音声コマンド関連ツールを登録する。"""

    @mcp.tool()
    async def submit_voice_command(transcript: str, ctx: Context = None) -> dict[str, Any]:
        """音声コマンドの書き起こしを解釈する。

        信頼度が閾値以下のコマンドは記録のみ行い、何も実行しない。

        Args:
            transcript: 書き起こしテキスト

        Returns:
            解釈結果（success, command, accepted, target_view, interaction）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        outcome = await app_ctx.manager.submit_voice_command(transcript)
        return {
            "success": True,
            "command": outcome.command.model_dump(mode="json"),
            "accepted": outcome.accepted,
            "target_view": outcome.target_view,
            "interaction": (
                outcome.interaction.model_dump(mode="json") if outcome.interaction else None
            ),
        }

    @mcp.tool()
    async def list_voice_commands(ctx: Context = None) -> dict[str, Any]:
        """音声コマンド履歴を新しい順に取得する。

        Returns:
            履歴（success, commands, count）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        commands = app_ctx.manager.state.voice_commands
        return {
            "success": True,
            "commands": [c.model_dump(mode="json") for c in commands],
            "count": len(commands),
        }
