"""MCP Tools モジュール。"""

from mcp.server.fastmcp import FastMCP

from src.tools import agent, canvas, risk, session, synergy, voice


def register_all_tools(mcp: FastMCP) -> None:
    """全ツールをMCPサーバーに登録する。

    Args:
        mcp: FastMCPインスタンス
    """
    # セッション管理
    session.register_tools(mcp)

    # エージェント・インタラクション
    agent.register_tools(mcp)

    # リスク予測
    risk.register_tools(mcp)

    # シナジー・リソース配分
    synergy.register_tools(mcp)

    # キャンバス
    canvas.register_tools(mcp)

    # 音声コマンド
    voice.register_tools(mcp)
