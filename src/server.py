"""Agent Orchestration MCP Server エントリーポイント。"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP

from src.config.settings import load_settings
from src.context import AppContext
from src.managers.orchestration_daemon import stop_orchestration_daemon
from src.managers.orchestration_manager import OrchestrationManager
from src.tools import register_all_tools

# ログ設定（stderrに出力）
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """サーバーライフサイクルを管理する。

    Args:
        server: FastMCPサーバーインスタンス

    Yields:
        アプリケーションコンテキスト
    """
    logger.info("Agent Orchestration Server を起動しています...")

    settings = load_settings()
    app_ctx = AppContext(settings=settings, manager=OrchestrationManager(settings))

    try:
        yield app_ctx
    finally:
        logger.info("サーバーをシャットダウンしています...")
        await stop_orchestration_daemon(app_ctx)


# FastMCPサーバーを作成
mcp = FastMCP("Agent Orchestration", lifespan=app_lifespan)
register_all_tools(mcp)


def main() -> None:
    """MCPサーバーを起動する。"""
    mcp.run()


if __name__ == "__main__":
    main()
