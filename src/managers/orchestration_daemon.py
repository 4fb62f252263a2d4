"""オーケストレーション常駐ループ。

状態・インタラクション・リスクの 3 つの定期タスクをそれぞれ asyncio タスクとして回す。
"""

import asyncio
import logging

logger = logging.getLogger(__name__)

# 連続エラーの閾値
_CONSECUTIVE_ERROR_STOP_THRESHOLD = 5
# 即座に停止すべき致命的例外
_FATAL_EXCEPTIONS = (ImportError, AttributeError, TypeError)


def is_orchestration_daemon_running(app_ctx) -> bool:
    """orchestration daemon が稼働中かどうか。"""
    return any(not task.done() for task in app_ctx.orchestration_daemon_tasks.values())


def _tick_handler(app_ctx, name: str):
    """定期タスク名に対応する処理を返す。"""
    manager = app_ctx.manager
    if name == "status":
        return manager.tick_status
    if name == "interactions":
        return manager.tick_interactions
    return manager.run_risk_analysis


async def _run_tick_loop(app_ctx, name: str, stop_event: asyncio.Event) -> None:
    """定期タスク 1 本分の常駐ループ本体。"""
    consecutive_errors = 0
    interval = app_ctx.settings.get_tick_intervals()[name]
    handler = _tick_handler(app_ctx, name)
    try:
        while not stop_event.is_set():
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                pass
            if stop_event.is_set():
                break

            try:
                await handler()
                consecutive_errors = 0
            except _FATAL_EXCEPTIONS as e:
                logger.error("orchestration daemon (%s) 致命的エラーにより停止: %s", name, e)
                break
            except Exception as e:
                consecutive_errors += 1
                logger.warning(
                    "orchestration daemon (%s) loop error (consecutive=%d): %s",
                    name,
                    consecutive_errors,
                    e,
                )
                if consecutive_errors >= _CONSECUTIVE_ERROR_STOP_THRESHOLD:
                    logger.error(
                        "orchestration daemon (%s) を停止: 連続 %d 回エラー",
                        name,
                        consecutive_errors,
                    )
                    break
    finally:
        tasks = app_ctx.orchestration_daemon_tasks
        if tasks.get(name) is asyncio.current_task():
            del tasks[name]


async def start_orchestration_daemon(app_ctx) -> bool:
    """orchestration daemon を開始する。

    連続エラーなどで停止した定期タスクがあれば、そのタスクだけを再開する。

    Returns:
        1 本以上の定期タスクを開始した場合 True（すべて稼働中なら False）
    """
    if app_ctx.orchestration_daemon_lock is None:
        app_ctx.orchestration_daemon_lock = asyncio.Lock()

    async with app_ctx.orchestration_daemon_lock:
        live = {
            name: task
            for name, task in app_ctx.orchestration_daemon_tasks.items()
            if not task.done()
        }
        missing = [name for name in app_ctx.settings.get_tick_intervals() if name not in live]
        if not missing:
            return False

        stop_event = app_ctx.orchestration_daemon_stop_event
        if not live or stop_event is None:
            stop_event = asyncio.Event()
            app_ctx.orchestration_daemon_stop_event = stop_event

        for name in missing:
            live[name] = asyncio.create_task(
                _run_tick_loop(app_ctx, name, stop_event),
                name=f"agent-orchestration-{name}",
            )
        app_ctx.orchestration_daemon_tasks = live
        logger.info("orchestration daemon started: %s", ", ".join(missing))
        return True


async def stop_orchestration_daemon(app_ctx, timeout_seconds: float = 5.0) -> bool:
    """orchestration daemon を停止する。

    戻った時点でいずれの定期タスクも再度発火しないことを保証する。
    """
    if app_ctx.orchestration_daemon_lock is None:
        app_ctx.orchestration_daemon_lock = asyncio.Lock()

    async with app_ctx.orchestration_daemon_lock:
        tasks = list(app_ctx.orchestration_daemon_tasks.values())
        stop_event = app_ctx.orchestration_daemon_stop_event
        if not tasks:
            app_ctx.orchestration_daemon_stop_event = None
            return False

        if stop_event is not None:
            stop_event.set()

        current = asyncio.current_task()
        tasks = [task for task in tasks if task is not current]

        try:
            await asyncio.wait_for(
                asyncio.gather(*tasks, return_exceptions=True), timeout=timeout_seconds
            )
        except asyncio.TimeoutError:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        app_ctx.orchestration_daemon_tasks = {}
        app_ctx.orchestration_daemon_stop_event = None
        logger.info("orchestration daemon stopped")
        return True
