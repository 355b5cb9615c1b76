# src/hn_sync/cli/main.py

"""
CLI entrypoint.

Initializes logging, provisions the store, then runs the pipeline until the
process is interrupted. Startup failures exit with status 1.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from ..cli.bootstrap import create_item_source, prepare_store
from ..config import get_settings
from ..core.errors import StartupError
from ..logging_setup import setup_logging
from ..pipeline.runner import run_pipeline

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    source = create_item_source(settings=settings)

    main_task = asyncio.current_task()
    loop = asyncio.get_running_loop()

    def _handle_signal(signum: int) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        if main_task is not None:
            main_task.cancel()

    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on every platform (e.g. Windows event loops).
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, _handle_signal, sig)

    try:
        await run_pipeline(settings, source)
    except asyncio.CancelledError:
        pass
    finally:
        await source.aclose()


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (db=%s)...", settings.app_name, settings.db_path)

    try:
        prepare_store(settings=settings)
        asyncio.run(_run(settings))
    except StartupError as e:
        logger.critical("Startup failed: %s", e)
        raise SystemExit(1) from e
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")

    logger.info("Bye.")


if __name__ == "__main__":
    main()
