"""CLI interface for alist-refresh."""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

import yaml

from alistrefresh.browser.page import HostPage
from alistrefresh.browser.session import BrowserSession, NavigationBlockedError
from alistrefresh.companion import RefreshCompanion
from alistrefresh.core.config import Config, load_config
from alistrefresh.core.logging import setup_logging
from alistrefresh.store.prompt import ConsolePrompter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Alist Refresh - refresh the real storage path behind an rclone crypt mount"
    )
    parser.add_argument(
        "url",
        nargs="?",
        help="File manager URL to open (default: alist_url from the config file)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to configuration file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Forget stored mount paths and crypt credentials before starting",
    )
    return parser


async def run_companion(settings: Config, url: str, reset: bool) -> int:
    """Open the file manager and keep the companion running until the window closes.

    Returns:
        Process exit code.
    """
    session = BrowserSession(settings.browser)
    try:
        await session.launch()
        await session.navigate(url)
    except NavigationBlockedError as e:
        logger.error(f"Navigation blocked: {e}")
        await session.close()
        return 2
    except Exception as e:
        logger.error(f"Could not open {url}: {e}")
        await session.close()
        return 1

    page = HostPage(session.page)
    companion = RefreshCompanion.from_settings(page, settings, ConsolePrompter())

    if reset:
        await companion.store.forget()

    stop_event = asyncio.Event()

    def signal_handler() -> None:
        stop_event.set()

    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, signal_handler)
    loop.add_signal_handler(signal.SIGTERM, signal_handler)

    closed_task = asyncio.create_task(page.wait_closed())
    stop_task = asyncio.create_task(stop_event.wait())

    started = await companion.start()
    if not started:
        logger.error("Companion not started. Log in in the browser window, then run again.")

    try:
        await asyncio.wait({closed_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        logger.info("Shutting down...")
    finally:
        loop.remove_signal_handler(signal.SIGINT)
        loop.remove_signal_handler(signal.SIGTERM)
        closed_task.cancel()
        stop_task.cancel()
        await companion.stop()
        await session.close()

    return 0 if started else 1


async def main() -> int:
    """CLI entry point."""
    args = build_parser().parse_args()
    settings = load_config(args.config)

    level = "DEBUG" if args.verbose else settings.logging.level
    setup_logging(
        level=level,
        directory=settings.logging.directory,
        max_size_mb=settings.logging.max_size_mb,
        backup_count=settings.logging.backup_count,
    )

    url = args.url or settings.alist_url
    if not url:
        logger.error("No file manager URL given (pass it as an argument or set alist_url)")
        return 2

    return await run_companion(settings, url, args.reset)


def run() -> None:
    """Entry point for console scripts."""
    try:
        code = asyncio.run(main())
    except KeyboardInterrupt:
        return
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Invalid YAML in config file: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Startup failed: {e} (run with -v for details)", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    run()
