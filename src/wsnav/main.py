"""Application entry point: loads the workspace and keeps its markers live.

Execution:
  1. Read settings (.env + settings.toml); exit with a message on error.
  2. Configure logging.
  3. Fetch the workspace tree from the persistence backend and load it.
  4. Register an AllStatusObserver and repaint the visible tree every
     ``refresh_interval`` seconds until interrupted.

Flags:
  --verbose  debug logging for the wsnav package
  --once     print the tree once and exit without observing
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .settings import NavigatorConfig

logger = logging.getLogger(__name__)


async def _run(cfg: NavigatorConfig, once: bool) -> None:
    from .execution import AllStatusObserver, TestExecutionClient
    from .indicators import status_indicator_setup
    from .persistence import PersistenceClient
    from .render import render_tree
    from .workspace import Workspace

    workspace = Workspace(error_delay=cfg.error_delay)
    setup = status_indicator_setup()
    token = cfg.auth_token or None

    async with PersistenceClient(
        cfg.persistence_url, token=token, timeout=cfg.request_timeout
    ) as persistence:
        workspace.reload(await persistence.list_files())

    if once:
        print("\n".join(render_tree(workspace, setup)))
        return

    async with TestExecutionClient(
        cfg.execution_url, token=token, timeout=cfg.request_timeout
    ) as execution:
        workspace.observe(AllStatusObserver(execution, cfg.poll_interval))
        logger.info("Observing test status (interval: %ss)", cfg.poll_interval)
        try:
            while True:
                print("\033[2J\033[H" + "\n".join(render_tree(workspace, setup)))
                await asyncio.sleep(cfg.refresh_interval)
        finally:
            await workspace.stop_observing()


def main() -> None:
    """Main entry point."""
    args = sys.argv[1:]
    verbose = "--verbose" in args
    once = "--once" in args

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.WARNING,
    )

    from .settings import load_settings

    try:
        cfg = load_settings()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}\n")
        print("Check your settings.toml configuration.")
        sys.exit(1)

    logging.getLogger("wsnav").setLevel(logging.DEBUG if verbose else logging.INFO)

    from .errors import ServiceError

    try:
        asyncio.run(_run(cfg, once))
    except ServiceError as e:
        logger.error("Backend unavailable: %s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
