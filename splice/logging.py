"""
splice.logging - Package logger and CLI logging setup.

Library modules log to the ``splice`` logger at DEBUG and never configure
handlers themselves. The CLI calls configure_logging() once, which routes the
package logger through Rich so log lines share the console with command
output.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("splice")


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Attach a Rich handler to the splice logger.

    Calling it again replaces the previous handler, so repeated CLI
    invocations in one process do not duplicate output.

    Args:
        verbose: If True, emit DEBUG records; otherwise WARNING and above
        console: Console to write to (stderr if None)
    """
    level = logging.DEBUG if verbose else logging.WARNING

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbose,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
