"""
Simulation gate.

Lets callers test their error handling without real validation or I/O:
every send waits a short delay, and a send carrying a simulated error
fails right after it.
"""

import asyncio
import logging
from typing import Optional

from localemail.domain.errors import SIMULATE_ERROR
from localemail.domain.models import MailError, SimulateOptions

logger = logging.getLogger(__name__)


async def wait(options: Optional[SimulateOptions]) -> None:
    """Sleep for the configured delay (1 ms when unset)."""
    delay_ms = options.effective_delay_ms if options else 1
    await asyncio.sleep(delay_ms / 1000)


def simulated_error(options: Optional[SimulateOptions]) -> Optional[MailError]:
    """
    Resolve the injected error, if any.

    Args:
        options: Simulate options from the message

    Returns:
        MailError with code SIMULATE_ERROR for a bare string, the given
        MailError unchanged for a structured one, None when no error is set
    """
    if options is None or not options.error:
        return None

    if isinstance(options.error, MailError):
        error = options.error
    else:
        error = MailError(message=str(options.error), code=SIMULATE_ERROR)

    logger.info(f"Simulating send failure: code={error.code}")
    return error
