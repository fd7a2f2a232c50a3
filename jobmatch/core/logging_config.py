"""
Logging setup - loguru sink configuration and request logging middleware.
"""

import sys
import time

from fastapi import Request
from loguru import logger

from jobmatch.core.config import Settings


def setup_logging(settings: Settings) -> None:
    """Replace loguru's default sink with one at the configured level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        serialize=settings.log_json,
        backtrace=settings.debug,
        diagnose=False,
    )


async def log_requests(request: Request, call_next):
    """Log request timing and status"""
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Duration: {duration:.3f}s"
    )
    return response
