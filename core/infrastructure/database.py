"""
Database utilities.
"""

import functools
import logging

from django.db import InterfaceError, OperationalError

from core.domain.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)


def translate_database_errors(func):
    """
    Turn connectivity failures into UpstreamUnavailableError.

    Wraps synchronous repository methods; apply it beneath sync_to_async.
    Integrity errors are left alone so adapters can map them themselves.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.error("Database unavailable in %s: %s", func.__qualname__, exc)
            raise UpstreamUnavailableError() from exc

    return wrapper
