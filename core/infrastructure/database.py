"""
Database helpers shared by the ORM repositories.
"""
import logging
from contextlib import contextmanager

from django.db import DatabaseError

from core.domain.exceptions import StoreFailureError

logger = logging.getLogger(__name__)


@contextmanager
def translate_database_errors(operation: str):
    """Map Django database errors onto domain exceptions."""
    try:
        yield
    except DatabaseError as e:
        logger.error("Store failure during %s: %s", operation, e, exc_info=True)
        raise StoreFailureError() from e
