import sqlite3
from functools import wraps

from logger import setup_logger

logger = setup_logger("DatabaseErrorHandler")


def db_error_handler(func):
    """Log database failures with the failing query method, then re-raise."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except sqlite3.IntegrityError as e:
            logger.warning(f"Constraint failed in {func.__qualname__}: {e}")
            raise
        except sqlite3.OperationalError as e:
            if "database is locked" in str(e).lower():
                logger.error(f"Database locked during {func.__qualname__}: {e}")
            else:
                logger.error(
                    f"Database error in {func.__qualname__}: {e}", exc_info=True
                )
            raise
        except ValueError as e:
            logger.warning(f"Rejected input in {func.__qualname__}: {e}")
            raise

    return wrapper
