from contextlib import contextmanager
from flask import current_app
from sqlalchemy.exc import OperationalError
from sitebuilder.extensions import db
from sitebuilder.domain.exceptions import StorageUnavailable

@contextmanager
def transactional():
    """
    Context manager for database transactions.

    Connection-level failures surface as StorageUnavailable, the only
    error kind callers should retry.
    """
    try:
        yield
        db.session.commit()
    except OperationalError as exc:
        db.session.rollback()
        current_app.logger.error(f"Storage failure, transaction rolled back: {exc}")
        raise StorageUnavailable() from exc
    except Exception:
        db.session.rollback()
        raise
