import threading
import weakref
from contextlib import contextmanager

from sqlalchemy import select

from sitebuilder.extensions import db
from sitebuilder.models.landing import Landing
from sitebuilder.domain.exceptions import LandingNotFound


class LandingMutex:
    """Process-local lock for one landing."""
    __slots__ = ("lock", "__weakref__")

    def __init__(self):
        self.lock = threading.Lock()


_registry_lock = threading.Lock()

# Entries disappear once no caller holds the mutex
_landing_mutexes: "weakref.WeakValueDictionary[str, LandingMutex]" = weakref.WeakValueDictionary()


def landing_mutex(landing_id: str) -> LandingMutex:
    """The one mutex every concurrent caller shares for ``landing_id``."""
    with _registry_lock:
        mutex = _landing_mutexes.get(landing_id)
        if mutex is None:
            mutex = LandingMutex()
            _landing_mutexes[landing_id] = mutex
        return mutex


@contextmanager
def landing_lock(landing_id: str):
    """
    Serialize structural mutations (create, duplicate, delete, reorder)
    of one landing's block collection.

    Holds a per-process lock and a row-level lock on the landing for the
    rest of the transaction. Yields the locked Landing.
    """
    mutex = landing_mutex(landing_id)

    with mutex.lock:
        landing = (
            db.session.execute(
                select(Landing)
                .where(Landing.id == landing_id)
                .with_for_update()
            )
            .scalar_one_or_none()
        )

        if not landing:
            raise LandingNotFound("Landing not found", landing_id=landing_id)

        yield landing
