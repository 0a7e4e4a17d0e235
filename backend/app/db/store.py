"""
Per-user store provisioning.

Every user owns one SQLite file, user_<id>.db, under the configured data
directory. The file is created with the categories/records schema the first
time it is opened. One UserStore handle, and with it one reader/writer lock,
is shared by all requests for the same user.
"""
import logging
import re
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from app.core.errors import StorageUnavailable, ERR_DATABASE_ACCESS
from app.db.base import StoreBase
import app.models  # noqa: F401  registers the models on their bases

logger = logging.getLogger(__name__)

SAFE_USER_ID = re.compile(r"[A-Za-z0-9_-]+")


class ReadWriteLock:
    """
    Many readers or one writer.

    Waiting writers block new readers so a steady stream of list requests
    cannot starve mutations.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class UserStore:
    """Handle on one user's database, guarded by a reader/writer lock."""

    def __init__(self, user_id: str, engine: Engine):
        self.user_id = user_id
        self.engine = engine
        self.lock = ReadWriteLock()
        # Rows are handed back to callers after the scope closes
        self._sessionmaker = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )

    @contextmanager
    def reading(self) -> Iterator[Session]:
        """Shared read scope. Runs alongside other readers, never alongside a writer."""
        with self.lock.read():
            db = self._sessionmaker()
            try:
                yield db
            except SQLAlchemyError as e:
                logger.error(f"Read failed on store for user {self.user_id}: {e}", exc_info=True)
                raise StorageUnavailable() from e
            finally:
                db.close()

    @contextmanager
    def writing(self) -> Iterator[Session]:
        """
        Exclusive write scope.

        The whole block is one transaction: committed when it exits normally,
        rolled back when it raises.
        """
        with self.lock.write():
            db = self._sessionmaker()
            try:
                yield db
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Write failed on store for user {self.user_id}: {e}", exc_info=True)
                raise StorageUnavailable() from e
            except BaseException:
                db.rollback()
                raise
            finally:
                db.close()


class StoreProvisioner:
    """
    Opens, creating on first use, the per-user stores under data_path.

    Handles are cached for the life of the process and never evicted, so the
    cache holds one engine per user that has made a request.
    """

    def __init__(self, data_path: str, echo: bool = False):
        self.data_path = Path(data_path)
        self.echo = echo
        self._stores: Dict[str, UserStore] = {}
        self._lock = threading.Lock()

    def store_path(self, user_id: str) -> Path:
        if not SAFE_USER_ID.fullmatch(user_id):
            logger.error(f"Refusing to open store for unsafe user id {user_id!r}")
            raise StorageUnavailable(ERR_DATABASE_ACCESS)
        return self.data_path / f"user_{user_id}.db"

    def open_store(self, user_id: str) -> UserStore:
        """Return the user's store, creating the file and schema if missing."""
        store = self._stores.get(user_id)
        if store is not None:
            return store

        with self._lock:
            store = self._stores.get(user_id)
            if store is not None:
                return store
            path = self.store_path(user_id)
            try:
                self.data_path.mkdir(parents=True, exist_ok=True)
                created = not path.exists()
                engine = create_engine(
                    f"sqlite:///{path}",
                    echo=self.echo,
                    connect_args={"check_same_thread": False},
                )
                # Only creates what is missing; existing tables are left as-is
                StoreBase.metadata.create_all(bind=engine)
            except (OSError, SQLAlchemyError) as e:
                logger.error(f"Failed to open store for user {user_id}: {e}", exc_info=True)
                raise StorageUnavailable(ERR_DATABASE_ACCESS) from e
            if created:
                logger.info(f"Provisioned store for user {user_id} at {path}")
            store = UserStore(user_id, engine)
            self._stores[user_id] = store
            return store

    def dispose(self) -> None:
        """Close every cached engine."""
        with self._lock:
            for store in self._stores.values():
                store.engine.dispose()
            self._stores.clear()
