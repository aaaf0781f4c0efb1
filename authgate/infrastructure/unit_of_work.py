# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-operation SQLAlchemy session scope used by the credential store."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from authgate.shared.logging import logger


@dataclass(slots=True)
class SqlAlchemyUnitOfWork(AbstractContextManager):
    """Opens one session; commits when the block succeeds, rolls back when it raises."""

    session_factory: Callable[[], Session]
    _session: Session | None = field(default=None, init=False)

    def __enter__(self) -> Session:
        self._session = self.session_factory()
        return self._session

    def __exit__(self, exc_type, exc, tb) -> None:
        session = self._session
        assert session is not None
        try:
            if exc is None:
                session.commit()
            else:
                logger.debug(f"uow: rolling back after {exc_type.__name__}")
                session.rollback()
        except Exception:
            logger.exception("uow: commit failed, rolling back")
            session.rollback()
            raise
        finally:
            session.close()
            # scoped_session keeps a thread-local registry that must be cleared
            remove = getattr(self.session_factory, "remove", None)
            if callable(remove):
                remove()
            self._session = None


@contextmanager
def unit_of_work_scope(factory: Callable[[], Session]) -> Iterator[Session]:
    with SqlAlchemyUnitOfWork(factory) as session:
        yield session
