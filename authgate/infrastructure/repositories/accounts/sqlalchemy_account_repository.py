# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from authgate.domain.accounts.entities import Account
from authgate.domain.accounts.exceptions import DuplicateEmailError, DuplicateUsernameError
from authgate.domain.accounts.repositories import CredentialStore
from authgate.infrastructure.db.models import AccountRow
from authgate.infrastructure.unit_of_work import unit_of_work_scope
from authgate.shared.logging import logger


def _to_domain(row: AccountRow) -> Account:
    return Account(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class SqlAlchemyCredentialStore(CredentialStore):
    """Account persistence; uniqueness is backed by the table's unique indexes."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def exists_by_username(self, username: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return bool(session.scalar(select(exists().where(AccountRow.username == username))))

    def exists_by_email(self, email: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return bool(session.scalar(select(exists().where(AccountRow.email == email))))

    def find_by_username(self, username: str) -> Account | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(
                select(AccountRow).where(AccountRow.username == username)
            ).first()
            return _to_domain(row) if row else None

    def find_by_id(self, account_id: int) -> Account | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(AccountRow, account_id)
            return _to_domain(row) if row else None

    def add(self, account: Account) -> Account:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = AccountRow(
                    username=account.username,
                    email=account.email,
                    password_hash=account.password_hash,
                    created_at=account.created_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            logger.warning(
                f"accounts.store: unique constraint hit while adding username={account.username}"
            )
            duplicate = self._duplicate_error_for(account)
            if duplicate is None:
                raise
            raise duplicate from exc

    def _duplicate_error_for(
        self, account: Account
    ) -> DuplicateUsernameError | DuplicateEmailError | None:
        # The losing insert was rolled back; look again to see which value is now taken.
        if self.exists_by_username(account.username):
            return DuplicateUsernameError()
        if self.exists_by_email(account.email):
            return DuplicateEmailError()
        return None
