# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .sqlalchemy_account_repository import SqlAlchemyCredentialStore

__all__ = ["SqlAlchemyCredentialStore"]
