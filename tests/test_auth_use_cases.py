from __future__ import annotations

import pytest

from authgate.application.use_cases.accounts import (
    ResolveSessionUseCase,
    SignInUseCase,
    SignUpUseCase,
)
from authgate.domain.accounts.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidSessionError,
)


def test_sign_up_persists_hashed_password(store, hasher) -> None:
    use_case = SignUpUseCase(accounts=store, password_hasher=hasher)

    account = use_case.execute("alice", "a@x.com", "secret1")

    assert account.id == 1
    assert account.username == "alice"
    assert account.email == "a@x.com"
    assert account.password_hash == "hashed:secret1"
    assert store.find_by_username("alice") == account


def test_sign_up_duplicate_username_ignores_email(store, hasher) -> None:
    use_case = SignUpUseCase(accounts=store, password_hasher=hasher)
    use_case.execute("alice", "a@x.com", "secret1")

    with pytest.raises(DuplicateUsernameError):
        use_case.execute("alice", "b@x.com", "secret2")
    with pytest.raises(DuplicateUsernameError):
        use_case.execute("alice", "a@x.com", "secret2")


def test_sign_up_duplicate_email(store, hasher) -> None:
    use_case = SignUpUseCase(accounts=store, password_hasher=hasher)
    use_case.execute("alice", "a@x.com", "secret1")

    with pytest.raises(DuplicateEmailError) as info:
        use_case.execute("bob", "a@x.com", "secret2")

    assert info.value.message == "Error: Email is already in use!"
    assert store.find_by_username("bob") is None


def test_sign_in_issues_token_for_account(store, hasher, token_issuer) -> None:
    account = SignUpUseCase(accounts=store, password_hasher=hasher).execute(
        "alice", "a@x.com", "secret1"
    )
    sign_in = SignInUseCase(accounts=store, password_hasher=hasher, tokens=token_issuer)

    session = sign_in.execute("alice", "secret1")

    assert session.account == account.summary()
    assert session.token.account_id == account.id
    assert token_issuer.validate(session.token.value).account_id == account.id


@pytest.mark.parametrize(
    ("username", "password"),
    [("alice", "wrong"), ("nobody", "secret1"), ("alice", "")],
)
def test_sign_in_rejects_bad_credentials(store, hasher, token_issuer, username, password) -> None:
    SignUpUseCase(accounts=store, password_hasher=hasher).execute("alice", "a@x.com", "secret1")
    sign_in = SignInUseCase(accounts=store, password_hasher=hasher, tokens=token_issuer)

    with pytest.raises(InvalidCredentialsError) as info:
        sign_in.execute(username, password)

    assert int(info.value.status) == 401


class _CountingHasher:
    def __init__(self) -> None:
        self.verified: list[str] = []

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verified.append(hashed)
        return hashed == f"hashed:{password}"


def test_sign_in_unknown_username_still_verifies(store, token_issuer) -> None:
    hasher = _CountingHasher()
    sign_in = SignInUseCase(accounts=store, password_hasher=hasher, tokens=token_issuer)

    for _ in range(2):
        with pytest.raises(InvalidCredentialsError):
            sign_in.execute("ghost", "secret1")

    assert len(hasher.verified) == 2
    assert hasher.verified[0] == hasher.verified[1]
    assert hasher.verified[0].startswith("hashed:")


def test_resolve_session_returns_summary(store, hasher, token_issuer) -> None:
    account = SignUpUseCase(accounts=store, password_hasher=hasher).execute(
        "alice", "a@x.com", "secret1"
    )
    token = token_issuer.issue(account)

    resolved = ResolveSessionUseCase(accounts=store, tokens=token_issuer).execute(token.value)

    assert resolved == account.summary()


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_resolve_session_rejects_missing_or_garbage(store, token_issuer, token) -> None:
    with pytest.raises(InvalidSessionError):
        ResolveSessionUseCase(accounts=store, tokens=token_issuer).execute(token)


def test_resolve_session_rejects_deleted_account(store, hasher, token_issuer) -> None:
    account = SignUpUseCase(accounts=store, password_hasher=hasher).execute(
        "alice", "a@x.com", "secret1"
    )
    token = token_issuer.issue(account)
    store.remove(account.id)

    with pytest.raises(InvalidSessionError) as info:
        ResolveSessionUseCase(accounts=store, tokens=token_issuer).execute(token.value)

    assert info.value.context == {"reason": "account_not_found"}
