"""Tests for the AuthService use cases."""

import dataclasses
from datetime import UTC
from datetime import datetime

import pytest

from authflow.domains.auth.ports import UserAdapter
from authflow.domains.auth.ports import VerifiedToken
from authflow.domains.auth.schemas import LoginInput
from authflow.domains.auth.schemas import RegisterInput
from authflow.domains.auth.services import REVOKED_MARKER
from authflow.domains.auth.services import AuthService
from authflow.exceptions import InvalidCredentialsException
from authflow.exceptions import InvalidTokenException
from authflow.exceptions import UserExistsException
from authflow.utilities.enums import AuthErrorCode

from .conftest import Account
from .conftest import MemoryUserRepository
from .conftest import account_adapter
from .conftest import account_claims


# =============================================================================
# HELPERS
# =============================================================================


class StaticTokenManager:
    """Token manager returning a fixed verification result."""

    def __init__(self, verified: VerifiedToken) -> None:
        self.verified = verified

    async def issue(self, claims, *, expires_in_seconds=None) -> str:
        return "static-token"

    async def verify(self, token: str) -> VerifiedToken:
        return self.verified


class RecordingCache:
    """Cache recording every write."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.writes: list[tuple[str, str, int | None]] = []

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        self.values[key] = value
        self.writes.append((key, value, ttl_seconds))

    async def delete(self, key: str) -> None:
        self.values.pop(key, None)


class FailingUserRepository(MemoryUserRepository):
    async def find_by_id(self, user_id: str) -> Account | None:
        raise RuntimeError("database unavailable")

    async def create(self, user: Account) -> Account:
        raise RuntimeError("database unavailable")


async def register_and_login(service: AuthService, email: str = "a@example.com", password: str = "secret"):
    user = await service.register(RegisterInput(email=email, password=password))
    result = await service.login(LoginInput(email=email, password=password))
    return user, result.token


# =============================================================================
# REGISTER
# =============================================================================


class TestRegister:
    async def test_returns_created_user(self, auth_service, user_repo):
        user = await auth_service.register(
            RegisterInput(email="a@example.com", password="secret", attributes={"name": "Ada"})
        )

        assert user.email == "a@example.com"
        assert user.name == "Ada"
        assert user_repo.by_id[user.id] is user

    async def test_stores_hash_not_plaintext(self, auth_service):
        user = await auth_service.register(RegisterInput(email="a@example.com", password="secret"))

        assert user.password_hash == "hashed:secret"

    async def test_duplicate_email_rejected(self, auth_service, user_repo):
        await auth_service.register(RegisterInput(email="a@example.com", password="p"))

        with pytest.raises(UserExistsException) as exc_info:
            await auth_service.register(RegisterInput(email="a@example.com", password="other"))

        assert exc_info.value.code == AuthErrorCode.USER_EXISTS
        assert len([u for u in user_repo.by_id.values() if u.email == "a@example.com"]) == 1

    async def test_duplicate_has_no_side_effects(self, auth_service, hasher):
        await auth_service.register(RegisterInput(email="a@example.com", password="p"))
        assert hasher.hash_calls == 1

        with pytest.raises(UserExistsException):
            await auth_service.register(RegisterInput(email="a@example.com", password="p"))

        assert hasher.hash_calls == 1

    async def test_returns_entity_from_store(self, hasher, token_manager):
        class StampingRepository(MemoryUserRepository):
            async def create(self, user: Account) -> Account:
                return await super().create(dataclasses.replace(user, name="stamped"))

        service = AuthService(
            user_repo=StampingRepository(),
            hasher=hasher,
            token=token_manager,
            users=account_adapter,
        )

        user = await service.register(RegisterInput(email="a@example.com", password="p"))

        assert user.name == "stamped"

    async def test_store_errors_propagate(self, hasher, token_manager):
        service = AuthService(
            user_repo=FailingUserRepository(),
            hasher=hasher,
            token=token_manager,
            users=account_adapter,
        )

        with pytest.raises(RuntimeError, match="database unavailable"):
            await service.register(RegisterInput(email="a@example.com", password="p"))


# =============================================================================
# LOGIN
# =============================================================================


class TestLogin:
    async def test_login_returns_user_and_token(self, auth_service):
        user, token = await register_and_login(auth_service)

        result = await auth_service.login(LoginInput(email="a@example.com", password="secret"))

        assert result.user.id == user.id
        assert isinstance(token, str)
        assert token

    async def test_wrong_password_and_unknown_email_are_indistinguishable(self, auth_service):
        await auth_service.register(RegisterInput(email="a@example.com", password="secret"))

        with pytest.raises(InvalidCredentialsException) as wrong_password:
            await auth_service.login(LoginInput(email="a@example.com", password="wrong"))
        with pytest.raises(InvalidCredentialsException) as unknown_email:
            await auth_service.login(LoginInput(email="nobody@example.com", password="secret"))

        assert type(wrong_password.value) is type(unknown_email.value)
        assert wrong_password.value.code == unknown_email.value.code == AuthErrorCode.INVALID_CREDENTIALS
        assert str(wrong_password.value) == str(unknown_email.value)

    async def test_token_subject_is_user_id(self, auth_service, token_manager):
        user, token = await register_and_login(auth_service)

        verified = await token_manager.verify(token)

        assert verified.claims["sub"] == user.id

    async def test_extra_claims_cannot_override_subject(self, user_repo, hasher, token_manager):
        adapter = dataclasses.replace(
            account_adapter,
            build_claims=lambda user: {**account_claims(user), "sub": "someone-else", "role": "member"},
        )
        service = AuthService(user_repo=user_repo, hasher=hasher, token=token_manager, users=adapter)

        user, token = await register_and_login(service)
        verified = await token_manager.verify(token)

        assert verified.claims["sub"] == user.id
        assert verified.claims["email"] == "a@example.com"
        assert verified.claims["role"] == "member"


# =============================================================================
# VALIDATE
# =============================================================================


class TestValidate:
    async def test_round_trip(self, auth_service):
        user, token = await register_and_login(auth_service)

        result = await auth_service.validate(token)

        assert result.valid is True
        assert result.claims["sub"] == user.id
        assert result.user == user

    async def test_malformed_token(self, auth_service):
        result = await auth_service.validate("not-a-token")

        assert result.valid is False
        assert result.claims is None
        assert result.user is None

    async def test_expired_token(self, auth_service, token_manager):
        user, _ = await register_and_login(auth_service)
        expired = await token_manager.issue({"sub": user.id}, expires_in_seconds=-10)

        result = await auth_service.validate(expired)

        assert result.valid is False

    async def test_revoked_token(self, auth_service):
        _, token = await register_and_login(auth_service)

        await auth_service.logout(token)
        result = await auth_service.validate(token)

        assert result.valid is False
        assert result.claims is None

    async def test_missing_subject_is_still_valid(self, auth_service, user_repo):
        user, token = await register_and_login(auth_service)
        user_repo.remove(user)

        result = await auth_service.validate(token)

        assert result.valid is True
        assert result.claims["sub"] == user.id
        assert result.user is None

    async def test_claims_without_subject_are_invalid(self, user_repo, hasher, cache):
        service = AuthService(
            user_repo=user_repo,
            hasher=hasher,
            token=StaticTokenManager(VerifiedToken(claims={"email": "x@example.com"}, jti="j1")),
            users=account_adapter,
            cache=cache,
        )

        result = await service.validate("static-token")

        assert result.valid is False
        assert result.claims is None
        assert result.user is None

    async def test_store_errors_collapse_to_invalid(self, hasher, token_manager):
        service = AuthService(
            user_repo=FailingUserRepository(),
            hasher=hasher,
            token=token_manager,
            users=account_adapter,
        )
        token = await token_manager.issue({"sub": "abc"})

        result = await service.validate(token)

        assert result.valid is False

    async def test_revocation_check_uses_prefix(self, user_repo, hasher, token_manager):
        cache = RecordingCache()
        service = AuthService(
            user_repo=user_repo,
            hasher=hasher,
            token=token_manager,
            users=account_adapter,
            cache=cache,
            blacklist_prefix="revoked:",
        )
        _, token = await register_and_login(service)
        verified = await token_manager.verify(token)

        cache.values[f"revoked:{verified.jti}"] = REVOKED_MARKER

        assert (await service.validate(token)).valid is False


# =============================================================================
# LOGOUT
# =============================================================================


class TestLogout:
    async def test_writes_marker_keyed_on_jti(self, auth_service, token_manager, fake_redis):
        _, token = await register_and_login(auth_service)
        verified = await token_manager.verify(token)

        await auth_service.logout(token)

        key = f"auth:blacklist:{verified.jti}"
        assert await fake_redis.get(key) == REVOKED_MARKER
        assert 0 < await fake_redis.ttl(key) <= 15 * 60

    async def test_falls_back_to_raw_token_without_jti(self, user_repo, hasher):
        cache = RecordingCache()
        token_manager = StaticTokenManager(VerifiedToken(claims={"sub": "abc"}))
        service = AuthService(
            user_repo=user_repo,
            hasher=hasher,
            token=token_manager,
            users=account_adapter,
            cache=cache,
        )

        await service.logout("raw-token")

        assert cache.writes == [("auth:blacklist:raw-token", REVOKED_MARKER, None)]
        assert (await service.validate("raw-token")).valid is False

    async def test_already_expired_token_gets_minimum_ttl(self, user_repo, hasher):
        cache = RecordingCache()
        past = int(datetime.now(UTC).timestamp()) - 60
        token_manager = StaticTokenManager(VerifiedToken(claims={"sub": "abc"}, jti="j1", exp=past))
        service = AuthService(
            user_repo=user_repo,
            hasher=hasher,
            token=token_manager,
            users=account_adapter,
            cache=cache,
        )

        await service.logout("token")

        assert cache.writes == [("auth:blacklist:j1", REVOKED_MARKER, 1)]

    async def test_invalid_token_raises(self, auth_service):
        with pytest.raises(InvalidTokenException) as exc_info:
            await auth_service.logout("not-a-token")

        assert exc_info.value.code == AuthErrorCode.TOKEN_INVALID

    async def test_no_cache_is_noop(self, auth_service_no_cache):
        _, token = await register_and_login(auth_service_no_cache)

        await auth_service_no_cache.logout(token)
        result = await auth_service_no_cache.validate(token)

        assert auth_service_no_cache.revocation_enabled is False
        assert result.valid is True

    async def test_no_cache_skips_verification(self, auth_service_no_cache):
        await auth_service_no_cache.logout("not-a-token")


# =============================================================================
# TTL COMPUTATION
# =============================================================================


class TestComputeTtl:
    now = datetime.fromtimestamp(1_000.0, UTC)

    def test_no_expiration_means_no_ttl(self):
        assert AuthService._compute_ttl_seconds(None, self.now) is None

    def test_floors_remaining_seconds(self):
        assert AuthService._compute_ttl_seconds(1_010, datetime.fromtimestamp(1_000.5, UTC)) == 9

    @pytest.mark.parametrize("exp", [1_000, 999, 0])
    def test_clamps_to_one(self, exp):
        assert AuthService._compute_ttl_seconds(exp, self.now) == 1

    def test_defaults_to_current_time(self):
        exp = int(datetime.now(UTC).timestamp()) + 120

        assert 118 <= AuthService._compute_ttl_seconds(exp) <= 120


def test_adapter_without_claims_builder():
    adapter = UserAdapter(
        build_user=lambda data, password_hash: password_hash,
        get_user_id=str,
        get_password_hash=str,
    )

    assert adapter.build_claims is None
