"""
Tests for the auth service.

Tests:
- register (duplicates, hashing, roles, store failures)
- login (password, role, token claims)
- get_current_user (missing, invalid, expired tokens; deleted profiles)
"""

from datetime import timedelta

import pytest

from app.core.errors import StoreError
from app.models import UserProfile
from app.services.auth_service import AuthService
from app.services.credential_store import SqlCredentialStore

ANN = {"name": "Ann", "email": "ann@x.com", "password": "secret1", "role": "job-seeker"}


class BrokenStore:
    """Credential store whose every call fails."""

    async def find_by_email(self, email):
        raise StoreError("connection refused")

    async def get_by_id(self, user_id):
        raise StoreError("connection refused")

    async def insert(self, record):
        raise StoreError("connection refused")


class InsertFailsStore:
    async def find_by_email(self, email):
        return []

    async def get_by_id(self, user_id):
        return None

    async def insert(self, record):
        raise StoreError()


class StaleReadStore(SqlCredentialStore):
    """Existence check that never sees the competing registration."""

    async def find_by_email(self, email):
        return []


# =============================================================================
# register
# =============================================================================


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_success(self, service):
        result = await service.register(**ANN)

        assert result.success is True
        assert result.message == "User registered successfully"
        assert result.data is None
        assert result.error is None

    @pytest.mark.asyncio
    async def test_password_is_stored_hashed(self, service, db, hasher):
        await service.register(**ANN)

        profile = db.query(UserProfile).filter(UserProfile.email == "ann@x.com").one()
        assert profile.password_hash != "secret1"
        assert hasher.verify("secret1", profile.password_hash)
        assert profile.role == "job-seeker"
        assert profile.id

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service):
        await service.register(**ANN)
        result = await service.register(**ANN)

        assert result.success is False
        assert result.error == "duplicate_email"
        assert result.message == "User already exists with this email."

    @pytest.mark.asyncio
    async def test_duplicate_email_is_case_insensitive(self, service):
        await service.register(**ANN)
        result = await service.register(**{**ANN, "email": "  ANN@X.com "})

        assert result.error == "duplicate_email"

    @pytest.mark.asyncio
    async def test_email_stored_canonical(self, service, db):
        await service.register(**{**ANN, "email": " Ann@X.COM"})

        assert db.query(UserProfile).filter(UserProfile.email == "ann@x.com").count() == 1

    @pytest.mark.asyncio
    async def test_unknown_role_rejected(self, service, db):
        result = await service.register(**{**ANN, "role": "admin"})

        assert result.success is False
        assert result.error == "invalid_role"
        assert db.query(UserProfile).count() == 0

    @pytest.mark.asyncio
    async def test_lookup_failure_is_store_error(self, hasher, codec):
        service = AuthService(store=BrokenStore(), hasher=hasher, codec=codec)
        result = await service.register(**ANN)

        assert result.success is False
        assert result.error == "store_error"

    @pytest.mark.asyncio
    async def test_insert_failure_is_store_error(self, hasher, codec):
        service = AuthService(store=InsertFailsStore(), hasher=hasher, codec=codec)
        result = await service.register(**ANN)

        assert result.success is False
        assert result.error == "store_error"
        assert result.message == "Credential store is unavailable."

    @pytest.mark.asyncio
    async def test_racing_registration_does_not_leak_row_data(self, db, hasher, codec):
        service = AuthService(store=StaleReadStore(db), hasher=hasher, codec=codec)
        await service.register(**ANN)

        result = await service.register(**ANN)

        assert result.success is False
        assert result.error == "store_error"
        assert "$2b$" not in result.message
        assert "[SQL:" not in result.message
        assert "ann@x.com" not in result.message
        assert db.query(UserProfile).count() == 1


# =============================================================================
# login
# =============================================================================


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_success_returns_token(self, service, codec, db):
        await service.register(**ANN)
        result = await service.login("ann@x.com", "secret1", "job-seeker")

        assert result.success is True
        assert result.message == "Login successful"

        claims = codec.verify(result.data)
        profile = db.query(UserProfile).filter(UserProfile.email == "ann@x.com").one()
        assert claims["sub"] == profile.id
        assert claims["email"] == "ann@x.com"
        assert claims["role"] == "job-seeker"

    @pytest.mark.asyncio
    async def test_login_email_is_canonicalised(self, service):
        await service.register(**ANN)
        result = await service.login("  ANN@x.com", "secret1", "job-seeker")

        assert result.success is True

    @pytest.mark.asyncio
    async def test_empty_password_round_trips(self, service):
        await service.register(**{**ANN, "password": ""})

        assert (await service.login("ann@x.com", "", "job-seeker")).success is True
        assert (await service.login("ann@x.com", "secret1", "job-seeker")).error == "invalid_credentials"

    @pytest.mark.asyncio
    async def test_wrong_password(self, service):
        await service.register(**ANN)
        result = await service.login("ann@x.com", "wrong", "job-seeker")

        assert result.success is False
        assert result.error == "invalid_credentials"
        assert result.data is None

    @pytest.mark.asyncio
    async def test_wrong_role(self, service):
        await service.register(**ANN)
        result = await service.login("ann@x.com", "secret1", "recruiter")

        assert result.success is False
        assert result.error == "unauthorized_role"
        assert result.message == "Unauthorized role access."

    @pytest.mark.asyncio
    async def test_unknown_email(self, service):
        result = await service.login("nobody@x.com", "secret1", "job-seeker")

        assert result.success is False
        assert result.error == "not_found"

    @pytest.mark.asyncio
    async def test_lookup_failure_reported_as_not_found(self, hasher, codec):
        service = AuthService(store=BrokenStore(), hasher=hasher, codec=codec)
        result = await service.login("ann@x.com", "secret1", "job-seeker")

        assert result.error == "not_found"

    @pytest.mark.asyncio
    async def test_ann_scenario(self, service):
        assert (await service.register(**ANN)).success is True
        assert (await service.login("ann@x.com", "secret1", "job-seeker")).success is True
        assert (await service.login("ann@x.com", "wrong", "job-seeker")).error == "invalid_credentials"
        assert (await service.login("ann@x.com", "secret1", "recruiter")).error == "unauthorized_role"


# =============================================================================
# get_current_user
# =============================================================================


class TestGetCurrentUser:
    async def _login(self, service) -> str:
        await service.register(**ANN)
        return (await service.login("ann@x.com", "secret1", "job-seeker")).data

    @pytest.mark.asyncio
    async def test_token_resolves_to_profile(self, service, codec):
        token = await self._login(service)
        result = await service.get_current_user(token)

        assert result.success is True
        user = result.data
        claims = codec.verify(token)
        assert user.id == claims["sub"]
        assert user.email == "ann@x.com"
        assert user.role == "job-seeker"
        assert user.name == "Ann"

    @pytest.mark.asyncio
    async def test_password_hash_not_returned(self, service):
        token = await self._login(service)
        result = await service.get_current_user(token)

        dumped = result.model_dump()
        assert "password_hash" not in dumped["data"]
        assert not hasattr(result.data, "password_hash")

    @pytest.mark.asyncio
    async def test_missing_token(self, service):
        result = await service.get_current_user(None)

        assert result.success is False
        assert result.error == "missing_token"

    @pytest.mark.asyncio
    async def test_empty_token(self, service):
        assert (await service.get_current_user("")).error == "missing_token"

    @pytest.mark.asyncio
    async def test_garbage_token(self, service):
        result = await service.get_current_user("garbage")

        assert result.success is False
        assert result.error == "invalid_token"

    @pytest.mark.asyncio
    async def test_expired_token(self, service, codec, db):
        await service.register(**ANN)
        profile = db.query(UserProfile).one()
        token = codec.sign(
            {"sub": profile.id, "email": profile.email, "role": profile.role},
            expires_delta=timedelta(seconds=-10),
        )

        result = await service.get_current_user(token)

        assert result.success is False
        assert result.error == "invalid_token"

    @pytest.mark.asyncio
    async def test_deleted_profile(self, service, db):
        token = await self._login(service)
        db.query(UserProfile).delete()
        db.commit()

        result = await service.get_current_user(token)

        assert result.success is False
        assert result.error == "not_found"


class TestSqlCredentialStore:
    @pytest.mark.asyncio
    async def test_table_rejects_unknown_role(self, db):
        store = SqlCredentialStore(db)
        with pytest.raises(StoreError) as exc_info:
            await store.insert({
                "name": "Eve",
                "email": "eve@x.com",
                "password_hash": "$2b$04$notarealhash",
                "role": "admin",
            })

        assert exc_info.value.message == "Credential store is unavailable."
        assert db.query(UserProfile).count() == 0
