"""
Cookbook Backend: Users, Login & Auth Gate Tests
=================================================
"""

import uuid

import pytest
from pydantic import ValidationError as SchemaError

from cookbook.exceptions import AccessDeniedError, ValidationError
from cookbook.models import User
from cookbook.schemas.user import LoginRequest, UserCreate, UserUpdate
from cookbook.services.auth_service import AuthGate
from cookbook.services.user_service import LOGIN_FAILED, UserService


@pytest.fixture
def users(store):
    return UserService(store, bcrypt_rounds=4)


class TestPasswords:

    @pytest.mark.asyncio
    async def test_password_is_hashed(self, store, users):
        created = await users.create(UserCreate(email="a@example.com", password="hunter2"))
        stored = await store.get(User, created.id)

        assert stored.password_hash != "hunter2"
        assert stored.password_hash.startswith("$2")
        assert users.verify_password("hunter2", stored.password_hash)
        assert not users.verify_password("hunter3", stored.password_hash)

    def test_same_password_hashes_differently(self, users):
        assert users.hash_password("pw") != users.hash_password("pw")

    def test_password_limit_counts_bytes_not_characters(self):
        # 40 characters, 80 bytes in UTF-8
        with pytest.raises(SchemaError, match="72 bytes"):
            UserCreate(email="a@example.com", password="é" * 40)
        with pytest.raises(SchemaError, match="72 bytes"):
            UserUpdate(password="x" * 73)

    def test_password_of_exactly_72_bytes_is_accepted(self):
        # 36 two-byte characters
        assert UserCreate(password="é" * 36).password == "é" * 36

    @pytest.mark.asyncio
    async def test_over_long_password_never_matches(self, store, users):
        password = "p" * 72
        created = await users.create(UserCreate(email="a@example.com", password=password))
        stored = await store.get(User, created.id)

        assert users.verify_password(password, stored.password_hash)
        assert not users.verify_password(password + "extra", stored.password_hash)

    def test_verify_without_hash(self, users):
        assert users.verify_password("anything", None) is False
        assert users.verify_password("anything", "not-a-bcrypt-hash") is False

    @pytest.mark.asyncio
    async def test_response_has_no_password(self, users):
        created = await users.create(UserCreate(email="a@example.com", password="pw"))
        dumped = created.model_dump()
        assert "password" not in dumped
        assert "password_hash" not in dumped


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success(self, users):
        created = await users.create(UserCreate(email="Chef@Example.com", password="s3cret"))

        result = await users.login(LoginRequest(email="chef@example.com", password="s3cret"))

        assert result.success is True
        assert result.user.id == created.id
        assert result.error is None

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, users):
        await users.create(UserCreate(email="chef@example.com", password="s3cret"))

        wrong = await users.login(LoginRequest(email="chef@example.com", password="nope"))
        unknown = await users.login(LoginRequest(email="nobody@example.com", password="s3cret"))

        assert wrong == unknown
        assert wrong.success is False
        assert wrong.user is None
        assert wrong.error == LOGIN_FAILED

    @pytest.mark.asyncio
    async def test_update_without_password_disables_login(self, users):
        created = await users.create(UserCreate(email="chef@example.com", password="s3cret"))

        await users.update(created.id, UserUpdate(email="chef@example.com"))

        result = await users.login(LoginRequest(email="chef@example.com", password="s3cret"))
        assert result.success is False


class TestFavorites:

    @pytest.mark.asyncio
    async def test_favorites_resolve_to_recipes(self, users, catalog):
        oats = catalog["recipes"]["Peanut Banana Oats"]
        created = await users.create(UserCreate(email="a@example.com", password="pw", favorites=[oats]))

        assert [f.title for f in created.favorites] == ["Peanut Banana Oats"]

    @pytest.mark.asyncio
    async def test_unknown_favorite_is_rejected(self, users):
        with pytest.raises(ValidationError, match="favorites"):
            await users.create(UserCreate(email="a@example.com", favorites=[uuid.uuid4()]))


class TestAuthGate:

    @pytest.mark.asyncio
    async def test_existing_user_passes(self, store, users):
        created = await users.create(UserCreate(email="a@example.com", password="pw"))
        user = await AuthGate(store).require_user(str(created.id))
        assert user.email == "a@example.com"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", [None, "", "not-a-uuid"])
    async def test_missing_or_malformed_id_is_denied(self, store, user_id):
        with pytest.raises(AccessDeniedError):
            await AuthGate(store).require_user(user_id)

    @pytest.mark.asyncio
    async def test_unknown_user_is_denied(self, store):
        with pytest.raises(AccessDeniedError):
            await AuthGate(store).require_user(str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_deleted_user_is_denied(self, store, users):
        created = await users.create(UserCreate(email="a@example.com", password="pw"))
        assert await users.delete(created.id) is True

        with pytest.raises(AccessDeniedError):
            await AuthGate(store).require_user(str(created.id))
