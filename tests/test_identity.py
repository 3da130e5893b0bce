import pytest
from sqlalchemy.exc import OperationalError

from shared.auth import Role, verify_password
from services.school_admin.exceptions import EntityNotFound
from services.school_admin.identity import AccountDeletion, IdentityProvider
from services.school_admin.models import UserAccount


async def _create(identity, username="ada", password="s3cret-pass"):
    return await identity.create_account(
        username=username, password=password, first_name="Ada", last_name="Lovelace", role=Role.TEACHER,
    )


async def test_created_account_authenticates(session):
    identity = IdentityProvider(session)
    account_id = await _create(identity)
    await session.commit()

    account = await identity.authenticate("ada", "s3cret-pass")

    assert account.id == account_id
    assert account.role is Role.TEACHER
    assert await identity.authenticate("ada", "wrong-pass") is None
    assert await identity.authenticate("nobody", "s3cret-pass") is None


async def test_update_without_password_keeps_hash(session):
    identity = IdentityProvider(session)
    account_id = await _create(identity)
    original_hash = (await session.get(UserAccount, account_id)).hashed_password

    await identity.update_account(account_id, username="ada2", first_name="Ada", last_name="King")

    account = await session.get(UserAccount, account_id)
    assert account.username == "ada2"
    assert account.hashed_password == original_hash


async def test_update_with_password_rehashes(session):
    identity = IdentityProvider(session)
    account_id = await _create(identity)

    await identity.update_account(
        account_id, username="ada", first_name="Ada", last_name="King", password="n3w-passw0rd",
    )

    assert verify_password("n3w-passw0rd", (await session.get(UserAccount, account_id)).hashed_password)


async def test_update_of_unknown_account_fails(session):
    with pytest.raises(EntityNotFound):
        await IdentityProvider(session).update_account(
            "missing", username="x", first_name="X", last_name="Y",
        )


async def test_delete_reports_outcome(session):
    identity = IdentityProvider(session)
    account_id = await _create(identity)
    await session.commit()

    assert await identity.delete_account(account_id) is AccountDeletion.DELETED
    await session.commit()
    assert await session.get(UserAccount, account_id) is None
    assert await identity.delete_account(account_id) is AccountDeletion.NOT_FOUND


async def test_failed_delete_rolls_back_and_reports_transport_error(session, monkeypatch):
    identity = IdentityProvider(session)
    account_id = await _create(identity)
    await session.commit()

    async def lost_connection(*args, **kwargs):
        raise OperationalError("DELETE FROM user_accounts", {}, Exception("connection lost"))

    monkeypatch.setattr(session, "flush", lost_connection)
    assert await identity.delete_account(account_id) is AccountDeletion.TRANSPORT_ERROR
    monkeypatch.undo()

    assert await session.get(UserAccount, account_id) is not None
