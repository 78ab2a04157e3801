"""Tests for the user store."""

import pytest

from src.exceptions import DuplicateEmailError
from src.models.user import User
from src.services.auth import verify_password
from src.services.user_store import MAX_USER_ID, UserStore


@pytest.fixture
def store(db):
    return UserStore(db)


@pytest.fixture
def alice(store):
    return store.create(
        email="alice@example.com",
        password="password123",
        display_name="Alice",
        phone_number="111",
        address="1 First St",
    )


def test_create_assigns_id_and_hashes_password(alice):
    """Test create stores a digest and gets an id."""
    assert alice.id is not None
    assert alice.password_hash != "password123"
    assert verify_password("password123", alice.password_hash)


def test_create_duplicate_email_hits_unique_constraint(store, db, alice):
    """Test the unique constraint catches a duplicate the handler check missed."""
    with pytest.raises(DuplicateEmailError):
        store.create(email="alice@example.com", password="password456")

    # Session is usable after the rollback
    assert db.query(User).filter(User.email == "alice@example.com").count() == 1


def test_find_by_email_and_id(store, alice):
    """Test lookups by both keys."""
    assert store.find_by_email("alice@example.com").id == alice.id
    assert store.find_by_id(alice.id).email == "alice@example.com"
    assert store.find_by_email("missing@example.com") is None
    assert store.find_by_id(999999) is None


def test_update_ignores_empty_and_unknown_fields(store, alice):
    """Test only non-empty updatable fields are applied."""
    original_email = alice.email
    user = store.update(
        alice.id,
        {"display_name": "", "phone_number": "222", "address": None, "email": "x@example.com"},
    )
    assert user.display_name == "Alice"
    assert user.phone_number == "222"
    assert user.address == "1 First St"
    assert user.email == original_email


def test_update_missing_user(store):
    """Test updating an unknown id returns None."""
    assert store.update(999999, {"address": "nowhere"}) is None


def test_delete(store, alice):
    """Test delete reports whether a record was removed."""
    assert store.delete(alice.id) is True
    assert store.find_by_id(alice.id) is None
    assert store.delete(alice.id) is False


def test_list_all(store, alice):
    """Test list_all returns every user in id order."""
    bob = store.create(email="bob@example.com", password="password123")
    assert [user.id for user in store.list_all()] == [alice.id, bob.id]


def test_out_of_range_ids(store):
    """Test ids beyond the primary key range are treated as absent."""
    too_big = MAX_USER_ID + 1
    assert store.find_by_id(too_big) is None
    assert store.find_by_id(-1) is None
    assert store.update(too_big, {"address": "nowhere"}) is None
    assert store.delete(too_big) is False
