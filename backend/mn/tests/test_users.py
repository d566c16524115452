"""
Tests for the user service.
"""
import pytest
from mn.core.errors import ConflictError, InvalidValueError, NotFoundError
from mn.models.node import Node
from mn.schemas.node import NewNodePayload
from mn.services import node_service, user_service


def test_create_user(db):
    """Test user creation stores a hash instead of the password."""
    user = user_service.create_user("alice", "pw1", db)
    assert user.id is not None
    assert user.username == "alice"
    assert user.password_hash != "pw1"


def test_create_duplicate_user(db, alice):
    """Test usernames are unique."""
    with pytest.raises(ConflictError):
        user_service.create_user("alice", "other", db)


def test_usernames_are_case_sensitive(db, alice):
    """Test a username differing only in case is another user."""
    user = user_service.create_user("Alice", "pw", db)
    assert user.id != alice.id


def test_create_user_requires_values(db):
    """Test empty usernames and passwords are rejected."""
    with pytest.raises(InvalidValueError):
        user_service.create_user("", "pw", db)
    with pytest.raises(InvalidValueError):
        user_service.create_user("carol", "", db)


def test_verify_user(db, alice):
    """Test credential checks."""
    assert user_service.verify_user("alice", "pw1", db).id == alice.id
    assert user_service.verify_user("alice", "wrong", db) is None
    assert user_service.verify_user("nobody", "pw1", db) is None


def test_load_user(db, alice):
    """Test loading users by id and username."""
    assert user_service.get_user_by_id(alice.id, db).username == "alice"
    assert user_service.get_user_by_username("alice", db).id == alice.id
    with pytest.raises(NotFoundError):
        user_service.get_user_by_id(alice.id + 100, db)
    with pytest.raises(NotFoundError):
        user_service.get_user_by_username("nobody", db)


def test_change_password(db, alice):
    """Test the old password stops working after a change."""
    user_service.change_password(alice.id, "new", db)
    assert user_service.verify_user("alice", "new", db) is not None
    assert user_service.verify_user("alice", "pw1", db) is None


def test_change_password_of_unknown_user(db):
    """Test changing the password of a missing user."""
    with pytest.raises(NotFoundError):
        user_service.change_password(42, "new", db)


def test_delete_user_removes_owned_nodes(db, alice, bob):
    """Test deleting a user cascades to their nodes only."""
    node_service.create_node(alice.id, [], NewNodePayload(name="Notes", is_directory=True), db)
    node_service.create_node(bob.id, [], NewNodePayload(name="Notes", is_directory=True), db)

    user_service.delete_user(alice.id, db)

    remaining = db.query(Node).all()
    assert [node.owner_id for node in remaining] == [bob.id]
    with pytest.raises(NotFoundError):
        user_service.delete_user(alice.id, db)
