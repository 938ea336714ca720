import pytest

from zanzi import (
    DuplicateTuple,
    InvalidTuple,
    Member,
    MemberKind,
    Membership,
    RelationshipId,
    RelationshipStore,
    TupleKey,
    UnknownRelationship,
)


def test_direct_write_round_trip(store: RelationshipStore) -> None:
    store.write("owner", "dir1", Member.user("alice"))

    assert store.contains_direct("owner", "dir1", Member.user("alice"))
    assert store.list_direct_members("owner", "dir1") == [Member.user("alice")]
    assert store.lookup_memberships_of(Member.user("alice")) == [
        Membership(RelationshipId("owner"), "dir1")
    ]
    assert len(store) == 1


def test_directory_contents(document_store: RelationshipStore) -> None:
    assert document_store.contains_object_directly("parent", "dir1", "doc123")
    assert not document_store.contains_object_directly("parent", "dir1", "doc456")
    assert document_store.contains_object_directly("parent", "dir2", "doc456")
    assert not document_store.contains_object_directly("parent", "dir2", "doc123")


def test_non_existence_is_total(document_store: RelationshipStore) -> None:
    # Non-existent document is contained nowhere
    assert not document_store.contains_object_directly("parent", "dir2", "doc789")
    # Non-existent directory contains nothing
    assert not document_store.contains_object_directly("parent", "dir3", "doc123")
    assert document_store.list_direct_members("parent", "dir3") == []
    assert document_store.list_direct_members("viewer", "doc456") == []
    assert document_store.lookup_memberships_of(Member.user("mallory")) == []


def test_user_and_object_members_are_distinct(store: RelationshipStore) -> None:
    store.write_object("parent", "dir1", "alice")

    assert store.contains_object_directly("parent", "dir1", "alice")
    assert not store.contains_user_directly("parent", "dir1", "alice")
    assert store.user_lookup_memberships("alice") == []


def test_direct_user_associations(document_store: RelationshipStore) -> None:
    assert document_store.list_direct_members("owner", "dir1") == [
        Member.user("alice")
    ]
    assert document_store.contains_user_directly("owner", "dir1", "alice")
    assert not document_store.contains_user_directly("owner", "dir1", "bob")
    assert not document_store.contains_user_directly("owner", "dir1", "carol")

    assert document_store.list_direct_members("editor", "dir1") == [
        Member.user("bob")
    ]
    assert not document_store.contains_user_directly("editor", "dir1", "alice")
    assert document_store.contains_user_directly("editor", "dir1", "bob")

    assert document_store.list_direct_members("viewer", "dir1") == [
        Member.user("carol")
    ]
    # Direct reads ignore implication
    assert not document_store.contains_user_directly("viewer", "dir1", "alice")
    assert not document_store.contains_user_directly("viewer", "dir1", "bob")
    assert document_store.contains_user_directly("viewer", "dir1", "carol")


def test_reverse_index(document_store: RelationshipStore) -> None:
    assert document_store.object_lookup_memberships("dir1") == []
    assert document_store.object_lookup_memberships("dir2") == []
    assert document_store.object_lookup_memberships("doc123") == [
        Membership(RelationshipId("parent"), "dir1")
    ]
    assert document_store.user_lookup_memberships("alice") == [
        Membership(RelationshipId("owner"), "dir1")
    ]


def test_direct_members_are_ordered_objects_first(store: RelationshipStore) -> None:
    store.write_user("viewer", "dir1", "zoe")
    store.write_object("viewer", "dir1", "team")
    store.write_user("viewer", "dir1", "adam")
    store.write_object("viewer", "dir1", "admins")

    assert store.list_direct_members("viewer", "dir1") == [
        Member.object("admins"),
        Member.object("team"),
        Member.user("adam"),
        Member.user("zoe"),
    ]
    assert [m.kind for m in store.list_direct_members("viewer", "dir1")] == [
        MemberKind.OBJECT, MemberKind.OBJECT, MemberKind.USER, MemberKind.USER,
    ]


def test_memberships_are_ordered(store: RelationshipStore) -> None:
    store.write_user("viewer", "doc9", "alice")
    store.write_user("owner", "dir1", "alice")
    store.write_user("editor", "dir2", "alice")
    store.write_user("editor", "dir1", "alice")

    assert [str(m) for m in store.user_lookup_memberships("alice")] == [
        "dir1#editor",
        "dir2#editor",
        "dir1#owner",
        "doc9#viewer",
    ]


def test_duplicate_write_fails_and_keeps_store_consistent(
    store: RelationshipStore,
) -> None:
    store.write_user("owner", "dir1", "alice")
    with pytest.raises(DuplicateTuple) as exc_info:
        store.write_user("owner", "dir1", "alice")

    assert exc_info.value.relationship == RelationshipId("owner")
    assert store.list_direct_members("owner", "dir1") == [Member.user("alice")]
    assert store.user_lookup_memberships("alice") == [
        Membership(RelationshipId("owner"), "dir1")
    ]


def test_same_member_under_other_relationship_is_not_duplicate(
    store: RelationshipStore,
) -> None:
    store.write_user("owner", "dir1", "alice")
    store.write_user("viewer", "dir1", "alice")
    store.write_user("owner", "dir2", "alice")

    assert len(store) == 3
    assert len(store.user_lookup_memberships("alice")) == 3


def test_unknown_relationship_fails(store: RelationshipStore) -> None:
    with pytest.raises(UnknownRelationship):
        store.write_user("commenter", "dir1", "alice")
    with pytest.raises(UnknownRelationship):
        store.contains_direct("commenter", "dir1", Member.user("alice"))
    with pytest.raises(UnknownRelationship):
        store.list_direct_members("commenter", "dir1")
    assert len(store) == 0


def test_empty_identifiers_rejected(store: RelationshipStore) -> None:
    with pytest.raises(InvalidTuple):
        store.write_user("owner", "", "alice")
    with pytest.raises(InvalidTuple):
        store.write_user("owner", "dir1", None)
    assert len(store) == 0


def test_non_string_identifiers(store: RelationshipStore) -> None:
    store.write_user("owner", 10, 2)
    store.write_user("owner", 10, 1)

    assert store.list_direct_members("owner", 10) == [
        Member.user(1), Member.user(2)
    ]
    assert store.check("viewer", 10, 2)


def test_tuple_key_parse() -> None:
    key = TupleKey.parse("doc:1#viewer@user:alice")

    assert key.object_id == "doc:1"
    assert key.relation == "viewer"
    assert key.member == Member.user("alice")
    assert str(key) == "doc:1#viewer@user:alice"

    key = TupleKey.parse("dir1#parent@object:doc123")
    assert key.member == Member.object("doc123")


@pytest.mark.parametrize("tuple_str", [
    "dir1#viewer",
    "dir1@user:alice",
    "#viewer@user:alice",
    "dir1#viewer@alice",
    "dir1#viewer@user:",
    "dir1#viewer@group:eng",
    "dir1#viewer@user:a@user:b",
])
def test_tuple_key_parse_rejects_malformed(tuple_str: str) -> None:
    with pytest.raises(InvalidTuple):
        TupleKey.parse(tuple_str)


def test_write_tuple(store: RelationshipStore) -> None:
    store.write_tuple("dir1#parent@object:doc123")
    store.write_tuple(TupleKey.parse("dir1#owner@user:alice"))

    assert store.contains_object_directly("parent", "dir1", "doc123")
    assert store.contains_user_directly("owner", "dir1", "alice")


def test_write_batch(store: RelationshipStore) -> None:
    count = store.write_batch([
        "dir1#parent@object:doc123",
        "dir1#owner@user:alice",
        "dir1#editor@user:bob",
    ])

    assert count == 3
    assert len(store) == 3
    assert store.check("viewer", "doc123", "alice")


def test_write_batch_is_all_or_nothing(store: RelationshipStore) -> None:
    store.write_user("viewer", "dir1", "carol")

    with pytest.raises(UnknownRelationship):
        store.write_batch(["dir1#owner@user:alice", "dir1#commenter@user:bob"])
    with pytest.raises(DuplicateTuple):
        store.write_batch(["dir1#owner@user:alice", "dir1#viewer@user:carol"])
    with pytest.raises(DuplicateTuple):
        store.write_batch(["dir1#owner@user:alice", "dir1#owner@user:alice"])

    assert len(store) == 1
    assert store.user_lookup_memberships("alice") == []
