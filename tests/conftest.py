import pytest

from zanzi import RelationshipStore, create_document_store


@pytest.fixture
def store() -> RelationshipStore:
    return create_document_store()


@pytest.fixture
def document_store(store: RelationshipStore) -> RelationshipStore:
    """Figure 1 hierarchy: dir1 holds doc123, dir2 holds doc456."""
    store.write_object("parent", "dir1", "doc123")
    store.write_user("owner", "dir1", "alice")
    store.write_user("editor", "dir1", "bob")
    store.write_user("viewer", "dir1", "carol")

    store.write_user("owner", "doc123", "dan")
    store.write_user("editor", "doc123", "eve")
    store.write_user("viewer", "doc123", "faythe")

    store.write_object("parent", "dir2", "doc456")
    store.write_user("owner", "dir2", "heidi")
    store.write_user("editor", "dir2", "ivan")
    store.write_user("viewer", "dir2", "judy")
    store.write_user("owner", "doc456", "oscar")
    return store
