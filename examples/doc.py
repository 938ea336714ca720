"""
Document sharing configuration from Figure 1 of the Zanzibar paper,
which appears to describe the authorization behavior of Google Docs.

Object hierarchy (defined by the "parent" relationship):

    "dir1"                  owner: "alice"
      |                     editor: "bob"
      | "parent"            viewer: "carol"
      v
    "doc123"                owner: "dan"
                            editor: "eve"
                            viewer: "faythe"

    "dir2"                  owner: "heidi"
      |                     editor: "ivan"
      |                     viewer: "judy"
      v
    "doc456"                owner: "oscar"
"""
import logging

from zanzi import Relations, create_document_store

logger = logging.getLogger("doc")


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s : %(asctime)s | %(name)s  | %(message)s",
    )
    store = create_document_store()
    store.write_batch([
        "dir1#parent@object:doc123",
        "dir1#owner@user:alice",
        "dir1#editor@user:bob",
        "dir1#viewer@user:carol",
        "doc123#owner@user:dan",
        "doc123#editor@user:eve",
        "doc123#viewer@user:faythe",
        "dir2#parent@object:doc456",
        "dir2#owner@user:heidi",
        "dir2#editor@user:ivan",
        "dir2#viewer@user:judy",
        "doc456#owner@user:oscar",
    ])

    for obj in ("dir1", "doc123", "dir2", "doc456"):
        for user in ("alice", "bob", "carol", "dan", "heidi", "oscar"):
            for relation in (Relations.OWNER, Relations.EDITOR, Relations.VIEWER):
                result = store.check_detailed(relation, obj, user)
                if result.allowed:
                    logger.info(
                        f"{user} is {relation} of {obj}: {' -> '.join(result.path)}"
                    )

    logger.info(f"doc123 memberships: {store.object_lookup_memberships('doc123')}")


if __name__ == "__main__":
    main()
