"""
Tests for build_comment_tree.

The tree is pure: it takes comments in display order and returns top-level
threads with their direct replies, without touching the database.
"""

from datetime import UTC, datetime, timedelta

from bookreview.schemas import CommentResponse
from bookreview.services.comments import build_comment_tree

BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def make_comment(comment_id: int, parent_id: int | None = None, review_id: int = 1) -> CommentResponse:
    created = BASE_TIME + timedelta(minutes=comment_id)
    return CommentResponse(
        id=comment_id,
        review_id=review_id,
        user_id=1,
        parent_id=parent_id,
        content=f"comment {comment_id}",
        created_at=created,
        updated_at=created,
    )


class TestBuildCommentTree:
    """Tests for the two-level thread assembly."""

    def test_empty(self):
        """Test an empty comment list gives no threads."""
        assert build_comment_tree([]) == []

    def test_top_level_only(self):
        """Test top-level comments keep their order and have no replies."""
        comments = [make_comment(3), make_comment(2), make_comment(1)]

        tree = build_comment_tree(comments)

        assert [thread.id for thread in tree] == [3, 2, 1]
        assert all(thread.replies == [] for thread in tree)

    def test_replies_attached_to_parent(self):
        """Test replies are attached to their parent in input order."""
        # Newest first, as the service loads them
        comments = [
            make_comment(5, parent_id=1),
            make_comment(4, parent_id=2),
            make_comment(3, parent_id=1),
            make_comment(2),
            make_comment(1),
        ]

        tree = build_comment_tree(comments)

        assert [thread.id for thread in tree] == [2, 1]
        assert [reply.id for reply in tree[0].replies] == [4]
        assert [reply.id for reply in tree[1].replies] == [5, 3]

    def test_reply_to_reply_is_hidden(self):
        """Test a reply to a reply is not shown."""
        comments = [make_comment(3, parent_id=2), make_comment(2, parent_id=1), make_comment(1)]

        tree = build_comment_tree(comments)

        assert len(tree) == 1
        assert [reply.id for reply in tree[0].replies] == [2]
        shown = {tree[0].id} | {reply.id for reply in tree[0].replies}
        assert 3 not in shown

    def test_orphan_reply_is_hidden(self):
        """A reply whose parent is not in the set appears nowhere."""
        comments = [make_comment(2, parent_id=99), make_comment(1)]

        tree = build_comment_tree(comments)

        assert [thread.id for thread in tree] == [1]
        assert tree[0].replies == []

    def test_every_shown_reply_belongs_to_its_thread(self):
        """Test every shown reply points at its thread."""
        comments = [
            make_comment(6, parent_id=4),
            make_comment(5, parent_id=1),
            make_comment(4),
            make_comment(3, parent_id=4),
            make_comment(2, parent_id=1),
            make_comment(1),
        ]

        tree = build_comment_tree(comments)

        for thread in tree:
            assert thread.parent_id is None
            assert all(reply.parent_id == thread.id for reply in thread.replies)

        shown = [thread.id for thread in tree] + [r.id for t in tree for r in t.replies]
        assert sorted(shown) == [1, 2, 3, 4, 5, 6]

    def test_thread_serializes_camel_case(self):
        """Test threads serialize with camelCase keys."""
        tree = build_comment_tree([make_comment(2, parent_id=1), make_comment(1)])

        data = tree[0].to_json()

        assert data["reviewId"] == 1
        assert data["parentId"] is None
        assert data["replies"][0]["parentId"] == 1
        assert "createdAt" in data["replies"][0]

    def test_naive_timestamps_read_as_utc(self):
        """Test naive timestamps, as SQLite returns them, are tagged as UTC."""
        naive = datetime(2026, 3, 1, 12, 0)
        comment = CommentResponse(
            id=1,
            review_id=1,
            user_id=1,
            parent_id=None,
            content="naive",
            created_at=naive,
            updated_at=naive,
        )

        assert comment.created_at == BASE_TIME
        assert comment.created_at.utcoffset() == timedelta(0)
        assert comment.to_json()["createdAt"].endswith("Z")
