"""Unit tests for comment tree construction."""

from datetime import datetime, timedelta
from uuid import uuid4

from forum.domain.service.comment_tree import build_comment_tree, flatten
from forum.domain.value import CommentId, PostId
from tests.conftest import make_comment

T0 = datetime(2024, 6, 1, 12, 0, 0)


def _chain(post_id: PostId, length: int):
    """Root comment followed by ``length - 1`` nested replies."""
    comments = [make_comment(post_id, created_at=T0)]
    for i in range(1, length):
        comments.append(
            make_comment(
                post_id, parent=comments[-1], created_at=T0 + timedelta(minutes=i)
            )
        )
    return comments


class TestBuildCommentTree:
    """Tests for build_comment_tree."""

    def test_depth_limit_excludes_deeper_replies(self):
        """C1 > C2 > C3 with max_depth=2 stops at C2; max_depth=3 includes C3."""
        post_id = PostId(uuid4())
        c1, c2, c3 = _chain(post_id, 3)

        shallow = build_comment_tree([c1, c2, c3], max_depth=2)

        assert [n.comment.id for n in shallow] == [c1.id]
        assert [n.comment.id for n in shallow[0].replies] == [c2.id]
        assert shallow[0].replies[0].replies == []

        deep = build_comment_tree([c1, c2, c3], max_depth=3)

        assert deep[0].replies[0].replies[0].comment.id == c3.id

    def test_non_positive_depth_yields_empty_forest(self):
        """max_depth <= 0 returns nothing."""
        comments = _chain(PostId(uuid4()), 2)

        assert build_comment_tree(comments, max_depth=0) == []
        assert build_comment_tree(comments, max_depth=-1) == []

    def test_no_node_at_or_beyond_depth_limit(self):
        """For max_depth=N no returned comment has level >= N."""
        comments = _chain(PostId(uuid4()), 6)

        for n in range(1, 7):
            levels = [c.level for c in flatten(build_comment_tree(comments, n))]
            assert levels and max(levels) < n

    def test_siblings_ordered_by_score_then_oldest(self):
        """Higher score first; ties go to the older comment."""
        post_id = PostId(uuid4())
        low = make_comment(post_id, created_at=T0, upvotes=1)
        high = make_comment(post_id, created_at=T0 + timedelta(minutes=5), upvotes=9)
        tie_old = make_comment(post_id, created_at=T0 + timedelta(minutes=1), upvotes=3)
        tie_new = make_comment(post_id, created_at=T0 + timedelta(minutes=2), upvotes=3)

        forest = build_comment_tree([low, tie_new, high, tie_old], max_depth=1)

        assert [n.comment.id for n in forest] == [
            high.id,
            tie_old.id,
            tie_new.id,
            low.id,
        ]

    def test_score_is_net_of_downvotes(self):
        """Ordering uses upvotes minus downvotes."""
        post_id = PostId(uuid4())
        many_up = make_comment(post_id, created_at=T0, upvotes=10, downvotes=9)
        few_up = make_comment(post_id, created_at=T0, upvotes=3)

        forest = build_comment_tree([many_up, few_up], max_depth=1)

        assert [n.comment.id for n in forest] == [few_up.id, many_up.id]

    def test_replies_are_ordered_within_their_parent(self):
        """Child ordering applies per parent."""
        post_id = PostId(uuid4())
        root = make_comment(post_id, created_at=T0)
        older = make_comment(post_id, parent=root, created_at=T0 + timedelta(minutes=1))
        better = make_comment(
            post_id, parent=root, created_at=T0 + timedelta(minutes=2), upvotes=2
        )

        forest = build_comment_tree([older, root, better], max_depth=5)

        assert [n.comment.id for n in forest[0].replies] == [better.id, older.id]

    def test_orphan_is_treated_as_root(self):
        """A comment whose parent is not in the input becomes a root."""
        post_id = PostId(uuid4())
        root = make_comment(post_id, created_at=T0)
        orphan = make_comment(post_id, created_at=T0 + timedelta(minutes=1))
        orphan = orphan.model_copy(
            update={"parent_id": CommentId(uuid4()), "level": 3}
        )

        forest = build_comment_tree([root, orphan], max_depth=5)

        assert {n.comment.id for n in forest} == {root.id, orphan.id}

    def test_orphan_deeper_than_limit_is_dropped(self):
        """No returned comment has a level at or beyond max_depth."""
        post_id = PostId(uuid4())
        root = make_comment(post_id, created_at=T0)
        orphan = make_comment(post_id, created_at=T0 + timedelta(minutes=1))
        orphan = orphan.model_copy(
            update={"parent_id": CommentId(uuid4()), "level": 3}
        )
        reply = make_comment(
            post_id, parent=orphan, created_at=T0 + timedelta(minutes=2)
        )

        forest = build_comment_tree([root, orphan, reply], max_depth=2)

        assert [c.id for c in flatten(forest)] == [root.id]
        assert all(c.level < 2 for c in flatten(forest))

    def test_tombstoned_comments_keep_their_replies(self):
        """Deleted comments stay in the tree so replies keep their place."""
        post_id = PostId(uuid4())
        root, reply = _chain(post_id, 2)
        root = root.tombstone(T0 + timedelta(hours=1))

        forest = build_comment_tree([root, reply], max_depth=5)

        assert forest[0].comment.text == "[deleted]"
        assert forest[0].replies[0].comment.id == reply.id

    def test_is_deterministic(self):
        """The same input in any order yields the same forest."""
        post_id = PostId(uuid4())
        comments = _chain(post_id, 3) + [
            make_comment(post_id, created_at=T0) for _ in range(3)
        ]

        first = flatten(build_comment_tree(comments, max_depth=5))
        second = flatten(build_comment_tree(list(reversed(comments)), max_depth=5))

        assert [c.id for c in first] == [c.id for c in second]

    def test_empty_input(self):
        """No comments, no tree."""
        assert build_comment_tree([], max_depth=10) == []
