"""Comment tree construction.

Builds an ordered, depth-bounded forest from the flat list of comments on a
post. Comments reference their parent by ID only; the tree is rebuilt per
request and discarded afterwards.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from forum.domain.model import Comment
from forum.domain.value import CommentId


@dataclass
class CommentNode:
    """A comment and its ordered replies."""

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)

    def walk(self) -> Iterator["CommentNode"]:
        """Yield this node and all descendants, depth first."""
        yield self
        for reply in self.replies:
            yield from reply.walk()


def sibling_order(comment: Comment) -> tuple:
    """Best first: score descending, then oldest first, then ID."""
    return (-comment.score, comment.created_at, str(comment.id))


def build_comment_tree(
    comments: Iterable[Comment], max_depth: int
) -> list[CommentNode]:
    """Assemble comments into an ordered forest.

    Comments whose parent is not in the input are treated as roots. Expansion
    stops once ``max_depth`` levels have been produced; deeper comments are
    left out entirely. No returned comment has a stored ``level`` at or beyond
    ``max_depth``, so an orphan that deep is dropped along with its replies.

    Args:
        comments: Flat collection of comments for one post
        max_depth: Number of levels to include (1 = roots only)

    Returns:
        Root nodes in sibling order; empty when ``max_depth <= 0``
    """
    if max_depth <= 0:
        return []

    arena: dict[CommentId, Comment] = {comment.id: comment for comment in comments}

    children: dict[Optional[CommentId], list[Comment]] = defaultdict(list)
    for comment in arena.values():
        parent_id = comment.parent_id if comment.parent_id in arena else None
        children[parent_id].append(comment)

    for siblings in children.values():
        siblings.sort(key=sibling_order)

    def expand(parent_id: Optional[CommentId], depth: int) -> list[CommentNode]:
        if depth >= max_depth:
            return []
        return [
            CommentNode(comment=comment, replies=expand(comment.id, depth + 1))
            for comment in children.get(parent_id, [])
            if comment.level < max_depth
        ]

    return expand(None, 0)


def flatten(forest: Iterable[CommentNode]) -> list[Comment]:
    """Comments of a forest in display order (depth first)."""
    return [node.comment for root in forest for node in root.walk()]
