"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .comment_tree import CommentNode, build_comment_tree, flatten
from .post_service import PostService
from .ranking import RankingService, hot_score
from .reputation_service import ReputationService, reputation_delta
from .user_service import UserService
from .vote_ledger import VoteCast, VoteLedger
from .vote_service import VoteOutcome, VoteService

__all__ = [
    "CommentNode",
    "CommentService",
    "PostService",
    "RankingService",
    "ReputationService",
    "Service",
    "UserService",
    "VoteCast",
    "VoteLedger",
    "VoteOutcome",
    "VoteService",
    "build_comment_tree",
    "flatten",
    "hot_score",
    "reputation_delta",
]
