"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import CommentSettings, RankingSettings, VotingSettings
from forum.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from forum.domain.service import (
    CommentService,
    PostService,
    RankingService,
    ReputationService,
    UserService,
    VoteLedger,
    VoteService,
)
from forum.util.di.base import ProviderBase
from forum.util.locks import TargetLocks, UserLocks


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_ranking_service(self, settings: RankingSettings) -> RankingService:
        """Provide ranking service (stateless, shared)."""
        return RankingService(settings=settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        ranking_service: RankingService,
        settings: RankingSettings,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            ranking_service=ranking_service,
            settings=settings,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_service=post_service,
            settings=settings,
        )

    @provide
    def get_reputation_service(
        self, user_repository: UserRepository, user_locks: UserLocks
    ) -> ReputationService:
        """Provide reputation domain service."""
        return ReputationService(user_repository=user_repository, user_locks=user_locks)

    @provide
    def get_vote_ledger(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        target_locks: TargetLocks,
        settings: VotingSettings,
    ) -> VoteLedger:
        """Provide vote ledger."""
        return VoteLedger(
            vote_repository=vote_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
            target_locks=target_locks,
            settings=settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_ledger: VoteLedger,
        reputation_service: ReputationService,
        post_service: PostService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_ledger=vote_ledger,
            reputation_service=reputation_service,
            post_service=post_service,
        )
