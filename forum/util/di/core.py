"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from forum.config import (
    CommentSettings,
    RankingSettings,
    Settings,
    VotingSettings,
)
from forum.util.di.base import ProviderBase
from forum.util.locks import TargetLocks, UserLocks


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_ranking_settings(self, settings: Settings) -> RankingSettings:
        return settings.ranking

    @provide(scope=Scope.APP)
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        return settings.comments

    @provide(scope=Scope.APP)
    def provide_voting_settings(self, settings: Settings) -> VotingSettings:
        return settings.voting


class ProdLockProvider(ProviderBase):
    """Keyed lock registries shared by every request in the process."""

    @provide(scope=Scope.APP)
    def provide_target_locks(self) -> TargetLocks:
        """Per-(votable type, votable id) locks for the vote ledger."""
        return TargetLocks()

    @provide(scope=Scope.APP)
    def provide_user_locks(self) -> UserLocks:
        """Per-user locks for reputation updates."""
        return UserLocks()
