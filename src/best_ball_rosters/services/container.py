"""Centralized service container for CLI dependency injection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx
    from config import ConfigurationSet

    from best_ball_rosters.config import AnalysisSettings, DataSettings
    from best_ball_rosters.data.protocol import ADPSource, DraftablesSource, RosterSource
    from best_ball_rosters.domain.roster import EnrichedRoster
    from best_ball_rosters.repos.roster_repo import RosterRepository
    from best_ball_rosters.repos.side_tables import SideTableRepository
    from best_ball_rosters.services.player_matching import PlayerMatchingService

logger = logging.getLogger(__name__)


@dataclass
class ServiceConfig:
    """Configuration options for service creation.

    Attributes:
        config_path: YAML config file to layer under environment variables.
    """

    config_path: str = "config.yaml"


class ServiceContainer:
    """Lazily-initialized container for CLI service dependencies.

    Supports explicit injection for testing via constructor parameters.
    When dependencies are not provided, they are created on first access
    using the default implementations.
    """

    def __init__(
        self,
        config: ServiceConfig | None = None,
        *,
        app_config: ConfigurationSet | None = None,
        roster_source: RosterSource | None = None,
        adp_source: ADPSource | None = None,
        draftables_source: DraftablesSource | None = None,
    ) -> None:
        self._config = config or ServiceConfig()
        self._app_config = app_config
        self._roster_source = roster_source
        self._adp_source = adp_source
        self._draftables_source = draftables_source
        self._enriched: list[EnrichedRoster] | None = None

    @property
    def config(self) -> ServiceConfig:
        return self._config

    @cached_property
    def app_config(self) -> ConfigurationSet:
        if self._app_config is not None:
            return self._app_config
        from best_ball_rosters.config import create_config

        return create_config(yaml_path=self._config.config_path)

    @cached_property
    def data_settings(self) -> DataSettings:
        from best_ball_rosters.config import load_data_settings

        return load_data_settings(self.app_config)

    @cached_property
    def analysis_settings(self) -> AnalysisSettings:
        from best_ball_rosters.config import load_analysis_settings

        return load_analysis_settings(self.app_config)

    @cached_property
    def http_client(self) -> httpx.Client:
        """Shared HTTP client for URL locations."""
        from best_ball_rosters.data._fetch import default_client

        return default_client(self.data_settings.timeout_seconds)

    @cached_property
    def roster_source(self) -> RosterSource:
        if self._roster_source is not None:
            return self._roster_source
        from best_ball_rosters.data.roster_source import RosterJsonSource

        settings = self.data_settings
        return RosterJsonSource(settings.rosters, settings.contest_draft_group_id, client=self.http_client)

    @cached_property
    def adp_source(self) -> ADPSource:
        if self._adp_source is not None:
            return self._adp_source
        from best_ball_rosters.data.adp_source import ADPCsvSource

        return ADPCsvSource(self.data_settings.adp, client=self.http_client)

    @cached_property
    def draftables_source(self) -> DraftablesSource:
        if self._draftables_source is not None:
            return self._draftables_source
        from best_ball_rosters.data.draftables_source import DraftablesJsonSource

        return DraftablesJsonSource(self.data_settings.draftables, client=self.http_client)

    @cached_property
    def roster_repo(self) -> RosterRepository:
        from best_ball_rosters.repos.roster_repo import RosterRepository

        return RosterRepository(self.roster_source)

    @cached_property
    def side_tables(self) -> SideTableRepository:
        """The single ADP/draftables cache shared by every consumer."""
        from best_ball_rosters.repos.side_tables import SideTableRepository

        return SideTableRepository(self.adp_source, self.draftables_source)

    @cached_property
    def matching_service(self) -> PlayerMatchingService:
        from best_ball_rosters.services.player_matching import PlayerMatchingService

        return PlayerMatchingService(self.side_tables)

    def enriched_rosters(self) -> list[EnrichedRoster]:
        """Enriched roster snapshot, recomputed only after ``refresh()``.

        Raises:
            DataSourceError: If any dataset fails to load.
        """
        if self._enriched is None:
            rosters = self.roster_repo.load()
            self._enriched = self.matching_service.enrich_rosters(rosters)
        return self._enriched

    def refresh(self) -> None:
        """Drop every cached dataset; the next access reloads from the sources."""
        self.roster_repo.clear_cache()
        self.side_tables.clear_cache()
        self._enriched = None
        logger.debug("Cleared roster and side-table caches")

    def close(self) -> None:
        """Close the shared HTTP client if one was created."""
        client = self.__dict__.pop("http_client", None)
        if client is not None:
            logger.debug("Closing HTTP client")
            client.close()


_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the global service container, creating one if needed."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer | None) -> None:
    """Set or reset the global service container.

    Pass None to reset, which will cause get_container() to create
    a fresh container on next access.
    """
    global _container
    _container = container
