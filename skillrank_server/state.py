"""Application state: stores, lifecycle components, and related-items cache."""

import logging
from typing import Any, Optional

from skillrank import (
    AccessRecorder,
    BackgroundRunner,
    CatalogGateway,
    EngineConfig,
    ResurrectionChecker,
    ScratchStore,
)

from .config import ServerConfig, get_config
from .services import (
    HttpResurrectionClient,
    InMemoryCatalogStore,
    InMemoryScratchStore,
    JsonCatalogStore,
    RelatedItemsCache,
)

logger = logging.getLogger(__name__)


class AppState:
    """Global application state."""

    def __init__(
        self,
        config: ServerConfig,
        catalog: Optional[CatalogGateway] = None,
        scratch: Optional[ScratchStore] = None,
        resurrection_client: Optional[Any] = None,
        engine_config: Optional[EngineConfig] = None,
    ):
        self.config = config
        self.engine_config = engine_config or config.load_engine_config()

        # Stores: explicit instances win, else built from DATA_SOURCE
        self.catalog = catalog if catalog is not None else self._create_catalog(config)
        self.scratch = scratch if scratch is not None else self._create_scratch(config)
        logger.info(
            "[startup] Catalog: %s, scratch: %s",
            type(self.catalog).__name__, type(self.scratch).__name__,
        )

        # Lifecycle
        self.runner = BackgroundRunner()
        if resurrection_client is None:
            resurrection_client = self._create_resurrection_client(config)
        self.resurrection = ResurrectionChecker(
            self.scratch, client=resurrection_client, config=self.engine_config
        )
        self.access_recorder = AccessRecorder(
            self.catalog,
            self.scratch,
            self.resurrection,
            runner=self.runner,
            config=self.engine_config,
        )

        # Related items
        self.related_cache = RelatedItemsCache(self.scratch, config.related_cache_ttl_seconds)

    def _create_catalog(self, config: ServerConfig) -> CatalogGateway:
        """JSON fixture when DATA_SOURCE=json, else an empty in-memory catalog."""
        if config.data_source == "json" and config.items_json_path:
            return JsonCatalogStore(config.items_json_path)
        return InMemoryCatalogStore()

    def _create_scratch(self, config: ServerConfig) -> ScratchStore:
        """Firestore when DATA_SOURCE=firebase and credentials exist, else in-memory."""
        if config.data_source == "firebase" and config.firebase_credentials_path:
            cred_path = config.firebase_credentials_path
            if not cred_path.is_file():
                logger.warning(
                    "[startup] Firestore scratch store skipped: credentials file not found: %s",
                    cred_path,
                )
            else:
                from .services.firestore_scratch_store import FirestoreScratchStore

                try:
                    return FirestoreScratchStore(
                        project_id=config.firebase_project_id,
                        credentials_path=cred_path,
                    )
                except Exception as e:
                    logger.warning("[startup] Firestore scratch store init failed: %s, using in-memory", e)
        return InMemoryScratchStore()

    def _create_resurrection_client(self, config: ServerConfig) -> Optional[HttpResurrectionClient]:
        if not config.resurrection_configured:
            logger.info("[startup] Resurrection service not configured; archived views leave markers")
            return None
        return HttpResurrectionClient(
            config.resurrection_url,
            config.worker_secret,
            timeout=config.resurrection_timeout_seconds,
        )


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState(get_config())
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Install (or clear, with None) the global state, e.g. for tests."""
    global _state
    _state = state
