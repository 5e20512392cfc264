"""
Provider Selector
Chooses the remote or local provider from the current configuration
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Dict, List, Optional, Set, Tuple

from movieapp.models.config import ProviderConfig
from movieapp.services.providers.base import CatalogProvider, ProviderCapabilities
from movieapp.services.providers.local import LocalProvider
from movieapp.services.providers.tmdb import TMDBProvider

logger = logging.getLogger(__name__)


class ProviderSelector:
    """
    Resolves the active provider.

    A non-blank credential selects TMDB; otherwise the bundled dataset
    is used. Callers must go through ``current()`` or ``lease()`` for every
    load instead of keeping the returned provider around.

    A provider replaced by a configuration change is closed as soon as
    no leased call is still running on it.
    """

    def __init__(
        self,
        config: ProviderConfig,
        local_factory: Optional[Callable[[ProviderConfig], CatalogProvider]] = None,
        remote_factory: Optional[Callable[[ProviderConfig], CatalogProvider]] = None,
    ):
        self._config = config
        self._version = 0
        self._local_factory = local_factory or (
            lambda cfg: LocalProvider(image_base_url=cfg.image_base_url)
        )
        self._remote_factory = remote_factory or TMDBProvider
        self._provider: Optional[CatalogProvider] = None
        self._capabilities: Optional[ProviderCapabilities] = None
        self._built_version = -1
        self._in_flight: Dict[CatalogProvider, int] = {}
        self._retired: List[CatalogProvider] = []
        self._closing: Set[asyncio.Task] = set()

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def version(self) -> int:
        """Incremented on every configuration change"""
        return self._version

    @property
    def retired(self) -> List[CatalogProvider]:
        """Replaced providers still waiting to be closed"""
        return list(self._retired)

    def update(self, config: ProviderConfig):
        """Swap in a new configuration; affects subsequent loads only"""
        if config is self._config:
            return
        self._config = config
        self._version += 1
        logger.debug("Provider configuration changed (version %s)", self._version)

    def current(self) -> CatalogProvider:
        """Provider for the latest configuration"""
        if self._provider is None or self._built_version != self._version:
            if self._provider is not None:
                self._retire(self._provider)
            if self._config.has_credential:
                self._provider = self._remote_factory(self._config)
            else:
                self._provider = self._local_factory(self._config)
            self._capabilities = self._provider.capabilities()
            self._built_version = self._version
            logger.info(f"Using {self._provider.kind} catalog provider")
        return self._provider

    def capabilities(self) -> ProviderCapabilities:
        """Optional operations of the current provider"""
        self.current()
        return self._capabilities

    @asynccontextmanager
    async def lease(self) -> AsyncIterator[Tuple[CatalogProvider, ProviderCapabilities]]:
        """
        Borrow the current provider for one call

        The provider stays open until the lease ends even if the
        configuration changes meanwhile.

        Yields:
            Tuple of provider and its capabilities
        """
        provider = self.current()
        capabilities = self._capabilities
        self._in_flight[provider] = self._in_flight.get(provider, 0) + 1
        try:
            yield provider, capabilities
        finally:
            remaining = self._in_flight[provider] - 1
            if remaining:
                self._in_flight[provider] = remaining
            else:
                del self._in_flight[provider]
                if provider in self._retired:
                    self._retired.remove(provider)
                    await self._close_provider(provider)

    def _retire(self, provider: CatalogProvider):
        if self._in_flight.get(provider):
            # Closed by the last lease
            self._retired.append(provider)
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._retired.append(provider)
            return
        task = loop.create_task(self._close_provider(provider))
        self._closing.add(task)
        task.add_done_callback(self._closing.discard)

    @staticmethod
    async def _close_provider(provider: CatalogProvider):
        try:
            await provider.close()
        except Exception as e:
            logger.warning(f"Error closing {provider.kind} provider: {e}")

    async def close(self):
        """Close the current and every replaced provider"""
        if self._closing:
            await asyncio.gather(*list(self._closing))
        providers = self._retired + ([self._provider] if self._provider else [])
        for provider in providers:
            await self._close_provider(provider)
        self._retired = []
        self._provider = None
        self._built_version = -1
