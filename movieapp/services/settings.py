"""
Settings Manager
Loads, persists and publishes the provider configuration
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from movieapp.core.config import Settings
from movieapp.models.config import ProviderConfig
from movieapp.services.store import KeyValueStore
from movieapp.utils.crypto import decrypt_secret, encrypt_secret

logger = logging.getLogger(__name__)

ConfigListener = Callable[[ProviderConfig], None]


class SettingsManager:
    """
    Owner of the current ProviderConfig.

    The config is replaced wholesale on every update and listeners are
    told about the new object.
    """

    def __init__(self, store: KeyValueStore, app_settings: Settings):
        self.store = store
        self.app_settings = app_settings
        self.storage_key = f"{app_settings.STORAGE_PREFIX}settings"
        self._config = self.defaults()
        self._listeners: List[ConfigListener] = []

    def defaults(self) -> ProviderConfig:
        """Config derived from environment settings only"""
        return ProviderConfig(
            base_url=self.app_settings.TMDB_BASE_URL,
            image_base_url=self.app_settings.TMDB_IMAGE_BASE_URL,
            credential=self.app_settings.TMDB_API_KEY,
            locale=self.app_settings.LOCALE,
            region=self.app_settings.REGION,
            adult_content_allowed=self.app_settings.INCLUDE_ADULT,
        )

    @property
    def current(self) -> ProviderConfig:
        return self._config

    @property
    def is_configured(self) -> bool:
        return self._config.has_credential

    def subscribe(self, listener: ConfigListener):
        """Register a callback invoked with each new config"""
        self._listeners.append(listener)

    def _publish(self):
        for listener in self._listeners:
            listener(self._config)

    async def load(self) -> ProviderConfig:
        """
        Merge the persisted configuration over the defaults

        Returns:
            The loaded config (also published to listeners)
        """
        defaults = self.defaults()
        persisted = await self.store.get(self.storage_key)

        if isinstance(persisted, dict):
            credential = defaults.credential
            if persisted.get("credential"):
                credential = decrypt_secret(persisted["credential"], self.app_settings.CREDENTIAL_KEY)
                if credential is None:
                    logger.warning("Stored credential could not be decrypted; ignoring it")
            self._config = ProviderConfig.from_persisted(persisted, defaults, credential)
        else:
            if persisted is not None:
                logger.warning("Ignoring malformed persisted settings")
            self._config = defaults

        logger.info(
            "Loaded settings (configured=%s, locale=%s, region=%s)",
            self.is_configured,
            self._config.locale,
            self._config.region,
        )
        self._publish()
        return self._config

    async def update(self, **changes: Any) -> ProviderConfig:
        """
        Replace the configuration and persist it

        Args:
            **changes: ProviderConfig fields to change

        Returns:
            The new config
        """
        new_config = self._config.replace(**changes)
        if new_config == self._config:
            return self._config

        self._config = new_config
        stored_credential = None
        if new_config.has_credential:
            stored_credential = encrypt_secret(new_config.credential, self.app_settings.CREDENTIAL_KEY)

        saved = await self.store.set(self.storage_key, new_config.to_persisted(stored_credential))
        if not saved:
            logger.warning("Settings changed but could not be persisted")

        self._publish()
        return self._config

    def masked(self) -> Dict[str, Any]:
        """Current config with the credential hidden"""
        data = self._config.to_persisted(None)
        credential: Optional[str] = self._config.credential
        data["credential"] = f"****{credential[-4:]}" if self.is_configured and credential else None
        data["isConfigured"] = self.is_configured
        return data
