"""
Tests for the settings manager
"""
import pytest
from movieapp.services.settings import SettingsManager


@pytest.fixture
def manager(store, test_settings):
    return SettingsManager(store, test_settings)


@pytest.mark.asyncio
async def test_load_without_persisted_settings_uses_defaults(manager):
    config = await manager.load()

    assert config.locale == "en-US"
    assert config.region == "US"
    assert config.credential is None
    assert manager.is_configured is False


@pytest.mark.asyncio
async def test_update_persists_encrypted_credential(manager, store):
    await manager.load()

    await manager.update(credential="secret-token", locale="de-DE")

    stored = await store.get(manager.storage_key)
    assert stored["locale"] == "de-DE"
    assert stored["credential"]
    assert stored["credential"] != "secret-token"
    assert manager.current.credential == "secret-token"


@pytest.mark.asyncio
async def test_settings_survive_a_restart(manager, store, test_settings):
    await manager.load()
    await manager.update(credential="secret-token", region="GB", adult_content_allowed=True)

    reloaded = SettingsManager(store, test_settings)
    config = await reloaded.load()

    assert config.credential == "secret-token"
    assert config.region == "GB"
    assert config.adult_content_allowed is True
    assert reloaded.is_configured is True


@pytest.mark.asyncio
async def test_credential_from_another_key_is_dropped(manager, store, test_settings):
    await manager.load()
    await manager.update(credential="secret-token")

    other = SettingsManager(store, test_settings.model_copy(update={"CREDENTIAL_KEY": "rotated"}))
    config = await other.load()

    assert config.credential is None
    assert other.is_configured is False


@pytest.mark.asyncio
async def test_malformed_persisted_settings_are_ignored(manager, store):
    await store.set(manager.storage_key, ["not", "a", "dict"])

    config = await manager.load()

    assert config == manager.defaults()


@pytest.mark.asyncio
async def test_listeners_see_each_new_config(manager):
    seen = []
    manager.subscribe(seen.append)

    await manager.load()
    await manager.update(locale="ja-JP")
    await manager.update(locale="ja-JP")

    assert len(seen) == 2
    assert seen[-1].locale == "ja-JP"
    assert seen[0] is not seen[1]


@pytest.mark.asyncio
async def test_masked_hides_credential(manager):
    await manager.load()
    await manager.update(credential="abcdefgh1234")

    masked = manager.masked()

    assert masked["credential"] == "****1234"
    assert masked["isConfigured"] is True
    assert masked["locale"] == "en-US"
