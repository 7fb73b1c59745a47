from pivotal_tracker.core.config import API_URL, Settings


def test_settings_load_from_env(monkeypatch):
    """Test that settings load correctly from environment variables."""
    monkeypatch.setenv("PIVOTAL_TRACKER_API_TOKEN", "tok-123")
    monkeypatch.setenv("PIVOTAL_TRACKER_PROJECT_ID", "99")
    monkeypatch.setenv("PIVOTAL_TRACKER_TIMEOUT", "5")

    # We pass _env_file=None to ignore the .env file and rely on monkeypatch
    settings = Settings(_env_file=None)

    assert settings.PIVOTAL_TRACKER_API_TOKEN == "tok-123"
    assert settings.PIVOTAL_TRACKER_PROJECT_ID == "99"
    assert settings.PIVOTAL_TRACKER_TIMEOUT == 5.0


def test_settings_defaults(monkeypatch):
    """Nothing is required, so an empty environment still loads."""
    monkeypatch.delenv("PIVOTAL_TRACKER_API_TOKEN", raising=False)
    monkeypatch.delenv("PIVOTAL_TRACKER_PROJECT_ID", raising=False)
    monkeypatch.delenv("PIVOTAL_TRACKER_BASE_URL", raising=False)
    monkeypatch.delenv("PIVOTAL_TRACKER_TIMEOUT", raising=False)

    settings = Settings(_env_file=None)

    assert settings.PIVOTAL_TRACKER_API_TOKEN is None
    assert settings.PIVOTAL_TRACKER_PROJECT_ID is None
    assert settings.PIVOTAL_TRACKER_BASE_URL == API_URL
    assert settings.PIVOTAL_TRACKER_TIMEOUT == 30.0
