from tldr.core.config import Settings


def test_defaults(monkeypatch):
    for name in ("OPENAI_MODEL", "STREAM_METADATA", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.openai_model == "gpt-4-turbo-preview"
    assert settings.stream_metadata is True
    assert settings.cors_allow_origins == []


def test_cors_origins_are_split_and_stripped(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", " https://a.example , https://b.example ,, ")

    settings = Settings(_env_file=None)

    assert settings.cors_allow_origins == ["https://a.example", "https://b.example"]


def test_strings_are_stripped(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "  sk-padded  ")
    monkeypatch.setenv("OPENAI_BASE_URL", "   ")

    settings = Settings(_env_file=None)

    assert settings.openai_api_key == "sk-padded"
    assert settings.openai_base_url is None
