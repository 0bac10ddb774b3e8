from rdf_preview import config
from rdf_preview.config import AppSettings, PreviewSettings, get_settings


def test_preview_defaults(monkeypatch):
    for name in ("PREVIEW_SHORTEN_URIS", "PREVIEW_TYPES_TO_LABELS", "PREVIEW_LANGUAGE_FILTER", "PREVIEW_RDF_FORMAT"):
        monkeypatch.delenv(name, raising=False)

    settings = PreviewSettings()

    assert settings.shorten_uris is True
    assert settings.types_to_labels is True
    assert settings.language_filter is None
    assert settings.rdf_format is None


def test_preview_from_environment(monkeypatch):
    """PREVIEW_* variables configure the run"""
    monkeypatch.setenv("PREVIEW_TYPES_TO_LABELS", "false")
    monkeypatch.setenv("PREVIEW_LANGUAGE_FILTER", "@")

    settings = PreviewSettings()

    assert settings.types_to_labels is False
    assert settings.language_filter == "@"


def test_blank_language_filter_is_unset():
    """An empty filter means no filter"""
    assert PreviewSettings(language_filter="  ").language_filter is None


def test_app_settings_nest_components(monkeypatch):
    monkeypatch.setenv("NEO4J_DATABASE", "imports")

    settings = AppSettings()

    assert settings.neo4j.database == "imports"
    assert isinstance(settings.preview, PreviewSettings)


def test_get_settings_is_singleton(monkeypatch):
    monkeypatch.setattr(config, "_settings", None)

    assert get_settings() is get_settings()
