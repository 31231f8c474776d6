"""Tests for labels, parser config and settings lookup."""

from kanbanmd.config import DEFAULT_SETTINGS, Labels, ParserConfig, Settings, labels_for


def test_labels_default_english():
    assert labels_for(None) == Labels(archive="Archive", complete="Complete")
    assert labels_for("en") == Labels()


def test_labels_region_falls_back_to_language():
    assert labels_for("de-AT") == labels_for("de")
    assert labels_for("de").archive == "Archiv"


def test_labels_unknown_locale():
    assert labels_for("xx") == Labels()


def test_labels_case_and_underscore():
    assert labels_for("pt_BR") == labels_for("pt-br")


def test_parser_config_from_empty_settings_is_default():
    assert ParserConfig.from_settings({}) == ParserConfig()
    assert ParserConfig.from_settings(None) == ParserConfig()


def test_parser_config_from_settings():
    config = ParserConfig.from_settings({"date-trigger": "!", "time-trigger": "!!", "locale": "de"})
    assert config.date_trigger == "!"
    assert config.time_trigger == "!!"
    assert config.labels.archive == "Archiv"


def test_settings_falls_back_to_defaults():
    settings = Settings({"date-format": "DD/MM/YYYY"})
    assert settings.get("date-format") == "DD/MM/YYYY"
    assert settings.get("time-format") == DEFAULT_SETTINGS["time-format"]
    assert settings.get("missing") is None


def test_settings_metadata_keys_dedup():
    settings = Settings(
        {
            "metadata-keys": [
                {"metadataKey": "status", "label": "Status"},
                {"metadataKey": "owner", "label": "Owner"},
                {"metadataKey": "status", "label": "Again"},
            ]
        }
    )
    assert settings.metadata_keys() == ["status", "owner"]


def test_settings_is_a_copy():
    values = {"locale": "en"}
    settings = Settings(values)
    values["locale"] = "de"
    assert settings.get("locale") == "en"
