"""Tests for infobox settings defaults, derived values and persistence."""

import json

from frontmatter_infobox.settings import InfoboxSettings, load_settings, save_settings


class TestExcludedProperties:
    def test_includes_image_properties(self) -> None:
        assert InfoboxSettings().excluded_properties() == ["image", "images"]

    def test_comma_list_is_trimmed(self) -> None:
        settings = InfoboxSettings(exclude_properties=" aliases, cssclass ,,", images_property="")
        assert settings.excluded_properties() == ["aliases", "cssclass", "image"]


class TestImageHeight:
    def test_default(self) -> None:
        assert InfoboxSettings().image_max_height_css() == "500px"

    def test_zero_means_no_maximum(self) -> None:
        assert InfoboxSettings(max_image_height=0).image_max_height_css() == "none"

    def test_missing_falls_back_to_default(self) -> None:
        assert InfoboxSettings(max_image_height=None).image_max_height_css() == "500px"

    def test_custom(self) -> None:
        assert InfoboxSettings(max_image_height=320).image_max_height_css() == "320px"


class TestPersistence:
    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        assert load_settings(str(tmp_path / "absent.json")) == InfoboxSettings()

    def test_round_trip(self, tmp_path) -> None:
        path = str(tmp_path / "settings.json")
        settings = InfoboxSettings(sort_properties=True, nested_separator=" > ")
        save_settings(settings, path)
        assert load_settings(path) == settings

    def test_stored_values_merge_over_defaults(self, tmp_path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"image_property": "cover", "unknown": 1}), encoding="utf-8")
        settings = load_settings(str(path))
        assert settings.image_property == "cover"
        assert settings.images_property == "images"

    def test_corrupt_file_gives_defaults(self, tmp_path) -> None:
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_settings(str(path)) == InfoboxSettings()

    def test_env_var_selects_file(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "env.json"
        path.write_text(json.dumps({"sort_properties": True}), encoding="utf-8")
        monkeypatch.setenv("INFOBOX_SETTINGS", str(path))
        assert load_settings().sort_properties is True
