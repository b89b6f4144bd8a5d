"""Tests for the persisted settings store."""

import yaml

from bhasha_mitra.settings import Settings, SettingsStore


class TestSettingsStore:
    def test_missing_file_gives_defaults(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.yaml")
        assert store.current == Settings()
        assert store.current.doc_type == "generic"

    def test_update_is_not_persisted_until_save(self, tmp_path):
        path = tmp_path / "settings.yaml"
        store = SettingsStore(path)

        store.update(api_key="abc")

        assert store.current.api_key == "abc"
        assert not path.exists()

    def test_save_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "settings.yaml"
        store = SettingsStore(path)
        store.update(api_key="abc", doc_type="academic")
        store.save()

        assert yaml.safe_load(path.read_text(encoding="utf-8"))["doc_type"] == "academic"
        reloaded = SettingsStore(path)
        assert reloaded.current == Settings(api_key="abc", doc_type="academic")

    def test_observers_notified_on_save(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.yaml")
        seen = []
        store.on_save(seen.append)

        store.update(model="gemini-2.5-pro")
        assert seen == []
        store.save()

        assert [s.model for s in seen] == ["gemini-2.5-pro"]

    def test_unknown_and_null_keys_ignored(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("api_key: xyz\nmodel: null\ntheme: dark\n", encoding="utf-8")
        store = SettingsStore(path)
        assert store.current.api_key == "xyz"
        assert store.current.model == Settings().model
