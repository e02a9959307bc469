"""Unit tests for YAML configuration loading."""

import pytest

from sound_sync.config import load, paths, section
from sound_sync.errors import ConfigError


class TestLoad:
    def test_missing_default_file_is_empty(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load() == {}

    def test_reads_default_file_from_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "sound_sync.yaml").write_text("paths:\n  source: raw\n")
        monkeypatch.chdir(tmp_path)
        assert load() == {"paths": {"source": "raw"}}

    def test_missing_explicit_file_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load(tmp_path / "nope.yaml")

    def test_empty_file_is_empty(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("")
        assert load(path) == {}

    def test_malformed_yaml_raises(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("paths: [unclosed\n")
        with pytest.raises(ConfigError):
            load(path)

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load(path)


class TestSection:
    def test_defaults(self):
        assert section({}, "paths") == {"source": "prenormalized", "output": "sounds"}

    def test_file_values_win(self):
        merged = section({"paths": {"output": "out"}}, "paths")
        assert merged == {"source": "prenormalized", "output": "out"}

    def test_non_mapping_section_raises(self):
        with pytest.raises(ConfigError):
            section({"mime": "file"}, "mime")


class TestPaths:
    def test_defaults(self):
        assert paths({}) == {"source": "prenormalized", "output": "sounds"}

    def test_null_source_rejected(self):
        with pytest.raises(ConfigError, match="paths.source"):
            paths({"paths": {"source": None}})

    def test_non_string_output_rejected(self):
        with pytest.raises(ConfigError, match="paths.output"):
            paths({"paths": {"output": ["sounds"]}})
