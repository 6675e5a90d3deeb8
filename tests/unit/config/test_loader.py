"""Tests for the YAML config loader."""

import pytest
import yaml

from nestflow.config.loader import ConfigLoader

FLOW_YAML = """
version: "1.0"
root: main
nodes:
  hello:
    output: {kind: text, text: "Hello"}
flows:
  main:
    nodes: [hello]
"""


class TestConfigLoader:
    def test_load_single_file(self, tmp_path):
        path = tmp_path / "flow.yaml"
        path.write_text(FLOW_YAML)

        config = ConfigLoader.load(path)

        assert config.root == "main"
        assert list(config.nodes) == ["hello"]
        assert config.flows["main"].nodes == ["hello"]

    def test_directory_prefers_master_file(self, tmp_path):
        (tmp_path / "nestflow.yaml").write_text(FLOW_YAML)
        (tmp_path / "other.yaml").write_text("root: ignored\n")

        config = ConfigLoader.load(tmp_path)

        assert config.root == "main"

    def test_directory_merges_all_yaml_files(self, tmp_path):
        (tmp_path / "a_nodes.yaml").write_text(
            "nodes:\n  hello:\n    output: {kind: text, text: Hi}\n"
        )
        (tmp_path / "b_flows.yaml").write_text(
            "root: greeting\nsettings:\n  show_state: true\nflows:\n  greeting:\n    nodes: [hello]\n"
        )

        config = ConfigLoader.load(tmp_path)

        assert config.root == "greeting"
        assert set(config.nodes) == {"hello"}
        assert set(config.flows) == {"greeting"}
        assert config.settings.show_state is True

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        config = ConfigLoader.load(path)

        assert config.flows == {}

    def test_load_nonexistent_file_fails(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            ConfigLoader.load(tmp_path / "missing.yaml")

    def test_load_empty_directory_fails(self, tmp_path):
        domain_dir = tmp_path / "empty"
        domain_dir.mkdir()

        with pytest.raises(FileNotFoundError, match="No config files found"):
            ConfigLoader.load(domain_dir)

    def test_load_invalid_yaml_fails(self, tmp_path):
        path = tmp_path / "nestflow.yaml"
        path.write_text("invalid: yaml: architecture: [")

        with pytest.raises(yaml.YAMLError):
            ConfigLoader.load(tmp_path)
