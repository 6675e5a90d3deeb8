"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from nestflow.config.models import FlowConfig, NestflowConfig, NodeConfig, SettingsConfig
from nestflow.core.payloads import ChoiceExpectation, TextOutput


class TestNodeConfig:
    def test_payloads_are_parsed_by_kind(self):
        node = NodeConfig.model_validate(
            {
                "output": {"kind": "text", "text": "Pick one"},
                "expectation": {"kind": "choice", "options": ["a", "b"]},
                "store": "pick",
                "next": "after",
            }
        )

        assert node.output == TextOutput(text="Pick one")
        assert node.expectation == ChoiceExpectation(options=["a", "b"])
        assert node.targets() == ["after"]

    def test_next_and_branch_are_exclusive(self):
        with pytest.raises(ValidationError, match="mutually exclusive"):
            NodeConfig.model_validate(
                {"next": "a", "branch": {"key": "k", "cases": {"x": "b"}}}
            )

    def test_decide_excludes_declarative_routing(self):
        with pytest.raises(ValidationError, match="cannot be combined"):
            NodeConfig.model_validate({"decide": "custom", "store": "name"})

    def test_branch_targets_include_default(self):
        node = NodeConfig.model_validate(
            {"branch": {"key": "lang", "cases": {"Java": "java"}, "default": "js"}}
        )

        assert node.targets() == ["java", "js"]

    def test_bare_node_has_no_targets(self):
        assert NodeConfig().targets() == []


class TestFlowConfig:
    def test_root_defaults_to_first_node(self):
        flow = FlowConfig(nodes=["a", "b"])

        assert flow.root == "a"

    def test_root_must_be_a_node(self):
        with pytest.raises(ValidationError, match="not one of the flow nodes"):
            FlowConfig(nodes=["a"], root="z")

    def test_nodes_required(self):
        with pytest.raises(ValidationError):
            FlowConfig(nodes=[])

    def test_next_and_decide_are_exclusive(self):
        with pytest.raises(ValidationError, match="mutually exclusive"):
            FlowConfig(nodes=["a"], next="b", decide="custom")


class TestNestflowConfig:
    def test_defaults(self):
        config = NestflowConfig()

        assert config.version == "1.0"
        assert config.root == "main"
        assert config.settings == SettingsConfig()
        assert config.settings.log_level == "WARNING"

    def test_unsupported_version_raises(self):
        with pytest.raises(ValueError, match="Unsupported DSL version"):
            NestflowConfig(version="2.0")

    def test_invalid_log_level_raises(self):
        with pytest.raises(ValidationError):
            SettingsConfig(log_level="LOUD")
