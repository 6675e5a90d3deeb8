"""Flow interpreter: emitters, nodes, managers and the builder."""

from nestflow.flow.builder import FlowBuilder, ManagerDefinition, NodeDefinition
from nestflow.flow.emitters import Expectation, Output, identity, only_when, render_template
from nestflow.flow.manager import FlowManager, finish_traversal
from nestflow.flow.node import Node

__all__ = [
    "FlowBuilder",
    "NodeDefinition",
    "ManagerDefinition",
    "Output",
    "Expectation",
    "identity",
    "only_when",
    "render_template",
    "FlowManager",
    "finish_traversal",
    "Node",
]
