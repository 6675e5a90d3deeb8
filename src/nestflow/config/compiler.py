"""Compile a NestflowConfig into a FlowBuilder."""

import logging
from collections.abc import Mapping
from typing import Any

from nestflow.config.models import FlowConfig, NestflowConfig, NodeConfig
from nestflow.config.registry import HandlerRegistry
from nestflow.core.decision import Decision, ManagerDecisionFn, NodeDecisionFn, goto
from nestflow.core.errors import ConfigurationError
from nestflow.flow.builder import FlowBuilder
from nestflow.flow.emitters import Expectation, Output, identity, render_template

logger = logging.getLogger(__name__)


def _node_decision(name: str, node: NodeConfig, registry: HandlerRegistry) -> NodeDecisionFn:
    if node.decide is not None:
        return registry.get_decision(node.decide)

    def decide(value: Any, state: Mapping[str, Any]) -> Decision:
        patch = dict(node.patch)
        if node.store is not None:
            patch[node.store] = value

        next_node = node.next
        if node.branch is not None:
            current = {**state, **patch}.get(node.branch.key)
            next_node = node.branch.cases.get(str(current), node.branch.default)
            logger.debug(f"Node '{name}' branch on {node.branch.key}={current!r} -> {next_node}")

        return Decision(next_node=next_node, state_patch=patch or None)

    return decide


def _flow_decision(flow: FlowConfig, registry: HandlerRegistry) -> ManagerDecisionFn | None:
    if flow.decide is not None:
        return registry.get_decision(flow.decide)
    if flow.next is not None:
        target = flow.next
        return lambda state: goto(target)
    return None


def validate_config(config: NestflowConfig) -> list[str]:
    """Return every static problem found in the config (empty when valid).

    Only declarative routing can be checked; registered decision functions
    are opaque until they run.
    """
    errors: list[str] = []

    for name in sorted(set(config.nodes) & set(config.flows)):
        errors.append(f"'{name}' is defined both as a node and as a flow")

    if config.root not in config.flows:
        errors.append(f"Root flow '{config.root}' is not defined under 'flows'")

    known = set(config.nodes) | set(config.flows)
    parents: dict[str, list[str]] = {}
    for flow_name, flow in config.flows.items():
        for child in flow.nodes:
            if child not in known:
                errors.append(f"Flow '{flow_name}' references unknown node '{child}'")
            parents.setdefault(child, []).append(flow_name)

        for child in flow.nodes:
            node = config.nodes.get(child)
            if node is None:
                continue
            for target in node.targets():
                if target not in flow.nodes:
                    errors.append(
                        f"Node '{child}' routes to '{target}', which is not in flow '{flow_name}'"
                    )

    for flow_name, flow in config.flows.items():
        if flow.next is None:
            continue
        owners = parents.get(flow_name, [])
        if not owners:
            errors.append(f"Flow '{flow_name}' routes to '{flow.next}' but has no parent flow")
        for owner in owners:
            if flow.next not in config.flows[owner].nodes:
                errors.append(
                    f"Flow '{flow_name}' routes to '{flow.next}', "
                    f"which is not a sibling in flow '{owner}'"
                )

    return errors


def compile_config(
    config: NestflowConfig,
    registry: HandlerRegistry | None = None,
) -> FlowBuilder:
    """Register every configured node and flow on a new FlowBuilder.

    Raises:
        ConfigurationError: If static validation fails or a referenced
            decision function or transform is not registered.
    """
    errors = validate_config(config)
    if errors:
        raise ConfigurationError("Invalid flow configuration:\n  - " + "\n  - ".join(errors))

    registry = registry or HandlerRegistry.get_default()
    builder = FlowBuilder()

    for name, node in config.nodes.items():
        output = None
        if node.output is not None or node.output_transform is not None:
            transform = (
                registry.get_transform(node.output_transform)
                if node.output_transform
                else render_template
            )
            output = Output(node.output, transform)

        expectation = None
        if node.expectation is not None or node.expectation_transform is not None:
            transform = (
                registry.get_transform(node.expectation_transform)
                if node.expectation_transform
                else identity
            )
            expectation = Expectation(node.expectation, transform)

        builder.node(
            name,
            decide=_node_decision(name, node, registry),
            output=output,
            expectation=expectation,
        )

    for name, flow in config.flows.items():
        assert flow.root is not None
        builder.manager(
            name,
            nodes=flow.nodes,
            root=flow.root,
            decide=_flow_decision(flow, registry),
            description=flow.description,
        )

    builder.validate(config.root)
    logger.debug(f"Compiled {len(config.nodes)} nodes and {len(config.flows)} flows")
    return builder
