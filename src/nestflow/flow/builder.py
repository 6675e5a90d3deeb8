"""Flow graph builder.

Every node and manager is first registered by name; children and routing
targets are only resolved when the tree is built, so definitions can appear in
any order. Each ``build()`` call produces a fresh tree, which gives every
conversation its own nodes, cursors and state.
"""

import logging
from dataclasses import dataclass, field

from nestflow.core.decision import ManagerDecisionFn, NodeDecisionFn
from nestflow.core.errors import ConfigurationError
from nestflow.core.interfaces import Executable, FrontEnd
from nestflow.flow.emitters import Expectation, Output
from nestflow.flow.manager import FlowManager
from nestflow.flow.node import Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeDefinition:
    """Blueprint of a leaf node."""

    name: str
    decide: NodeDecisionFn
    output: Output | None = None
    expectation: Expectation | None = None


@dataclass(frozen=True)
class ManagerDefinition:
    """Blueprint of a manager; children are referenced by name."""

    name: str
    nodes: tuple[str, ...]
    root: str
    decide: ManagerDecisionFn | None = None
    description: str = field(default="", compare=False)


class FlowBuilder:
    """Registry of node and manager definitions keyed by name.

    Usage:
        builder = FlowBuilder()
        builder.node("ask", decide=lambda value, state: goto("thanks", name=value),
                     output=Output(TextOutput(text="Name?")),
                     expectation=Expectation(FreeTextExpectation()))
        builder.node("thanks", decide=lambda value, state: finish(),
                     output=Output(TextOutput(text="Hello! ${name}"), render_template))
        builder.manager("main", nodes=["ask", "thanks"], root="ask")
        root = builder.build("main", front_end=my_front_end)
    """

    def __init__(self) -> None:
        self._definitions: dict[str, NodeDefinition | ManagerDefinition] = {}

    @property
    def names(self) -> list[str]:
        return list(self._definitions)

    def __contains__(self, name: str) -> bool:
        return name in self._definitions

    def _register(self, definition: NodeDefinition | ManagerDefinition) -> None:
        if definition.name in self._definitions:
            raise ConfigurationError(f"Duplicate flow element name: '{definition.name}'")
        self._definitions[definition.name] = definition

    def node(
        self,
        name: str,
        decide: NodeDecisionFn,
        output: Output | None = None,
        expectation: Expectation | None = None,
    ) -> "FlowBuilder":
        """Register a leaf node."""
        self._register(NodeDefinition(name, decide, output, expectation))
        return self

    def manager(
        self,
        name: str,
        nodes: list[str],
        root: str,
        decide: ManagerDecisionFn | None = None,
        description: str = "",
    ) -> "FlowBuilder":
        """Register a manager over already or later registered children."""
        self._register(ManagerDefinition(name, tuple(nodes), root, decide, description))
        return self

    def get(self, name: str) -> NodeDefinition | ManagerDefinition:
        try:
            return self._definitions[name]
        except KeyError:
            raise ConfigurationError(f"Unknown flow element: '{name}'") from None

    def managers(self) -> list[ManagerDefinition]:
        """Manager definitions in registration order."""
        return [d for d in self._definitions.values() if isinstance(d, ManagerDefinition)]

    def validate(self, root: str) -> None:
        """Check the tree reachable from ``root``.

        Raises:
            ConfigurationError: On unknown names, a manager root outside its
                children, a leaf used as the outermost element or a manager
                that contains itself.
        """
        if not isinstance(self.get(root), ManagerDefinition):
            raise ConfigurationError(f"Outermost element '{root}' must be a manager")
        self._validate(root, ())

    def _validate(self, name: str, ancestors: tuple[str, ...]) -> None:
        if name in ancestors:
            cycle = " -> ".join((*ancestors, name))
            raise ConfigurationError(f"Manager cycle detected: {cycle}")

        definition = self.get(name)
        if not isinstance(definition, ManagerDefinition):
            return
        if not definition.nodes:
            raise ConfigurationError(f"Manager '{name}' has no nodes")
        if definition.root not in definition.nodes:
            raise ConfigurationError(
                f"Root node '{definition.root}' of manager '{name}' is not one of its nodes"
            )
        for child in definition.nodes:
            self._validate(child, (*ancestors, name))

    def build(self, root: str, front_end: FrontEnd | None = None) -> FlowManager:
        """Validate and instantiate a fresh tree rooted at ``root``."""
        self.validate(root)
        manager = self._instantiate(root)
        assert isinstance(manager, FlowManager)
        manager.front_end = front_end
        logger.debug(f"Built flow tree rooted at '{root}'")
        return manager

    def _instantiate(self, name: str) -> Executable:
        definition = self.get(name)
        if isinstance(definition, NodeDefinition):
            return Node(
                name=definition.name,
                decide=definition.decide,
                output=definition.output.clone() if definition.output else None,
                expectation=definition.expectation.clone() if definition.expectation else None,
            )
        return FlowManager(
            name=definition.name,
            nodes={child: self._instantiate(child) for child in definition.nodes},
            root=definition.root,
            decide=definition.decide,
        )
