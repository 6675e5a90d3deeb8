"""Configuration models for declarative flows."""

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from nestflow.core.payloads import ExpectationPayload, OutputPayload

# DSL Version constants
SUPPORTED_VERSIONS = frozenset({"1.0"})
CURRENT_VERSION = "1.0"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class BranchConfig(BaseModel):
    """Route on the value of a state key."""

    key: str = Field(description="State key to read (after this node's patch)")
    cases: dict[str, str] = Field(description="Value -> next node name")
    default: str | None = Field(default=None, description="Next node when no case matches")


class NodeConfig(BaseModel):
    """Configuration for a leaf node.

    Routing is either declarative (``store``/``patch`` plus ``next`` or
    ``branch``) or delegated to a registered decision function (``decide``).
    Without any of them the node finishes its manager's traversal.
    """

    output: OutputPayload | None = Field(default=None, description="Content to show")
    output_transform: str | None = Field(
        default=None, description="Registered transform (defaults to template rendering)"
    )
    expectation: ExpectationPayload | None = Field(default=None, description="Input to ask for")
    expectation_transform: str | None = Field(default=None, description="Registered transform")
    store: str | None = Field(default=None, description="State key receiving the raw input")
    patch: dict[str, Any] = Field(default_factory=dict, description="Static values to merge")
    next: str | None = Field(default=None, description="Next node in the same flow")
    branch: BranchConfig | None = Field(default=None, description="Conditional next node")
    decide: str | None = Field(default=None, description="Registered decision function")

    @model_validator(mode="after")
    def _check_routing(self) -> "NodeConfig":
        if self.next is not None and self.branch is not None:
            raise ValueError("'next' and 'branch' are mutually exclusive")
        declarative = self.store or self.patch or self.next or self.branch
        if self.decide is not None and declarative:
            raise ValueError("'decide' cannot be combined with store/patch/next/branch")
        return self

    def targets(self) -> list[str]:
        """Node names this node may route to, as far as the config tells."""
        if self.next is not None:
            return [self.next]
        if self.branch is not None:
            names = list(self.branch.cases.values())
            if self.branch.default is not None:
                names.append(self.branch.default)
            return names
        return []


class FlowConfig(BaseModel):
    """Configuration for a flow (manager)."""

    description: str = ""
    nodes: list[str] = Field(min_length=1, description="Child node or flow names")
    root: str | None = Field(default=None, description="First child (defaults to the first one)")
    next: str | None = Field(default=None, description="Sibling flow to route to when done")
    decide: str | None = Field(default=None, description="Registered decision function")

    @model_validator(mode="after")
    def _check(self) -> "FlowConfig":
        if self.next is not None and self.decide is not None:
            raise ValueError("'next' and 'decide' are mutually exclusive")
        if self.root is None:
            self.root = self.nodes[0]
        if self.root not in self.nodes:
            raise ValueError(f"root '{self.root}' is not one of the flow nodes")
        return self


class SettingsConfig(BaseModel):
    """Runtime settings."""

    log_level: LogLevel = Field(default="WARNING", description="Log level for the CLI")
    log_file: str | None = Field(default=None, description="Rotating JSON log file")
    show_state: bool = Field(default=False, description="Print the shared state after each turn")


class NestflowConfig(BaseModel):
    """Root configuration with DSL versioning."""

    version: str = Field(default=CURRENT_VERSION, description="DSL version")
    root: str = Field(default="main", description="Outermost flow")
    settings: SettingsConfig = Field(default_factory=SettingsConfig)
    nodes: dict[str, NodeConfig] = Field(default_factory=dict)
    flows: dict[str, FlowConfig] = Field(default_factory=dict)

    def model_post_init(self, __context: object) -> None:
        """Validate DSL version after initialization."""
        if self.version not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported DSL version: {self.version}. "
                f"Supported: {', '.join(sorted(SUPPORTED_VERSIONS))}"
            )
