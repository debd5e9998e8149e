import os
import re
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from it_depends.domain.enums import ReferenceKind
from it_depends.domain.exceptions import ConfigurationError

if TYPE_CHECKING:
    from it_depends.domain.interfaces import IRegistry

_PAIR = re.compile(r"\s*(?P<key>[A-Za-z_]\w*)\s*:\s*(?P<value>'[^']*'|\"[^\"]*\"|[\w.\-]*)\s*")
_NULL_VALUES = ("", "nil", "None")

PROFILE_VARIABLE = "PROFILE"
_SETTINGS_VARIABLES = {
    "IT_DEPENDS_ID_PREFIX": "id_prefix",
    "IT_DEPENDS_COLLECTION_PREFIX": "collection_prefix",
}


class ComponentConfig(BaseModel):
    """Configuration record attached to a component declaration.

    Attributes:
        type: Type tag used by type and collection references.
        id: Optional identifier, unique across the application.
        profile: Execution profile the component is registered under.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str = Field(..., min_length=1, description="The declared type tag of the component.")
    id: Optional[str] = Field(default=None, description="Optional unique identifier of the component.")
    profile: Optional[str] = Field(default=None, description="Execution profile the component belongs to.")

    @classmethod
    def parse(cls, text: str) -> "ComponentConfig":
        """Parse a configuration record from ``key: value`` pairs.

        The text may be wrapped in parentheses. Values may be bare words or
        quoted strings; ``nil``, ``None`` and empty values mean absent.

        Args:
            text: The configuration text, e.g. ``(type: 'worker', id: 'w1')``.

        Returns:
            The parsed configuration.

        Raises:
            ConfigurationError: If the text is malformed, repeats or misses keys.

        Example:
            >>> ComponentConfig.parse("type: manager, id: mgr, profile: production")
            ComponentConfig(type='manager', id='mgr', profile='production')
        """
        body = text.strip()
        if body.startswith("("):
            if not body.endswith(")"):
                raise ConfigurationError(f"Unbalanced parentheses in component configuration: {text!r}")
            body = body[1:-1]

        values: Dict[str, Optional[str]] = {}
        position = 0
        while True:
            match = _PAIR.match(body, position)
            if match is None:
                raise ConfigurationError(f"Malformed component configuration: {text!r}")
            key = match.group("key")
            if key in values:
                raise ConfigurationError(f"Key '{key}' repeated in component configuration: {text!r}")
            raw_value = match.group("value")
            if raw_value[:1] in ("'", '"'):
                raw_value = raw_value[1:-1]
            values[key] = None if raw_value in _NULL_VALUES else raw_value

            position = match.end()
            if position == len(body):
                break
            if body[position] != ",":
                raise ConfigurationError(f"Malformed component configuration: {text!r}")
            position += 1

        if values.get("type") is None:
            raise ConfigurationError(f"Component configuration must declare a type: {text!r}")
        try:
            return cls(**values)
        except ValueError as e:
            raise ConfigurationError(f"Invalid component configuration {text!r}: {e}") from e


class ComponentDeclaration(BaseModel):
    """Value object describing one discovered component.

    Attributes:
        name: Unique fully-qualified name of the component.
        declared_type: Type tag of the component.
        declared_id: Optional unique identifier.
        raw_dependencies: Dependency tokens, in constructor parameter order.
        profile: Execution profile the component belongs to.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Fully-qualified name of the component.")
    declared_type: str = Field(..., min_length=1, description="The declared type tag.")
    declared_id: Optional[str] = Field(default=None, description="Optional unique identifier.")
    raw_dependencies: Tuple[str, ...] = Field(
        default=(),
        description="Dependency tokens in constructor parameter order.",
    )
    profile: Optional[str] = Field(default=None, description="Execution profile of the component.")

    @field_validator("declared_id")
    @classmethod
    def _blank_id_is_absent(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @classmethod
    def from_config(
        cls, name: str, config: ComponentConfig, raw_dependencies: Tuple[str, ...] = ()
    ) -> "ComponentDeclaration":
        """Build a declaration from a parsed configuration record."""
        return cls(
            name=name,
            declared_type=config.type,
            declared_id=config.id,
            raw_dependencies=tuple(raw_dependencies),
            profile=config.profile,
        )


class DependencyReference(BaseModel):
    """A raw dependency token split into its kind and target."""

    model_config = ConfigDict(frozen=True)

    kind: ReferenceKind
    target: str = Field(..., min_length=1)
    token: str


class ResolvedDependency(BaseModel):
    """A dependency token resolved to concrete component names.

    Attributes:
        names: The concrete names, in discovery order.
        is_group: True for collection references, which expand to a sequence argument.
    """

    model_config = ConfigDict(frozen=True)

    names: Tuple[str, ...] = Field(default=())
    is_group: bool = False

    @classmethod
    def single(cls, name: str) -> "ResolvedDependency":
        return cls(names=(name,), is_group=False)

    @classmethod
    def group(cls, names: Tuple[str, ...]) -> "ResolvedDependency":
        return cls(names=tuple(names), is_group=True)


class BootstrapContext(BaseModel):
    """State of a single bootstrap run, passed through every stage.

    Attributes:
        registry: The registry holding this run's declarations.
        resolutions: Per-component resolved dependencies, unflattened.
        graph: Per-component flattened dependency names.
        order: Construction order, once computed.
        instances: Constructed instances, filled in construction order.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    registry: "IRegistry"
    resolutions: Dict[str, List[ResolvedDependency]] = Field(default_factory=dict)
    graph: Dict[str, List[str]] = Field(default_factory=dict)
    order: List[str] = Field(default_factory=list)
    instances: Dict[str, Any] = Field(default_factory=dict)

    def clear(self) -> None:
        """Drop every intermediate and constructed value of the run."""
        self.resolutions.clear()
        self.graph.clear()
        self.order.clear()
        self.instances.clear()


class BootstrapSettings(BaseModel):
    """Settings of a bootstrap run.

    Attributes:
        profile: Active execution profile; only components declared under it are registered.
        id_prefix: Prefix marking an id reference.
        collection_prefix: Prefix marking a collection reference.
        magic_comment: First-line marker of a component source file.
    """

    model_config = ConfigDict(frozen=True)

    profile: Optional[str] = Field(default=None, description="The active execution profile.")
    id_prefix: str = Field(default="the_", min_length=1, description="Prefix of id references.")
    collection_prefix: str = Field(default="every_", min_length=1, description="Prefix of collection references.")
    magic_comment: str = Field(default="# depend_on_me", min_length=1, description="Marker of component sources.")

    @model_validator(mode="after")
    def _prefixes_differ(self) -> "BootstrapSettings":
        if self.id_prefix == self.collection_prefix:
            raise ValueError("id_prefix and collection_prefix must differ")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BootstrapSettings":
        """Build settings from environment variables.

        Reads ``PROFILE``, ``IT_DEPENDS_ID_PREFIX`` and ``IT_DEPENDS_COLLECTION_PREFIX``.

        Args:
            environ: Variables to read; defaults to ``os.environ``.

        Raises:
            ConfigurationError: If the variables describe invalid settings.
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {"profile": environ.get(PROFILE_VARIABLE) or None}
        for variable, field_name in _SETTINGS_VARIABLES.items():
            if variable in environ:
                values[field_name] = environ[variable]
        try:
            return cls(**values)
        except ValueError as e:
            raise ConfigurationError(f"Invalid bootstrap settings: {e}") from e
