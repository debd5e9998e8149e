from typing import List, Optional, Sequence


class DIException(Exception):
    """Base exception for bootstrap errors."""


class ConfigurationError(DIException, ValueError):
    """Raised for malformed component configuration or settings.

    This occurs when:
    - A magic comment is not a list of ``key: value`` pairs.
    - A reference token carries a prefix but no target.
    - A constructor requires keyword-only parameters.
    """


class DuplicateIdError(DIException):
    """Raised when two components declare the same identifier.

    Attributes:
        component_id: The identifier declared twice.
        existing: Name of the component registered first.
        duplicate: Name of the component that tried to reuse the identifier.
    """

    def __init__(self, component_id: str, existing: str, duplicate: str) -> None:
        self.component_id = component_id
        self.existing = existing
        self.duplicate = duplicate
        super().__init__(
            f"A component with id '{component_id}' has already been declared by {existing}, "
            f"cannot declare it again on {duplicate}"
        )


class AmbiguityError(DIException):
    """Raised when a type reference matches more than one component.

    Attributes:
        declared_type: The type tag that was referenced.
        candidates: Names of every component of that type.
        requested_by: Name of the component holding the reference, if known.
    """

    def __init__(
        self, declared_type: str, candidates: Sequence[str], requested_by: Optional[str] = None
    ) -> None:
        self.declared_type = declared_type
        self.candidates = list(candidates)
        self.requested_by = requested_by
        message = (
            f"Dependency on type '{declared_type}' is ambiguous, "
            f"candidates: {', '.join(self.candidates)}"
        )
        if requested_by:
            message += f". Requested by: {requested_by}"
        super().__init__(message)


class ComponentLookupError(DIException, LookupError):
    """Raised when a reference matches no component.

    Attributes:
        reference: The identifier, type or name that was looked up.
        requested_by: Name of the component holding the reference, if known.
    """

    def __init__(self, reference: str, reason: Optional[str] = None, requested_by: Optional[str] = None) -> None:
        self.reference = reference
        self.reason = reason
        self.requested_by = requested_by
        message = f"No component found for: {reference}"
        if reason:
            message += f". Reason: {reason}"
        if requested_by:
            message += f". Requested by: {requested_by}"
        super().__init__(message)


class CycleError(DIException):
    """Raised when the dependency graph contains a cycle.

    Attributes:
        cycle: Component names along the cycle, first name repeated at the end.
    """

    def __init__(self, cycle: List[str]) -> None:
        self.cycle = cycle
        super().__init__(f"Circular dependency detected: {' -> '.join(cycle)}")


class ConstructionError(DIException):
    """Raised when a component's factory fails.

    Attributes:
        name: The component that could not be constructed.
        reason: Optional reason for the failure.
    """

    def __init__(self, name: str, reason: Optional[str] = None) -> None:
        self.name = name
        self.reason = reason
        message = f"Cannot construct component: {name}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)
