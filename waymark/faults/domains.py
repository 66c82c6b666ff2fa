"""
Waymark Faults - Domain-specific fault types.

Every fault here is raised synchronously at configuration time, while the
application is starting up. None of them is ever deferred to request
handling.
"""

from typing import Any, Optional

from .core import Fault, FaultDomain, Severity


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=severity,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class ConfigInvalidFault(ConfigFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str, **kwargs):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Configuration key '{key}' is invalid: {reason}",
            metadata={"key": key, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# Constraint Faults
# ============================================================================

class InvalidPatternFault(ConfigFault):
    """A matching pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str, **kwargs):
        super().__init__(
            code="INVALID_PATTERN",
            message=f"Invalid pattern '{pattern}': {reason}",
            metadata={"pattern": pattern, "reason": reason, **kwargs.get("metadata", {})},
        )


class MisconfiguredConstraintFault(ConfigFault):
    """
    A name-bound constraint type cannot produce a route constraint.

    Raised when the bound type is not a RouteConstraint, or when its
    constructor rejects the supplied parameters.
    """

    def __init__(self, name: str, constraint_type: Any, reason: str, **kwargs):
        type_name = getattr(constraint_type, "__qualname__", repr(constraint_type))
        module = getattr(constraint_type, "__module__", None)
        full_name = f"{module}.{type_name}" if module else type_name
        super().__init__(
            code="MISCONFIGURED_CONSTRAINT",
            message=f"Constraint '{name}' bound to {full_name} is misconfigured: {reason}",
            metadata={
                "name": name,
                "constraint_type": full_name,
                "reason": reason,
                **kwargs.get("metadata", {}),
            },
        )


class InvalidConstraintCompositionFault(ConfigFault):
    """A wrapper or compound constraint was given something that is not a constraint."""

    def __init__(self, wrapper: str, element: Any, **kwargs):
        super().__init__(
            code="INVALID_CONSTRAINT_COMPOSITION",
            message=(
                f"{wrapper} can only wrap route constraints, "
                f"got {type(element).__name__}: {element!r}"
            ),
            metadata={
                "wrapper": wrapper,
                "element_type": type(element).__name__,
                **kwargs.get("metadata", {}),
            },
        )
