"""
Waymark Faults - Structured configuration-time errors.

Faults are typed exceptions with a stable code, a domain and a severity.
Everything Waymark raises is a Fault in the CONFIG domain: the registry
fails fast while the application starts, never while serving a request.

Core exports:
- Fault: Base fault class
- FaultDomain: Domain taxonomy
- Severity: Severity levels
- ConfigInvalidFault, InvalidPatternFault, MisconfiguredConstraintFault,
  InvalidConstraintCompositionFault: concrete faults
"""

from .core import (
    Fault,
    FaultDomain,
    Severity,
    DOMAIN_DEFAULTS,
)

from .domains import (
    ConfigFault,
    ConfigInvalidFault,
    InvalidPatternFault,
    MisconfiguredConstraintFault,
    InvalidConstraintCompositionFault,
)

__all__ = [
    # Core types
    "Fault",
    "FaultDomain",
    "Severity",
    "DOMAIN_DEFAULTS",

    # Domain faults
    "ConfigFault",
    "ConfigInvalidFault",
    "InvalidPatternFault",
    "MisconfiguredConstraintFault",
    "InvalidConstraintCompositionFault",
]
