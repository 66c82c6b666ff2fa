"""
Waymark - Configuration and constraint resolution for attribute routing

Collects everything a route compilation pass needs:
- Configuration: ordered controller registration, default and inline constraints
- Constraints: regex, inline-by-name, compound, optional and query-string constraints
- Subdomains: pluggable host -> subdomain strategies
- Naming: pluggable route naming strategies
- Translation: ordered translation providers
- Faults: structured configuration-time errors
"""

__version__ = "0.1.0"

# ============================================================================
# Configuration
# ============================================================================

from .configuration import (
    AreaConfiguration,
    RoutingConfiguration,
    RoutingConfigurationBase,
)
from .config import ConfigLoader, RoutingSettings
from .controller import Controller

# ============================================================================
# Constraints
# ============================================================================

from .constraints import (
    CompoundRouteConstraint,
    ConstraintContext,
    InlineConstraintRegistry,
    InlineRouteConstraint,
    OptionalRouteConstraint,
    QueryStringRouteConstraint,
    RegexRouteConstraint,
    RouteConstraint,
    RouteConstraintFactory,
    RouteDirection,
    derive_constraint_name,
)

# ============================================================================
# Strategies
# ============================================================================

from .subdomains import SubdomainParsers, ThreeSectionSubdomainParser
from .naming import RouteNameBuilders, RouteSpecification
from .translation import FluentTranslationProvider, TranslationProvider
from .discovery import TypeScanner, discover_controller_types

# ============================================================================
# Faults
# ============================================================================

from .faults import (
    ConfigInvalidFault,
    Fault,
    FaultDomain,
    InvalidConstraintCompositionFault,
    InvalidPatternFault,
    MisconfiguredConstraintFault,
    Severity,
)

__all__ = [
    "__version__",
    # Configuration
    "AreaConfiguration",
    "RoutingConfiguration",
    "RoutingConfigurationBase",
    "ConfigLoader",
    "RoutingSettings",
    "Controller",
    # Constraints
    "CompoundRouteConstraint",
    "ConstraintContext",
    "InlineConstraintRegistry",
    "InlineRouteConstraint",
    "OptionalRouteConstraint",
    "QueryStringRouteConstraint",
    "RegexRouteConstraint",
    "RouteConstraint",
    "RouteConstraintFactory",
    "RouteDirection",
    "derive_constraint_name",
    # Strategies
    "SubdomainParsers",
    "ThreeSectionSubdomainParser",
    "RouteNameBuilders",
    "RouteSpecification",
    "FluentTranslationProvider",
    "TranslationProvider",
    "TypeScanner",
    "discover_controller_types",
    # Faults
    "ConfigInvalidFault",
    "Fault",
    "FaultDomain",
    "InvalidConstraintCompositionFault",
    "InvalidPatternFault",
    "MisconfiguredConstraintFault",
    "Severity",
]
