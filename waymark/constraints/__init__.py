"""
Waymark constraints.

- base: RouteConstraint, InlineRouteConstraint marker, ConstraintContext
- wrappers: compound, optional and query-string adapters
- inline: built-in inline constraints (int, length, regex, ...)
- registry: name -> constraint bindings
- factory: RouteConstraintFactory
"""

from .base import (
    ConstraintContext,
    InlineRouteConstraint,
    RouteConstraint,
    RouteDirection,
    ValueRouteConstraint,
    is_inline_route_constraint,
    is_route_constraint,
)
from .wrappers import (
    CompoundRouteConstraint,
    OptionalRouteConstraint,
    QueryStringRouteConstraint,
)
from .inline import RegexRouteConstraint
from .registry import ConstraintBinding, InlineConstraintRegistry, derive_constraint_name
from .factory import RouteConstraintFactory

__all__ = [
    "ConstraintContext",
    "InlineRouteConstraint",
    "RouteConstraint",
    "RouteDirection",
    "ValueRouteConstraint",
    "is_inline_route_constraint",
    "is_route_constraint",
    "CompoundRouteConstraint",
    "OptionalRouteConstraint",
    "QueryStringRouteConstraint",
    "RegexRouteConstraint",
    "ConstraintBinding",
    "InlineConstraintRegistry",
    "derive_constraint_name",
    "RouteConstraintFactory",
]
