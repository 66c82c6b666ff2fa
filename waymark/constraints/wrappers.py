"""
Composable constraint wrappers.

Compound, optional and query-string behavior are layered over any base
constraint by wrapping, so every combination is a stack of thin adapters.
Wrappers validate what they wrap when they are built.
"""

from typing import Iterable, Tuple

from .base import ConstraintContext, RouteConstraint
from ..faults import InvalidConstraintCompositionFault


def _require_constraint(wrapper: str, candidate) -> RouteConstraint:
    if not isinstance(candidate, RouteConstraint):
        raise InvalidConstraintCompositionFault(wrapper, candidate)
    return candidate


class CompoundRouteConstraint(RouteConstraint):
    """Matches only when every wrapped constraint matches (logical AND)."""

    def __init__(self, constraints: Iterable[RouteConstraint]):
        self.constraints: Tuple[RouteConstraint, ...] = tuple(
            _require_constraint(type(self).__name__, c) for c in constraints
        )

    def match(self, parameter_name: str, context: ConstraintContext) -> bool:
        return all(c.match(parameter_name, context) for c in self.constraints)

    def has_value(self, parameter_name: str, context: ConstraintContext) -> bool:
        return any(c.has_value(parameter_name, context) for c in self.constraints)

    def __repr__(self) -> str:
        return f"CompoundRouteConstraint({list(self.constraints)!r})"


class OptionalRouteConstraint(RouteConstraint):
    """
    Satisfied when the parameter is absent; otherwise delegates.

    Used for optional URL segments that still carry a validation rule.
    """

    def __init__(self, constraint: RouteConstraint):
        self.constraint = _require_constraint(type(self).__name__, constraint)

    def match(self, parameter_name: str, context: ConstraintContext) -> bool:
        if not self.constraint.has_value(parameter_name, context):
            return True
        return self.constraint.match(parameter_name, context)

    def has_value(self, parameter_name: str, context: ConstraintContext) -> bool:
        return self.constraint.has_value(parameter_name, context)

    def __repr__(self) -> str:
        return f"OptionalRouteConstraint({self.constraint!r})"


class QueryStringRouteConstraint(RouteConstraint):
    """
    Evaluates the wrapped constraint against the query string.

    Optional and query-string wrappers nest in either order:
    ``QueryStringRouteConstraint(OptionalRouteConstraint(c))`` and
    ``OptionalRouteConstraint(QueryStringRouteConstraint(c))`` behave alike.
    """

    def __init__(self, constraint: RouteConstraint):
        self.constraint = _require_constraint(type(self).__name__, constraint)

    def match(self, parameter_name: str, context: ConstraintContext) -> bool:
        return self.constraint.match(parameter_name, context.for_query_string())

    def has_value(self, parameter_name: str, context: ConstraintContext) -> bool:
        return self.constraint.has_value(parameter_name, context.for_query_string())

    def __repr__(self) -> str:
        return f"QueryStringRouteConstraint({self.constraint!r})"
