"""
Route constraint factory.

Materializes the constraint objects a route compiler attaches to route
parameters. All failures surface here, at configuration time.
"""

import logging
from typing import Any, Optional

from .base import RouteConstraint, is_route_constraint
from .inline import RegexRouteConstraint
from .registry import InlineConstraintRegistry
from .wrappers import (
    CompoundRouteConstraint,
    OptionalRouteConstraint,
    QueryStringRouteConstraint,
)
from ..faults import MisconfiguredConstraintFault

logger = logging.getLogger("waymark.constraints")


class RouteConstraintFactory:
    """
    Builds route constraints from declarative inputs.

    Example:
        factory = RouteConstraintFactory(configuration.inline_constraints)
        page = factory.create_query_string_constraint(
            factory.create_optional_constraint(
                factory.create_inline_constraint("min", "1")
            )
        )
    """

    def __init__(self, inline_constraints: InlineConstraintRegistry):
        self.inline_constraints = inline_constraints

    def create_regex_constraint(self, pattern: str, flags: int = 0) -> RegexRouteConstraint:
        """
        Constraint requiring the value to fully match ``pattern``.

        Raises:
            InvalidPatternFault: If the pattern does not compile
        """
        return RegexRouteConstraint(pattern, flags)

    def create_inline_constraint(self, name: str, *parameters: Any) -> Optional[RouteConstraint]:
        """
        Build the constraint bound to ``name``.

        Returns None when no constraint is bound to the name, so the caller
        can treat the parameter as unconstrained.

        Raises:
            MisconfiguredConstraintFault: If the bound type is not a
                RouteConstraint or rejects ``parameters``
        """
        binding = self.inline_constraints.get(name)
        if binding is None:
            logger.debug(f"No inline constraint named '{name}'")
            return None

        if not is_route_constraint(binding.constraint_type):
            raise MisconfiguredConstraintFault(
                name,
                binding.constraint_type,
                "the type must be a subclass of waymark.constraints.RouteConstraint",
            )

        try:
            constraint = binding.create(*parameters)
        except (TypeError, ValueError) as e:
            raise MisconfiguredConstraintFault(
                name,
                binding.constraint_type,
                f"cannot construct with parameters {parameters!r}: {e}",
            ) from e

        if not isinstance(constraint, RouteConstraint):
            raise MisconfiguredConstraintFault(
                name,
                binding.constraint_type,
                f"factory returned {type(constraint).__name__}, not a RouteConstraint",
            )
        return constraint

    def create_compound_constraint(self, *constraints: RouteConstraint) -> CompoundRouteConstraint:
        """
        Constraint matching only when every one of ``constraints`` matches.

        Raises:
            InvalidConstraintCompositionFault: If an element is not a RouteConstraint
        """
        return CompoundRouteConstraint(constraints)

    def create_optional_constraint(self, constraint: RouteConstraint) -> OptionalRouteConstraint:
        """Constraint satisfied by an absent parameter, else by ``constraint``."""
        return OptionalRouteConstraint(constraint)

    def create_query_string_constraint(self, constraint: RouteConstraint) -> QueryStringRouteConstraint:
        """Constraint evaluating ``constraint`` against the query string."""
        return QueryStringRouteConstraint(constraint)
