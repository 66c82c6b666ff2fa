"""
Route constraint base types.

A route constraint decides whether a single route parameter is acceptable.
Constraints never see a request object directly: the caller builds a
ConstraintContext holding the route values and the query-string values.
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class RouteDirection(str, Enum):
    """Whether a constraint is evaluated for an incoming request or URL generation."""
    INCOMING = "incoming"
    URL_GENERATION = "url_generation"


@dataclass
class ConstraintContext:
    """
    Values a constraint is evaluated against.

    Attributes:
        values: Route values keyed by parameter name
        query: Query-string values; a list value uses its first element
        direction: Evaluation direction
    """

    values: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    direction: RouteDirection = RouteDirection.INCOMING

    def has_value(self, parameter_name: str) -> bool:
        """A parameter is present when its key exists and is not None."""
        return self.values.get(parameter_name) is not None

    def get_value(self, parameter_name: str) -> Any:
        return self.values.get(parameter_name)

    def for_query_string(self) -> "ConstraintContext":
        """Context whose route values are the first value of each query parameter."""
        values = {}
        for key, value in self.query.items():
            if isinstance(value, (list, tuple)):
                value = value[0] if value else None
            values[key] = value
        return ConstraintContext(values=values, query=self.query, direction=self.direction)


class RouteConstraint(ABC):
    """
    Something the route system accepts as a constraint.

    Subclasses implement match(); it returns True when the named parameter
    is acceptable in the given context.
    """

    @abstractmethod
    def match(self, parameter_name: str, context: ConstraintContext) -> bool:
        ...

    def has_value(self, parameter_name: str, context: ConstraintContext) -> bool:
        """Whether the parameter is present where this constraint looks for it."""
        return context.has_value(parameter_name)

    def __call__(self, parameter_name: str, context: ConstraintContext) -> bool:
        return self.match(parameter_name, context)


class InlineRouteConstraint:
    """
    Marker for constraints that may be referenced by name inside a route
    template, e.g. ``{id:int}`` or ``{code:length(2,5)}``.

    The marker carries no behavior. A class tagged with it is bound in the
    inline constraint registry under a name derived from its class name.
    """


class ValueRouteConstraint(RouteConstraint):
    """
    Constraint over the string form of a present value.

    Absent values are rejected; wrap the constraint with
    OptionalRouteConstraint to accept them.
    """

    def match(self, parameter_name: str, context: ConstraintContext) -> bool:
        if not context.has_value(parameter_name):
            return False
        return self.is_valid(str(context.get_value(parameter_name)))

    @abstractmethod
    def is_valid(self, value: str) -> bool:
        ...


def is_route_constraint(candidate: Any) -> bool:
    """True when ``candidate`` is a RouteConstraint class."""
    return inspect.isclass(candidate) and issubclass(candidate, RouteConstraint)


def is_inline_route_constraint(candidate: Any) -> bool:
    """True when ``candidate`` is a class tagged with InlineRouteConstraint."""
    return inspect.isclass(candidate) and issubclass(candidate, InlineRouteConstraint)
