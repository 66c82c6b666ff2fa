"""
Route naming strategies.

When automatic route names are enabled, the route compiler hands each
RouteSpecification to the configuration's single naming strategy and uses
whatever name (or None) comes back.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Set, Tuple


@dataclass(frozen=True)
class RouteSpecification:
    """
    Metadata describing one route.

    Attributes:
        controller_name: Controller class name (``UsersController``)
        action_name: Handler method name
        http_methods: HTTP verbs the route answers to
        route_url: Path template (``users/{id:int}``)
        area_name: Area the controller belongs to, if any
        subdomain: Subdomain the route is bound to, if any
    """

    controller_name: str
    action_name: str
    http_methods: Tuple[str, ...] = ("GET",)
    route_url: str = ""
    area_name: Optional[str] = None
    subdomain: Optional[str] = None

    @property
    def controller_short_name(self) -> str:
        """Controller name without a trailing ``Controller``."""
        name = self.controller_name
        if name.endswith("Controller") and name != "Controller":
            return name[: -len("Controller")]
        return name


RouteNameBuilder = Callable[[RouteSpecification], Optional[str]]


def default_route_name(specification: RouteSpecification) -> str:
    """``Area_Controller_Action``, or ``Controller_Action`` outside an area."""
    parts = [specification.controller_short_name, specification.action_name]
    if specification.area_name:
        parts.insert(0, specification.area_name)
    return "_".join(parts)


class RouteNameBuilders:
    """
    Ready-made route naming strategies.

    Each call returns a fresh strategy with its own memory of issued names.
    """

    @staticmethod
    def first_in_wins() -> RouteNameBuilder:
        """The first route to claim a name keeps it; later ones get None."""
        issued: Set[str] = set()

        def build(specification: RouteSpecification) -> Optional[str]:
            name = default_route_name(specification)
            if name in issued:
                return None
            issued.add(name)
            return name

        return build

    @staticmethod
    def unique_appended() -> RouteNameBuilder:
        """Repeated names get ``_2``, ``_3``, ... appended."""
        counts: Dict[str, int] = {}
        issued: Set[str] = set()

        def build(specification: RouteSpecification) -> Optional[str]:
            base = default_route_name(specification)
            name = base
            while name in issued:
                counts[base] = counts.get(base, 1) + 1
                name = f"{base}_{counts[base]}"
            issued.add(name)
            return name

        return build
