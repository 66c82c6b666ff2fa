"""
Routing configuration registry.

The registry is the single source of truth a route compilation pass reads:
the ordered controller types, default and inline constraints, subdomain
settings, translation providers and the route naming strategy.

It is filled once, synchronously, while the application starts, and only
read afterwards. Registration calls are not thread-safe and must not run
concurrently on the same instance.
"""

import inspect
import logging
import re
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Pattern, Tuple, Type, Union

from .config import RoutingSettings
from .constraints import inline as builtin_constraints
from .constraints.base import (
    InlineRouteConstraint,
    RouteConstraint,
    is_inline_route_constraint,
)
from .constraints.factory import RouteConstraintFactory
from .constraints.inline import RegexRouteConstraint
from .constraints.registry import InlineConstraintRegistry
from .controller import Controller
from .discovery import Assembly, TypeScanner, defining_package, discover_controller_types
from .faults import ConfigInvalidFault, InvalidPatternFault, MisconfiguredConstraintFault
from .naming import RouteNameBuilder, RouteNameBuilders, RouteSpecification
from .subdomains import SubdomainParser, SubdomainParsers
from .translation import TranslationProvider

logger = logging.getLogger("waymark.configuration")


class RoutingConfigurationBase(ABC):
    """
    Configuration options used when generating attribute routes.

    Concrete configurations fix ``framework_controller_type``; only classes
    assignable to it are ever admitted as controllers.

    Attributes:
        default_subdomain: Subdomain used when the parser finds none
        subdomain_parser: Active ``host -> subdomain`` strategy
        route_name_builder: Active ``RouteSpecification -> name`` strategy
        append_trailing_slash: Outbound URLs end with a slash
        auto_generate_route_names: Name routes through ``route_name_builder``
        constrain_translated_routes_by_current_ui_culture: Translated routes
            only match for their own culture
        inherit_actions_from_base_controller: Include actions declared on
            base controllers
        preserve_case_for_url_parameters: Keep parameter case in URLs
        use_lowercase_routes: Generate lowercase URLs
    """

    def __init__(self):
        self._ordered_controller_types: List[type] = []
        self._mapped_subdomains: List[str] = []

        # Constraints
        self._default_route_constraints: Dict[str, RouteConstraint] = {}
        self._default_constraint_patterns: Dict[str, Pattern] = {}
        self.inline_constraints = InlineConstraintRegistry()
        self._constraint_factory: Optional[RouteConstraintFactory] = None

        # Translation
        self._translation_providers: List[TranslationProvider] = []

        # Subdomains
        self._area_subdomain_overrides: Dict[str, str] = {}
        self.default_subdomain = "www"
        self.subdomain_parser: SubdomainParser = SubdomainParsers.three_section()

        # Route names
        self.route_name_builder: RouteNameBuilder = RouteNameBuilders.first_in_wins()

        self.append_trailing_slash = False
        self.auto_generate_route_names = False
        self.constrain_translated_routes_by_current_ui_culture = False
        self.inherit_actions_from_base_controller = False
        self.preserve_case_for_url_parameters = False
        self.use_lowercase_routes = False

        self.scanner = TypeScanner()

    @property
    @abstractmethod
    def framework_controller_type(self) -> type:
        """Base type every registered controller must derive from."""

    @classmethod
    def from_settings(cls, settings: RoutingSettings) -> "RoutingConfigurationBase":
        configuration = cls()
        configuration.apply_settings(settings)
        return configuration

    def apply_settings(self, settings: RoutingSettings) -> None:
        """Copy scalar options from ``settings``."""
        self.append_trailing_slash = settings.append_trailing_slash
        self.auto_generate_route_names = settings.auto_generate_route_names
        self.constrain_translated_routes_by_current_ui_culture = (
            settings.constrain_translated_routes_by_current_ui_culture
        )
        self.default_subdomain = settings.default_subdomain
        self.inherit_actions_from_base_controller = settings.inherit_actions_from_base_controller
        self.preserve_case_for_url_parameters = settings.preserve_case_for_url_parameters
        self.use_lowercase_routes = settings.use_lowercase_routes

    # ========================================================================
    # Read access
    # ========================================================================

    @property
    def controller_types(self) -> Tuple[type, ...]:
        """Registered controller types in route emission order."""
        return tuple(self._ordered_controller_types)

    @property
    def default_route_constraints(self) -> Mapping[str, RouteConstraint]:
        return MappingProxyType(self._default_route_constraints)

    @property
    def area_subdomain_overrides(self) -> Mapping[str, str]:
        return MappingProxyType(self._area_subdomain_overrides)

    @property
    def mapped_subdomains(self) -> Tuple[str, ...]:
        """Every subdomain referenced so far, in first-reference order."""
        return tuple(self._mapped_subdomains)

    @property
    def translation_providers(self) -> Tuple[TranslationProvider, ...]:
        return tuple(self._translation_providers)

    @property
    def constraint_factory(self) -> RouteConstraintFactory:
        if self._constraint_factory is None:
            self._constraint_factory = self.create_constraint_factory()
        return self._constraint_factory

    def create_constraint_factory(self) -> RouteConstraintFactory:
        """New factory bound to this configuration's inline constraint table."""
        return RouteConstraintFactory(self.inline_constraints)

    # ========================================================================
    # Controllers
    # ========================================================================

    def add_controller(self, controller_type: type) -> None:
        """
        Append ``controller_type`` unless it is already registered.

        Anything that is not a subclass of ``framework_controller_type`` is
        ignored.
        """
        self._add_controller(controller_type, reorder=False)

    def promote_controller(self, controller_type: type) -> None:
        """Append ``controller_type``, moving it to the end if already registered."""
        self._add_controller(controller_type, reorder=True)

    def add_controllers_from(self, assembly: Assembly) -> None:
        """Add every controller defined in a module or package, in discovery order."""
        for controller_type in discover_controller_types(
            assembly, self.framework_controller_type, self.scanner
        ):
            self.add_controller(controller_type)

    def add_controllers_of_type(self, base_type: type) -> None:
        """
        Promote every controller deriving from ``base_type``.

        Controllers are discovered in the package that defines ``base_type``.
        """
        package = defining_package(base_type)
        for controller_type in discover_controller_types(
            package, self.framework_controller_type, self.scanner
        ):
            if issubclass(controller_type, base_type):
                self.promote_controller(controller_type)

    def _add_controller(self, controller_type: type, reorder: bool) -> None:
        if not (
            inspect.isclass(controller_type)
            and issubclass(controller_type, self.framework_controller_type)
        ):
            logger.debug(
                f"Ignoring {controller_type!r}: not a "
                f"{self.framework_controller_type.__name__} subclass"
            )
            return

        if controller_type not in self._ordered_controller_types:
            self._ordered_controller_types.append(controller_type)
            logger.debug(f"Added controller {controller_type.__qualname__}")
        elif reorder:
            self._ordered_controller_types.remove(controller_type)
            self._ordered_controller_types.append(controller_type)
            logger.debug(f"Promoted controller {controller_type.__qualname__}")

    # ========================================================================
    # Constraints
    # ========================================================================

    def add_default_constraint(
        self,
        key_pattern: str,
        constraint: Union[RouteConstraint, str],
    ) -> None:
        """
        Apply ``constraint`` to every route parameter whose name matches
        ``key_pattern``.

        The first constraint registered for a key pattern stays; later
        registrations for the same pattern are ignored. A string constraint
        is compiled into a RegexRouteConstraint.

        Raises:
            InvalidPatternFault: If ``key_pattern`` or a string constraint
                is not a valid regular expression
            MisconfiguredConstraintFault: If ``constraint`` is neither a
                RouteConstraint nor a string
        """
        try:
            compiled = re.compile(key_pattern)
        except re.error as e:
            raise InvalidPatternFault(key_pattern, str(e)) from e

        if isinstance(constraint, str):
            constraint = RegexRouteConstraint(constraint)
        elif not isinstance(constraint, RouteConstraint):
            raise MisconfiguredConstraintFault(
                key_pattern,
                type(constraint),
                "default constraints must be a RouteConstraint or a regex string",
            )

        if key_pattern in self._default_route_constraints:
            logger.debug(f"Default constraint for '{key_pattern}' already set; ignoring")
            return

        self._default_route_constraints[key_pattern] = constraint
        self._default_constraint_patterns[key_pattern] = compiled

    def default_constraints_for(self, parameter_name: str) -> List[RouteConstraint]:
        """Default constraints whose key pattern matches ``parameter_name``."""
        return [
            self._default_route_constraints[key]
            for key, pattern in self._default_constraint_patterns.items()
            if pattern.search(parameter_name)
        ]

    def register_inline_constraints(self, marker: type, assembly: Assembly) -> None:
        """
        Bind every inline constraint class found in ``assembly``.

        A class qualifies when it subclasses ``marker`` and is tagged with
        InlineRouteConstraint. Each is bound under the name derived from its
        class name; names already bound keep their first binding.
        """

        def qualifies(candidate: type) -> bool:
            return (
                is_inline_route_constraint(candidate)
                and candidate not in (marker, InlineRouteConstraint)
                and not inspect.isabstract(candidate)
            )

        for constraint_type in self.scanner.scan(assembly, base_class=marker, predicate=qualifies):
            self.inline_constraints.register_type(constraint_type)

    def register_inline_constraint(
        self,
        name: str,
        constraint_type: Any,
        factory: Optional[Callable[..., Any]] = None,
    ) -> None:
        """Bind a single inline constraint name; first registration wins."""
        self.inline_constraints.register(name, constraint_type, factory)

    # ========================================================================
    # Translation
    # ========================================================================

    def add_translation_provider(
        self,
        provider: Union[TranslationProvider, Type[TranslationProvider]],
    ) -> None:
        """
        Append a translation provider; earlier providers take precedence.

        A provider class is instantiated without arguments.
        """
        if inspect.isclass(provider):
            provider = provider()
        if not isinstance(provider, TranslationProvider):
            raise ConfigInvalidFault(
                "translation_providers",
                f"expected a TranslationProvider, got {type(provider).__name__}",
            )
        self._translation_providers.append(provider)

    def get_translation_cultures(self) -> List[str]:
        """Distinct culture names across all providers."""
        return list(dict.fromkeys(
            culture_name
            for provider in self._translation_providers
            for culture_name in provider.culture_names
        ))

    # ========================================================================
    # Areas & subdomains
    # ========================================================================

    def map_area(self, name: str) -> "AreaConfiguration":
        """Handle for configuring the area called ``name``."""
        return AreaConfiguration(name, self)

    def set_area_subdomain(self, area_name: str, subdomain: str) -> None:
        self._area_subdomain_overrides[area_name] = subdomain
        self.record_mapped_subdomain(subdomain)

    def record_mapped_subdomain(self, subdomain: str) -> None:
        """Remember that ``subdomain`` is mapped. Entries are never removed."""
        if subdomain not in self._mapped_subdomains:
            self._mapped_subdomains.append(subdomain)

    def resolve_subdomain(self, host: Optional[str], area_name: Optional[str] = None) -> str:
        """
        Subdomain for a route: the area's override if one is configured,
        else what the active parser makes of ``host``, else the default.
        """
        if area_name is not None and area_name in self._area_subdomain_overrides:
            return self._area_subdomain_overrides[area_name]
        return self.subdomain_parser(host) or self.default_subdomain

    # ========================================================================
    # Route names
    # ========================================================================

    def build_route_name(self, specification: RouteSpecification) -> Optional[str]:
        """Name for a route, or None when automatic names are disabled."""
        if not self.auto_generate_route_names:
            return None
        return self.route_name_builder(specification)


class RoutingConfiguration(RoutingConfigurationBase):
    """
    Routing configuration for Waymark controllers.

    The built-in inline constraints (``int``, ``length``, ``regex``, ...)
    are registered on construction.

    Example:
        configuration = RoutingConfiguration()
        configuration.add_controllers_from("myapp.controllers")
        configuration.add_default_constraint(r"^id$", configuration.constraint_factory.create_inline_constraint("int"))
        configuration.map_area("admin").to_subdomain("admin")
    """

    def __init__(self):
        super().__init__()
        self.register_inline_constraints(RouteConstraint, builtin_constraints)

    @property
    def framework_controller_type(self) -> type:
        return Controller


class AreaConfiguration:
    """
    Area-scoped view of a routing configuration.

    Holds no state of its own; every call writes through to the registry.
    """

    def __init__(self, name: str, configuration: RoutingConfigurationBase):
        self.name = name
        self.configuration = configuration

    @property
    def subdomain(self) -> Optional[str]:
        return self.configuration.area_subdomain_overrides.get(self.name)

    def to_subdomain(self, subdomain: str) -> "AreaConfiguration":
        """Serve this area from ``subdomain``."""
        self.configuration.set_area_subdomain(self.name, subdomain)
        return self

    def add_controller(self, controller_type: type) -> "AreaConfiguration":
        self.configuration.add_controller(controller_type)
        return self

    def promote_controller(self, controller_type: type) -> "AreaConfiguration":
        self.configuration.promote_controller(controller_type)
        return self

    def add_controllers_from(self, assembly: Assembly) -> "AreaConfiguration":
        self.configuration.add_controllers_from(assembly)
        return self
