"""
Inline constraint registry.

Maps a short lowercase name (``int``, ``length``) to the constraint class it
stands for and to a constructor closure that builds instances of it.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional

logger = logging.getLogger("waymark.constraints")

_SUFFIX_RE = re.compile(r"RouteConstraint$")


def derive_constraint_name(type_name: str) -> str:
    """
    Derive the inline name for a constraint class name.

    A trailing ``RouteConstraint`` is stripped and the rest lower-cased:
    ``NumericRouteConstraint`` -> ``numeric``, ``Custom`` -> ``custom``.
    """
    return _SUFFIX_RE.sub("", type_name).lower()


@dataclass(frozen=True)
class ConstraintBinding:
    """A named constraint type plus the closure that constructs it."""
    name: str
    constraint_type: Any
    factory: Callable[..., Any]

    def create(self, *parameters: Any) -> Any:
        return self.factory(*parameters)


class InlineConstraintRegistry:
    """
    Registry of inline constraint bindings.

    The first registration for a name wins. Later registrations under the
    same name are ignored, so re-running configuration code can never
    replace an established binding.
    """

    def __init__(self):
        self.bindings: Dict[str, ConstraintBinding] = {}

    def register(
        self,
        name: str,
        constraint_type: Any,
        factory: Optional[Callable[..., Any]] = None,
    ) -> bool:
        """
        Bind ``name`` to ``constraint_type``.

        Args:
            name: Inline name, lower-cased before storing
            constraint_type: Class the name stands for
            factory: Constructor closure; defaults to the class itself

        Returns:
            True if the binding was added, False if the name was taken
        """
        key = name.lower()
        if key in self.bindings:
            logger.debug(
                f"Inline constraint '{key}' already bound to "
                f"{self.bindings[key].constraint_type!r}; ignoring {constraint_type!r}"
            )
            return False

        self.bindings[key] = ConstraintBinding(
            name=key,
            constraint_type=constraint_type,
            factory=factory if factory is not None else constraint_type,
        )
        logger.debug(f"Registered inline constraint '{key}' -> {constraint_type!r}")
        return True

    def register_type(self, constraint_type: type) -> bool:
        """Bind a class under the name derived from its class name."""
        return self.register(derive_constraint_name(constraint_type.__name__), constraint_type)

    def get(self, name: str) -> Optional[ConstraintBinding]:
        """Look up a binding; names are matched exactly as stored."""
        return self.bindings.get(name)

    def names(self) -> list:
        return list(self.bindings)

    def __contains__(self, name: str) -> bool:
        return name in self.bindings

    def __len__(self) -> int:
        return len(self.bindings)

    def __iter__(self) -> Iterator[ConstraintBinding]:
        return iter(self.bindings.values())
