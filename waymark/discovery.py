"""
Type discovery.

Finds classes inside a module or package. Waymark uses it to bulk-register
controllers and inline constraints; a module or package plays the part an
assembly plays in other frameworks.

Results come back in a stable order: modules in walk order, classes in
definition order within each module.
"""

import importlib
import inspect
import logging
import pkgutil
import sys
from types import ModuleType
from typing import Any, Callable, Dict, List, Optional, Type, Union

logger = logging.getLogger("waymark.discovery")

Assembly = Union[ModuleType, str]


class TypeScanner:
    """
    Scanner for discovering classes in Python modules and packages.

    Features:
    - Recursive package scanning with depth control
    - Class filtering (by base class or predicate)
    - Deduplication
    - Scan statistics
    """

    def __init__(self):
        self._scan_stats = {
            'modules_scanned': 0,
            'classes_found': 0,
            'errors_encountered': 0,
        }

    def get_stats(self) -> Dict[str, Any]:
        """Get scanning statistics."""
        return self._scan_stats.copy()

    def scan(
        self,
        target: Assembly,
        base_class: Optional[Type] = None,
        predicate: Optional[Callable[[Type], bool]] = None,
        recursive: bool = True,
        max_depth: int = 5,
    ) -> List[Type]:
        """
        Scan a module or package for classes matching criteria.

        Only classes defined in the scanned modules are returned; classes a
        module merely imports are skipped.

        Args:
            target: Module object or dotted path (e.g. 'myapp.controllers')
            base_class: Optional base class to filter by (subclass check)
            predicate: Optional custom filter function
            recursive: Whether to scan subpackages
            max_depth: Maximum recursion depth for subpackages

        Returns:
            List of discovered classes

        Raises:
            ImportError: If ``target`` itself cannot be imported
        """
        module = importlib.import_module(target) if isinstance(target, str) else target
        discovered: List[Type] = []

        self._scan_module(module, discovered, base_class, predicate)

        if recursive and hasattr(module, "__path__") and max_depth > 0:
            seen_modules = {module.__name__}

            for _, name, _ in pkgutil.walk_packages(
                module.__path__,
                module.__name__ + ".",
                onerror=lambda pkg: logger.warning(f"Could not walk package {pkg}"),
            ):
                current_depth = name.count('.') - module.__name__.count('.')
                if current_depth > max_depth or name in seen_modules:
                    continue
                seen_modules.add(name)

                try:
                    submodule = importlib.import_module(name)
                except Exception as e:
                    self._scan_stats['errors_encountered'] += 1
                    logger.warning(f"Skipping module {name} during discovery: {e}")
                    continue

                self._scan_module(submodule, discovered, base_class, predicate)

        self._scan_stats['classes_found'] += len(discovered)
        return discovered

    def _scan_module(
        self,
        module: ModuleType,
        discovered: List[Type],
        base_class: Optional[Type],
        predicate: Optional[Callable[[Type], bool]],
    ):
        """Internal helper to scan a single module."""
        self._scan_stats['modules_scanned'] += 1

        # vars() keeps definition order
        for obj in list(vars(module).values()):
            if not inspect.isclass(obj):
                continue
            if obj.__module__ != module.__name__:
                continue
            if base_class and not issubclass(obj, base_class):
                continue
            if predicate and not predicate(obj):
                continue
            if obj not in discovered:
                discovered.append(obj)


def defining_package(cls: Type) -> ModuleType:
    """Package containing the module that defines ``cls``."""
    module = sys.modules[cls.__module__]
    package_name = module.__package__
    if package_name and package_name != module.__name__:
        return importlib.import_module(package_name)
    return module


def discover_controller_types(
    assembly: Assembly,
    framework_controller_type: Type,
    scanner: Optional[TypeScanner] = None,
) -> List[Type]:
    """
    Every concrete class in ``assembly`` assignable to ``framework_controller_type``.

    The framework controller type itself and abstract classes are excluded.
    """
    scanner = scanner or TypeScanner()
    return scanner.scan(
        assembly,
        base_class=framework_controller_type,
        predicate=lambda t: t is not framework_controller_type and not inspect.isabstract(t),
    )
