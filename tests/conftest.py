"""
Shared test fixtures and helpers for the Waymark test suite.
"""

from typing import Any, Dict, Optional

import pytest

from waymark import ConstraintContext, RoutingConfiguration


# ============================================================================
# Configuration
# ============================================================================


@pytest.fixture
def configuration() -> RoutingConfiguration:
    """Fresh routing configuration with the built-in inline constraints."""
    return RoutingConfiguration()


@pytest.fixture
def factory(configuration):
    """Constraint factory bound to the configuration fixture."""
    return configuration.constraint_factory


# ============================================================================
# Constraint Helpers
# ============================================================================


def make_context(
    values: Optional[Dict[str, Any]] = None,
    query: Optional[Dict[str, Any]] = None,
) -> ConstraintContext:
    """Build a ConstraintContext from route values and query values."""
    return ConstraintContext(values=values or {}, query=query or {})


@pytest.fixture
def ctx():
    """Factory fixture: ctx(values, query) -> ConstraintContext."""
    return make_context
