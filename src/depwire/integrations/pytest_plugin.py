"""pytest fixtures for tests that inject depwire dependencies.

Enable the plugin from a test module or the root ``conftest.py``:

.. code-block:: python

    pytest_plugins = ["depwire.integrations.pytest_plugin"]


    @pytest.fixture()
    def depwire_registrations() -> dict[str, object]:
        return {"logger": logging.getLogger("tests"), "pool-size": 2}


    def test_pool(depwire_inject) -> None:
        pool = depwire_inject(WorkerPool())
        assert pool.pool_size == 2
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

import pytest

from depwire._internal.registry import Registry

T = TypeVar("T")


@pytest.fixture()
def depwire_registrations() -> Mapping[str, Any]:
    """Name-to-value pairs registered into ``depwire_registry``.

    Override this fixture in a test module or ``conftest.py`` to provide the
    dependencies your tests inject. The default registers nothing.

    """
    return {}


@pytest.fixture()
def depwire_registry(depwire_registrations: Mapping[str, Any]) -> Registry:
    """Create a per-test registry holding ``depwire_registrations``.

    The fixture is function-scoped, so registrations made inside one test
    never leak into another.

    Returns:
        A new ``Registry`` instance.

    """
    registry = Registry()
    for name, value in depwire_registrations.items():
        registry.register(name, value)
    return registry


@pytest.fixture()
def depwire_inject(depwire_registry: Registry) -> Callable[[T], T]:
    """Return a helper that injects a target and hands it back.

    Errors raised by ``Registry.inject`` propagate unchanged, so missing
    registrations fail the test with the full list of missing names.

    """

    def inject(target: T) -> T:
        depwire_registry.inject(target)
        return target

    return inject


__all__ = ["depwire_inject", "depwire_registrations", "depwire_registry"]
