"""Hidden dependencies: keep injected collaborators out of the public surface.

An object with a ``dependencies()`` method hands the injector a private
record to fill. Containers are walked element by element, so a whole mapping
of clients is wired with one call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated

from depwire import Inject, Registry


@dataclass
class _ClientDependencies:
    logger: Annotated[logging.Logger | None, Inject("logger")] = None
    timeout: Annotated[float, Inject("timeout")] = 0.0


class HttpClient:
    def __init__(self, base_url: str) -> None:
        self.base_url = base_url
        self._dependencies = _ClientDependencies()

    def dependencies(self) -> _ClientDependencies:
        return self._dependencies

    @property
    def timeout(self) -> float:
        return self._dependencies.timeout


def main() -> None:
    registry = Registry()
    registry.register("logger", logging.getLogger("app.http"))
    registry.register("timeout", 2.5)

    clients = {
        "users": HttpClient("https://users.internal"),
        "billing": HttpClient("https://billing.internal"),
    }
    registry.inject(clients)

    print(f"users.timeout={clients['users'].timeout}")  # => users.timeout=2.5
    billing_logger = clients["billing"].dependencies().logger
    print(f"billing.logger={billing_logger.name if billing_logger else None}")  # => billing.logger=app.http

    # The registry itself hides its operational logger the same way.
    registry.inject(registry)
    print(f"registry.logger={registry.dependencies().logger.name}")  # => registry.logger=app.http


if __name__ == "__main__":
    main()
