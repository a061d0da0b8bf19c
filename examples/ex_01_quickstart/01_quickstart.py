"""Quickstart: register named values and inject them into annotated fields.

Only fields annotated with ``Inject("name")`` are touched. Everything else on
the object keeps the value it was constructed with.
"""

from __future__ import annotations

import logging
from typing import Annotated

from depwire import Inject, Registry


class WorkerPool:
    length: int
    logger: Annotated[logging.Logger | None, Inject("logger")] = None
    pool_size: Annotated[int, Inject("pool-size")] = 0

    def __init__(self, length: int) -> None:
        self.length = length


def main() -> None:
    registry = Registry()
    registry.register("logger", logging.getLogger("app.workers"))
    registry.register("pool-size", 20)

    pool = WorkerPool(length=3)
    registry.inject(pool)

    logger_name = pool.logger.name if pool.logger is not None else None
    print(f"logger={logger_name}")  # => logger=app.workers
    print(f"pool_size={pool.pool_size}")  # => pool_size=20
    print(f"length={pool.length}")  # => length=3

    print(f"names={list(registry.names())}")  # => names=['logger', 'pool-size']
    print(f"pool-size={registry.get('pool-size')}")  # => pool-size=20


if __name__ == "__main__":
    main()
