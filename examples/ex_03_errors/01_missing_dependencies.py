"""Errors: every missing name is reported at once, wrong types fail fast.

Fields whose dependencies were found stay injected even when the call
raises, so fix the registrations and inject again.
"""

from __future__ import annotations

from typing import Annotated

from depwire import (
    DepwireAlreadyRegisteredError,
    DepwireDependenciesNotFoundError,
    DepwireDependencyNotFoundError,
    DepwireWrongTypeError,
    Inject,
    Registry,
)


class Database:
    pass


class Cache:
    pass


class Repository:
    database: Annotated[Database | None, Inject("db")] = None
    cache: Annotated[Cache | None, Inject("cache")] = None


class Mailer:
    smtp_host: Annotated[str, Inject("smtp-host")] = "localhost"


def main() -> None:
    registry = Registry()
    registry.register("cache", Cache())

    repository = Repository()
    try:
        registry.inject([repository, Mailer()])
    except DepwireDependenciesNotFoundError as error:
        print(error)  # => Dependencies not found: 'db', 'smtp-host'
    print(f"cache_injected={repository.cache is not None}")  # => cache_injected=True

    registry.register("smtp-host", 25)
    try:
        registry.inject(Mailer())
    except DepwireWrongTypeError as error:
        print(f"wrong_type={error.dependency_name}")  # => wrong_type=smtp-host

    try:
        registry.register("cache", Cache())
    except DepwireAlreadyRegisteredError as error:
        print(error)  # => Dependency 'cache' is already registered.

    try:
        registry.get("db")
    except DepwireDependencyNotFoundError as error:
        print(error)  # => Dependency 'db' is not registered.


if __name__ == "__main__":
    main()
