from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Any

from depwire._internal.injector import Injector
from depwire._internal.markers import Inject
from depwire.exceptions import (
    DepwireAlreadyRegisteredError,
    DepwireDependencyNotFoundError,
    DepwireError,
    DepwireInvalidRegistrationError,
)

_module_logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _RegistryDependencies:
    logger: Annotated[logging.Logger, Inject("logger")]


class Registry:
    """Store named values and inject them into annotated fields.

    A registry is a plain name-to-value table. Names are unique: registering
    a name twice is an error and nothing is ever replaced. ``inject`` walks a
    target object and fills every field annotated with ``Inject("name")``
    from the table, reporting all missing names at once.

    Registries are explicit, caller-owned objects. Several can coexist and
    none of them is global. They do no locking; share one across threads only
    behind your own lock, typically by registering everything at startup and
    injecting afterwards.

    The registry is itself a dependency holder: its operational logger is a
    hidden ``"logger"`` dependency, so registering a ``logging.Logger`` under
    ``"logger"`` and calling ``registry.inject(registry)`` redirects its
    ``[BEGIN]``/``[END]`` debug records.

    Examples:
        .. code-block:: python

            registry = Registry()
            registry.register("logger", logging.getLogger("app"))
            registry.register("pool-size", 20)


            class WorkerPool:
                logger: Annotated[logging.Logger | None, Inject("logger")] = None
                pool_size: Annotated[int, Inject("pool-size")] = 0


            pool = WorkerPool()
            registry.inject(pool)

    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        """Create an empty registry.

        Args:
            logger: Logger receiving debug records for registry operations.
                Defaults to the registry module logger, which emits nothing
                unless the application configures logging.

        """
        self._entries: dict[str, Any] = {}
        self._dependencies = _RegistryDependencies(logger=logger or _module_logger)

    def register(self, name: str, value: Any) -> None:
        """Store ``value`` under ``name``.

        Args:
            name: Dependency name used by ``Inject(name)`` annotations.
            value: Any object. It is stored and injected as is.

        Raises:
            DepwireInvalidRegistrationError: If ``name`` is not a string.
            DepwireAlreadyRegisteredError: If ``name`` is already registered.
                The stored value is left unchanged.

        """
        log = self._dependencies.logger
        log.debug("[BEGIN] register(%r, <%s>)", name, type(value).__qualname__)

        if not isinstance(name, str):
            msg = f"Dependency name must be a string, got {name!r}."
            error: DepwireError = DepwireInvalidRegistrationError(msg)
            log.debug("[END]   register(%r) with ERROR: %s", name, error)
            raise error

        if name in self._entries:
            error = DepwireAlreadyRegisteredError(name)
            log.debug(
                "[END]   register(%r, <%s>) with ERROR: %s",
                name,
                type(value).__qualname__,
                error,
            )
            raise error

        self._entries[name] = value
        log.debug("[END]   register(%r, <%s>)", name, type(value).__qualname__)

    def get(self, name: str) -> Any:
        """Return the value registered under ``name``.

        Raises:
            DepwireDependencyNotFoundError: If nothing is registered under
                ``name``.

        """
        log = self._dependencies.logger
        log.debug("[BEGIN] get(%r)", name)

        try:
            value = self._entries[name]
        except KeyError:
            error = DepwireDependencyNotFoundError(name)
            log.debug("[END]   get(%r) with ERROR: %s", name, error)
            raise error from None

        log.debug("[END]   get(%r)", name)
        return value

    def inject(self, target: Any) -> None:
        """Fill the annotated fields of ``target`` and of everything it contains.

        ``target`` may be a record (any object with attributes), a sequence or
        mapping of targets, a ``weakref.ref`` to a target, or ``None``. Objects
        exposing a ``dependencies()`` accessor have its result injected first.
        Other values are ignored.

        Raises:
            DepwireDependenciesNotFoundError: When annotated dependencies are
                not registered. Every missing name of the whole walk is
                reported; fields that could be injected are injected.
            DepwireWrongTypeError: When a registered value does not fit the
                annotated field. The walk stops at the first such field.
            DepwireInjectionProblemError: When the field assignment itself
                fails, for example on a frozen dataclass.

        """
        log = self._dependencies.logger
        log.debug("[BEGIN] inject(<%s>)", type(target).__qualname__)

        injector = Injector(entries=self._entries, logger=log)
        try:
            injector.inject(target)
        except DepwireError as error:
            log.debug("[END]   inject(<%s>) with ERROR: %s", type(target).__qualname__, error)
            raise

        log.debug("[END]   inject(<%s>)", type(target).__qualname__)

    def names(self) -> tuple[str, ...]:
        """Return the registered names, sorted."""
        return tuple(sorted(self._entries))

    def dependencies(self) -> Any:
        """Return the registry's own hidden dependencies."""
        return self._dependencies

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(names={list(self.names())!r})"


__all__ = ["Registry"]
