from __future__ import annotations

from typing import Any, Protocol, TypeGuard, runtime_checkable


@runtime_checkable
class DependencyHolder(Protocol):
    """Expose dependencies that are not stored in public fields.

    When an injection target has a zero-argument ``dependencies()`` method,
    the injector walks whatever it returns before walking the target itself.
    The accessor may return a single target, a sequence or mapping of targets,
    or ``None`` for nothing. The returned objects stay owned by the holder.

    Examples:
        .. code-block:: python

            @dataclass
            class _WorkerPoolDependencies:
                logger: Annotated[logging.Logger | None, Inject("logger")] = None
                pool_size: Annotated[int, Inject("pool-size")] = 0


            class WorkerPool:
                def __init__(self, name: str) -> None:
                    self.name = name
                    self._dependencies = _WorkerPoolDependencies()

                def dependencies(self) -> _WorkerPoolDependencies:
                    return self._dependencies

    """

    def dependencies(self) -> Any: ...


def is_dependency_holder(target: object) -> TypeGuard[DependencyHolder]:
    """Return whether ``target`` exposes a callable ``dependencies()`` accessor.

    Classes themselves are not holders, only their instances are.
    """
    if isinstance(target, type):
        return False
    return isinstance(target, DependencyHolder) and callable(target.dependencies)


__all__ = ["DependencyHolder", "is_dependency_holder"]
