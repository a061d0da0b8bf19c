from __future__ import annotations

import ast
from typing import Annotated, Any, NamedTuple, get_args, get_origin

INJECT_METADATA_KEY = "inject"
_ANNOTATED_MARKER_MIN_ARGS = 2
_MARKER_NAME = "Inject"
_CLASS_VAR_NAME = "ClassVar"


class Inject(NamedTuple):
    """Mark a class attribute as a dependency field.

    Attach ``Inject`` metadata to ``typing.Annotated`` to tell the injector
    which registry name fills the attribute. An empty name is the same as no
    marker at all: the attribute is left alone.

    Examples:
        .. code-block:: python

            from typing import Annotated
            import logging


            class WorkerPool:
                logger: Annotated[logging.Logger, Inject("logger")]
                pool_size: Annotated[int, Inject("pool-size")]

    """

    name: str


def find_inject_marker(annotation: Any) -> Inject | None:
    """Return the ``Inject`` marker of an ``Annotated`` annotation, if any."""
    if get_origin(annotation) is not Annotated:
        return None
    annotation_args = get_args(annotation)
    if len(annotation_args) < _ANNOTATED_MARKER_MIN_ARGS:
        return None
    metadata = annotation_args[1:]
    return next(
        (item for item in reversed(metadata) if isinstance(item, Inject)),
        None,
    )


def parse_inject_marker(source: str) -> Inject | None:
    """Read a literal ``Inject("name")`` call out of an unresolved annotation string.

    Used when the annotation's types cannot be resolved, for example names
    imported under ``TYPE_CHECKING`` or classes local to a function. The
    marker name is taken from the source text, so no type needs to exist.
    ``ClassVar`` annotations never carry a marker.

    Args:
        source: The annotation as written in the class body.

    Raises:
        ValueError: If ``source`` mentions ``Inject`` but the dependency name
            cannot be read as a string literal.

    """
    try:
        expression = ast.parse(source.strip(), mode="eval").body
    except SyntaxError:
        if _MARKER_NAME in source:
            msg = f"Cannot parse annotation {source!r}."
            raise ValueError(msg) from None
        return None

    if isinstance(expression, ast.Subscript) and _node_name(expression.value) == _CLASS_VAR_NAME:
        return None

    markers: list[tuple[int, int, Inject]] = []
    for node in ast.walk(expression):
        if not isinstance(node, ast.Call) or _node_name(node.func) != _MARKER_NAME:
            continue
        arguments = [*node.args, *(keyword.value for keyword in node.keywords)]
        if len(arguments) != 1 or not isinstance(arguments[0], ast.Constant):
            msg = f"Dependency name in {source!r} is not a string literal."
            raise ValueError(msg)
        name = arguments[0].value
        if not isinstance(name, str):
            msg = f"Dependency name in {source!r} is not a string literal."
            raise ValueError(msg)
        markers.append((node.lineno, node.col_offset, Inject(name)))

    if not markers:
        return None
    return max(markers, key=lambda item: item[:2])[2]


def strip_annotated(annotation: Any) -> Any:
    """Return the bare type of an ``Annotated`` annotation."""
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


def _node_name(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


__all__ = [
    "INJECT_METADATA_KEY",
    "Inject",
    "find_inject_marker",
    "parse_inject_marker",
    "strip_annotated",
]
