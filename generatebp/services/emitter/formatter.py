"""Blueprint (Android.bp) formatting for module declarations."""

from __future__ import annotations

from typing import Any

from ...models.blueprint import ModuleDeclaration

INDENT = " " * 4


def tabs(indent: int) -> str:
    return INDENT * indent


def quote(value: str) -> str:
    return '"%s"' % value.replace("\\", "\\\\").replace('"', '\\"')


def write_blueprint_key_value(output: list[str], name: str, value: Any, indent: int = 1) -> None:
    """Append one ``name: value,`` property to ``output``.

    Lists keep their order. An empty list is written as ``[]`` so a module
    without edges still states it.
    """
    if isinstance(value, (list, tuple)):
        if not value:
            output.append(tabs(indent) + "%s: []," % name)
            return
        output.append(tabs(indent) + "%s: [" % name)
        output.extend(render_list_items([str(item) for item in value], indent + 1))
        output.append(tabs(indent) + "],")
        return
    output.append(tabs(indent) + "%s: %s," % (name, quote(str(value))))


def render_module(declaration: ModuleDeclaration) -> str:
    """Render a declaration as a Blueprint module block, without trailing newline."""
    output = ["%s {" % declaration.module_type]
    for key, value in declaration.properties():
        write_blueprint_key_value(output, key, value)
    output.append("}")
    return "\n".join(output)


def render_list_items(items: list[str], indent: int) -> list[str]:
    """Quoted, comma-terminated list entries, one per line."""
    return [tabs(indent) + "%s," % quote(item) for item in items]
