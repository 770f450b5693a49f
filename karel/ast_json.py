"""JSON serialization for Karel outlines.

This module converts the outline dataclasses produced by
`karel.parser.parse_outline` into plain dict/list structures suitable for
JSON encoding.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import Block, Instruction, Outline, Procedure


def outline_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, list):
        return [outline_to_obj(item) for item in node]
    if isinstance(node, Outline):
        return {"type": "Outline", "procedures": outline_to_obj(node.procedures)}
    if isinstance(node, Procedure):
        return {
            "type": "Procedure",
            "name": node.name,
            "position": node.position,
            "end": node.end,
            "body": outline_to_obj(node.body),
        }
    if isinstance(node, Block):
        obj: Dict[str, Any] = {
            "type": "Block",
            "kind": node.kind.value,
            "position": node.position,
            "end": node.end,
            "body": outline_to_obj(node.body),
        }
        if node.argument is not None:
            obj["argument"] = node.argument
        return obj
    if isinstance(node, Instruction):
        obj = {"type": "Instruction", "command": node.command.value, "position": node.position}
        if node.argument is not None:
            obj["argument"] = node.argument
        return obj
    raise TypeError(f"Unsupported outline node: {type(node).__name__}")
