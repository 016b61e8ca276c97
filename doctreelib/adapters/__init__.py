"""Concrete NodeStore implementations."""

from .memory import MemoryNode, MemoryNodeStore, NodeTypeRegistry

__all__ = [
    "MemoryNode",
    "MemoryNodeStore",
    "NodeTypeRegistry",
]
