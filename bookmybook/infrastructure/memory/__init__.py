"""
Memory Layer - Process-local implementations of ports (local runs and tests).
"""

from bookmybook.infrastructure.memory.in_memory_document_store import (
    InMemoryDocumentStore,
)

__all__ = [
    "InMemoryDocumentStore",
]
