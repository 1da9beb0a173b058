"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from rag_gateway.services import RagService

    service = RagService.create(retriever=retriever, generator=generator)
    response = await service.answer(QueryRequest(query="What is osmosis?"))
    ```
"""

from .rag_service import RagService

__all__ = [
    "RagService",
]
