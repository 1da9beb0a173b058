"""HTTP handler for RAG queries.

Handlers convert between request contexts, DTOs and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import logging

from fastapi import status
from pydantic import ValidationError

from rag_gateway.config import settings
from rag_gateway.dto import ErrorResponse, QueryRequest, format_validation_error
from rag_gateway.entities import HandlerResponse, RequestContext
from rag_gateway.services import RagService

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred processing your request"


class RagHandler:
    """HTTP handler for the RAG query endpoint.

    This handler delegates business logic to RagService
    and handles HTTP-specific concerns like:
    - Rejecting unsupported methods
    - Validating the body into a QueryRequest
    - Mapping outcomes to status codes

    Example:
        ```python
        handler = RagHandler(rag_service=service)
        endpoint = caching_middleware.wrap(handler.handle_query)
        response = await endpoint(request_context)
        ```
    """

    def __init__(self, rag_service: RagService, expose_errors: bool | None = None) -> None:
        """Initialize the RAG handler.

        Args:
            rag_service: The RAG service for business logic (required).
            expose_errors: Include exception text in 500 responses.
                Defaults to True outside production.
        """
        self._rag = rag_service
        self._expose_errors = not settings.is_production if expose_errors is None else expose_errors

    async def handle_query(self, request: RequestContext) -> HandlerResponse:
        """Handle POST /api/rag/query requests.

        Args:
            request: The incoming request context

        Returns:
            200 with answer and sources, 400 on invalid body,
            405 on wrong method, 500 on unexpected failure
        """
        if request.method.upper() != "POST":
            return self._error(
                status.HTTP_405_METHOD_NOT_ALLOWED,
                "Method not allowed. Please use POST.",
            )

        try:
            query = QueryRequest.model_validate(request.body)
        except ValidationError as e:
            return self._error(status.HTTP_400_BAD_REQUEST, format_validation_error(e))

        try:
            result = await self._rag.answer(query)
        except Exception as e:
            logger.exception("Error in RAG query")
            message = GENERIC_ERROR_MESSAGE
            if self._expose_errors and str(e):
                message = str(e)
            return self._error(status.HTTP_500_INTERNAL_SERVER_ERROR, message)

        return HandlerResponse(status_code=status.HTTP_200_OK, payload=result.model_dump())

    @staticmethod
    def _error(status_code: int, message: str) -> HandlerResponse:
        return HandlerResponse(status_code=status_code, payload=ErrorResponse(error=message).model_dump())
