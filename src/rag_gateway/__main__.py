"""Run the API with uvicorn: ``python -m rag_gateway``."""

import uvicorn

from rag_gateway.config import settings


def main() -> None:
    uvicorn.run(
        "rag_gateway.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    main()
