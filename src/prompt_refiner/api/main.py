"""ASGI entrypoint."""

from prompt_refiner.api.app import create_app
from prompt_refiner.config import settings

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "prompt_refiner.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
