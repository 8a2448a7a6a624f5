"""Run the API server: python -m fusion_api"""

import uvicorn

from .config import settings


def main() -> None:
    """Start uvicorn with the configured host and port."""
    uvicorn.run("fusion_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
