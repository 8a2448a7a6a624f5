"""Run the development proxy: python -m fusion_devserver"""

import uvicorn

from fusion_core import init_logging

from .app import create_app
from .config import settings


def main() -> None:
    """Start uvicorn in front of the configured backend."""
    init_logging(settings.log_level, debug=True)
    app = create_app(
        target=settings.target,
        static_dir=settings.static_dir,
        change_origin=settings.change_origin,
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
