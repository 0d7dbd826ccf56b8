"""ASGI application entrypoint.

Run with `uvicorn product_api.api.main:app` or `python -m product_api.api.main`.
"""

from __future__ import annotations

import uvicorn

from product_api.api.api_config import get_api_config
from product_api.api.app import create_app

app = create_app()


def main() -> None:
    config = get_api_config()
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
