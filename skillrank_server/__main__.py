"""Run the API with uvicorn: python -m skillrank_server"""

import uvicorn

from .config import get_config


def main() -> None:
    config = get_config()
    uvicorn.run("skillrank_server.app:app", host=config.host, port=config.port)


if __name__ == "__main__":
    main()
