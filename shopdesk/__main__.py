"""
Run the API server: `python -m shopdesk` (or the `shopdesk` console script).

Host and port come from Settings; set PORT to change the listening port.
"""

import uvicorn

from shopdesk.config import settings


def main() -> None:
    uvicorn.run(
        "shopdesk.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
