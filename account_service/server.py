"""
Run the API under uvicorn on the configured HOST and PORT:

  python -m account_service.server
"""

import sys

import uvicorn

from account_service.core.config import get_settings


def main() -> int:
    settings = get_settings()
    uvicorn.run(
        "account_service.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
