import sys

import structlog
import uvicorn
from pydantic import ValidationError

from stock_tracker.config import get_settings
from stock_tracker.logging_config import setup_logging

logger = structlog.get_logger()


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as exc:
        setup_logging()
        invalid = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
        if "finnhub_api_key" in invalid:
            logger.error("settings_invalid", message="FINNHUB_API_KEY environment variable is required")
        else:
            logger.error("settings_invalid", error=str(exc))
        sys.exit(1)

    uvicorn.run(
        "stock_tracker.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
