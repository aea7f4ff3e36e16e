import logging

import uvicorn

from .logging_config import setup_logging
from .settings import get_settings

logger = logging.getLogger(__name__)

def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Server is running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(
        "contact_service.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )

if __name__ == "__main__":
    main()
