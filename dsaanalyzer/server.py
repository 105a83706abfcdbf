"""
Server entry point for the DSA Analyzer backend.
"""
import logging

import uvicorn

from .config import configure_logging, get_settings


logger = logging.getLogger("dsaanalyzer")


def main():
    """Run the server."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting DSA Analyzer on %s:%d", settings.HOST, settings.PORT)

    uvicorn.run(
        "dsaanalyzer.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
