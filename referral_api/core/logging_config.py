import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the process. Called once by the entry point."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQL echo is controlled by DB_ECHO, keep the engine logger quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
