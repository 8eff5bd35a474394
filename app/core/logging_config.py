import logging

from app.core.config import config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or config.log_level).upper(), format=LOG_FORMAT)
    # sqlalchemy echo is controlled by Settings.db_echo
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
