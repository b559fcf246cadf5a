import logging
import sys

from energia_livre.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    """Configura o logging raiz uma única vez (stdout, nível vindo de LOG_LEVEL)."""
    root = logging.getLogger()
    if getattr(root, "_energia_livre_configured", False):
        return

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root.handlers = [handler]
    root.setLevel(level)

    # SQL do SQLAlchemy só em DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(logging.DEBUG if level == logging.DEBUG else logging.WARNING)
    root._energia_livre_configured = True
