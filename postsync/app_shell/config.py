import logging
import os
import sys
from pathlib import Path

from postsync.rules.models import Rules

logger = logging.getLogger(__name__)


def configure_logging(rules: Rules) -> None:
    logging.basicConfig(level=rules.logging.level, format=rules.logging.format)


def validate_ops_rules(rules: Rules, base_dir: Path) -> None:
    """
    Validate operational requirements before startup.
    Exits with status 1 when a required environment variable is missing.
    """
    ops = rules.ops

    missing = [env_var for env_var in ops.required_env if env_var not in os.environ]
    if missing:
        logger.critical("Missing required environment variables: %s", ", ".join(missing))
        sys.exit(1)

    migrations_dir = base_dir / rules.storage.migrations_dir
    if not migrations_dir.is_dir():
        logger.critical("Migrations directory not found: %s", migrations_dir)
        sys.exit(1)

    if rules.remote.token_env not in os.environ:
        logger.warning(
            "%s is not set; remote calls will fail on private sites", rules.remote.token_env
        )

    logger.debug("Configuration validated.")
