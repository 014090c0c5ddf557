import logging
import os
from typing import Iterable, List, Optional

PACKAGE_LOGGER = "mempal"


def _qualify(name: str) -> str:
    name = name.strip()
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return name
    return f"{PACKAGE_LOGGER}.{name}"


def configure_logging(default_level: int = logging.INFO, debug_modules: Optional[Iterable[str]] = None) -> List[str]:
    """Configure root logger with a sane default format.

    Respects MEMPAL_LOG_LEVEL env var if present. Pipeline passes log their
    per-phase counts at DEBUG; to see only some of them without turning the
    whole tree up, name the modules in debug_modules or in the comma separated
    MEMPAL_DEBUG_MODULES (``dungeon.stairs`` and ``mempal.dungeon.stairs`` are
    equivalent). Returns the logger names switched to DEBUG.
    """
    level_name = os.getenv("MEMPAL_LOG_LEVEL")
    level = default_level
    if level_name:
        level = getattr(logging, level_name.upper(), default_level)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )

    names = list(debug_modules or ())
    names.extend(os.getenv("MEMPAL_DEBUG_MODULES", "").split(","))
    enabled: List[str] = []
    for name in names:
        if not name.strip():
            continue
        qualified = _qualify(name)
        # Child records reach the root handler regardless of the root level
        logging.getLogger(qualified).setLevel(logging.DEBUG)
        if qualified not in enabled:
            enabled.append(qualified)
    return enabled
