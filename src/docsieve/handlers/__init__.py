# topmark:header:start
#
#   project      : DocSieve
#   file         : __init__.py
#   file_relpath : src/docsieve/handlers/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in statement handlers and their auto-registration."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import TYPE_CHECKING

from docsieve.config.logging import get_logger
from docsieve.handlers.registry import get_handler_registry

if TYPE_CHECKING:
    from docsieve.config.logging import DocsieveLogger
    from docsieve.handlers.registry import HandlerRegistry

logger: DocsieveLogger = get_logger(__name__)


def register_all_handlers() -> HandlerRegistry:
    """Import every handler module of this package so the built-ins register.

    Modules are imported in sorted order, which fixes the order in which
    matching handlers run for a statement. Importing twice is a no-op.

    Returns:
        HandlerRegistry: The process-wide registry.
    """
    package_dir = Path(__file__).parent
    for module_info in sorted(pkgutil.iter_modules([str(package_dir)]), key=lambda m: m.name):
        if not module_info.ispkg:
            # Importing the module runs its @register_handler decorators
            importlib.import_module(f"{__name__}.{module_info.name}")
    registry: HandlerRegistry = get_handler_registry()
    logger.debug("%d handler(s) registered: %s", len(registry), ", ".join(registry.names()))
    return registry
