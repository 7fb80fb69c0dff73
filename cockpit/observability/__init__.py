"""
Observability module: structured logging with snapshot revision context.

Usage:
    from cockpit.observability import get_logger, RevisionContext

    logger = get_logger(__name__)

    with RevisionContext(snapshot.revision):
        logger.info("Scoring roster", extra={"people": len(snapshot.people)})
"""

from .logging import (
    HumanFormatter,
    JSONFormatter,
    RevisionContext,
    RevisionFilter,
    configure_logging,
    get_logger,
    get_revision,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "JSONFormatter",
    "HumanFormatter",
    # Revision
    "RevisionContext",
    "RevisionFilter",
    "get_revision",
]
