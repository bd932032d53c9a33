"""Run a command as one atomic unit.

Each command handler executes inside a single Protean Unit of Work, so all
repository writes it makes are committed together or not at all. When another
request commits the same aggregate first, saving our stale copy raises
``ExpectedVersionError``, the Unit of Work rolls back and Protean re-runs the
handler against the fresh state, as configured under
``[server.version_retry]`` in ``domain.toml``. A conflict that outlives those
retries, or a commit the database refuses, surfaces here as ``StorageFailure``.
"""

from protean.exceptions import ExpectedVersionError, TransactionError
from protean.utils.globals import current_domain
from sqlalchemy.exc import SQLAlchemyError

from storefront.errors import StorageFailure
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def conflict_attempts() -> int:
    """How many times a handler runs before a version conflict becomes a failure."""
    version_retry = current_domain.config.get("server", {}).get("version_retry", {})
    if not version_retry.get("enabled", True):
        return 1
    return 1 + max(0, int(version_retry.get("max_retries", 0)))


def process_atomically(command):
    """Process ``command`` synchronously and return the handler's result.

    Raises:
        StorageFailure: the unit could not be committed. Nothing was applied,
            so the whole call may safely be repeated.
    """
    command_name = command.__class__.__name__

    try:
        return current_domain.process(command, asynchronous=False)
    except ExpectedVersionError as exc:
        attempts = conflict_attempts()
        logger.error("atomic_conflict_exhausted", command=command_name, attempts=attempts)
        raise StorageFailure(
            {"_entity": [f"{command_name} conflicted with a concurrent update {attempts} time(s): {exc}"]}
        ) from exc
    except (TransactionError, SQLAlchemyError) as exc:
        logger.error("atomic_commit_failed", command=command_name, error=str(exc))
        raise StorageFailure({"_entity": [f"{command_name} could not be committed: {exc}"]}) from exc
