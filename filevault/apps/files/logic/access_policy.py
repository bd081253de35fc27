"""Access policy for file operations.

Pure decisions over (identity, record, operation). Rules, first match
wins:

1. anonymous callers are denied everything
2. admins are allowed everything
3. listing and uploading are allowed (listing is scoped to own files)
4. download and delete are allowed on records the caller owns
5. everything else is denied
"""

import enum
import logging

from filevault.apps.accounts.logic.identity import Actor, Identity
from filevault.apps.files.exceptions import AccessDeniedError
from filevault.apps.files.models import FileRecord

logger = logging.getLogger(__name__)


class Operation(enum.StrEnum):
    """File operations subject to the access policy."""

    LIST = 'list'
    UPLOAD = 'upload'
    DOWNLOAD = 'download'
    DELETE = 'delete'


class Decision(enum.Enum):
    """Outcome of a policy check."""

    ALLOW = 'allow'
    DENY = 'deny'


_UNSCOPED_OPERATIONS = frozenset((Operation.LIST, Operation.UPLOAD))


def decide(
    identity: Actor,
    record: FileRecord | None,
    operation: Operation,
) -> Decision:
    """Decide whether identity may perform operation on record.

    Args:
        identity: Caller identity or ANONYMOUS.
        record: Target record, None for list and upload.
        operation: Requested operation.

    Returns:
        Decision.ALLOW or Decision.DENY.
    """
    if not isinstance(identity, Identity):
        return Decision.DENY
    if identity.is_admin:
        return Decision.ALLOW
    if operation in _UNSCOPED_OPERATIONS:
        return Decision.ALLOW
    if record is not None and record.owner_id == identity.user_id:
        return Decision.ALLOW
    return Decision.DENY


def check(
    identity: Actor,
    record: FileRecord | None,
    operation: Operation,
) -> None:
    """Raise if the policy denies the operation.

    Args:
        identity: Caller identity or ANONYMOUS.
        record: Target record, None for list and upload.
        operation: Requested operation.

    Raises:
        AccessDeniedError: If the decision is DENY.
    """
    if decide(identity, record, operation) is Decision.ALLOW:
        return

    file_id = record.pk if record is not None else None
    logger.warning(
        'Access denied: %s by %r (file ID: %s)',
        operation,
        identity,
        file_id,
    )
    raise AccessDeniedError(identity, operation, file_id)
