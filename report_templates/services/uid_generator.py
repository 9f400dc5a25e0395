"""
DICOM UID Generator

Generates study instance UIDs under a configured organisation root. A UID is
``<org_root>.<decimal value of a random UUID>``; with roots of at most 24
characters the result stays within the 64 characters DICOM allows.
"""

import re
from uuid import uuid4

from ..exceptions import InvalidArgumentError

MAX_UID_LENGTH = 64

MAX_ORG_ROOT_LENGTH = 24

# Dot separated numeric components, no leading zeros
UID_PATTERN = re.compile(r"^(0|[1-9][0-9]*)(\.(0|[1-9][0-9]*))*$")


def is_valid_uid(uid: str) -> bool:
    return len(uid) <= MAX_UID_LENGTH and UID_PATTERN.match(uid) is not None


class DicomUidGenerator:
    """Generator for globally unique DICOM UIDs"""

    def new_uid(self, org_root: str) -> str:
        """Return a new UID below ``org_root``

        Raises:
            InvalidArgumentError: if org_root is missing, blank, longer than
                24 characters or not a valid UID itself
        """
        if org_root is None:
            raise InvalidArgumentError.missing("org_root")
        if not org_root.strip():
            raise InvalidArgumentError("org_root cannot be empty", argument="org_root")
        if len(org_root) > MAX_ORG_ROOT_LENGTH:
            raise InvalidArgumentError(
                f"org root {org_root} exceeds the maximum length of {MAX_ORG_ROOT_LENGTH}",
                argument="org_root",
            )
        if not is_valid_uid(org_root):
            raise InvalidArgumentError(f"org root {org_root} is not a valid UID", argument="org_root")

        return f"{org_root}.{uuid4().int}"
