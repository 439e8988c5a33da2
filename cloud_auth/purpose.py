"""Display copy for the onboarding purpose

The purpose only changes the wording shown to the user, never the
authentication behavior.
"""

from enum import Enum
from typing import NamedTuple, Union


class Purpose(str, Enum):
    BACKUP = "backup"
    PRIMARY = "primary"
    HYBRID = "hybrid"


class PurposeCopy(NamedTuple):
    title: str
    description: str


_COPY = {
    Purpose.BACKUP: PurposeCopy(
        title="Connect Cloud Storage for Backups",
        description="Your data will stay local, with encrypted backups stored in the cloud for safety.",
    ),
    Purpose.PRIMARY: PurposeCopy(
        title="Connect Cloud Database Storage",
        description="Your data will be stored in the cloud as your primary database, with local caching for speed.",
    ),
    Purpose.HYBRID: PurposeCopy(
        title="Connect Cloud Storage for Hybrid Mode",
        description="Your data will be intelligently synced between local and cloud storage.",
    ),
}

DEFAULT_COPY = PurposeCopy(
    title="Connect Cloud Storage",
    description="Connect to a cloud storage provider to sync your health data.",
)


def purpose_copy(purpose: Union[Purpose, str, None]) -> PurposeCopy:
    """Get title and description for a purpose

    Unrecognized or missing purposes fall back to generic copy.
    """
    try:
        return _COPY[Purpose(purpose)]
    except ValueError:
        return DEFAULT_COPY
