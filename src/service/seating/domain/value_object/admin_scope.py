from typing import Optional

import attrs

from src.platform.exception.exceptions import ForbiddenError


@attrs.define(frozen=True)
class AdminScope:
    """What an authorized admin PIN may manage: one library, or all of them (master)"""

    library_id: Optional[str] = None

    @classmethod
    def master(cls) -> 'AdminScope':
        return cls(library_id=None)

    @property
    def is_master(self) -> bool:
        return self.library_id is None

    def can_manage(self, library_id: str) -> bool:
        return self.is_master or self.library_id == library_id

    def ensure_can_manage(self, library_id: str) -> None:
        if not self.can_manage(library_id):
            raise ForbiddenError('Admin PIN does not cover this library')
