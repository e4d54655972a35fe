"""In-memory user registry.

Without a database there is no users table to check against. Given no ids,
every user is accepted (the demo keeps working offline); given ids, only those
are registered.
"""

from collections.abc import Iterable


class InMemoryUserRegistry:
    def __init__(self, user_ids: Iterable[str] | None = None) -> None:
        self._user_ids: set[str] | None = set(user_ids) if user_ids else None

    async def user_exists(self, user_id: str) -> bool:
        if self._user_ids is None:
            return True
        return user_id in self._user_ids

    async def count_users(self) -> int:
        return len(self._user_ids) if self._user_ids else 0
