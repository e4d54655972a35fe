# src/cb_user/domain/repository.py
"""UserRegistry Protocol — registration itself lives in the agent webapp."""

from typing import Protocol


class UserRegistryProtocol(Protocol):
    async def user_exists(self, user_id: str) -> bool: ...

    async def count_users(self) -> int: ...
