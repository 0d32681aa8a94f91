"""
Authentication provider interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class IAuthProvider(ABC):
    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """Verify a bearer token and return the user it identifies."""
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        pass
