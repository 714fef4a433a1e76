from __future__ import annotations
from abc import ABC, abstractmethod

class UserInterface(ABC):
    @abstractmethod
    async def create_user():
        pass

    @abstractmethod
    async def get_user():
        pass

    @abstractmethod
    async def list_users():
        pass

    @abstractmethod
    async def update_user():
        pass

    @abstractmethod
    async def delete_user():
        pass
