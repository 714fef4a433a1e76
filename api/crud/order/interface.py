from abc import ABC, abstractmethod


class OrderInterface(ABC):
    @abstractmethod
    async def create_order():
        pass

    @abstractmethod
    async def get_order():
        pass

    @abstractmethod
    async def list_orders():
        pass

    @abstractmethod
    async def update_order():
        pass

    @abstractmethod
    async def delete_order():
        pass
