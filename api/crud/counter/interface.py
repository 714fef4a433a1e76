from abc import ABC, abstractmethod


class CounterInterface(ABC):
    @abstractmethod
    async def next_sequence():
        pass

    @abstractmethod
    async def generate_campaign_reference_id():
        pass

    @abstractmethod
    async def generate_order_reference_id():
        pass

    @abstractmethod
    async def clear_all_counters():
        pass
