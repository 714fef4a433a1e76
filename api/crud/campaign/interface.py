from abc import ABC, abstractmethod


class CampaignInterface(ABC):
    @abstractmethod
    async def create_campaign():
        pass

    @abstractmethod
    async def get_campaign():
        pass

    @abstractmethod
    async def list_campaigns():
        pass

    @abstractmethod
    async def update_campaign():
        pass

    @abstractmethod
    async def delete_campaign():
        pass
