from .base import Base
from .user import User, UserRole, UserStatus
from .campaign import Campaign, CampaignStatus, CampaignType, Platform
from .order import Order, OrderStatus
from .counter import Counter
