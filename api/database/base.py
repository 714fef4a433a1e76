from api.models.base import Base  # noqa

# Import all the models, so that Base has them before being
# imported by Alembic.
# This ensures that Alembic's autogenerate can "see" the models.
from api.models.user import User  # noqa
from api.models.campaign import Campaign  # noqa
from api.models.order import Order  # noqa
from api.models.counter import Counter  # noqa
