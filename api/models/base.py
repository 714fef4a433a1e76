from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

# Constraint names match the ones alembic generates through op.f()
metadata = MetaData(naming_convention={
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
})

Base = declarative_base(metadata=metadata)
