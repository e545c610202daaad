import re
import uuid

from sqlalchemy.orm import DeclarativeBase, declared_attr


def generate_uuid() -> str:
     """Default for UUID string primary keys."""
     return str(uuid.uuid4())


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Provides common configuration and mixins.
     """

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Automatically generate table name from class name.
          Example: GambarKos -> gambar_kos
          """
          return re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()
