import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable

from sqlalchemy.orm import DeclarativeBase, declared_attr


def _json_safe(value: Any) -> Any:
     if isinstance(value, (datetime, date)):
          return value.isoformat()
     if isinstance(value, Decimal):
          return float(value)
     if hasattr(value, "value"):  # Enum
          return value.value
     return value


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Provides common configuration and mixins.
     """

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Automatically generate table name from class name.
          Example: PropertyImage -> property_images
          """
          name = re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()
          # Pluralize (simple version)
          if name.endswith('y'):
               return name[:-1] + 'ies'
          elif name.endswith('s'):
               return name + 'es'
          return name + 's'

     def to_dict(self, exclude: Iterable[str] = ()) -> Dict[str, Any]:
          """
          JSON-safe snapshot of the mapped columns, keyed by attribute name.
          Used for audit before/after records and exports.
          """
          skip = set(exclude)
          return {
               column.key: _json_safe(getattr(self, column.key))
               for column in self.__mapper__.column_attrs
               if column.key not in skip
          }
