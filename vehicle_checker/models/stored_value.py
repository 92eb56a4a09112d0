from sqlalchemy import Column, DateTime, String, Text

from vehicle_checker.db.database import DeclarativeBase
from vehicle_checker.utils import time_utils


class StoredValue(DeclarativeBase):
    """ Represents one entry of the key/value store """

    __tablename__ = 'stored_values'

    # columns
    key = Column(String(64), primary_key=True)
    updated_at = Column(DateTime(timezone=True), default=time_utils.utc_now, nullable=False)
    value = Column(Text, nullable=False)
