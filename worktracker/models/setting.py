from sqlalchemy import Column, String, Text

from worktracker.db.session import Base


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
