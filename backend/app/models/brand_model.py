from sqlalchemy import Boolean, Column, Integer, String
from ..core.database import Base

class Brand(Base):
    __tablename__ = "brands"

    id = Column(String, primary_key=True, index=True)
    name_kr = Column(String)
    name_en = Column(String)
    logo = Column(String)  # URL or base64 data URI
    is_domestic = Column(Boolean, default=True)
    sort_order = Column(Integer, default=999)
    is_active = Column(Boolean, default=True)
    position = Column(Integer, nullable=False, default=0, index=True)
