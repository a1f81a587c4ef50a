from sqlalchemy import Boolean, Column, Integer, String, Text
from ..core.database import Base

class FAQ(Base):
    __tablename__ = "faqs"

    id = Column(String, primary_key=True, index=True)
    question = Column(String(500), nullable=False)
    answer = Column(Text, nullable=False)
    is_active = Column(Boolean, default=True)
    sort_order = Column(Integer, default=999)
    position = Column(Integer, nullable=False, default=0, index=True)
