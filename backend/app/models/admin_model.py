from sqlalchemy import Column, Integer, String
from ..core.database import Base

class Admin(Base):
    __tablename__ = "admins"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash
    name = Column(String)
    position = Column(Integer, nullable=False, default=0, index=True)
