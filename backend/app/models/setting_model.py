from sqlalchemy import Column, String, Text
from ..core.database import Base

class Setting(Base):
    """
    Site settings shown on public pages (hero text, contact numbers, ...)
    """
    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)


class CompanyInfo(Base):
    """
    Company details edited from the admin screen (name, address, licence no.)
    """
    __tablename__ = "company_info"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
