from sqlalchemy import Boolean, Column, Integer, String, Text
from ..core.database import Base

class Banner(Base):
    """
    Main-page carousel banner, shown between start_date and end_date when set
    """
    __tablename__ = "banners"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    subtitle = Column(String)
    image = Column(Text)
    mobile_image = Column(Text)
    link = Column(String)
    link_text = Column(String)
    description = Column(Text)
    background_color = Column(String(20))
    text_color = Column(String(20))
    # ISO 8601 strings, stored exactly as the JSON files hold them
    start_date = Column(String)
    end_date = Column(String)
    sort_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
    position = Column(Integer, nullable=False, default=0, index=True)


class Partner(Base):
    __tablename__ = "partners"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    logo = Column(Text)
    link = Column(String)
    category = Column(String(50))
    description = Column(Text)
    sort_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
    position = Column(Integer, nullable=False, default=0, index=True)
