# services/school_admin/models/notices.py
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from shared.db import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=True)  # null = whole school

    school_class = relationship("SchoolClass", back_populates="events")


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=True)

    school_class = relationship("SchoolClass", back_populates="announcements")
