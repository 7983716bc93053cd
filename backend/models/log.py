# backend/models/log.py
from sqlalchemy import Column, Integer, String, DateTime, JSON, func
from database import Base

# Audit trail of registrations, check-ins and administrative actions.
# user_id is the acting user; kept as plain text so entries survive user deletion.
class Log(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)

    # Event timestamp and core action details
    ts = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    user_id = Column(String, nullable=True, index=True)
    action = Column(String(50), index=True)
    resource = Column(String(50), index=True)
    status = Column(String(20), index=True)
    ip = Column(String(64), nullable=True)

    # JSON container for flexible context data
    meta = Column(JSON, nullable=True)
