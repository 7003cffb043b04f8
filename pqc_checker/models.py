from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class CheckResult(Base):
    __tablename__ = 'check_results'

    id = Column(Integer, primary_key=True)
    url = Column(String(2048), nullable=False, index=True)
    check_date = Column(DateTime, nullable=False, index=True)
    check_status = Column(String(50), nullable=False)
    error_message = Column(Text)

    security_state = Column(String(50))
    server = Column(String(255))
    transport = Column(String(100))
    key_exchange = Column(String(100))
    key_exchange_group = Column(String(100))
    cipher = Column(String(255))
    subject = Column(String(255))
    issuer = Column(String(255))
    valid_from = Column(String(30))  # ISO-8601 or "N/A", as reported
    valid_to = Column(String(30))
    pqc_detected = Column(Boolean)

    created_at = Column(DateTime, default=func.now())
