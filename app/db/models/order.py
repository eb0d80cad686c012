# app/db/models/order.py
from sqlalchemy import Column, Integer, String, Text, DateTime

from app.db.base import Base, utcnow


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)

    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    whatsapp = Column(String, nullable=False)

    business_name = Column(String, nullable=False)
    niche = Column(String, nullable=False)
    website_goal = Column(String, nullable=False)
    website_goal_other = Column(String, nullable=True)

    key_features = Column(Text, nullable=True)
    special_requests = Column(Text, nullable=True)
    reference_style = Column(Text, nullable=True)

    status = Column(String, nullable=False, default="pending", server_default="pending")
    admin_notes = Column(Text, nullable=True)

    # bumped by SQLAlchemy on every UPDATE; writes must carry the version they read
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __mapper_args__ = {"version_id_col": version}
