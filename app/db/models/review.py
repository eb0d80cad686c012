# app/db/models/review.py
from sqlalchemy import Column, Integer, String, Text, DateTime

from app.db.base import Base, utcnow


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)

    client_name = Column(String, nullable=False)
    client_email = Column(String, nullable=True)

    overall_experience = Column(String, nullable=False)
    project_type = Column(String, nullable=False)
    delivery = Column(String, nullable=False)
    communication = Column(String, nullable=False)
    optional_comment = Column(Text, nullable=True)
    would_recommend = Column(String, nullable=False)

    # model output, stored verbatim and never edited afterwards
    generated_review = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)   # 1..5

    # moderation: pending reviews stay hidden from the public testimonials
    status = Column(String, nullable=False, default="pending", server_default="pending")

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
