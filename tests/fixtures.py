"""Sample testimonials used to seed the reviews table in tests."""

from app.db.models.review import Review

SAMPLE_TESTIMONIALS = [
    {
        "client_name": "Sarah Mitchell",
        "project_type": "Website Development",
        "overall_experience": "Excellent",
        "delivery": "On Time",
        "communication": "Excellent",
        "would_recommend": "Yes",
        "rating": 5,
        "generated_review": "The new site came together quickly and looks fantastic. I would recommend this work to anyone.",
    },
    {
        "client_name": "James Chen",
        "project_type": "AI Automation",
        "overall_experience": "Very Good",
        "delivery": "On Time",
        "communication": "Excellent",
        "would_recommend": "Yes",
        "rating": 4,
        "generated_review": "Our support inbox now triages itself. Communication was excellent throughout, and I would recommend it.",
    },
    {
        "client_name": "Emily Rodriguez",
        "project_type": "Portfolio Site",
        "overall_experience": "Good",
        "delivery": "Flexible",
        "communication": "Good",
        "would_recommend": "Yes",
        "rating": None,
        "generated_review": "A clean portfolio that finally shows my work properly. I would happily recommend the process.",
    },
]


def seed_reviews(db, rows=SAMPLE_TESTIMONIALS, status="approved"):
    reviews = []
    for row in rows:
        review = Review(status=status, **row)
        db.add(review)
        db.commit()
        db.refresh(review)
        reviews.append(review)
    return reviews

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct horse battery staple"
