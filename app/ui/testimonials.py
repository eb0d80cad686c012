from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from app.clients.site import SiteClient, SiteClientError
from app.services.review_builder import star_count, star_glyphs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TestimonialCard:
    __test__ = False  # keep pytest from collecting this as a test class

    client_name: str
    project_type: str
    text: str
    stars: int

    @property
    def glyphs(self) -> str:
        return star_glyphs(self.stars)


class TestimonialsSection:
    """Read-only list of the most recent approved reviews.

    An empty result or a failed fetch hides the section entirely.
    """

    __test__ = False

    def __init__(self, client: SiteClient, *, limit: int | None = None) -> None:
        self._client = client
        self._limit = limit
        self.reviews: List[dict] = []
        self.is_loading = True

    def load(self) -> None:
        self.is_loading = True
        try:
            self.reviews = self._client.list_testimonials(self._limit)
        except SiteClientError as exc:
            logger.error("Error fetching reviews: %s", exc)
            self.reviews = []
        finally:
            self.is_loading = False

    def render(self) -> Optional[List[TestimonialCard]]:
        if self.is_loading or not self.reviews:
            return None
        return [
            TestimonialCard(
                client_name=review["client_name"],
                project_type=review["project_type"],
                text=review["generated_review"],
                stars=star_count(review.get("rating"), review.get("overall_experience")),
            )
            for review in self.reviews
        ]
