from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from app.clients.site import SiteClient, SiteClientError
from app.services.review_builder import PROJECT_TYPE_OPTIONS, build_review_fields, rating_label
from app.ui.notifications import ClipboardWriter, CopiedIndicator, Notifier, copy_text

logger = logging.getLogger(__name__)


class ReviewSubmissionForm:
    """Two-step review page: generate a testimonial from a star rating, then publish it.

    Once published the form is terminal; generating or publishing again does
    nothing.
    """

    def __init__(
        self,
        client: SiteClient,
        *,
        notifier: Notifier | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._client = client
        self.notifier = notifier or Notifier()

        self.client_name = ""
        self.client_email = ""
        self.project_type = ""
        self.optional_comment = ""

        self.rating = 5
        self.hovered_rating = 0

        self.generated_review = ""
        self.published: Optional[Dict[str, Any]] = None
        self.is_loading = False
        self.is_submitting = False
        self.submitted = False
        self._copied = CopiedIndicator(clock=clock) if clock else CopiedIndicator()

    # ------------------------------------------------------------------
    # star picker
    # ------------------------------------------------------------------
    def set_rating(self, stars: int) -> None:
        if not 0 <= stars <= 5:
            raise ValueError("rating must be between 0 and 5")
        self.rating = stars

    def hover(self, stars: int) -> None:
        self.hovered_rating = stars

    def leave(self) -> None:
        self.hovered_rating = 0

    @property
    def rating_label(self) -> str:
        return rating_label(self.hovered_rating or self.rating)

    def set_project_type(self, value: str) -> None:
        if value not in PROJECT_TYPE_OPTIONS:
            raise ValueError(f"{value!r} is not a known project type")
        self.project_type = value

    @property
    def copied(self) -> bool:
        return self._copied.active

    # ------------------------------------------------------------------
    # step 1: generate
    # ------------------------------------------------------------------
    def generate(self) -> bool:
        if self.submitted or self.is_loading:
            return False
        if not self.client_name.strip() or not self.project_type or self.rating == 0:
            self.notifier.error("Please fill in your name, project type, and rating")
            return False

        payload = build_review_fields(
            self.project_type,
            rating=self.rating,
            optional_comment=self.optional_comment,
        )

        self.is_loading = True
        try:
            review = self._client.generate_review(payload)
        except SiteClientError as exc:
            # earlier generated text, if any, stays in place
            logger.warning("Error generating review: %s", exc)
            self.notifier.error("Failed to generate review. Please try again.")
            return False
        finally:
            self.is_loading = False

        self.generated_review = review
        self.notifier.success("Review generated! You can now submit it.")
        return True

    # ------------------------------------------------------------------
    # step 2: publish
    # ------------------------------------------------------------------
    def publish(self) -> bool:
        if self.submitted or self.is_submitting:
            return False
        if not self.generated_review:
            self.notifier.error("Please generate a review first")
            return False

        payload = {
            "client_name": self.client_name,
            "client_email": self.client_email or None,
            "project_type": self.project_type,
            "rating": self.rating,
            "optional_comment": self.optional_comment or None,
            "generated_review": self.generated_review,
        }

        self.is_submitting = True
        try:
            self.published = self._client.publish_review(payload)
        except SiteClientError as exc:
            logger.warning("Error submitting review: %s", exc)
            self.notifier.error("Failed to submit review. Please try again.")
            return False
        finally:
            self.is_submitting = False

        self.submitted = True
        self.notifier.success("Thank you! Your review has been published.")
        return True

    def copy(self, writer: ClipboardWriter) -> bool:
        return copy_text(self.generated_review, writer, self._copied, self.notifier)
