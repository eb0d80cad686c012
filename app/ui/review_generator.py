"""Inline review generator: explicit selections in, generated text out.

Nothing is stored; the only thing a visitor can do with the result is copy it.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

from app.clients.site import SiteClient, SiteClientError
from app.services.review_builder import (
    COMMUNICATION_OPTIONS,
    DELIVERY_OPTIONS,
    EXPERIENCE_OPTIONS,
    PROJECT_TYPE_OPTIONS,
    RECOMMEND_OPTIONS,
    ReviewFields,
    build_review_fields,
)
from app.ui.notifications import ClipboardWriter, CopiedIndicator, Notifier, copy_text

logger = logging.getLogger(__name__)

FIELD_OPTIONS: Dict[str, tuple] = {
    "overall_experience": EXPERIENCE_OPTIONS,
    "project_type": PROJECT_TYPE_OPTIONS,
    "delivery": DELIVERY_OPTIONS,
    "communication": COMMUNICATION_OPTIONS,
    "would_recommend": RECOMMEND_OPTIONS,
}


class ReviewGeneratorWidget:
    def __init__(
        self,
        client: SiteClient,
        *,
        notifier: Notifier | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._client = client
        self.notifier = notifier or Notifier()
        self.selections: Dict[str, str] = {name: "" for name in FIELD_OPTIONS}
        self.optional_comment = ""
        self.generated_review = ""
        self.is_loading = False
        self._copied = CopiedIndicator(clock=clock) if clock else CopiedIndicator()

    def select(self, field: str, value: str) -> None:
        if field not in FIELD_OPTIONS:
            raise KeyError(field)
        if value not in FIELD_OPTIONS[field]:
            raise ValueError(f"{value!r} is not an option for {field}")
        self.selections[field] = value

    @property
    def copied(self) -> bool:
        return self._copied.active

    def generate(self) -> bool:
        if self.is_loading:
            return False
        if not all(self.selections.values()):
            self.notifier.error("Please fill in all required fields")
            return False

        payload = build_review_fields(
            self.selections["project_type"],
            explicit=ReviewFields(
                overall_experience=self.selections["overall_experience"],
                delivery=self.selections["delivery"],
                communication=self.selections["communication"],
                would_recommend=self.selections["would_recommend"],
            ),
            optional_comment=self.optional_comment,
        )

        self.is_loading = True
        try:
            review = self._client.generate_review(payload)
        except SiteClientError as exc:
            logger.warning("Error generating review: %s", exc)
            self.notifier.error("Failed to generate review. Please try again.")
            return False
        finally:
            self.is_loading = False

        self.generated_review = review
        self.notifier.success("Review generated successfully!")
        return True

    def copy(self, writer: ClipboardWriter) -> bool:
        return copy_text(self.generated_review, writer, self._copied, self.notifier)
