from __future__ import annotations

from typing import Dict, List

from app.schemas.review import GenerateReviewRequest

SYSTEM_PROMPT = """You are an AI that generates professional client reviews for a portfolio website. A client will provide their selections from a form and optionally a short comment.

Your task is to take the selected options and optional comment, and generate a polished, readable paragraph as a client testimonial. Include all selected options naturally in the text, include the optional comment if provided, and end with the recommendation statement.

Guidelines:
- Keep the tone professional yet warm
- Make it sound natural and authentic
- Include all form selections naturally in the flow
- If there's an optional comment, weave it in seamlessly
- Keep it to 2-3 sentences
- End with the recommendation naturally"""


def build_user_prompt(request: GenerateReviewRequest) -> str:
    return (
        "Generate a professional testimonial with these details:\n"
        f"- Overall Experience: {request.overallExperience}\n"
        f"- Project Type: {request.projectType}\n"
        f"- Delivery: {request.delivery}\n"
        f"- Communication: {request.communication}\n"
        f"- Optional Comment: {request.optionalComment or 'None provided'}\n"
        f"- Would Recommend: {request.wouldRecommend}"
    )


def build_messages(request: GenerateReviewRequest) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(request)},
    ]
