# app/api/routes/generate_review.py
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from app.clients.ai_gateway import ChatCompletionClient
from app.dependencies.clients import get_chat_completion_client
from app.schemas.review import GenerateReviewRequest, GenerateReviewResponse
from app.services.exceptions import ServiceError
from app.services.review_builder import missing_fields
from app.services.review_prompt import build_messages

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["generate-review"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=CORS_HEADERS)


@router.options("/generate-review")
def generate_review_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/generate-review", response_model=GenerateReviewResponse)
async def generate_review(
    request: Request,
    client: ChatCompletionClient = Depends(get_chat_completion_client),
):
    try:
        payload = await request.json()
        if not isinstance(payload, dict):
            raise ValueError("request body must be a JSON object")

        if missing_fields(payload):
            return _error("Missing required fields", 400)

        comment = payload.get("optionalComment")
        fields = GenerateReviewRequest(
            overallExperience=str(payload["overallExperience"]),
            projectType=str(payload["projectType"]),
            delivery=str(payload["delivery"]),
            communication=str(payload["communication"]),
            optionalComment=str(comment) if comment else None,
            wouldRecommend=str(payload["wouldRecommend"]),
        )

        try:
            review = await client.complete(build_messages(fields))
        except ServiceError as exc:
            logger.warning("Review generation failed: %s", exc)
            return _error("Failed to generate review", 500)

        return JSONResponse({"review": review}, headers=CORS_HEADERS)
    except Exception:
        logger.exception("Error generating review")
        return _error("Internal server error", 500)
