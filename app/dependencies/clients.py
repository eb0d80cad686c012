from __future__ import annotations

import os

from fastapi import Depends

from app.clients.ai_gateway import ChatCompletionClient
from app.core.config import Settings, get_settings


def get_chat_completion_client(settings: Settings = Depends(get_settings)) -> ChatCompletionClient:
    # the key is looked up on every request so rotating it needs no restart
    return ChatCompletionClient(
        settings.ai_gateway_url,
        model=settings.ai_model,
        temperature=settings.ai_temperature,
        max_tokens=settings.ai_max_tokens,
        api_key=os.environ.get(settings.ai_api_key_env),
    )
