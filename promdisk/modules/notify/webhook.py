"""
Chat webhook delivery.

Messages use the group-robot text format:
``{"msgtype": "text", "text": {"content": "..."}}``
"""

import logging
from typing import Optional

import requests
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class WebhookError(Exception):
    """Webhook delivery failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TextContent(BaseModel):
    """Body of a text message."""

    content: str = Field(..., description="Message text")


class WebhookMessage(BaseModel):
    """Text message accepted by the chat webhook."""

    msgtype: str = Field(default="text", description="Message type")
    text: TextContent

    @classmethod
    def from_text(cls, content: str) -> "WebhookMessage":
        return cls(text=TextContent(content=content))


def send_to_webhook(
    webhook_url: str,
    message: WebhookMessage,
    timeout: int = DEFAULT_TIMEOUT,
) -> None:
    """
    POST a message to the webhook. No retries.

    Raises:
        WebhookError: On transport failure or a non-200 response
    """
    try:
        response = requests.post(
            webhook_url,
            json=message.model_dump(),
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        raise WebhookError(f"Failed to send message: {e}") from e

    if response.status_code != 200:
        raise WebhookError(
            f"Message delivery failed, status code: {response.status_code}",
            status_code=response.status_code,
        )

    logger.debug(f"Webhook accepted message: {response.text[:200]}")
