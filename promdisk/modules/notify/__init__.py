"""
Notify Module - Black Box Interface

Purpose: Deliver the rendered report to a chat webhook
Interface: send_to_webhook(), WebhookMessage, WebhookError
Hidden: HTTP transport, payload format

Can be replaced with different channels (Slack, email) behind the same interface.
"""

from .webhook import TextContent, WebhookError, WebhookMessage, send_to_webhook

__all__ = ["TextContent", "WebhookError", "WebhookMessage", "send_to_webhook"]
