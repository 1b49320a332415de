import time
from typing import Any

import litellm
import structlog

from palapizza.core.core import Service
from palapizza.core.modules.chat.models import ChatMessage
from palapizza.core.modules.chat.prompts import GREETING, build_system_prompt
from palapizza.errors import ConfigurationError, UpstreamError, ValidationError

logger = structlog.get_logger(__name__)

MAX_HISTORY_MESSAGES = 12


def trim_history(history: list[ChatMessage], message: str) -> list[ChatMessage]:
    """Keep the last MAX_HISTORY_MESSAGES non-empty turns before the new message.

    The widget sends the whole conversation including the greeting and the message
    being asked, both are dropped here.
    """
    turns = [m for m in history if m.content.strip()]
    if turns and turns[-1].role == "user" and turns[-1].content.strip() == message:
        turns = turns[:-1]
    if turns and turns[0].role == "assistant":
        turns = turns[1:]
    return turns[-MAX_HISTORY_MESSAGES:]


def extract_reply(response: Any) -> str:
    """Pull the assistant text out of a completion response, empty string if there is none."""
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    content = getattr(choices[0].message, "content", None)
    if isinstance(content, list):
        content = "\n".join(str(part.get("text", "")) if isinstance(part, dict) else str(part) for part in content)
    return (content or "").strip()


class ChatService(Service):
    """Relays customer questions to the chat-completion provider."""

    @property
    def greeting(self) -> str:
        return GREETING.format(restaurant_name=self.core.config.restaurant_name)

    async def reply(self, message: str, history: list[ChatMessage] | None = None) -> str:
        """Answer ``message`` given the previous turns of the conversation."""
        config = self.core.config
        if not config.llm_api_key:
            logger.error("llm_api_key_missing")
            raise ConfigurationError("Chiave API del bot non configurata sul server.")

        message = message.strip()
        if not message:
            raise ValidationError("Messaggio mancante nella richiesta.")

        messages = [{"role": "system", "content": build_system_prompt(config.restaurant_name)}]
        messages += [m.model_dump() for m in trim_history(history or [], message)]
        messages.append({"role": "user", "content": message})

        start_time = time.time()
        try:
            response = await litellm.acompletion(model=config.llm_model, messages=messages, api_key=config.llm_api_key)
        except Exception as e:
            logger.exception("chat_completion_failed", model=config.llm_model)
            raise UpstreamError("Errore interno nella risposta del bot.") from e
        duration_ms = int((time.time() - start_time) * 1000)

        usage = getattr(response, "usage", None)
        logger.info(
            "chat_completion",
            model=config.llm_model,
            duration_ms=duration_ms,
            history=len(messages) - 2,
            total_tokens=getattr(usage, "total_tokens", None),
        )

        reply = extract_reply(response)
        if not reply:
            logger.warning("chat_completion_empty", model=config.llm_model)
            raise UpstreamError("Risposta vuota dal modello.")
        return reply
