"""
Mock LLM module for contextpack.

This module provides an offline stand-in for provider LLMs, used when no API
key is configured or when --mock is passed.
"""

import logging
from typing import Sequence

from llama_index.core.base.llms.types import ChatMessage, ChatResponse, MessageRole


class MockLLM:
    """
    Mock LLM class for running without provider credentials.
    """

    def __init__(self, model="mock-model"):
        """
        Initialize the mock LLM.

        Args:
            model (str): Model name echoed back in responses.
        """
        self.model = model
        self.logger = logging.getLogger(__name__)

    def predict(self, prompt, **kwargs):
        """
        Mock prediction function.

        Args:
            prompt (str): Input prompt

        Returns:
            str: Mock response
        """
        self.logger.info(f"Mock LLM received prompt: {prompt[:50]}...")

        if "# CONTEXT DOCUMENTS" in prompt:
            file_count = prompt.count("## File: ")
            return (
                f"This is a mock response from {self.model} for a prompt "
                f"with {file_count} context file(s)."
            )
        return f"This is a mock response from {self.model} for testing purposes."

    async def achat(self, messages: Sequence[ChatMessage], **kwargs) -> ChatResponse:
        """
        Mock chat completion mirroring the llama-index LLM interface.

        Args:
            messages (Sequence[ChatMessage]): System and user messages.

        Returns:
            ChatResponse: Response wrapping the mock text.
        """
        user_text = "\n".join(
            message.content or "" for message in messages if message.role == MessageRole.USER
        )
        text = self.predict(user_text)
        return ChatResponse(
            message=ChatMessage(role=MessageRole.ASSISTANT, content=text),
            raw={"model": self.model, "mock": True},
        )
