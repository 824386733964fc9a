"""
Module for picking the highlights of a transcript with an LLM.

The model is asked for a bare JSON array but often wraps it in prose or
code fences, so the first well-formed array in the reply is used. A reply
that holds no usable array yields an empty result: a summary without key
moments beats failing the whole request.
"""

import json
from typing import Any, List, Optional, Union

from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError

from quickwatch.core.llm import create_chat_model, message_text, resolve_api_key
from quickwatch.core.prompts import prune_template, key_moments_template
from quickwatch.models.schemas import HighlightConfig, HighlightMode, KeyMoment, TranscriptItem
from quickwatch.utils.error_handling import UpstreamFailureError
from quickwatch.utils.logger import logging


def extract_json_array(text: str) -> Optional[list]:
    """
    Find the first well-formed JSON array in free text.

    Args:
        text: Model reply

    Returns:
        Parsed list, or None if the text holds no JSON array
    """
    decoder = json.JSONDecoder()
    position = text.find("[")
    while position != -1:
        try:
            value, _ = decoder.raw_decode(text, position)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, list):
            return value
        position = text.find("[", position + 1)
    return None


def format_indexed_transcript(transcript: List[TranscriptItem]) -> str:
    return "\n".join(f"[{i}] {item.text}" for i, item in enumerate(transcript))


def format_timed_transcript(transcript: List[TranscriptItem]) -> str:
    return "\n".join(
        f"[{item.start:.1f}-{item.end:.1f}] {item.text}" for item in transcript
    )


class HighlightSelector:
    """Class to handle highlight selection operations."""

    def __init__(self, api_key: Optional[str] = None, provider: Optional[str] = None):
        """
        Initialize the selector with API key.

        Args:
            api_key: LLM provider API key (if None, will try to get from environment)
            provider: LangChain model provider, defaults to the configured one
        """
        self.provider = provider or HighlightConfig().provider
        self.api_key = resolve_api_key(self.provider, api_key)

    def _ask(self, template: str, config: HighlightConfig, **values) -> str:
        llm = create_chat_model(config.model, self.provider, config.temperature, config.max_tokens)
        messages = ChatPromptTemplate.from_messages([("human", template)]).format_messages(**values)
        try:
            return message_text(llm.invoke(messages)).strip()
        except Exception as e:
            logging.error(f"Error in highlight selection: {str(e)}")
            raise UpstreamFailureError("Failed to select highlights") from e

    def prune_script(self, transcript: List[TranscriptItem], config: HighlightConfig) -> List[int]:
        """
        Pick the transcript lines worth keeping.

        Args:
            transcript: Ordered transcript items
            config: Configuration for highlight selection

        Returns:
            De-duplicated indices of lines to keep, in the order the model
            gave them; empty if the reply could not be parsed
        """
        if not transcript:
            return []

        reply = self._ask(prune_template, config, transcript=format_indexed_transcript(transcript))
        values = extract_json_array(reply)
        if values is None:
            logging.warning("No index array found in highlight reply")
            return []

        indices = []
        for value in values:
            if isinstance(value, bool) or not isinstance(value, int):
                continue
            if 0 <= value < len(transcript) and value not in indices:
                indices.append(value)
        return indices

    def identify_key_moments(
        self, transcript: List[TranscriptItem], config: HighlightConfig, max_moments: int = 5
    ) -> List[KeyMoment]:
        """
        Pick time-bounded key moments with a rationale for each.

        Items that do not validate as key moments are dropped one by one.

        Args:
            transcript: Ordered transcript items
            config: Configuration for highlight selection
            max_moments: How many moments to ask for

        Returns:
            Key moments in the order the model gave them; empty if the reply
            could not be parsed
        """
        if not transcript:
            return []

        reply = self._ask(
            key_moments_template, config,
            transcript=format_timed_transcript(transcript), max_moments=max_moments,
        )
        values = extract_json_array(reply)
        if values is None:
            logging.warning("No key moment array found in highlight reply")
            return []

        moments = []
        for value in values:
            if not isinstance(value, dict):
                continue
            try:
                moments.append(KeyMoment.model_validate(value))
            except ValidationError as e:
                logging.warning(f"Dropping malformed key moment {value!r}: {e.error_count()} errors")
        return moments

    def select(
        self, transcript: List[TranscriptItem], config: HighlightConfig
    ) -> Union[List[KeyMoment], List[int]]:
        """Pick highlights in the shape ``config.mode`` asks for."""
        if config.mode == HighlightMode.PRUNE:
            return self.prune_script(transcript, config)
        return self.identify_key_moments(transcript, config)
