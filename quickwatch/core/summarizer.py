"""
Module for summarizing transcripts using LLM models.
"""

from typing import List, Optional

from langchain_core.documents import Document
from langchain_core.prompts import ChatPromptTemplate
from langchain_text_splitters import RecursiveCharacterTextSplitter

from quickwatch.core.llm import create_chat_model, message_text, resolve_api_key
from quickwatch.core.prompts import summary_template, map_template, reduce_template
from quickwatch.core.transcript import full_text
from quickwatch.models.schemas import SummaryConfig, TranscriptItem
from quickwatch.utils.error_handling import UpstreamFailureError
from quickwatch.utils.logger import logging


class TranscriptSummarizer:
    """Class to handle transcript summarization operations."""

    def __init__(self, api_key: Optional[str] = None, provider: Optional[str] = None):
        """
        Initialize the summarizer with API key.

        Args:
            api_key: LLM provider API key (if None, will try to get from environment)
            provider: LangChain model provider, defaults to the configured one
        """
        self.provider = provider or SummaryConfig().provider
        self.api_key = resolve_api_key(self.provider, api_key)

    def summarize(self, transcript_text: str, config: SummaryConfig) -> str:
        """
        Summarize a transcript text.

        Args:
            transcript_text: Full transcript text to summarize
            config: Configuration for summarization

        Returns:
            Summarized text

        Raises:
            UpstreamFailureError: The model failed or returned nothing
        """
        # For longer transcripts, split into chunks
        text_splitter = RecursiveCharacterTextSplitter(
            chunk_size=config.chunk_size,
            chunk_overlap=config.chunk_overlap
        )
        docs = text_splitter.split_documents([Document(page_content=transcript_text)])

        llm = create_chat_model(config.model, self.provider, config.temperature, config.max_tokens)
        words = {"min_words": config.min_words, "max_words": config.max_words}

        try:
            # For shorter transcripts: use the "stuff" method
            if len(docs) <= 1:
                summary = self._invoke(llm, summary_template, text=transcript_text, **words)

            # For longer transcripts: use map-reduce
            else:
                logging.info(f"Summarizing transcript in {len(docs)} chunks")
                interim_summaries = [
                    self._invoke(llm, map_template, text=doc.page_content)
                    for doc in docs
                ]
                summary = self._invoke(
                    llm, reduce_template, summaries="\n\n".join(interim_summaries), **words
                )
        except Exception as e:
            logging.error(f"Error in summarization: {str(e)}")
            raise UpstreamFailureError("Failed to summarize transcript") from e

        summary = summary.strip()
        if not summary:
            raise UpstreamFailureError("Failed to summarize transcript")
        return summary

    def summarize_transcript(self, transcript: List[TranscriptItem], config: SummaryConfig) -> str:
        """
        Summarize a timed transcript.

        Args:
            transcript: Ordered transcript items
            config: Configuration for summarization

        Returns:
            Summarized text
        """
        return self.summarize(full_text(transcript), config)

    @staticmethod
    def _invoke(llm, template: str, **values) -> str:
        messages = ChatPromptTemplate.from_messages([("human", template)]).format_messages(**values)
        return message_text(llm.invoke(messages))
