"""
Tests for the transcript summarizer module.
"""

import os
import pytest
from unittest.mock import patch, MagicMock

from quickwatch.models.schemas import SummaryConfig
from quickwatch.core.summarizer import TranscriptSummarizer
from quickwatch.utils.error_handling import UpstreamFailureError


@pytest.fixture
def mock_langchain_model():
    """Fixture to mock the langchain chat model."""
    with patch('quickwatch.core.summarizer.create_chat_model') as mock_create_model:
        # Create mock model
        mock_model = MagicMock()

        # Configure invoke to return a mock response
        mock_response = MagicMock()
        mock_response.content = "This is a summarized transcript of the video."
        mock_model.invoke.return_value = mock_response

        # Make create_chat_model return our mock model
        mock_create_model.return_value = mock_model

        yield mock_model


@pytest.fixture
def summary_config():
    """Fixture to create a SummaryConfig object."""
    return SummaryConfig(
        model="gemini-2.0-flash",
        temperature=0.0,
        max_tokens=1024,
    )


@patch.dict(os.environ, {"GOOGLE_API_KEY": "test_api_key"})
def test_init_summarizer():
    """Test initializing the summarizer."""
    summarizer = TranscriptSummarizer(api_key="test_api_key")
    assert summarizer.api_key == "test_api_key"
    assert summarizer.provider == "google_genai"


@patch.dict(os.environ, {"GROQ_API_KEY": ""})
@patch('quickwatch.core.llm.config.GROQ_API_KEY', None)
def test_init_summarizer_without_key():
    """Test that a missing key is reported."""
    with pytest.raises(ValueError):
        TranscriptSummarizer(provider="groq")


def test_summarize_short_transcript(mock_langchain_model, summary_config):
    """Test summarizing a short transcript (single chunk)."""
    # Short transcript (will be processed as a single chunk)
    transcript_text = "This is a short test transcript."

    # Create summarizer and summarize
    summarizer = TranscriptSummarizer()
    summary = summarizer.summarize(transcript_text, summary_config)

    # Verify model was called once with the word range in the prompt
    mock_langchain_model.invoke.assert_called_once()
    prompt = mock_langchain_model.invoke.call_args[0][0][0].content
    assert "150-200 words" in prompt
    assert transcript_text in prompt

    # Verify result
    assert summary == "This is a summarized transcript of the video."


@patch('quickwatch.core.summarizer.RecursiveCharacterTextSplitter.split_documents')
def test_summarize_long_transcript(mock_split_docs, mock_langchain_model, summary_config):
    """Test summarizing a long transcript (multiple chunks)."""
    # Mock the text splitter to return multiple document chunks
    from langchain_core.documents import Document

    # Create some document chunks
    chunk1 = Document(page_content="This is the first part of a long transcript.")
    chunk2 = Document(page_content="This is the second part of a long transcript.")
    mock_split_docs.return_value = [chunk1, chunk2]

    # Long transcript (will be processed with map-reduce approach)
    long_transcript = "This is a really long transcript " * 100

    # Create summarizer and summarize
    summarizer = TranscriptSummarizer()
    summary = summarizer.summarize(long_transcript, summary_config)

    # One call per chunk, then the combining call
    assert mock_langchain_model.invoke.call_count == 3

    # Verify result
    assert summary == "This is a summarized transcript of the video."


def test_summarize_transcript_items(mock_langchain_model, summary_config, transcript):
    """Test summarizing a timed transcript."""
    summarizer = TranscriptSummarizer()
    summarizer.summarize_transcript(transcript, summary_config)

    prompt = mock_langchain_model.invoke.call_args[0][0][0].content
    assert "Welcome to the video. Today we look at fusion." in prompt


def test_summarize_model_error(mock_langchain_model, summary_config):
    """Test that model errors surface as upstream failures."""
    mock_langchain_model.invoke.side_effect = RuntimeError("service unavailable")

    summarizer = TranscriptSummarizer()
    with pytest.raises(UpstreamFailureError) as exc_info:
        summarizer.summarize("Some transcript.", summary_config)

    assert exc_info.value.message == "Failed to summarize transcript"


def test_summarize_empty_reply(mock_langchain_model, summary_config):
    """Test that an empty summary is treated as a failure."""
    mock_langchain_model.invoke.return_value.content = "   "

    summarizer = TranscriptSummarizer()
    with pytest.raises(UpstreamFailureError):
        summarizer.summarize("Some transcript.", summary_config)
