from unittest.mock import MagicMock, patch

import pytest

from summarizer import NO_SUMMARY, build_prompt, clean_summary, summarize_paper


def _openai_client(content: str | None) -> MagicMock:
    mock_choice = MagicMock()
    mock_choice.message.content = content
    mock_response = MagicMock()
    mock_response.choices = [mock_choice]
    mock_client = MagicMock()
    mock_client.chat.completions.create.return_value = mock_response
    return mock_client


def test_clean_summary_strips_preamble_and_bullets() -> None:
    raw = "Here is the summary:\n* This paper studies graphs.\n• It proposes  a new model.\n"
    assert clean_summary(raw) == "This paper studies graphs. It proposes a new model."


def test_clean_summary_without_preamble_is_untouched() -> None:
    assert clean_summary("A plain paragraph.") == "A plain paragraph."


def test_clean_summary_only_strips_first_line_preamble() -> None:
    raw = "The method works well.\nResults: accuracy improves."
    assert clean_summary(raw) == "The method works well. Results: accuracy improves."


@pytest.mark.parametrize("raw", [None, "", "   \n"])
def test_clean_summary_empty(raw: str | None) -> None:
    assert clean_summary(raw) == NO_SUMMARY


def test_build_prompt_includes_metadata() -> None:
    prompt = build_prompt("Graph Nets", "We study graphs.", ["Ada", "Alan"], 2024)
    assert 'Title: "Graph Nets"' in prompt
    assert 'Authors: "Ada, Alan"' in prompt
    assert 'Year: "2024"' in prompt
    assert 'Abstract: "We study graphs."' in prompt
    assert "single concise paragraph" in prompt


def test_build_prompt_unknown_authors_and_year() -> None:
    prompt = build_prompt("Graph Nets", "We study graphs.")
    assert 'Authors: "Unknown"' in prompt
    assert 'Year: "Unknown"' in prompt


@pytest.mark.parametrize("title, summary", [("", "abstract"), ("title", "")])
def test_summarize_requires_title_and_summary(title: str, summary: str) -> None:
    with pytest.raises(ValueError, match="required"):
        summarize_paper(title, summary)


def test_summarize_raises_without_api_key() -> None:
    with patch.dict("os.environ", {}, clear=True):
        with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
            summarize_paper("Title", "Abstract")


def test_summarize_rejects_unknown_provider() -> None:
    with patch.dict("os.environ", {"SUMMARY_PROVIDER": "gemini"}):
        with pytest.raises(RuntimeError, match="Unsupported SUMMARY_PROVIDER"):
            summarize_paper("Title", "Abstract")


def test_summarize_with_openai() -> None:
    mock_client = _openai_client("Summary: Graphs are studied.\nA model is proposed.")

    with patch("summarizer.OpenAI", return_value=mock_client), \
         patch.dict("os.environ", {"OPENAI_API_KEY": "test-key", "SUMMARY_PROVIDER": "openai"}):
        result = summarize_paper("Graph Nets", "We study graphs.", ["Ada"], 2024)

    assert result == "Graphs are studied. A model is proposed."
    _, kwargs = mock_client.chat.completions.create.call_args
    assert 'Title: "Graph Nets"' in kwargs["messages"][0]["content"]


def test_summarize_empty_model_output() -> None:
    with patch("summarizer.OpenAI", return_value=_openai_client(None)), \
         patch.dict("os.environ", {"OPENAI_API_KEY": "test-key", "SUMMARY_PROVIDER": "openai"}):
        assert summarize_paper("Title", "Abstract") == NO_SUMMARY


def test_summarize_retries_then_fails() -> None:
    mock_client = MagicMock()
    mock_client.chat.completions.create.side_effect = ConnectionError("down")

    with patch("summarizer.OpenAI", return_value=mock_client), \
         patch.dict("os.environ", {"OPENAI_API_KEY": "test-key", "SUMMARY_PROVIDER": "openai"}):
        with pytest.raises(RuntimeError, match="Summary generation failed"):
            summarize_paper("Title", "Abstract")

    assert mock_client.chat.completions.create.call_count == 2


def test_summarize_with_anthropic() -> None:
    mock_block = MagicMock()
    mock_block.text = "A concise paragraph."
    mock_response = MagicMock()
    mock_response.content = [mock_block]
    mock_client = MagicMock()
    mock_client.messages.create.return_value = mock_response

    with patch("summarizer.anthropic.Anthropic", return_value=mock_client), \
         patch.dict("os.environ", {"ANTHROPIC_API_KEY": "test-key", "SUMMARY_PROVIDER": "anthropic"}):
        assert summarize_paper("Title", "Abstract") == "A concise paragraph."


def test_openai_settings_are_read_at_call_time() -> None:
    mock_client = _openai_client("A paragraph.")
    env = {
        "OPENAI_API_KEY": "test-key",
        "SUMMARY_PROVIDER": "openai",
        "OPENAI_MODEL": "gpt-from-dotenv",
        "OPENAI_TEMPERATURE": "0.7",
    }

    with patch("summarizer.OpenAI", return_value=mock_client), patch.dict("os.environ", env):
        summarize_paper("Title", "Abstract")

    _, kwargs = mock_client.chat.completions.create.call_args
    assert kwargs["model"] == "gpt-from-dotenv"
    assert kwargs["temperature"] == 0.7


def test_claude_model_is_read_at_call_time() -> None:
    mock_block = MagicMock()
    mock_block.text = "A paragraph."
    mock_client = MagicMock()
    mock_client.messages.create.return_value.content = [mock_block]
    env = {
        "ANTHROPIC_API_KEY": "test-key",
        "SUMMARY_PROVIDER": "anthropic",
        "CLAUDE_MODEL": "claude-from-dotenv",
    }

    with patch("summarizer.anthropic.Anthropic", return_value=mock_client), patch.dict("os.environ", env):
        summarize_paper("Title", "Abstract")

    _, kwargs = mock_client.messages.create.call_args
    assert kwargs["model"] == "claude-from-dotenv"
