"""One-paragraph paper summaries from an external text-generation service."""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Callable, Sequence

import anthropic
from openai import OpenAI

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_OPENAI_TEMPERATURE = "0.2"
DEFAULT_CLAUDE_MODEL = "claude-sonnet-4-5"
MAX_ATTEMPTS = 2
MAX_OUTPUT_TOKENS = 400
NO_SUMMARY = "No summary generated."

LOGGER = logging.getLogger(__name__)

# A leading "Here is a summary:" style line, up to its first colon.
_PREAMBLE_RE = re.compile(r"^[^\n:]*:\s*")
_BULLETS_RE = re.compile(r"[\n*•]+")
_WHITESPACE_RE = re.compile(r"\s+")

_INSTRUCTIONS = """Important instructions:
- Return only one cohesive paragraph.
- Do NOT include any bullet points, lists, headings, or enumerations.
- Do not include introductory phrases like "Given the title..." or "Based on the title...".
- Do not invent content unrelated to the title and abstract.
- Provide a clear, direct, and scientifically plausible summary."""


def summarize_paper(
    title: str,
    summary: str,
    authors: Sequence[str] | str | None = None,
    year: int | str | None = None,
) -> str:
    """Ask the configured provider (SUMMARY_PROVIDER) for a cleaned summary paragraph.

    Raises ValueError when title or summary is missing, RuntimeError when the
    provider is not configured or fails on every attempt.
    """
    if not title or not summary:
        raise ValueError("Title and summary are required.")

    provider = os.getenv("SUMMARY_PROVIDER", "openai").strip().lower()
    if provider not in _PROVIDERS:
        raise RuntimeError(f"Unsupported SUMMARY_PROVIDER: {provider!r}")

    key_var, call = _PROVIDERS[provider]
    api_key = os.getenv(key_var)
    if not api_key:
        raise RuntimeError(f"{key_var} environment variable is required")

    prompt = build_prompt(title, summary, authors, year)
    LOGGER.info("Summarizing paper with %s: %s", provider, title)
    last_error: Exception | None = None

    for attempt in range(1, MAX_ATTEMPTS + 1):
        try:
            return clean_summary(call(api_key, prompt))
        except Exception as exc:
            last_error = exc
            LOGGER.warning(
                "Summary via %s failed for title=%r on attempt %s/%s: %s",
                provider,
                title,
                attempt,
                MAX_ATTEMPTS,
                exc,
            )

    raise RuntimeError(f"Summary generation failed for title={title!r}: {last_error}")


def build_prompt(
    title: str,
    summary: str,
    authors: Sequence[str] | str | None = None,
    year: int | str | None = None,
) -> str:
    if isinstance(authors, str):
        author_text = authors
    elif authors:
        author_text = ", ".join(authors)
    else:
        author_text = "Unknown"

    lines = [
        "Summarize this academic paper in a single concise paragraph (5-10 lines). "
        "Only use the provided abstract if available; otherwise, infer from the title and authors.",
        "",
        f'Title: "{title}"',
        f'Authors: "{author_text}"',
        f'Year: "{year or "Unknown"}"',
    ]
    if summary.strip():
        lines.append(f'Abstract: "{summary}"')
    lines.extend(["", _INSTRUCTIONS])
    return "\n".join(lines)


def clean_summary(text: str | None) -> str:
    """Strip a leading preamble and flatten lists and newlines into one paragraph."""
    if not text or not text.strip():
        return NO_SUMMARY
    cleaned = _PREAMBLE_RE.sub("", text.strip(), count=1)
    cleaned = _BULLETS_RE.sub(" ", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    return cleaned or NO_SUMMARY


def _call_openai(api_key: str, prompt: str) -> str | None:
    client = OpenAI(api_key=api_key)
    response = client.chat.completions.create(
        model=os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
        temperature=float(os.getenv("OPENAI_TEMPERATURE", DEFAULT_OPENAI_TEMPERATURE)),
        max_completion_tokens=MAX_OUTPUT_TOKENS,
        messages=[{"role": "user", "content": prompt}],
    )
    return response.choices[0].message.content


def _call_claude(api_key: str, prompt: str) -> str | None:
    model = os.getenv("CLAUDE_MODEL", DEFAULT_CLAUDE_MODEL)
    client = anthropic.Anthropic(api_key=api_key)
    kwargs: dict[str, Any] = {
        "model": model,
        "max_tokens": MAX_OUTPUT_TOKENS,
        "messages": [{"role": "user", "content": prompt}],
    }
    LOGGER.debug("Calling Claude model=%s max_tokens=%s", model, MAX_OUTPUT_TOKENS)
    response = client.messages.create(**kwargs)
    return response.content[0].text if response.content else None


_PROVIDERS: dict[str, tuple[str, Callable[[str, str], str | None]]] = {
    "openai": ("OPENAI_API_KEY", _call_openai),
    "anthropic": ("ANTHROPIC_API_KEY", _call_claude),
}
