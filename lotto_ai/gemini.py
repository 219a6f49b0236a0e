"""
Gemini summary of a ``StatsDigest``.

Builds a short analyst prompt from the digest and calls the Generative
Language API (``generateContent``), trying a list of models in order until
one answers. A failed summary never fails the weekly job: ``summarize``
returns an empty string and the report says the AI block is unavailable.
"""
from typing import Optional, Sequence

import requests

from lotto_ai.config import GEMINI_GENERATION_CONFIG, GEMINI_MODELS, GEMINI_URL, HIGHLIGHT_COUNT, REQUEST_TIMEOUT
from lotto_ai.errors import SummaryError
from lotto_ai.stats import StatsDigest


def _fmt_counts(items) -> str:
    return ", ".join(f"{s.number}({s.count})" for s in items)


def build_prompt(digest: StatsDigest, patterns: Optional[dict] = None,
                 language: str = "Hebrew", top: int = HIGHLIGHT_COUNT) -> str:
    """Concise analyst prompt. The model is told the lottery is random."""
    latest = digest.latest
    lines = [
        f"You are a data analyst. Write a very short summary in {language} of these lottery "
        "statistics (the lottery is random, no win is promised).",
        f"The data covers the last {digest.total_draws} draws.",
        "",
        f"Latest draw (#{latest.sequence_id}, {latest.date or 'unknown date'}): "
        f"numbers {', '.join(str(n) for n in latest.main_numbers)} | strong {latest.strong_number}",
        "",
        f"Hot main numbers (high frequency): {_fmt_counts(digest.hot_all[:top])}",
        f"Cold main numbers (low frequency): {_fmt_counts(digest.cold_all[:top])}",
        f"Hot in the last {digest.window_size} draws: {_fmt_counts(digest.hot_recent[:top])}",
        f"Most overdue: {', '.join(str(s.number) for s in digest.overdue[:top])}",
        f"Hot strong: {_fmt_counts(digest.hot_strong[:3])}",
        f"Cold strong: {_fmt_counts(digest.cold_strong[:3])}",
        f"Chi-square deviation main: {digest.chi_square:.1f} (df={digest.degrees_of_freedom})"
        f" | strong: {digest.chi_square_strong:.1f} (df={digest.degrees_of_freedom_strong})",
    ]
    if digest.top_pairs:
        lines.append("Top pairs: " + ", ".join(f"{p.a}-{p.b}({p.count})" for p in digest.top_pairs[:5]))
    if patterns:
        oe = patterns.get("odd_even")
        if oe:
            lines.append(f"Most common odd/even split: {oe['most_common'][0]}/{oe['most_common'][1]}")
        hl = patterns.get("high_low")
        if hl:
            lines.append(f"Most common low/high split: {hl['most_common'][0]}/{hl['most_common'][1]}")
    lines += [
        "",
        "Answer requirements:",
        "1) One short title.",
        "2) 3 bullet points on the statistics (hot/cold and what it means in practice).",
        "3) One warning line: the lottery is random.",
        "4) Be short, sharp and analytical.",
    ]
    return "\n".join(lines)


def generate_content(prompt: str, api_key: str, model: str,
                     session: Optional[requests.Session] = None,
                     timeout: int = REQUEST_TIMEOUT) -> str:
    """
    Single ``generateContent`` call.

    Raises
    ------
    SummaryError
        Transport failure, non-2xx status or an empty answer.
    """
    session = session or requests.Session()
    body = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": GEMINI_GENERATION_CONFIG,
    }
    try:
        resp = session.post(
            GEMINI_URL.format(model=model),
            json=body,
            headers={"Content-Type": "application/json", "x-goog-api-key": api_key},
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise SummaryError(f"Gemini request failed ({model}): {e}") from e

    try:
        payload = resp.json()
    except ValueError:
        payload = None

    if not resp.ok:
        err = (payload or {}).get("error") or {}
        message = err.get("message") or f"HTTP {resp.status_code}"
        code = err.get("code") or resp.status_code
        status = err.get("status") or "ERROR"
        raise SummaryError(f"Gemini error ({code} {status}): {message}")

    candidates = (payload or {}).get("candidates") or []
    content = (candidates[0].get("content") or {}) if candidates else {}
    parts = content.get("parts") or []
    text = "\n".join(p["text"] for p in parts if p.get("text")).strip()
    if not text:
        raise SummaryError(f"Gemini returned an empty answer ({model})")
    return text


def summarize(digest: StatsDigest, api_key: Optional[str], patterns: Optional[dict] = None,
              models: Sequence[str] = GEMINI_MODELS, session: Optional[requests.Session] = None,
              language: str = "Hebrew") -> str:
    """First non-empty summary from ``models`` in order; ``""`` if none answers."""
    if not api_key:
        print("[Gemini] API key not configured (GEMINI_API_KEY missing).")
        return ""

    prompt = build_prompt(digest, patterns, language)
    for model in models:
        try:
            text = generate_content(prompt, api_key, model, session=session)
        except SummaryError as e:
            print(f"[Gemini] Failed with model {model}: {e}")
            continue
        print(f"[Gemini] OK with model: {model}")
        return text

    print("[Gemini] Analysis failed (all models).")
    return ""
