"""
Telegram delivery via the Bot API ``sendMessage`` method.
"""
import html
import re
from typing import List, Optional

import requests

from lotto_ai.config import REQUEST_TIMEOUT, TELEGRAM_MAX_LENGTH, TELEGRAM_URL
from lotto_ai.errors import NotifierError

TAG_RE = re.compile(r"<(/?)([a-zA-Z]+)[^<>]*>")
BAD_ENTITY_RE = re.compile(r"&(?!(?:amp|lt|gt|quot|#\d+);)")


def html_is_balanced(text: str) -> bool:
    """True when every tag in ``text`` is complete and closed in order, and no entity is cut."""
    stack = []
    for closing, name in TAG_RE.findall(text):
        name = name.lower()
        if not closing:
            stack.append(name)
        elif not stack or stack.pop() != name:
            return False
    rest = TAG_RE.sub("", text)
    return not stack and "<" not in rest and ">" not in rest and not BAD_ENTITY_RE.search(rest)


def strip_html(text: str) -> str:
    return html.unescape(TAG_RE.sub("", text))


def split_message(text: str, limit: int = TELEGRAM_MAX_LENGTH) -> List[str]:
    """Split on line boundaries so each chunk fits Telegram's length limit."""
    if len(text) <= limit:
        return [text]

    chunks = []
    current = ""
    for line in text.split("\n"):
        # a single line longer than the limit is hard-cut
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks


def send_message(text: str, token: Optional[str], chat_id: Optional[str],
                 parse_mode: Optional[str] = "HTML",
                 session: Optional[requests.Session] = None,
                 timeout: int = REQUEST_TIMEOUT) -> bool:
    """
    Send ``text`` to ``chat_id``. Returns False when credentials are missing.

    Long messages go out in several chunks. In HTML mode a chunk whose markup
    was cut by the split is sent as plain text with the tags removed.

    Raises
    ------
    NotifierError
        Transport failure, non-2xx status or ``ok: false`` from the API.
    """
    if not token or not chat_id:
        print("[Telegram] Not configured (missing TELEGRAM_BOT_TOKEN or TELEGRAM_CHAT_ID).")
        return False

    session = session or requests.Session()
    url = TELEGRAM_URL.format(token=token)

    for chunk in split_message(text):
        chunk_mode = parse_mode
        if parse_mode and parse_mode.upper() == "HTML" and not html_is_balanced(chunk):
            chunk, chunk_mode = strip_html(chunk), None

        payload = {
            "chat_id": chat_id,
            "text": chunk,
            "disable_web_page_preview": True,
        }
        if chunk_mode:
            payload["parse_mode"] = chunk_mode

        try:
            resp = session.post(url, json=payload, timeout=timeout)
        except requests.RequestException as e:
            raise NotifierError(f"Telegram send failed: {e}") from e

        if not resp.ok:
            raise NotifierError(f"Telegram send failed: {resp.status_code} {resp.text}")
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if body.get("ok") is False:
            raise NotifierError(f"Telegram send failed: {body.get('description', 'unknown error')}")

    return True
