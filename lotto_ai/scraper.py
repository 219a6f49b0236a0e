"""
Israel Lotto Results Scraper

Fetches recent draw results from Lottolyzer's history pages. The page layout
is not a stable contract: table rows are parsed first, then a regex over the
page text. Every result passes the same validation as the CSV loader.
Scraping is best effort; a failed page is reported and skipped.
"""
import re
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from lotto_ai.config import LOTTOLYZER_URL, MAIN_COUNT, MAIN_MAX, REQUEST_TIMEOUT, STRONG_MAX, USER_AGENT
from lotto_ai.loader import validate_draw
from lotto_ai.stats import DrawRecord

TEXT_PATTERN = re.compile(
    r"(\d{3,5})\s+(\d{4}-\d{2}-\d{2})\s+(\d{1,2}(?:\s*,\s*\d{1,2}){5})\s+(\d{1,2})"
)


def _parse_table_rows(soup: BeautifulSoup, max_number: int, strong_max: int) -> List[DrawRecord]:
    rows = soup.select("table.history-summary tbody tr")
    if not rows:
        rows = soup.select("tr[data-draw]")

    results = []
    for row in rows:
        cells = row.find_all("td")
        if len(cells) < 3:
            continue
        try:
            draw_no = int(cells[0].get_text(strip=True))
            date_str = cells[1].get_text(strip=True)
            nums_text = cells[2].get_text(strip=True)
            nums = [int(n) for n in re.split(r"[,\s]+", nums_text) if n.isdigit()]

            if len(nums) >= MAIN_COUNT + 1:
                main_nums, strong = nums[:MAIN_COUNT], nums[MAIN_COUNT]
            elif len(nums) == MAIN_COUNT and len(cells) > 3:
                main_nums, strong = nums, int(cells[3].get_text(strip=True))
            else:
                continue
        except (ValueError, IndexError):
            continue

        record = validate_draw(draw_no, date_str, sorted(main_nums), strong, max_number, strong_max)
        if record:
            results.append(record)
    return results


def _parse_text_content(text: str, max_number: int, strong_max: int) -> List[DrawRecord]:
    """Parse draw results from raw page text."""
    results = []
    for draw_no, date_str, nums_text, strong in TEXT_PATTERN.findall(text):
        nums = sorted(int(n.strip()) for n in nums_text.split(","))
        record = validate_draw(draw_no, date_str, nums, strong, max_number, strong_max)
        if record:
            results.append(record)
    return results


def parse_history_page(html: str, max_number: int = MAIN_MAX,
                       strong_max: int = STRONG_MAX) -> List[DrawRecord]:
    """Extract draws from one history page, in page order (newest first)."""
    soup = BeautifulSoup(html, "lxml")
    results = _parse_table_rows(soup, max_number, strong_max)
    if not results:
        results = _parse_text_content(soup.get_text(" "), max_number, strong_max)
    return results


def fetch_latest_draws(pages: int = 1, session: Optional[requests.Session] = None,
                       max_number: int = MAIN_MAX, strong_max: int = STRONG_MAX) -> List[DrawRecord]:
    """
    Fetch the most recent draws, newest first, de-duplicated by draw id.

    Network and HTTP failures are printed and the page skipped; an empty
    list means nothing usable was found.
    """
    session = session or requests.Session()
    headers = {"User-Agent": USER_AGENT}

    seen = set()
    results = []
    for page in range(1, pages + 1):
        url = LOTTOLYZER_URL.format(page=page)
        try:
            resp = session.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            print(f"[Scraper] Error on page {page}: {e}")
            continue
        if resp.status_code != 200:
            print(f"[Scraper] Page {page}: HTTP {resp.status_code}")
            continue

        page_draws = parse_history_page(resp.text, max_number, strong_max)
        for draw in page_draws:
            if draw.sequence_id not in seen:
                seen.add(draw.sequence_id)
                results.append(draw)
        print(f"[Scraper] Page {page}: found {len(page_draws)} draws")

    return results
