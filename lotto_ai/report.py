"""
Message rendering for a ``StatsDigest``.

``format_stats_message`` produces a Markdown summary for logs and the
console; ``build_final_message`` produces the Telegram HTML report.
"""
import html
import math
from datetime import datetime
from typing import Iterable, Optional

from lotto_ai.config import HIGHLIGHT_COUNT
from lotto_ai.stats import NumberStat, PairStat, StatsDigest

DISCLAIMER = "Note: the lottery is random. This is a statistical / entertainment analysis only."


def safe_html(text) -> str:
    """Escape text for Telegram's HTML parse mode."""
    return html.escape(str(text), quote=False)


def fmt_nums(nums: Iterable[int]) -> str:
    return " ".join(f"{n:02d}" for n in nums)


def fmt_recency(value) -> str:
    return "never" if math.isinf(value) else str(int(value))


def fmt_stats(items: Iterable[NumberStat], fields=("num", "count")) -> str:
    out = []
    for s in items:
        parts = []
        for f in fields:
            if f == "num":
                parts.append(f"{s.number}")
            elif f == "count":
                parts.append(f"({s.count})")
            elif f == "pct":
                parts.append(f"{s.pct:.2f}%")
            elif f == "z":
                parts.append(f"z={s.z:.2f}")
            elif f == "overdue":
                parts.append(f"overdue={fmt_recency(s.recency)}")
        out.append(" ".join(parts))
    return ", ".join(out)


def fmt_pairs(pairs: Iterable[PairStat]) -> str:
    return ", ".join(f"{p.a}-{p.b} ({p.count})" for p in pairs)


def format_stats_message(digest: StatsDigest, top: int = HIGHLIGHT_COUNT) -> str:
    """Markdown summary of the digest, ``top`` entries per ranking."""
    lines = [
        "📊 *Lotto Stats (Main numbers)*",
        f"• Draws analyzed: *{digest.total_draws}*",
        f"• Recent window: *{digest.window_size}*",
        f"• Expected count/number: *{digest.expected_per_number:.2f}* "
        f"(sd={digest.std_dev_per_number:.2f})",
        f"• Chi-square: *{digest.chi_square:.2f}* (df={digest.degrees_of_freedom})",
        "",
        f"🔥 *Hot (All {digest.total_draws})*: "
        f"{fmt_stats(digest.hot_all[:top], ('num', 'count', 'z'))}",
        f"🧊 *Cold (All {digest.total_draws})*: "
        f"{fmt_stats(digest.cold_all[:top], ('num', 'count', 'z'))}",
        "",
        f"⚡ *Hot (Last {digest.window_size})*: {fmt_stats(digest.hot_recent[:top])}",
        f"❄️ *Cold (Last {digest.window_size})*: {fmt_stats(digest.cold_recent[:top])}",
        "",
        f"⏳ *Most Overdue*: {fmt_stats(digest.overdue[:top], ('num', 'overdue', 'count'))}",
        "",
        f"⭐ *Strong*: hot {fmt_stats(digest.hot_strong[:3])} | "
        f"cold {fmt_stats(digest.cold_strong[:3])} | "
        f"chi-square {digest.chi_square_strong:.2f} (df={digest.degrees_of_freedom_strong})",
    ]
    if digest.top_pairs:
        lines.append("")
        lines.append(f"👥 *Top Pairs*: {fmt_pairs(digest.top_pairs)}")
    return "\n".join(lines) + "\n"


def _patterns_block(patterns: dict) -> str:
    lines = []
    oe = patterns.get("odd_even")
    if oe:
        odd, even = oe["most_common"]
        lines.append(f"• Odd/Even: most common {odd}/{even}, even share {oe['even_ratio']:.0%}")
    hl = patterns.get("high_low")
    if hl:
        low, high = hl["most_common"]
        lines.append(f"• Low/High (1-{hl['low_bound']}): most common {low}/{high}")
    sr = patterns.get("sum_range")
    if sr:
        lines.append(f"• Sum: mean {sr['stats']['mean']:.0f}, 70% zone "
                     f"{sr['zone_70'][0]}-{sr['zone_70'][1]}")
    return "\n".join(lines)


def build_final_message(digest: StatsDigest, patterns: Optional[dict] = None,
                        ai_text: str = "", now: Optional[datetime] = None,
                        top: int = HIGHLIGHT_COUNT) -> str:
    """Telegram HTML report: statistics, latest draw, AI summary and disclaimer."""
    now = now or datetime.now()
    latest = digest.latest

    header = f"🎯 <b>Lotto Weekly AI</b>\n🕒 {now.strftime('%Y-%m-%d %H:%M')}\n"

    stats = (
        f"\n<b>Statistical summary (last {digest.total_draws} draws)</b>\n"
        f"• Hot (main): {', '.join(str(s.number) for s in digest.hot_all[:top])}\n"
        f"• Cold (main): {', '.join(str(s.number) for s in digest.cold_all[:top])}\n"
        f"• Overdue: {', '.join(str(s.number) for s in digest.overdue[:top])}\n"
        f"• Strong hot: {', '.join(str(s.number) for s in digest.hot_strong[:3])}"
        f" | Strong cold: {', '.join(str(s.number) for s in digest.cold_strong[:3])}\n"
        f"• Chi-square: {digest.chi_square:.1f} (df={digest.degrees_of_freedom})"
        f" | Strong: {digest.chi_square_strong:.1f}\n"
    )
    if digest.top_pairs:
        stats += f"• Top pairs: {safe_html(fmt_pairs(digest.top_pairs[:5]))}\n"
    if patterns:
        stats += safe_html(_patterns_block(patterns)) + "\n"

    latest_line = (
        f"• Latest (#{latest.sequence_id}"
        f"{', ' + safe_html(latest.date) if latest.date else ''}): "
        f"{fmt_nums(latest.main_numbers)} | Strong: {latest.strong_number}\n"
    )

    if ai_text:
        ai_block = f"\n<b>AI analysis (Gemini)</b>\n{safe_html(ai_text)}"
    else:
        ai_block = "\n<b>AI analysis (Gemini)</b>\nNot available right now."

    disclaimer = f"\n\n<i>{safe_html(DISCLAIMER)}</i>"

    return header + stats + latest_line + ai_block + disclaimer


def build_error_message(error) -> str:
    return f"❌ <b>Lotto Weekly AI</b>\nError:\n<code>{safe_html(error)}</code>"
