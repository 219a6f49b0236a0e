"""
Project-wide paths and constants.

Israel Lotto: 6 main numbers from 1-37 plus one strong number from 1-7.
Engine parameters live in ``lotto_ai.stats.StatsConfig``; everything here is
operational (file locations, endpoints, timeouts).
"""
import os

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.path.join(PROJECT_ROOT, "data")
CSV_PATH = os.path.join(DATA_DIR, "lotto.csv")

MAIN_COUNT = 6
MAIN_MAX = 37
STRONG_MAX = 7

LAST_N_DRAWS = 1000
MIN_DRAWS = 10
HIGHLIGHT_COUNT = 10

CSV_COLUMNS = ["draw_id", "date", "num1", "num2", "num3", "num4", "num5", "num6", "strong"]

REQUEST_TIMEOUT = 30
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

LOTTOLYZER_URL = "https://en.lottolyzer.com/history/israel/lotto/page/{page}/per-page/50/summary-view"

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
GEMINI_MODELS = ["gemini-2.5-flash", "gemini-2.0-flash", "gemini-1.5-flash"]
GEMINI_GENERATION_CONFIG = {
    "temperature": 0.35,
    "topP": 0.9,
    "maxOutputTokens": 450,
}

TELEGRAM_URL = "https://api.telegram.org/bot{token}/sendMessage"
TELEGRAM_MAX_LENGTH = 4096

TIMEZONE = "Asia/Jerusalem"
REPORT_DAYS = [0, 4]  # Monday=0, Friday=4
REPORT_HOURS = (7, 11)
