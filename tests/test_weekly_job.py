import pytest

from conftest import load_script, make_draws
from lotto_ai.loader import save_draws


@pytest.fixture
def weekly_job(monkeypatch):
    for var in ("GEMINI_API_KEY", "TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID",
                "ADMIN_CHAT_ID", "GITHUB_EVENT_NAME", "LOTTO_CSV_PATH"):
        monkeypatch.delenv(var, raising=False)
    module = load_script("weekly_job")
    monkeypatch.setattr(module, "load_dotenv", lambda: None)
    return module


def test_dry_run_prints_report(weekly_job, tmp_path, capsys):
    path = tmp_path / "lotto.csv"
    save_draws(make_draws(60), str(path))

    code = weekly_job.main(["--csv", str(path), "--force", "--dry-run", "--window", "20"])

    assert code == 0
    out = capsys.readouterr().out
    assert "Draws analyzed: *60*" in out
    assert "Recent window: *20*" in out
    assert "<b>Lotto Weekly AI</b>" in out
    assert "Not available right now." in out


def test_sends_report_to_telegram(weekly_job, tmp_path, monkeypatch):
    path = tmp_path / "lotto.csv"
    save_draws(make_draws(30), str(path))
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "T")
    monkeypatch.setenv("ADMIN_CHAT_ID", "99")

    sent = []
    monkeypatch.setattr(weekly_job.telegram, "send_message",
                        lambda text, token, chat_id: sent.append((token, chat_id, text)) or True)

    assert weekly_job.main(["--csv", str(path), "--force"]) == 0
    assert sent[0][:2] == ("T", "99")
    assert "Statistical summary (last 30 draws)" in sent[0][2]


def test_failure_notifies_and_exits_1(weekly_job, tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "T")
    monkeypatch.setenv("TELEGRAM_CHAT_ID", "1")
    sent = []
    monkeypatch.setattr(weekly_job.telegram, "send_message",
                        lambda text, token, chat_id: sent.append(text) or True)

    code = weekly_job.main(["--csv", str(tmp_path / "missing.csv"), "--force"])

    assert code == 1
    assert "Job failed: Missing CSV file" in capsys.readouterr().out
    assert sent and sent[0].startswith("❌ <b>Lotto Weekly AI</b>")


def test_too_few_draws_fails(weekly_job, tmp_path):
    path = tmp_path / "lotto.csv"
    save_draws(make_draws(5), str(path))
    assert weekly_job.main(["--csv", str(path), "--force", "--dry-run"]) == 1


def test_last_zero_fails_cleanly(weekly_job, tmp_path, capsys):
    path = tmp_path / "lotto.csv"
    save_draws(make_draws(30), str(path))

    code = weekly_job.main(["--csv", str(path), "--force", "--dry-run", "--last", "0"])

    assert code == 1
    assert "Job failed: CSV parsed but has too few rows (0)" in capsys.readouterr().out


def test_outside_window_skips(weekly_job, monkeypatch, capsys):
    monkeypatch.setattr(weekly_job, "should_run", lambda now, event, force: False)
    assert weekly_job.main([]) == 0
    assert "Not scheduled time" in capsys.readouterr().out
