# tests/test_cli.py
# How to run:
#   pytest -q

from tools.tickbus_cli import main, stress

def test_stress_dedups_refreshes():
    stats = stress(events=100, keys=5, capacity=1000)
    # 50 refreshes over 5 keys collapse to 5; 50 custom events kept
    assert stats["popped"] == 55
    assert stats["overflows"] == 0

def test_stress_reports_overflow():
    stats = stress(events=100, keys=100, capacity=30)
    assert stats["overflows"] == 3
    assert stats["popped"] == 10

def test_cli_stress_prints_summary(capsys):
    assert main(["stress", "--events", "10", "--keys", "2"]) == 0
    out = capsys.readouterr().out
    assert "Stress Summary" in out
    assert "Overflows     : 0" in out
