import argparse

import pytest

from src.cli import main, month_year


class TestMonthYear:
    def test_parses_one_based_month(self):
        assert month_year("3/2025") == (2, "2025")

    @pytest.mark.parametrize("text", ["13/2025", "0/2025", "march", "3/"])
    def test_rejects_bad_input(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            month_year(text)


class TestMain:
    def test_prints_report(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", ["cli", "--price", "300000", "--start", "1/2024", "--years"])
        main()
        out = capsys.readouterr().out
        assert "Loan Summary" in out
        assert "$240,000.00" in out
        assert "$1,438.92" in out
        assert "Dec 2053" in out
        assert "Loan Years" in out

    def test_writes_csv(self, monkeypatch, tmp_path):
        path = tmp_path / "schedule.csv"
        monkeypatch.setattr("sys.argv", ["cli", "--price", "300000", "--start", "1/2024", "--csv", str(path)])
        main()
        lines = path.read_bytes().split(b"\r\n")
        assert lines[0].startswith(b"LoanYear,")
        assert len(lines) == 361

    def test_arm_preset_and_refinance(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", [
            "cli", "--price", "300000", "--start", "1/2024",
            "--arm", "5/1", "--arm-index-rate", "8",
            "--refi-at", "60", "--refi-rate", "5", "--refi-term", "25", "--refi-costs", "3000",
        ])
        main()
        out = capsys.readouterr().out
        assert "Refinance After Payment 60" in out
        assert "Break-even:" in out

    def test_arm_requires_index_rate(self, monkeypatch):
        monkeypatch.setattr("sys.argv", ["cli", "--price", "300000", "--arm", "5/1"])
        with pytest.raises(SystemExit):
            main()
