from conftest import SAMPLE_CSV
from riceup.cli import main


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "predict" in capsys.readouterr().out


def test_types(capsys):
    assert main(["--data", str(SAMPLE_CSV), "types"]) == 0
    out = capsys.readouterr().out
    assert "KADIWA" in out
    assert "NFA_RICE" not in out


def test_series(capsys):
    assert main(["--data", str(SAMPLE_CSV), "series"]) == 0
    out = capsys.readouterr().out
    assert "Regular_Milled" in out
    assert "2024-09-01" in out


def test_stats(capsys):
    assert main(["--data", str(SAMPLE_CSV), "stats", "--type", "KADIWA", "--category", "P20"]) == 0
    out = capsys.readouterr().out
    assert "Records:  3" in out
    assert "20.00" in out


def test_stats_no_match(capsys):
    assert main(["--data", str(SAMPLE_CSV), "stats", "--category", "NoSuchCategory"]) == 0
    assert "No matching records" in capsys.readouterr().out


def test_predict(capsys):
    assert main(["--data", str(SAMPLE_CSV), "predict", "KADIWA", "Well_Milled", "--weeks", "2"]) == 0
    out = capsys.readouterr().out
    assert "KADIWA / Well_Milled" in out
    assert "downward" in out


def test_predict_failure_exit_code(capsys):
    assert main(["--data", str(SAMPLE_CSV), "predict", "LOCAL", "Brown"]) == 1
    assert "Prediction failed" in capsys.readouterr().out


def test_predict_bad_horizon_exit_code(capsys):
    assert main(["--data", str(SAMPLE_CSV), "predict", "LOCAL", "Special", "--weeks", "60"]) == 1
    assert "weeks_ahead must be between 1 and 52" in capsys.readouterr().out
