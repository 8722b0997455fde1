import json

from termchat.logger import LogLevel, RichLogger


def test_text_record_in_file(tmp_path):
    path = tmp_path / "app.log"
    logger = RichLogger(path)
    logger.log(LogLevel.INFO, "hello there")
    logger.close()
    text = path.read_text(encoding="utf-8")
    assert text.endswith("| hello there\n")
    assert " INFO " in text
    assert "test_text_record_in_file()" in text


def test_level_threshold(tmp_path):
    path = tmp_path / "app.log"
    logger = RichLogger(path)
    logger.set_level(LogLevel.ERROR)
    logger.log(LogLevel.WARNING, "dropped")
    logger.log(LogLevel.ERROR, "kept")
    logger.close()
    text = path.read_text(encoding="utf-8")
    assert "dropped" not in text
    assert "kept" in text


def test_json_mode_record(tmp_path):
    path = tmp_path / "app.log"
    logger = RichLogger(path, json_mode=True)
    logger.log(LogLevel.WARNING, "careful")
    logger.close()
    record = json.loads(path.read_text(encoding="utf-8").strip())
    assert record["level"] == "WARN"
    assert record["message"] == "careful"
    assert record["function"] == "test_json_mode_record"
    assert record["file"].endswith("test_logger.py")


def test_set_json_mode_switches_format(tmp_path):
    path = tmp_path / "app.log"
    logger = RichLogger(path)
    logger.set_json_mode(True)
    logger.log(LogLevel.CRITICAL, "boom")
    logger.close()
    record = json.loads(path.read_text(encoding="utf-8").strip())
    assert record["level"] == "CRIT"


def test_appends_to_existing_file(tmp_path):
    path = tmp_path / "app.log"
    for msg in ("first", "second"):
        logger = RichLogger(path)
        logger.log(LogLevel.DEBUG, msg)
        logger.close()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("first")


def test_console_output_is_colored(capsys):
    logger = RichLogger()
    logger.log(LogLevel.ERROR, "bad thing")
    out = capsys.readouterr().out
    assert out.startswith("\033[31m")
    assert out.endswith("\033[0m")
    assert "ERROR" in out
    assert "bad thing" in out