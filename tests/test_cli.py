import io
import os
import subprocess
import sys
from pathlib import Path

import pytest

from zalgo_codec import cli, zalgo_decode, zalgo_encode


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("zalgo_codec.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")
    for name in (
        "ZALGO_CODEC_CONFIG",
        "ZALGO_CODEC_STRIP_CR",
        "ZALGO_CODEC_TAB_WIDTH",
        "ZALGO_CODEC_FORCE",
        "ZALGO_CODEC_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def _exit_message(capsys: pytest.CaptureFixture[str], argv: list[str]) -> str:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)
    assert excinfo.value.code == 1
    return capsys.readouterr().err


def test_encode_text_joins_words_with_spaces(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["encode", "text", "Hello", "World"])
    out = capsys.readouterr().out
    assert out == zalgo_encode("Hello World") + "\n"


def test_decode_text(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["decode", "text", zalgo_encode("Zalgo")])
    assert capsys.readouterr().out == "Zalgo\n"


def test_decode_text_accepts_a_single_argument(capsys: pytest.CaptureFixture[str]) -> None:
    err = _exit_message(capsys, ["decode", "text", "E", "E"])
    assert "can only decode one grapheme cluster at a time" in err


def test_encode_reports_unencodable_input(capsys: pytest.CaptureFixture[str]) -> None:
    err = _exit_message(capsys, ["encode", "text", "caf\u00e9"])
    assert err.startswith("error: line 1 at column 4: can not encode non-ascii character")


def test_decode_reports_empty_input(capsys: pytest.CaptureFixture[str]) -> None:
    err = _exit_message(capsys, ["decode", "text", ""])
    assert "can not decode an empty string" in err


def test_out_path_writes_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_path = tmp_path / "out.txt"
    cli.main(["-o", str(out_path), "encode", "text", "Zalgo"])
    assert capsys.readouterr().out == ""
    assert out_path.read_text(encoding="utf-8") == zalgo_encode("Zalgo")


def test_out_path_refuses_to_overwrite_without_force(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out_path = tmp_path / "out.txt"
    out_path.write_text("keep me", encoding="utf-8")

    err = _exit_message(capsys, ["-o", str(out_path), "encode", "text", "Zalgo"])

    assert "already exists" in err
    assert "-f or --force" in err
    assert out_path.read_text(encoding="utf-8") == "keep me"


def test_force_overwrites(tmp_path: Path) -> None:
    out_path = tmp_path / "out.txt"
    out_path.write_text("replace me", encoding="utf-8")

    cli.main(["-o", str(out_path), "-f", "encode", "text", "Zalgo"])

    assert out_path.read_text(encoding="utf-8") == zalgo_encode("Zalgo")


def test_force_requires_out_path(capsys: pytest.CaptureFixture[str]) -> None:
    err = _exit_message(capsys, ["--force", "encode", "text", "Zalgo"])
    assert "--force can only be used together with --out-path" in err


def test_encode_file_ignores_carriage_returns(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "windows.txt"
    source.write_bytes(b"Zalgo\r\nHe comes!\r\n")

    cli.main(["encode", "file", str(source)])

    encoded = capsys.readouterr().out.rstrip("\n")
    assert zalgo_decode(encoded) == "Zalgo\nHe comes!\n"


def test_decode_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "message.zalgo"
    source.write_text(zalgo_encode("line one\nline two"), encoding="utf-8")

    cli.main(["decode", "file", str(source)])

    assert capsys.readouterr().out == "line one\nline two\n"


def test_missing_input_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    err = _exit_message(capsys, ["encode", "file", str(tmp_path / "absent.txt")])
    assert err.startswith("error:")


def test_wrap_then_unwrap(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "script.py"
    wrapped = tmp_path / "wrapped.py"
    source.write_text("x = 1\n", encoding="utf-8")

    cli.main(["-o", str(wrapped), "wrap", str(source)])
    cli.main(["unwrap", str(wrapped)])

    assert capsys.readouterr().out == "x = 1\n\n"


def test_missing_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    err = _exit_message(capsys, ["--config", str(tmp_path / "nope.yaml"), "encode", "text", "hi"])
    assert "Config file not found" in err


def test_tab_width_from_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("codec:\n  tab_width: 1\n")
    source = tmp_path / "tabs.txt"
    source.write_text("\tx", encoding="utf-8")

    cli.main(["--config", str(config_path), "encode", "file", str(source)])

    assert zalgo_decode(capsys.readouterr().out.rstrip("\n")) == " x"


def test_tabs_are_reported_by_default(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "tabs.txt"
    source.write_text("\tx", encoding="utf-8")

    err = _exit_message(capsys, ["encode", "file", str(source)])

    assert "'Horizontal Tab'" in err


def test_non_utf8_stdout_reports_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "stdout", io.TextIOWrapper(io.BytesIO(), encoding="ascii"))

    err = _exit_message(capsys, ["encode", "text", "hi"])

    assert err.startswith("error: the terminal can not display the result")
    assert "--out-path" in err


def test_ascii_terminal_exits_with_message(tmp_path: Path) -> None:
    env = dict(os.environ)
    env["PYTHONIOENCODING"] = "ascii"
    env["HOME"] = str(tmp_path)
    env["PYTHONPATH"] = os.pathsep.join(
        [str(Path(__file__).resolve().parents[1]), env.get("PYTHONPATH", "")]
    )

    result = subprocess.run(
        [sys.executable, "-m", "zalgo_codec.cli", "encode", "text", "hi"],
        env=env,
        capture_output=True,
        text=True,
    )

    assert result.returncode == 1
    assert "Traceback" not in result.stderr
    assert "use --out-path to save it to a file instead" in result.stderr
