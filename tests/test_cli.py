import json
import subprocess
import sys
from pathlib import Path


SCRIPT = Path(__file__).resolve().parents[1] / "block_match.py"


def _write_registry(base: Path) -> Path:
    path = base / "known_blocks.json"
    payload = {
        "blocks": [
            "begin, push 1, end",
            "if, push 2, not, push 3, end",
            "if, push 2, push 3, end",
            "if, end",
        ]
    }
    path.write_text(json.dumps(payload, indent=2), "utf-8")
    return path


def _write_program(base: Path, text: str) -> Path:
    path = base / "program.txt"
    path.write_text(text, "utf-8")
    return path


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, str(SCRIPT), *args],
        capture_output=True,
        text=True,
    )


def test_cli_prints_listing(tmp_path: Path) -> None:
    registry = _write_registry(tmp_path)
    program = _write_program(
        tmp_path,
        "begin\n  if, push 2, push 3, end\n  if\n    if, end\n    push 1\n  end\nend\n",
    )

    result = _run(str(program), "--registry", str(registry))

    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert lines[0] == "block @1..4: matched #2 (if, push 2, push 3, end)"
    assert lines[1] == "block @6..7: matched #3 (if, end)"
    assert lines[2] == "block @5..9: not matched"
    assert lines[3] == "block @0..10: not matched"
    assert "blocks: 4 matched=2 unmatched=2" in result.stdout


def test_cli_emits_json(tmp_path: Path) -> None:
    registry = _write_registry(tmp_path)
    program = _write_program(tmp_path, "if, end")

    result = _run(str(program), "--registry", str(registry), "--json")

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["matches"] == [{"start": 0, "end": 1, "registry_idx": 3}]
    assert payload["summary"]["matched"] == 1


def test_cli_reports_malformed_program(tmp_path: Path) -> None:
    registry = _write_registry(tmp_path)
    program = _write_program(tmp_path, "begin, if, end")

    result = _run(str(program), "--registry", str(registry))

    assert result.returncode != 0
    assert "blocks were never closed, start positions: [0]" in result.stderr


def test_cli_rejects_missing_program(tmp_path: Path) -> None:
    result = _run(str(tmp_path / "absent.txt"))
    assert result.returncode != 0
    assert "missing input file" in result.stderr


def test_cli_rejects_program_that_is_not_utf8(tmp_path: Path) -> None:
    registry = _write_registry(tmp_path)
    program = tmp_path / "program.txt"
    program.write_bytes(b"if, end \xff")

    result = _run(str(program), "--registry", str(registry))

    assert result.returncode != 0
    assert "not valid UTF-8" in result.stderr
    assert "Traceback" not in result.stderr


def test_cli_rejects_registry_that_is_not_utf8(tmp_path: Path) -> None:
    registry = tmp_path / "known_blocks.json"
    registry.write_bytes(b'["if, end", "\xff"]')
    program = _write_program(tmp_path, "if, end")

    result = _run(str(program), "--registry", str(registry))

    assert result.returncode != 0
    assert "not valid UTF-8" in result.stderr
    assert "Traceback" not in result.stderr


def test_cli_rejects_directory_as_program(tmp_path: Path) -> None:
    registry = _write_registry(tmp_path)

    result = _run(str(tmp_path), "--registry", str(registry))

    assert result.returncode != 0
    assert "missing input file" in result.stderr
    assert "Traceback" not in result.stderr
