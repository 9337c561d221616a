"""Test the command-line interface."""

import os
import subprocess
import sys
from pathlib import Path

import lox
import lox.cli


SRC = Path(__file__).parent.parent / "src"


def run_cli(*args, input=None):
    """Run `python -m lox` in a subprocess."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "lox", *args],
        capture_output=True,
        text=True,
        input=input,
        env=env,
    )


def test_cli_runs_script(tmp_path):
    script = tmp_path / "hello.lox"
    script.write_text('var who = "world";\nprint "hello " + who;\n')

    result = run_cli(str(script))

    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert result.stdout == "hello world\n"


def test_cli_eval():
    result = run_cli("-e", "print 6 * 7;")
    assert result.returncode == 0
    assert result.stdout == "42\n"


def test_cli_static_error_exit(tmp_path):
    script = tmp_path / "bad.lox"
    script.write_text("print 1;\nprint ;\n")

    result = run_cli(str(script))

    assert result.returncode == 65
    assert result.stdout == ""
    assert result.stderr == "[line 2] Error at ';': Expect expression.\n"


def test_cli_runtime_error_exit():
    result = run_cli("-e", 'print "a"; print -"b"; print "c";')
    assert result.returncode == 70
    assert result.stdout == "a\nc\n"
    assert result.stderr == "Operand must be a number.\n[line 1]\n"


def test_cli_missing_file(tmp_path):
    result = run_cli(str(tmp_path / "missing.lox"))
    assert result.returncode == 66
    assert "Could not read" in result.stderr


def test_cli_usage_errors():
    result = run_cli("one.lox", "two.lox")
    assert result.returncode == 64
    assert "usage:" in result.stderr

    result = run_cli("--bogus")
    assert result.returncode == 64


def test_cli_repl_from_stdin():
    result = run_cli(input="var a = 3;\na + 4\n")
    assert result.returncode == 0
    assert "7\n" in result.stdout


def test_main_dump_tokens(capsys):
    status = lox.cli.main(["-e", "print 1;", "--tokens"])
    out = capsys.readouterr().out
    assert status == lox.EXIT_OK
    assert out.splitlines() == [
        "1:1 PRINT print None",
        "1:7 NUMBER 1 1.0",
        "1:8 SEMICOLON ; None",
        "1:9 EOF  None",
    ]


def test_main_dump_ast(capsys):
    status = lox.cli.main(["-e", "var a = 1 + 2 * 3;", "--ast"])
    assert status == lox.EXIT_OK
    assert capsys.readouterr().out == "(var a (+ 1 (* 2 3)))\n"


def test_main_dump_rpn(capsys):
    status = lox.cli.main(["-e", "(1 + 2) * (4 - 3);", "--rpn"])
    assert status == lox.EXIT_OK
    assert capsys.readouterr().out == "1 2 + 4 3 - *\n"


def test_main_dump_reports_errors(capsys):
    status = lox.cli.main(["-e", "print ;", "--ast"])
    assert status == lox.EXIT_DATAERR
    assert capsys.readouterr().err == "[line 1] Error at ';': Expect expression.\n"
