import io

import pytest

from korisp import cli
from korisp.evaluation.interpreter import Interpreter


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


def test_runs_script(tmp_path, streams):
    stdout, stderr = streams
    script = tmp_path / "hello.ksp"
    script.write_text('(defn greet [who] (println "hello " who))\n(greet "world")\n')
    assert cli.main([str(script)], stdout=stdout, stderr=stderr) == 0
    assert stdout.getvalue() == "hello world\n"
    assert stderr.getvalue() == ""


def test_script_error_reports_location(tmp_path, streams):
    stdout, stderr = streams
    script = tmp_path / "broken.ksp"
    script.write_text("(println 1)\n(undefined-fn)\n")
    assert cli.main([str(script)], stdout=stdout, stderr=stderr) == 1
    assert stdout.getvalue() == "1\n"
    assert stderr.getvalue() == "[002:002]: Undefined symbol 'undefined-fn'\n"


def test_missing_file(tmp_path, streams):
    stdout, stderr = streams
    assert cli.main([str(tmp_path / "nope.ksp")], stdout=stdout, stderr=stderr) == 1
    assert "unable to read" in stderr.getvalue()


def test_usage_error(streams):
    stdout, stderr = streams
    assert cli.main(["a", "b"], stdout=stdout, stderr=stderr) == 2
    assert stderr.getvalue().strip() == cli.USAGE


def test_repl_keeps_going_after_errors(streams):
    stdout, stderr = streams
    stdin = io.StringIO("(def x 2)\n\n(+ x 1)\n(foo)\n(* x 5)\nexit\n")
    assert cli.main([], stdin=stdin, stdout=stdout, stderr=stderr) == 0
    out = stdout.getvalue()
    assert "3\n" in out
    assert "10\n" in out
    assert stderr.getvalue() == "[001:002]: Undefined symbol 'foo'\n"


def test_repl_exits_on_eof(streams):
    stdout, stderr = streams
    assert cli.main([], stdin=io.StringIO(""), stdout=stdout, stderr=stderr) == 0
    assert stdout.getvalue().endswith("Exiting.\n")


def test_recursion_error_is_reported(monkeypatch, tmp_path, streams):
    def explode(self, source):
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr(Interpreter, "interpret", explode)
    stdout, stderr = streams
    script = tmp_path / "deep.ksp"
    script.write_text("(deep)")
    assert cli.main([str(script)], stdout=stdout, stderr=stderr) == 1
    assert stderr.getvalue() == "[000:000]: maximum recursion depth exceeded\n"


def test_script_with_invalid_utf8(tmp_path, streams):
    stdout, stderr = streams
    script = tmp_path / "binary.ksp"
    script.write_bytes(b"(println 1)\n\xff\n")
    assert cli.main([str(script)], stdout=stdout, stderr=stderr) == 1
    assert "unable to read" in stderr.getvalue()


def test_native_value_error_is_reported(tmp_path, streams):
    stdout, stderr = streams
    script = tmp_path / "align.ksp"
    script.write_text("(number/align 1e300 1)\n")
    assert cli.main([str(script)], stdout=stdout, stderr=stderr) == 1
    assert stderr.getvalue().startswith("[001:001]: ")
