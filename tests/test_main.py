import io

from loxvm.main import main, repl, run_file
from loxvm.vm import VM


def _quiet_vm():
    out, err = io.StringIO(), io.StringIO()
    return VM(stdout=out, stderr=err, trace=False), out, err


def test_run_file_success(tmp_path):
    script = tmp_path / "ok.lox"
    script.write_text("1 + 2")
    vm, out, _ = _quiet_vm()
    assert run_file(vm, str(script)) == 0
    assert out.getvalue() == "3\n"


def test_run_file_compile_error(tmp_path):
    script = tmp_path / "bad.lox"
    script.write_text("(1")
    vm, _, err = _quiet_vm()
    assert run_file(vm, str(script)) == 65
    assert "Expect ')' after expression." in err.getvalue()


def test_run_file_missing(tmp_path, capsys):
    path = tmp_path / "missing.lox"
    vm, _, _ = _quiet_vm()
    assert run_file(vm, str(path)) == 74
    assert capsys.readouterr().err == f'Could not open file "{path}".\n'


def test_repl_interprets_each_line():
    vm, out, _ = _quiet_vm()
    prompt = io.StringIO()
    repl(vm, io.StringIO("1 + 2\n4\n"), prompt)
    assert out.getvalue().splitlines() == ["3", "4"]
    assert prompt.getvalue() == "> > > \n"


def test_main_usage_error(capsys):
    assert main(["a.lox", "b.lox"]) == 64
    assert capsys.readouterr().err == "Usage: loxc [path]\n"


def test_main_runs_file(tmp_path, capsys):
    script = tmp_path / "seven.lox"
    script.write_text("7")
    assert main([str(script)]) == 0
    captured = capsys.readouterr().out
    assert captured.startswith("== code == \n")
    assert captured.endswith("7\n")


def test_main_without_arguments_starts_repl(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main([]) == 0
    assert capsys.readouterr().out == "> \n"