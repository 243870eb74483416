from mdhtml.cli import convert, main
from mdhtml.lexer import lex


def test_convert_heading():
    assert convert(b"# Hi") == "<h1>Hi</h1>"


def test_convert_empty_input():
    assert convert(b"") == ""


def test_main_writes_output_file(tmp_path, capsys):
    source = tmp_path / "in.md"
    target = tmp_path / "out.html"
    data = b"_a_ text"
    source.write_bytes(data)
    assert main([str(source), "-o", str(target)]) == 0
    assert target.read_bytes() == convert(data).encode()
    out = capsys.readouterr().out
    lines = out.splitlines()
    token_lines = [line for line in lines if line.startswith("Type: ")]
    assert len(token_lines) == len(lex(data))
    assert "Render result:" in lines
    assert lines[-1] == convert(data)


def test_main_uses_default_paths(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    data = b"# Title"
    (tmp_path / "README.md").write_bytes(data)
    assert main([]) == 0
    assert (tmp_path / "rendered.html").read_bytes() == convert(data).encode()
    capsys.readouterr()


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "absent.md"
    assert main([str(missing), "-o", str(tmp_path / "x.html")]) == 1
    assert not (tmp_path / "x.html").exists()
    assert "absent.md" in capsys.readouterr().err


def test_main_preserves_raw_bytes(tmp_path, capsys):
    source = tmp_path / "raw.md"
    target = tmp_path / "raw.html"
    source.write_bytes(b"\xff")
    assert main([str(source), "-o", str(target)]) == 0
    assert target.read_bytes() == b"\xff"
    capsys.readouterr()