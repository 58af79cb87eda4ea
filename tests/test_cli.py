from ahi import decode
from ahi.cli import main

CANONICAL = "ahi0 w2 h1 n2\n\n0F\n\nA1\n"
MESSY = "ahi0 w2 h1 n2\r\n0f\r\n\r\n\r\na1"


def test_fmt_rewrites_file(tmp_path, capsys):
    path = tmp_path / "sprites.ahi"
    path.write_bytes(MESSY.encode("ascii"))
    assert main(["fmt", str(path)]) == 0
    assert path.read_bytes() == CANONICAL.encode("ascii")
    assert "Reformatted" in capsys.readouterr().out
    assert main(["fmt", "--check", str(path)]) == 0


def test_fmt_check_reports_non_canonical(tmp_path, capsys):
    path = tmp_path / "sprites.ahi"
    path.write_bytes(MESSY.encode("ascii"))
    assert main(["fmt", "--check", str(path)]) == 1
    assert "not in canonical form" in capsys.readouterr().err
    assert path.read_bytes() == MESSY.encode("ascii")


def test_fmt_handles_fonts(tmp_path):
    path = tmp_path / "tiny.ahf"
    path.write_text("ahf0 h1 b1 n1\n\ndef w1 l0 r1\nf\n\n'a' w2 l0 r2\n1e\n")
    assert main(["fmt", str(path)]) == 0
    assert path.read_text() == "ahf0 h1 b1 n1\n\ndef w1 l0 r1\nF\n\n'a' w2 l0 r2\n1E\n"


def test_info(tmp_path, capsys):
    path = tmp_path / "sprites.ahi"
    path.write_text(CANONICAL)
    assert main(["info", str(path)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["ahi0 w2 h1 n2", "image 0: 2x1 colors 0F", "image 1: 2x1 colors 1A"]


def test_decode_error_goes_to_stderr(tmp_path, capsys):
    path = tmp_path / "bad.ahi"
    path.write_text("ahi0 w2 h1 n1\n\n0G\n")
    assert main(["info", str(path)]) == 2
    err = capsys.readouterr().err
    assert "line 3" in err
    assert "'G'" in err


def test_max_dimension_option(tmp_path, capsys):
    path = tmp_path / "wide.ahi"
    path.write_text(CANONICAL)
    assert main(["--max-dimension", "1", "info", str(path)]) == 2
    assert "exceeds" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(["info", str(tmp_path / "nope.ahi")]) == 2
    assert capsys.readouterr().err


def test_png_round_trip(tmp_path):
    source = tmp_path / "sprites.ahi"
    source.write_text(CANONICAL)
    assert main(["ahi2png", str(source)]) == 0
    pngs = [tmp_path / "sprites.0.png", tmp_path / "sprites.1.png"]
    assert all(png.exists() for png in pngs)
    output = tmp_path / "rebuilt.ahi"
    assert main(["png2ahi", *map(str, pngs), "-o", str(output)]) == 0
    assert decode(output.read_text()) == decode(CANONICAL)
