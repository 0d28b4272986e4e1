import io
from pathlib import Path

import pytest

from image_reference.cli import REFERENCE_MAX_NAME_LENGTH, ParseCommand, max_name_length_from_env, run

REFERENCES = Path(__file__).parent / "fixtures" / "references.tsv"


class TestParseCommand:

    def test_valid_reference(self, capsys) -> None:
        run(["parse", "docker.io/library/busybox:latest"])

        out = capsys.readouterr().out
        assert out == "docker.io/library/busybox:latest\tdocker.io/library/busybox\tdocker.io\tlibrary/busybox\tlatest\t\t\t\n"

    def test_invalid_reference_exits_1(self, capsys) -> None:
        with pytest.raises(SystemExit) as info:
            run(["parse", "UPPER/busybox"])

        assert info.value.code == 1
        assert capsys.readouterr().out == "UPPER/busybox\t\t\t\t\t\t\trepository name must be lowercase\n"

    def test_reads_stdin(self, capsys) -> None:
        ParseCommand(None, False, 255, stdin=io.StringIO("busybox:1.36\r\n")).invoke()

        assert capsys.readouterr().out.split("\t")[:5] == ["busybox:1.36", "busybox", "", "busybox", "1.36"]

    def test_reads_stdin_from_run(self, capsys, monkeypatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("localhost/app\n"))
        run(["parse"])

        assert capsys.readouterr().out.split("\t")[2] == "localhost"

    def test_canonical(self, capsys) -> None:
        with pytest.raises(SystemExit) as info:
            run(["--canonical", "parse", "busybox:latest"])

        assert info.value.code == 1
        assert capsys.readouterr().out.rstrip("\n").endswith("repository name must be canonical")

    def test_max_name_length_flag(self, capsys) -> None:
        with pytest.raises(SystemExit):
            run(["--max-name-length", "3", "parse", "busybox"])

        assert "not be more than 3 characters" in capsys.readouterr().out


class TestCheckCommand:

    def test_sample_corpus(self, capsys) -> None:
        run(["check", str(REFERENCES)])

        assert "0 mismatched" in capsys.readouterr().out

    def test_mismatch_exits_1(self, tmp_path: Path, capsys) -> None:
        fixture = tmp_path / "references.tsv"
        fixture.write_text(
            "input\tname\tdomain\tpath\ttag\tdigest_algo\tdigest_encoded\terr\n"
            "busybox\tbusybox\tdocker.io\tbusybox\t\t\t\t\n"
        )

        with pytest.raises(SystemExit) as info:
            run(["check", str(fixture)])

        assert info.value.code == 1
        out = capsys.readouterr().out
        assert "domain None != 'docker.io'" in out
        assert "1 mismatched" in out

    def test_missing_fixture(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as info:
            run(["check", str(tmp_path / "missing.tsv")])

        assert info.value.code == 2


class TestConfiguration:

    def test_flag_wins(self, monkeypatch) -> None:
        monkeypatch.setenv(REFERENCE_MAX_NAME_LENGTH, "100")

        assert max_name_length_from_env(50) == 50

    def test_environment(self, monkeypatch) -> None:
        monkeypatch.setenv(REFERENCE_MAX_NAME_LENGTH, "100")

        assert max_name_length_from_env() == 100

    def test_default(self, monkeypatch) -> None:
        monkeypatch.delenv(REFERENCE_MAX_NAME_LENGTH, raising=False)

        assert max_name_length_from_env() == 255

    def test_bad_environment_value(self, monkeypatch) -> None:
        monkeypatch.setenv(REFERENCE_MAX_NAME_LENGTH, "lots")

        with pytest.raises(SystemExit):
            max_name_length_from_env()


class TestRun:

    def test_no_command_prints_help(self, capsys) -> None:
        with pytest.raises(SystemExit) as info:
            run([])

        assert info.value.code == 2
        assert "usage: image-reference" in capsys.readouterr().out
