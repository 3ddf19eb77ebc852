"""Tests for the textrecords command-line tool."""

import shutil
import tempfile
from pathlib import Path

import pytest

from textrecords.cli import main

PEOPLE = (
    '{\n name "Albert Einstein"\n id "100"\n}\n\n'
    '{\n name "George Washington"\n id "200"\n}\n\n'
    '{\n name "Grace Hopper"\n id "100"\n}\n'
)


@pytest.fixture
def workdir():
    """Temporary directory holding a types file and a records file."""
    tmp = Path(tempfile.mkdtemp())
    (tmp / "people.types").write_text("Person { name: string, id: integer }\n")
    (tmp / "people.txt").write_text(PEOPLE)
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


def run(workdir, *args):
    return main(["-t", str(workdir / "people.types"), *args])


class TestCommands:
    def test_show(self, workdir, capsys):
        assert run(workdir, "show", str(workdir / "people.txt")) == 0
        out = capsys.readouterr().out
        assert out.startswith('{\n\tname "Albert Einstein"\n\tid "100"\n}\n\n')
        assert out.count("{") == 3

    def test_show_limit(self, workdir, capsys):
        assert run(workdir, "show", str(workdir / "people.txt"), "-n", "1") == 0
        assert capsys.readouterr().out.count("{") == 1

    def test_find(self, workdir, capsys):
        assert run(workdir, "find", str(workdir / "people.txt"), "id", "100") == 0
        captured = capsys.readouterr()
        assert "Albert Einstein" in captured.out
        assert "Grace Hopper" in captured.out
        assert "George Washington" not in captured.out
        assert "(2 records)" in captured.err

    def test_find_limit(self, workdir, capsys):
        assert run(workdir, "find", str(workdir / "people.txt"), "id", "100", "-n", "1") == 0
        assert "(1 records)" in capsys.readouterr().err

    def test_count(self, workdir, capsys):
        assert run(workdir, "count", str(workdir / "people.txt")) == 0
        assert capsys.readouterr().out.strip() == "3"

    def test_format_to_file(self, workdir, capsys):
        output = workdir / "clean.txt"
        assert run(workdir, "format", str(workdir / "people.txt"), "-o", str(output)) == 0
        assert output.read_text().startswith('{\n\tname "Albert Einstein"')
        assert "Wrote" in capsys.readouterr().err

    def test_format_to_stdout(self, workdir, capsys):
        assert run(workdir, "format", str(workdir / "people.txt")) == 0
        assert '\tname "Grace Hopper"' in capsys.readouterr().out

    def test_insert_creates_file(self, workdir, capsys):
        data = workdir / "new.txt"
        assert run(workdir, "insert", str(data), "Utada Hikaru", "111") == 0
        assert data.read_text() == '{\n\tname "Utada Hikaru"\n\tid "111"\n}\n\n'
        assert "Inserted record 0" in capsys.readouterr().err

    def test_insert_appends(self, workdir):
        data = workdir / "people.txt"
        assert run(workdir, "insert", str(data), "Ada Lovelace", "1815") == 0
        assert data.read_text().count("{") == 4
        assert data.read_text().rstrip().endswith('id "1815"\n}')

    def test_remove(self, workdir, capsys):
        data = workdir / "people.txt"
        assert run(workdir, "remove", str(data), "id", "100") == 0
        assert "Removed 1 records" in capsys.readouterr().err
        text = data.read_text()
        assert "Albert Einstein" not in text
        assert "Grace Hopper" in text

    def test_remove_all(self, workdir):
        data = workdir / "people.txt"
        assert run(workdir, "remove", str(data), "id", "100", "-n", "0") == 0
        assert data.read_text().count("{") == 1

    def test_remove_no_match_leaves_file(self, workdir, capsys):
        data = workdir / "people.txt"
        assert run(workdir, "remove", str(data), "id", "999") == 0
        assert data.read_text() == PEOPLE
        assert "Removed 0 records" in capsys.readouterr().err


class TestErrors:
    def test_missing_types_file(self, workdir, capsys):
        code = main(["-t", str(workdir / "nope.types"), "count", str(workdir / "people.txt")])
        assert code == 1
        assert "Type definitions not found" in capsys.readouterr().err

    def test_missing_records_file(self, workdir, capsys):
        assert run(workdir, "show", str(workdir / "missing.txt")) == 1
        assert "Records file not found" in capsys.readouterr().err

    def test_bad_value(self, workdir, capsys):
        assert run(workdir, "find", str(workdir / "people.txt"), "id", "abc") == 1
        assert "Cannot convert 'abc' to integer" in capsys.readouterr().err

    def test_unknown_field(self, workdir, capsys):
        assert run(workdir, "find", str(workdir / "people.txt"), "age", "3") == 1
        assert "age" in capsys.readouterr().err

    def test_bad_records_file(self, workdir, capsys):
        data = workdir / "people.txt"
        data.write_text('{\n name "x"\n id "oops"\n}\n')
        assert run(workdir, "count", str(data)) == 1
        assert "line 3" in capsys.readouterr().err

    def test_too_many_insert_values(self, workdir, capsys):
        assert run(workdir, "insert", str(workdir / "people.txt"), "a", "1", "2") == 1
        assert "2 fields" in capsys.readouterr().err

    def test_type_required_with_several_types(self, workdir, capsys):
        types = workdir / "people.types"
        types.write_text("Person { name: string, id: integer }\nPet { name: string }\n")
        assert run(workdir, "count", str(workdir / "people.txt")) == 1
        assert "--type is required" in capsys.readouterr().err

        assert run(workdir, "--type", "Person", "count", str(workdir / "people.txt")) == 0
        assert capsys.readouterr().out.strip() == "3"

    def test_type_syntax_error(self, workdir, capsys):
        (workdir / "people.types").write_text("Person { name string }")
        assert run(workdir, "count", str(workdir / "people.txt")) == 1
        assert "Syntax error" in capsys.readouterr().err
