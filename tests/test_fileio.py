import pytest

from cweb.errors import CWebError
from cweb.fileio import file_exists, read_file


def test_read_file_contents(tmp_path):
    path = tmp_path / "index.html"
    content = "<h1>Hello</h1>\n"
    path.write_text(content)
    assert read_file(path) == content


def test_read_file_accepts_string_path(tmp_path):
    path = tmp_path / "a.txt"
    path.write_text("data")
    assert read_file(str(path)) == "data"


def test_read_empty_file_fails(tmp_path):
    path = tmp_path / "empty.html"
    path.write_text("")
    with pytest.raises(CWebError) as info:
        read_file(path)
    assert info.value.code == 2
    assert info.value.message == "File size is invalid."


def test_read_missing_file_fails(tmp_path):
    with pytest.raises(CWebError) as info:
        read_file(tmp_path / "missing.html")
    assert info.value.code == 2


def test_file_exists(tmp_path):
    path = tmp_path / "x.html"
    path.write_text("x")
    assert file_exists(path) is True
    assert file_exists(tmp_path / "nope.html") is False


def test_directory_is_not_a_file(tmp_path):
    assert file_exists(tmp_path) is False