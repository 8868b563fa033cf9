import pytest

from klcore.file_view import FileView


def test_file_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileView(tmp_path / "test22_does_not_exist.tmp")


def test_read_empty_file(tmp_path):
    path = tmp_path / "test_empty_file.tmp"
    path.write_bytes(b"")
    with FileView(path) as view:
        assert len(view) == 0
        assert bytes(view.data) == b""


def test_read_file_already_opened(tmp_path):
    path = tmp_path / "test-opened.tmp"
    with open(path, "wb") as stream:
        stream.write(b"Test\nHello.")
        stream.flush()
        with FileView(path) as view:
            assert len(view) == 11
            assert view.data.nbytes == 11


def test_read_file(tmp_path):
    path = tmp_path / "test.tmp"
    path.write_bytes(b"Test\nHello.")
    with FileView(path) as view:
        assert len(view) == 11
        assert bytes(view.data).decode("ascii") == "Test\nHello."


def test_view_is_read_only(tmp_path):
    path = tmp_path / "ro.tmp"
    path.write_bytes(b"abc")
    with FileView(path) as view:
        assert view.data.readonly
        with pytest.raises(TypeError):
            view.data[0] = 0


def test_close_empties_view(tmp_path):
    path = tmp_path / "close.tmp"
    path.write_bytes(b"data")
    view = FileView(path)
    assert len(view) == 4
    view.close()
    assert len(view) == 0