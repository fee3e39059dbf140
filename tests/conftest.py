import pytest

from sublingo.models import Cue


@pytest.fixture
def write_file(tmp_path):
    def _write(name, content, encoding="utf-8"):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding=encoding)
        return str(path)

    return _write


@pytest.fixture
def make_cue():
    def _make(index, start, end, original, translation=""):
        return Cue(index=index, start_time=start, end_time=end, original=original, translation=translation)

    return _make
