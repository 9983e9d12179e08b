import pytest

from mmflow.core.errors import IOFailure
from mmflow.core.workdir import WorkDirectoryResolver


def test_resolve_creates_temp_folder(tmp_path):
    resolver = WorkDirectoryResolver()
    path = resolver.resolve(tmp_path / "mm")
    assert path == tmp_path / "mm" / "temp"
    assert path.is_dir()
    assert resolver.path == path


def test_first_resolution_sticks(tmp_path):
    resolver = WorkDirectoryResolver()
    first = resolver.resolve(tmp_path / "a")
    second = resolver.resolve(tmp_path / "b")
    assert first == second == tmp_path / "a" / "temp"
    assert not (tmp_path / "b").exists()


def test_resolvers_are_independent(tmp_path):
    assert WorkDirectoryResolver().resolve(tmp_path / "a") != WorkDirectoryResolver().resolve(tmp_path / "b")


def test_creation_failure_is_io_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(IOFailure) as exc:
        WorkDirectoryResolver().resolve(blocker)
    assert isinstance(exc.value, OSError)
    assert "temp folder" in str(exc.value)
