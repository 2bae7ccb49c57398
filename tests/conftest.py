import builtins as _builtins
import sys
from collections.abc import Callable
from pathlib import Path
from pathlib import Path as _Path

import pytest



@pytest.fixture
def permit_only_target_open(monkeypatch) -> Callable[[str, BaseException], None]:
    """Monkeypatch ``builtins.open`` so it raises ``exc`` only when called
    for ``target_path`` and otherwise calls through to the real ``open``.

    The destination writer opens through ``builtins.open``; the source reader
    uses ``Path.open`` and is patched separately where needed. Tests using
    this fixture are serial because they replace a global builtin.

    Usage:
        permit_only_target_open(str(path), PermissionError("nope"))
    """

    def _patch(target_path: str | Path, exc: BaseException) -> None:
        real_open = _builtins.open

        target_str = str(Path(target_path))

        def _fake_open(name, *args, **kwargs):
            try:
                name_str = str(Path(name))
            except TypeError:
                name_str = str(name)
            if name_str == target_str:
                raise exc
            return real_open(name, *args, **kwargs)

        monkeypatch.setattr(_builtins, "open", _fake_open)

    return _patch


@pytest.fixture
def input_file(tmp_path) -> Callable[[bytes | str], Path]:
    """Write ``input.txt`` under ``tmp_path`` and return its path."""

    def _make(content: bytes | str, name: str = "input.txt") -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture(autouse=True)
def _reset_path_policies():
    from splurge_safe_copy.path_validator import PathValidator

    yield
    PathValidator.clear_pre_resolution_policies()


# Ensure tests can import the local package when pytest runs from the
# repository root or when the test runner's CWD differs.
_ROOT = _Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))
