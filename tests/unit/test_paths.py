from __future__ import annotations

from pathlib import Path

from state import paths


def test_linux_prefers_absolute_xdg_data_home():
    env = {"HOME": "/home/u", "XDG_DATA_HOME": "/data/xdg"}
    assert paths.data_local_dir(platform="linux", environ=env) == Path("/data/xdg")


def test_linux_ignores_relative_xdg_data_home():
    env = {"HOME": "/home/u", "XDG_DATA_HOME": "relative/dir"}
    assert paths.data_local_dir(platform="linux", environ=env) == Path("/home/u/.local/share")


def test_linux_defaults_to_local_share():
    env = {"HOME": "/home/u"}
    assert paths.data_local_dir(platform="linux", environ=env) == Path("/home/u/.local/share")


def test_macos_uses_application_support():
    env = {"HOME": "/Users/u"}
    assert paths.data_local_dir(platform="darwin", environ=env) == Path(
        "/Users/u/Library/Application Support"
    )


def test_windows_uses_localappdata():
    env = {"LOCALAPPDATA": "C:/Users/u/AppData/Local"}
    assert paths.data_local_dir(platform="win32", environ=env) == Path("C:/Users/u/AppData/Local")


def test_windows_without_localappdata_is_unavailable():
    assert paths.data_local_dir(platform="win32", environ={}) is None


def test_missing_home_is_unavailable(monkeypatch):
    def no_home():
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(paths.Path, "home", staticmethod(no_home))
    assert paths.data_local_dir(platform="linux", environ={}) is None


def test_state_path_joins_app_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(paths, "data_local_dir", lambda: tmp_path)
    path = paths.state_path()
    assert path == tmp_path / "docuum" / "state.yml"
    assert path.parent == tmp_path / "docuum"


def test_state_path_none_without_data_dir(monkeypatch):
    monkeypatch.setattr(paths, "data_local_dir", lambda: None)
    assert paths.state_path() is None
