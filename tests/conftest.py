import json

import pytest

from pluginpack import zip_plugin


@pytest.fixture
def project(tmp_path):
    """A plugin project with a built main.js and a manifest at version 1.2.3."""
    (tmp_path / "main.js").write_text("console.log('plugin');\n")
    (tmp_path / "manifest.json").write_text(json.dumps({"id": "w-obsidian-webpage-export", "version": "1.2.3"}))
    return tmp_path


class FakeRun:
    """Records zip invocations and writes a placeholder archive when it succeeds."""

    def __init__(self, returncode=0):
        self.returncode = returncode
        self.calls = []

    def __call__(self, cmd, cwd=None, **kwargs):
        self.calls.append((list(cmd), cwd))
        with open(cmd[2], "wb") as f:
            f.write(b"new" if self.returncode == 0 else b"partial")
        return zip_plugin.subprocess.CompletedProcess(cmd, self.returncode)


@pytest.fixture
def fake_zip(monkeypatch):
    """Replace the zip subprocess with a recorder."""
    fake = FakeRun()
    monkeypatch.setattr(zip_plugin, "check_zip_installed", lambda: True)
    monkeypatch.setattr(zip_plugin.subprocess, "run", fake)
    return fake
