import threading
from pathlib import Path

import pytest

from translate_dir.ai.exceptions import ProviderError, ProviderErrorKind
from translate_dir.ai.service import ProviderCredentials
from translate_dir.language_codes import Language
from translate_dir.project.creator import init_project


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config loader at a file that does not exist and clear the env key."""
    monkeypatch.setenv("TRANSLATE_DIR_CONFIG", str(tmp_path / "no-config" / "config.json"))
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)


class FakeProvider:
    """Uppercases content; fails for documents containing a marker."""

    def __init__(self, failures=None):
        # marker substring -> ProviderErrorKind
        self.failures = failures or {}
        self.calls = []
        self._lock = threading.Lock()

    def translate(self, content, source_language, target_language):
        with self._lock:
            self.calls.append((content, source_language, target_language))
        for marker, kind in self.failures.items():
            if marker in content:
                raise ProviderError(f"provider refused '{marker}'", kind=kind)
        return f"[{target_language.value}] {content.upper()}"


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def credentials():
    return ProviderCredentials(provider="gemini", api_key="test-key", models=["gemini-2.5-flash"])


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path):
    """Project with an English source dir 'src' holding a few files."""
    root = tmp_path / "proj"
    proj = init_project("demo", root)
    proj.set_source_dir("src", Language.ENGLISH)
    write(root / "src" / "a.txt", "alpha")
    write(root / "src" / "b.txt", "bravo")
    write(root / "src" / "docs" / "guide.md", "# Guide")
    write(root / "src" / "logo.svg", "<svg/>")
    return proj
