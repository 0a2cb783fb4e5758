"""Shared test fixtures for Skeletor tests."""
from io import StringIO
from pathlib import Path
from typing import Dict, List, Optional

import pytest
import yaml
from rich.console import Console

from skeletor.scaffold.source import TemplateSource
from skeletor.scaffold.templates import JinjaRenderer


class ScriptedPrompter:
    """Prompter that replays canned answers and records what it was asked."""

    def __init__(self, answers: List[str]):
        self.answers = list(answers)
        self.asked = []
        self.reports = []

    def ask(self, label: str, default: Optional[str] = None) -> str:
        self.asked.append((label, default))
        if not self.answers:
            raise AssertionError(f"unexpected prompt: {label}")
        return self.answers.pop(0)

    def report(self, message: str) -> None:
        self.reports.append(message)


def write_tree(root: Path, files: Dict[str, str]) -> Path:
    """Create files (and their parent directories) below root."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


def write_config(root: Path, config: dict, filename: str = "template.yml") -> Path:
    root.mkdir(parents=True, exist_ok=True)
    path = root / filename
    path.write_text(yaml.safe_dump(config, sort_keys=False))
    return path


def console_output(console: Console) -> str:
    return console.file.getvalue()


@pytest.fixture
def console():
    """Console writing to an in-memory buffer."""
    return Console(file=StringIO(), width=200)


@pytest.fixture
def renderer():
    return JinjaRenderer()


@pytest.fixture
def template_root(tmp_path):
    root = tmp_path / "template-src"
    root.mkdir()
    return root


@pytest.fixture
def local_source(template_root):
    return TemplateSource(template_root, ".", origin=str(template_root))


@pytest.fixture
def demo_variables():
    """Variables as the resolver produces them for name=demo, author=Jane."""
    return {
        "MixinName": "demo",
        "AuthorName": "Jane",
        "SanitizedMixinName": "demo",
        "MixinNameCap": "Demo",
        "ModulePath": "github.com/getporter/demo",
        "OutputDir": "./demo",
        "ComplianceLevel": "basic",
        "EnableSecurity": False,
        "SecurityFeatures": "",
        "EnableCompliance": False,
        "ComplianceFrameworks": "",
        "EnableAuth": False,
        "AuthFeatures": "",
        "EnableObservability": False,
        "ObservabilityFeatures": "",
    }


@pytest.fixture
def make_tree():
    return write_tree


@pytest.fixture
def make_config():
    return write_config


@pytest.fixture
def read_console():
    return console_output


@pytest.fixture
def scripted_prompter():
    return ScriptedPrompter
