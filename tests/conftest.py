# ===============================================
# tests/conftest.py
# Shared fixtures: throwaway knowledge dirs, persona
# files and a model client that records its input.
# ===============================================
import json
from pathlib import Path

import pytest

from portfolio_bot.generate.types import ModelParams


class RecordingClient:
    """Model client stand-in: remembers every call, replies with a fixed text."""

    def __init__(self, reply: str = "recorded reply"):
        self.model = "recording"
        self.reply = reply
        self.calls = []

    def generate(self, messages, params: ModelParams):
        self.calls.append((list(messages), params))
        return self.reply, {"engine": "recording", "model": self.model}


class FailingClient:
    model = "failing"

    def generate(self, messages, params):
        raise RuntimeError("upstream unavailable")


def write_knowledge(directory: Path, files: dict) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, text in files.items():
        (directory / name).write_text(text, encoding="utf-8")
    return directory


def write_profiles(path: Path, doc) -> Path:
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


@pytest.fixture
def recording_client():
    return RecordingClient()


@pytest.fixture
def site_dir(tmp_path):
    """A small but complete data directory: two personas, public + private notes."""
    write_knowledge(
        tmp_path / "knowledge",
        {
            "about.md": "Sankalp is a Full Stack Developer based in Dallas, Texas.",
            "services.md": (
                "Rates start at seventy five dollars per hour.\n\n"
                "Availability: taking new projects this quarter."
            ),
            "anaita.md": "Anaita loves hiking and her rates of tea drinking are legendary.",
        },
    )
    write_profiles(
        tmp_path / "profiles.json",
        {
            "default": "sankalp",
            "profiles": {
                "sankalp": {
                    "name": "Sankalp Singh",
                    "tone": "professional, confident, concise",
                    "knowledgeFiles": ["about.md", "services.md"],
                },
                "anaita": {
                    "name": "Anaita Sharma",
                    "aliases": ["annie"],
                    "tone": "warm and playful",
                    "notes": "Only talk about shared memories she wrote down.",
                    "knowledgeFiles": ["anaita.md"],
                },
            },
        },
    )
    return tmp_path


@pytest.fixture
def failing_client():
    return FailingClient()


@pytest.fixture
def make_knowledge():
    return write_knowledge


@pytest.fixture
def make_profiles():
    return write_profiles
