"""Shared fixtures for ralph tests."""

import json

import pytest

from ralph.lib.config import load_config


def make_story(story_id: str, priority: int, passes: bool = False, **extra) -> dict:
    """Build an on-disk story dict."""
    story = {
        "id": story_id,
        "title": f"Title {story_id}",
        "description": f"Description {story_id}",
        "acceptanceCriteria": [f"{story_id} works", "Typecheck passes"],
        "priority": priority,
        "passes": passes,
        "notes": "",
    }
    story.update(extra)
    return story


def make_prd(stories: list[dict], branch: str = "ralph/login") -> dict:
    return {
        "project": "Acme",
        "branchName": branch,
        "description": "Login flow",
        "userStories": stories,
    }


@pytest.fixture
def write_prd(tmp_path):
    """Write a PRD dict to tmp_path/prd.json and return the path."""
    def _write(data: dict):
        path = tmp_path / "prd.json"
        path.write_text(json.dumps(data, indent=2))
        return path
    return _write


@pytest.fixture
def config(tmp_path):
    """Default config rooted at tmp_path."""
    return load_config(tmp_path)
