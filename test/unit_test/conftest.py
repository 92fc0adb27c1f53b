from typing import List

import pytest

from sparxstar_gluon.content.posts import InMemoryPostRepository, Post
from sparxstar_gluon.plugin import GluonPlugin

POST_ID = 123
POST_CONTENT = "Gluon binds consent to sessions. It also exposes AI tools. Nothing else happens here."


class FakeSummarizer:
    """Records prompts and returns a canned two-sentence summary."""

    def __init__(self, summary: str = "Gluon binds consent to sessions. It exposes AI tools.") -> None:
        self.summary = summary
        self.texts: List[str] = []

    async def summarize(self, text: str) -> str:
        self.texts.append(text)
        return self.summary


@pytest.fixture
def fake_summarizer() -> FakeSummarizer:
    return FakeSummarizer()


@pytest.fixture
def posts() -> InMemoryPostRepository:
    return InMemoryPostRepository([Post(id=POST_ID, title="About Gluon", content=POST_CONTENT)])


@pytest.fixture
def plugin(posts, fake_summarizer) -> GluonPlugin:
    """A booted plugin with no consent subsystem."""
    plugin = GluonPlugin(posts=posts, summarizer=fake_summarizer)
    assert plugin.boot()
    return plugin
