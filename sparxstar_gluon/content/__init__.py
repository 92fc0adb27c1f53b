"""Host content access and summarization backends used by abilities."""

from .posts import InMemoryPostRepository, Post, PostRepository
from .summarizer import PydanticAISummarizer, Summarizer

__all__ = ["InMemoryPostRepository", "Post", "PostRepository", "PydanticAISummarizer", "Summarizer"]
