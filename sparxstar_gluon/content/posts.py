"""Host content access.

Abilities read posts through ``PostRepository``; the host supplies the real
implementation. ``InMemoryPostRepository`` backs the default server wiring and
the tests.
"""

from __future__ import annotations

import threading
from typing import Dict, Iterable, Optional, Protocol, runtime_checkable

from pydantic import Field

from sparxstar_gluon.schemas.base import BaseSchema


class Post(BaseSchema):
    id: int = Field(ge=1)
    title: str = ""
    content: str = ""
    status: str = "publish"


@runtime_checkable
class PostRepository(Protocol):
    def get_post(self, post_id: int) -> Optional[Post]: ...


class InMemoryPostRepository:
    def __init__(self, posts: Iterable[Post] = ()) -> None:
        self._lock = threading.Lock()
        self._posts: Dict[int, Post] = {p.id: p for p in posts}

    def add(self, post: Post) -> None:
        with self._lock:
            self._posts[post.id] = post

    def get_post(self, post_id: int) -> Optional[Post]:
        with self._lock:
            return self._posts.get(int(post_id))
