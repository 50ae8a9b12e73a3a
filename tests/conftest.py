"""Shared fixtures: an in-process fake upstream that records every request."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pytest
from aiohttp import web


@dataclass
class RecordedCall:
    path: str
    query: Dict[str, str]
    headers: Dict[str, str]
    body: bytes
    form: Dict[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        return json.loads(self.body)


class FakeUpstream:
    """Answer POSTs with canned responses keyed by path and record them."""

    def __init__(self) -> None:
        self.calls: List[RecordedCall] = []
        self._routes: Dict[str, Tuple[int, Optional[Any], Optional[str], float]] = {}
        self.app = web.Application()
        self.app.router.add_post("/{tail:.*}", self._handle)

    def respond(
        self,
        path: str,
        status: int = 200,
        json_body: Optional[Any] = None,
        text: Optional[str] = None,
        delay: float = 0.0,
    ) -> None:
        self._routes[path] = (status, json_body, text, delay)

    def calls_to(self, path: str) -> List[RecordedCall]:
        return [call for call in self.calls if call.path == path]

    async def _handle(self, request: web.Request) -> web.StreamResponse:
        body = await request.read()
        form: Dict[str, str] = {}
        if request.content_type in {"application/x-www-form-urlencoded", "multipart/form-data"}:
            form = {key: str(value) for key, value in (await request.post()).items()}
        self.calls.append(
            RecordedCall(
                path=request.path,
                query=dict(request.query),
                headers=dict(request.headers),
                body=body,
                form=form,
            )
        )

        status, json_body, text, delay = self._routes.get(request.path, (404, None, "not found", 0.0))
        if delay:
            await asyncio.sleep(delay)
        if json_body is not None:
            return web.json_response(json_body, status=status)
        return web.Response(status=status, text=text or "")


def chat_completion(text: Optional[str]) -> Dict[str, Any]:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": text}}]}


def gemini_content(text: Optional[str]) -> Dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    return FakeUpstream()
