"""Shared test doubles."""

from __future__ import annotations

from leftysay.types import RenderOutput, RenderRequest


class ScriptedRenderer:
    """Renderer double that replays canned outputs and records each request."""

    def __init__(self, *outputs: RenderOutput) -> None:
        self.outputs = list(outputs)
        self.requests: list[RenderRequest] = []

    def run(self, request: RenderRequest) -> RenderOutput:
        self.requests.append(request)
        if not self.outputs:
            raise AssertionError(f"unexpected render call: {request}")
        return self.outputs.pop(0)


def ok(stdout: str = "IMAGE\n") -> RenderOutput:
    return RenderOutput(stdout=stdout, stderr="", code=0)


def fail(stderr: str = "boom") -> RenderOutput:
    return RenderOutput(stdout="", stderr=stderr, code=1)
