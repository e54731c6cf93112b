"""Unit tests for the invocation model and the recipe registry."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from ffrecipe.compiler import (
    CompiledPlan,
    Invocation,
    compile_request,
    ffmpeg,
    ffprobe,
    overwrite_flag,
    recipe,
    registered_requests,
)
from ffrecipe.compiler import requests as request_module
from ffrecipe.compiler.requests import Request, TrimRequest
from ffrecipe.exceptions import PreconditionError
from ffrecipe.values import Time


class TestInvocation:
    """Tests for Invocation and CompiledPlan."""

    def test_args_frozen_as_strings(self):
        invocation = ffmpeg(["-i", Path("/in/a.mp4"), "out.mp4"], "copy")
        assert invocation.args == ("-i", "/in/a.mp4", "out.mp4")
        assert invocation.program == "ffmpeg"
        assert invocation.description == "copy"

    def test_argv_uses_resolved_executable(self):
        invocation = ffprobe(["-v", "error"])
        assert invocation.argv() == ["ffprobe", "-v", "error"]
        assert invocation.argv("/opt/bin/ffprobe") == ["/opt/bin/ffprobe", "-v", "error"]

    def test_str_is_shell_quoted(self):
        invocation = Invocation("ffmpeg", ("-i", "my clip.mp4", "-vf", "scale=1:2"))
        assert str(invocation) == "ffmpeg -i 'my clip.mp4' -vf scale=1:2"

    def test_overwrite_flag(self):
        assert overwrite_flag(True) == "-y"
        assert overwrite_flag(False) == "-n"

    def test_plan_sequence_behaviour(self):
        plan = CompiledPlan.of([ffmpeg(["a"]), ffmpeg(["b"])], [Path("out")])
        assert len(plan) == 2
        assert [inv.args for inv in plan] == [("a",), ("b",)]
        assert plan.outputs == (Path("out"),)
        assert plan.auxiliary == ()


class TestRegistry:
    """Tests for recipe registration and compile_request()."""

    def test_every_request_has_a_recipe(self):
        """Each concrete request type is registered exactly once."""
        request_types = {
            obj
            for obj in vars(request_module).values()
            if isinstance(obj, type) and issubclass(obj, Request) and obj is not Request
        }
        assert set(registered_requests()) == request_types

    def test_duplicate_registration_rejected(self):
        registered_requests()
        with pytest.raises(ValueError, match="already registered"):
            recipe(TrimRequest)(lambda request, ctx: None)

    def test_unknown_request(self, probe):
        @dataclass(frozen=True)
        class UnknownThingRequest(Request):
            pass

        with pytest.raises(PreconditionError, match="unknown-thing"):
            compile_request(UnknownThingRequest(), probe)

    def test_operation_name(self):
        request = TrimRequest(Path("a.mp4"), Path("b.mp4"), Time(), Time(0, 0, 5))
        assert request.operation == "trim"

    def test_overwrite_flag_leads(self, probe):
        """The -y/-n flag is the first argument of user-facing invocations."""
        request = TrimRequest(Path("a.mp4"), Path("b.mp4"), Time(), Time(0, 0, 5))

        assert compile_request(request, probe).invocations[0].args[0] == "-n"
        assert compile_request(request, probe, overwrite=True).invocations[0].args[0] == "-y"
