"""Filter-graph compiler: turns operation requests into invocation plans."""

from ffrecipe.compiler.graph import FilterGraph, simple_chain
from ffrecipe.compiler.invocation import (
    AuxiliaryFile,
    CompiledPlan,
    Invocation,
    ffmpeg,
    ffprobe,
    overwrite_flag,
)
from ffrecipe.compiler.registry import (
    RecipeContext,
    compile_request,
    recipe,
    registered_requests,
)

__all__ = [
    "AuxiliaryFile",
    "CompiledPlan",
    "FilterGraph",
    "Invocation",
    "RecipeContext",
    "compile_request",
    "ffmpeg",
    "ffprobe",
    "overwrite_flag",
    "recipe",
    "registered_requests",
    "simple_chain",
]
