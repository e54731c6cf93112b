"""Recipe registry and the compiler entry point."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from ffrecipe.compiler.invocation import CompiledPlan, overwrite_flag
from ffrecipe.compiler.requests import Request
from ffrecipe.exceptions import PreconditionError
from ffrecipe.probe.interface import ProbeFacade

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Request)

Recipe = Callable[..., CompiledPlan]

_RECIPES: dict[type[Request], Recipe] = {}


@dataclass(frozen=True)
class RecipeContext:
    """What a recipe may consult besides its request.

    Attributes:
        probe: Source of media properties, queried only when a decision
            depends on them.
        overwrite: Whether outputs may replace existing files.
    """

    probe: ProbeFacade
    overwrite: bool = False

    @property
    def flag(self) -> str:
        """Leading ``-y``/``-n`` flag for invocations that write user outputs."""
        return overwrite_flag(self.overwrite)


def recipe(request_type: type[R]) -> Callable[[Recipe], Recipe]:
    """Register the decorated function as the recipe for ``request_type``."""

    def decorator(func: Recipe) -> Recipe:
        if request_type in _RECIPES:
            raise ValueError(f"Recipe already registered for {request_type.__name__}")
        _RECIPES[request_type] = func
        return func

    return decorator


def registered_requests() -> list[type[Request]]:
    _load_recipes()
    return sorted(_RECIPES, key=lambda cls: cls.__name__)


def _load_recipes() -> None:
    # Recipe modules register themselves on import
    from ffrecipe.compiler import recipes  # noqa: F401


def compile_request(
    request: Request,
    probe: ProbeFacade,
    overwrite: bool = False,
) -> CompiledPlan:
    """Compile a request into an ordered plan of invocations.

    Args:
        request: The operation to compile.
        probe: Media prober consulted for duration-dependent operations.
        overwrite: Emit ``-y`` instead of ``-n`` on user-visible outputs.

    Returns:
        The compiled plan.

    Raises:
        PreconditionError: If the request cannot be satisfied.
        ProbeError: If a required media property cannot be read.
    """
    _load_recipes()
    func = _RECIPES.get(type(request))
    if func is None:
        raise PreconditionError(f"No recipe for operation '{request.operation}'")

    plan = func(request, RecipeContext(probe=probe, overwrite=overwrite))
    logger.debug(
        "Compiled %s into %d invocation(s)",
        request.operation,
        len(plan.invocations),
        extra={"operation": request.operation, "invocations": len(plan.invocations)},
    )
    return plan
