"""Recipe modules.

Importing this package registers every recipe with the compiler registry.
"""

from ffrecipe.compiler.recipes import (  # noqa: F401
    analysis,
    audio,
    compose,
    compress,
    convert,
    edit,
    effects,
    overlay,
)
