from .generator import TypeScriptGenerator, generate_typescript
from .internal.types.exceptions import (
    AmbiguousBodyParameterError,
    GenerationError,
    RouteResolutionError,
    TypeModelError,
)
from .options import GeneratorOptions, NullableTypeMapping

__all__ = [
    "TypeScriptGenerator",
    "generate_typescript",
    "GeneratorOptions",
    "NullableTypeMapping",
    "GenerationError",
    "TypeModelError",
    "RouteResolutionError",
    "AmbiguousBodyParameterError",
]
