"""
Опции генератора TypeScript клиента
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .internal.types.type_model import TypeDeclaration

DEFAULT_HEADER = (
    "// This file is autogenerated, any manual changes will be lost after regeneration"
)


class NullableTypeMapping(str, Enum):
    """Чем расширяется nullable тип: null, undefined или обоими"""

    NULL = "null"
    UNDEFINED = "undefined"
    NULL_OR_UNDEFINED = "null_or_undefined"


def _default_module_imports(module_name: str) -> List[str]:
    if module_name == "api":
        return ["import axios from 'axios';"]

    return []


@dataclass
class GeneratorOptions:
    """Опции генерации. Передаются явно через все этапы"""

    strings_are_nullable_by_default: bool = True

    default_nullable_type_mapping: NullableTypeMapping = (
        NullableTypeMapping.NULL_OR_UNDEFINED
    )
    # None - используется default_nullable_type_mapping
    parameter_nullable_type_mapping: Optional[NullableTypeMapping] = None
    property_nullable_type_mapping: Optional[NullableTypeMapping] = None

    make_undefined_properties_optional: bool = True
    make_undefined_parameters_optional: bool = True

    # None - все сборки модели
    entry_assemblies: Optional[List[str]] = None
    additional_entry_types: List[str] = field(default_factory=list)

    type_filter: Callable[[TypeDeclaration], bool] = lambda declaration: True
    namespace_calculator: Callable[[str, TypeDeclaration], str] = (
        lambda module_name, declaration: ""
    )
    request_url_expression: Callable[[str], str] = lambda url: f"'{url}'"

    logger: Callable[[str], None] = print

    header: str = DEFAULT_HEADER
    additional_module_imports: Callable[[str], List[str]] = _default_module_imports
    additional_module_content: Callable[[str], List[str]] = lambda module_name: []

    @property
    def parameter_mapping(self) -> NullableTypeMapping:
        return self.parameter_nullable_type_mapping or self.default_nullable_type_mapping

    @property
    def property_mapping(self) -> NullableTypeMapping:
        return self.property_nullable_type_mapping or self.default_nullable_type_mapping
