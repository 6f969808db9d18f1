"""
Определение nullability вхождений типов.

Статус вычисляется один раз по атрибутам самого вхождения (свойства, параметра,
возвращаемого значения), атрибуты других вхождений не наследуются.
"""

from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from .type_model import AttributeInfo, TypeDescriptor, TypeSystem, STRING
from .type_ref import NULL, UNDEFINED, TypeRef, Union


class NullabilityMarker(str, Enum):
    NOT_NULL = "not_null"
    MAYBE_NULL = "maybe_null"


# Нормализованные имена атрибутов (без пространства имен и суффикса Attribute).
# JetBrains.Annotations.NotNull совпадает с System.Diagnostics.CodeAnalysis.NotNull
NULLABILITY_MARKERS: Dict[str, NullabilityMarker] = {
    "notnull": NullabilityMarker.NOT_NULL,
    "disallownull": NullabilityMarker.NOT_NULL,
    "maybenull": NullabilityMarker.MAYBE_NULL,
    "allownull": NullabilityMarker.MAYBE_NULL,
    "canbenull": NullabilityMarker.MAYBE_NULL,
}


class NullabilityStatus(str, Enum):
    NOT_NULL = "not_null"
    NULL = "null"
    OBLIVIOUS = "oblivious"


def find_marker(attributes: Iterable[AttributeInfo]) -> Optional[NullabilityMarker]:
    """Маркер nullability среди атрибутов. NOT_NULL важнее MAYBE_NULL"""
    markers = {
        NULLABILITY_MARKERS[attribute.short_name]
        for attribute in attributes
        if attribute.short_name in NULLABILITY_MARKERS
    }

    if NullabilityMarker.NOT_NULL in markers:
        return NullabilityMarker.NOT_NULL

    if NullabilityMarker.MAYBE_NULL in markers:
        return NullabilityMarker.MAYBE_NULL

    return None


class TypeWithNullabilityContext:
    """Вхождение типа вместе с атрибутами места, где он встречается"""

    def __init__(
        self,
        type_system: TypeSystem,
        type: TypeDescriptor,
        attributes: Iterable[AttributeInfo] = (),
    ):
        self.type = type
        self.attributes: Tuple[AttributeInfo, ...] = tuple(attributes)
        self.status = self._compute_status(type_system)

    def _compute_status(self, type_system: TypeSystem) -> NullabilityStatus:
        marker = find_marker(self.attributes)

        if marker == NullabilityMarker.NOT_NULL:
            return NullabilityStatus.NOT_NULL

        if marker == NullabilityMarker.MAYBE_NULL:
            return NullabilityStatus.NULL

        if type_system.is_nullable_value_type(self.type):
            return NullabilityStatus.NULL

        if type_system.is_value_type(self.type):
            return NullabilityStatus.NOT_NULL

        return NullabilityStatus.OBLIVIOUS

    @property
    def is_string(self) -> bool:
        return not self.type.is_generic_parameter and self.type.full_name == STRING

    def __repr__(self) -> str:
        return f"TypeWithNullabilityContext({self.type}, {self.status.value})"


class NullabilityResolver:
    """Расширение TypeRef вариантами undefined/null по статусу и настройкам"""

    def __init__(self, options):
        self.options = options

    def is_nullable(self, occurrence: TypeWithNullabilityContext) -> bool:
        if occurrence.status == NullabilityStatus.NULL:
            return True

        if occurrence.status == NullabilityStatus.NOT_NULL:
            return False

        # Oblivious: null допускается только для строк при включенной настройке
        return occurrence.is_string and self.options.strings_are_nullable_by_default

    def resolve(
        self, occurrence: TypeWithNullabilityContext, base: TypeRef, mapping=None
    ) -> TypeRef:
        """Итоговый тип вхождения с учетом nullability"""
        if not self.is_nullable(occurrence):
            return base

        mapping = (mapping or self.options.default_nullable_type_mapping).value
        widening = []

        if mapping in ("undefined", "null_or_undefined"):
            widening.append(UNDEFINED)

        if mapping in ("null", "null_or_undefined"):
            widening.append(NULL)

        return Union(base, *widening)

    @staticmethod
    def promote_optional(type_ref: TypeRef, enabled: bool) -> Tuple[TypeRef, bool]:
        """Замена варианта undefined на опциональность имени"""
        if not enabled or not type_ref.includes(UNDEFINED):
            return type_ref, False

        return type_ref.subtract(UNDEFINED), True
