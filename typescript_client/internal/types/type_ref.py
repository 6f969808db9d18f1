"""
Алгебра TypeScript выражений типов.

TypeRef - неизменяемое значение со структурным равенством:
- UserType: ссылка на пользовательский тип (модуль и имя подставляются при рендеринге)
- Compound: шаблон с аргументами (встроенные типы, массивы, словари, generic типы)
- Union: плоское множество вариантов без дубликатов
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Set, Tuple

from .type_model import TypeDescriptor

NameResolver = Callable[[TypeDescriptor], str]


class TypeRef:
    """Базовый класс выражения типа"""

    is_atomic: bool = True

    @property
    def variants(self) -> Tuple["TypeRef", ...]:
        return (self,)

    def includes(self, other: "TypeRef") -> bool:
        """Точная проверка вхождения варианта"""
        return other in self.variants

    def subtract(self, other: "TypeRef") -> "TypeRef":
        """Удаление варианта из объединения"""
        return Union(*[variant for variant in self.variants if variant != other])

    def dependencies(self) -> Set[TypeDescriptor]:
        return set()

    def render(self, name_resolver: NameResolver) -> str:
        raise NotImplementedError

    def __or__(self, other: "TypeRef") -> "TypeRef":
        return Union(self, other)


@dataclass(frozen=True)
class UserType(TypeRef):
    descriptor: TypeDescriptor

    def dependencies(self) -> Set[TypeDescriptor]:
        return {self.descriptor.definition}

    def render(self, name_resolver: NameResolver) -> str:
        return name_resolver(self.descriptor)


@dataclass(frozen=True)
class Compound(TypeRef):
    """Выражение по шаблону: аргументы подставляются на места {0}, {1}, ..."""

    template: str
    arguments: Tuple[TypeRef, ...] = ()
    is_atomic: bool = True
    needs_atomic_constituents: bool = False

    def dependencies(self) -> Set[TypeDescriptor]:
        result = set()
        for argument in self.arguments:
            result |= argument.dependencies()
        return result

    def render(self, name_resolver: NameResolver) -> str:
        rendered = []

        for argument in self.arguments:
            text = argument.render(name_resolver)

            if self.needs_atomic_constituents and not argument.is_atomic:
                text = f"({text})"

            rendered.append(text)

        return self.template.format(*rendered)

    @classmethod
    def builtin(cls, name: str) -> "Compound":
        return cls(template=name)

    @classmethod
    def array(cls, element: TypeRef) -> "Compound":
        return cls(
            template="{0}[]", arguments=(element,), needs_atomic_constituents=True
        )

    @classmethod
    def indexed(cls, key_type: str, value: TypeRef) -> "Compound":
        return cls(template="{{[key: %s]: {0}}}" % key_type, arguments=(value,))

    @classmethod
    def mapped(cls, key: TypeRef, value: TypeRef) -> "Compound":
        return cls(template="{{[K in {0}]: {1}}}", arguments=(key, value))

    @classmethod
    def generic(cls, definition: TypeRef, arguments: Iterable[TypeRef]) -> "Compound":
        arguments = tuple(arguments)
        placeholders = ", ".join("{%d}" % index for index in range(1, len(arguments) + 1))

        return cls(
            template="{0}<" + placeholders + ">",
            arguments=(definition,) + arguments,
        )


class Union(TypeRef):
    """Объединение типов. Вложенные объединения всегда разворачиваются"""

    __slots__ = ("_variants",)

    def __init__(self, *types: TypeRef):
        variants = []

        for type_ref in types:
            for variant in type_ref.variants:
                if variant not in variants:
                    variants.append(variant)

        self._variants = tuple(variants)

    @property
    def variants(self) -> Tuple[TypeRef, ...]:
        return self._variants

    @property
    def is_atomic(self) -> bool:
        if not self._variants:
            return True

        return len(self._variants) == 1 and self._variants[0].is_atomic

    def dependencies(self) -> Set[TypeDescriptor]:
        result = set()
        for variant in self._variants:
            result |= variant.dependencies()
        return result

    def render(self, name_resolver: NameResolver) -> str:
        if not self._variants:
            return "never"

        return " | ".join(
            (
                f"({variant.render(name_resolver)})"
                if not variant.is_atomic
                else variant.render(name_resolver)
            )
            for variant in self._variants
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Union):
            return NotImplemented

        return frozenset(self._variants) == frozenset(other._variants)

    def __hash__(self) -> int:
        return hash(frozenset(self._variants))

    def __repr__(self) -> str:
        return f"Union({', '.join(map(repr, self._variants))})"


NEVER = Union()
ANY = Compound.builtin("any")
ANY_ARRAY = Compound.builtin("any[]")
VOID = Compound.builtin("void")
STRING = Compound.builtin("string")
BOOLEAN = Compound.builtin("boolean")
NUMBER = Compound.builtin("number")
DATE = Compound.builtin("Date")
FORM_DATA = Compound.builtin("FormData")
NULL = Compound.builtin("null")
UNDEFINED = Compound.builtin("undefined")
