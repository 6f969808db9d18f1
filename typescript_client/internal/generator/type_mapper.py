"""
Маппинг типов модели в TypeScript выражения (TypeRef)
"""

from typing import Iterable, Optional, Set

from ..types import type_ref as ts
from ..types.nullability import NullabilityResolver, TypeWithNullabilityContext
from ..types.type_model import (
    ACTION_RESULT,
    ACTION_RESULT_INTERFACE,
    BOOLEAN,
    CHAR,
    DATE_TYPES,
    DICTIONARY_TYPES,
    ENUMERABLE,
    FILE_RESULT,
    FORM_FILE,
    GUID,
    NUMERIC_TYPES,
    OBJECT,
    STRING,
    TASK,
    VALUE_TASK,
    VOID,
    AttributeInfo,
    TypeDescriptor,
    TypeSystem,
)
from .classifier import TypeCategory, TypeClassifier

VOID_DESCRIPTOR = TypeDescriptor(name=VOID)

SIMPLE_TYPES = {
    VOID: ts.VOID,
    OBJECT: ts.ANY,
    STRING: ts.STRING,
    BOOLEAN: ts.BOOLEAN,
    CHAR: ts.STRING,
    GUID: ts.STRING,
    FORM_FILE: ts.FORM_DATA,
}


class TypeMapper:
    """Преобразование вхождений типов в TypeRef"""

    def __init__(
        self,
        type_system: TypeSystem,
        nullability: NullabilityResolver,
        classifier: TypeClassifier,
    ):
        self.type_system = type_system
        self.nullability = nullability
        self.classifier = classifier

    def occurrence(
        self, descriptor: TypeDescriptor, attributes: Iterable[AttributeInfo] = ()
    ) -> TypeWithNullabilityContext:
        return TypeWithNullabilityContext(self.type_system, descriptor, attributes)

    def to_type_ref(
        self, occurrence: TypeWithNullabilityContext, mapping=None
    ) -> ts.TypeRef:
        """TypeRef вхождения, расширенный по nullability"""
        base = self.map_type(self.type_system.unwrap_nullable(occurrence.type))
        return self.nullability.resolve(occurrence, base, mapping)

    def _nested(self, descriptor: TypeDescriptor) -> ts.TypeRef:
        # Аргументы generic типов и элементы коллекций не несут атрибутов
        return self.to_type_ref(self.occurrence(descriptor))

    def map_type(self, descriptor: TypeDescriptor) -> ts.TypeRef:
        if descriptor.is_generic_parameter:
            return ts.Compound.builtin(descriptor.name)

        type_system = self.type_system
        declaration = type_system.declaration(descriptor)

        if declaration is None:
            return ts.ANY

        full_name = descriptor.full_name

        if full_name in SIMPLE_TYPES:
            return SIMPLE_TYPES[full_name]

        if full_name in DATE_TYPES:
            return ts.DATE

        if full_name in NUMERIC_TYPES:
            return ts.NUMBER

        if type_system.is_assignable_to(descriptor, FILE_RESULT):
            return ts.ANY

        dictionary = type_system.find_generic_implementation(descriptor, DICTIONARY_TYPES)
        if dictionary is not None:
            return self._map_dictionary(*dictionary.generic_arguments)

        sequence = type_system.find_generic_implementation(descriptor, {ENUMERABLE})
        if sequence is not None:
            return ts.Compound.array(self._nested(sequence.generic_arguments[0]))

        if type_system.is_assignable_to(descriptor, ENUMERABLE):
            return ts.ANY_ARRAY

        action_result = type_system.find_generic_implementation(
            descriptor, {ACTION_RESULT}
        )
        if action_result is not None:
            return self._nested(action_result.generic_arguments[0])

        if type_system.is_assignable_to(descriptor, ACTION_RESULT_INTERFACE):
            return ts.ANY

        if declaration.is_framework:
            return ts.ANY

        if self.classifier.classify(descriptor) == TypeCategory.EXCLUDED:
            return ts.ANY

        if descriptor.generic_arguments:
            return ts.Compound.generic(
                ts.UserType(descriptor.definition),
                (self._nested(argument) for argument in descriptor.generic_arguments),
            )

        return ts.UserType(descriptor)

    def _map_dictionary(
        self, key: TypeDescriptor, value: TypeDescriptor
    ) -> ts.TypeRef:
        value_ref = self._nested(value)

        if key.full_name == STRING and not key.is_generic_parameter:
            return ts.Compound.indexed("string", value_ref)

        if key.full_name in NUMERIC_TYPES and not key.is_generic_parameter:
            return ts.Compound.indexed("number", value_ref)

        if self.type_system.is_enum(key):
            return ts.Compound.mapped(self.map_type(key), value_ref)

        return ts.ANY

    def unwrap_return_type(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        """Снятие Task/ValueTask с возвращаемого типа. Task без результата - void"""
        while not descriptor.is_generic_parameter and descriptor.full_name in (
            TASK,
            VALUE_TASK,
        ):
            if not descriptor.generic_arguments:
                return VOID_DESCRIPTOR

            descriptor = descriptor.generic_arguments[0]

        return descriptor

    def dependencies(
        self, occurrence: TypeWithNullabilityContext, mapping=None
    ) -> Set[TypeDescriptor]:
        return self.to_type_ref(occurrence, mapping).dependencies()

    def user_type_ref(self, descriptor: TypeDescriptor) -> Optional[ts.TypeRef]:
        """TypeRef базового типа или интерфейса, если это собственный тип"""
        type_ref = self.map_type(descriptor)
        head = (
            type_ref.arguments[0]
            if isinstance(type_ref, ts.Compound) and type_ref.arguments
            else type_ref
        )

        if head == ts.UserType(descriptor.definition):
            return type_ref

        return None
