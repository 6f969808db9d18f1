from enum import Enum
from typing import Optional

from ..types.type_model import TypeDescriptor, TypeKind, TypeSystem

API_CONTROLLER_ATTRIBUTE = "ApiController"


class TypeCategory(str, Enum):
    ENUM = "enum"
    CONTROLLER = "controller"
    DTO = "dto"
    EXCLUDED = "excluded"


class Modules:
    ENUMS = "enums"
    DTO = "dto"
    API = "api"

    ALL = (ENUMS, DTO, API)


MODULE_BY_CATEGORY = {
    TypeCategory.ENUM: Modules.ENUMS,
    TypeCategory.CONTROLLER: Modules.API,
    TypeCategory.DTO: Modules.DTO,
}


class TypeClassifier:
    """Классификация типов и распределение по модулям"""

    def __init__(self, type_system: TypeSystem, type_filter=lambda declaration: True):
        self.type_system = type_system
        self.type_filter = type_filter

    def is_controller(self, descriptor: TypeDescriptor) -> bool:
        """Неабстрактный тип с атрибутом ApiController (в том числе унаследованным)"""
        declaration = self.type_system.declaration(descriptor.definition)

        return (
            declaration is not None
            and not declaration.is_abstract
            and self.type_system.has_attribute(
                declaration.descriptor, API_CONTROLLER_ATTRIBUTE, inherit=True
            )
        )

    def classify(self, descriptor: TypeDescriptor) -> TypeCategory:
        declaration = self.type_system.declaration(descriptor.definition)

        if declaration is None or declaration.is_framework:
            return TypeCategory.EXCLUDED

        if not self.type_filter(declaration):
            return TypeCategory.EXCLUDED

        if declaration.kind == TypeKind.ENUM:
            return TypeCategory.ENUM

        if self.is_controller(descriptor):
            return TypeCategory.CONTROLLER

        return TypeCategory.DTO

    def module_of(self, descriptor: TypeDescriptor) -> Optional[str]:
        return MODULE_BY_CATEGORY.get(self.classify(descriptor))

    def passes_filter(self, descriptor: TypeDescriptor) -> bool:
        return self.classify(descriptor) != TypeCategory.EXCLUDED
