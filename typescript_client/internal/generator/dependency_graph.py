import logging
from collections import deque
from typing import Dict, Iterable, List, Set

from ..types.nullability import TypeWithNullabilityContext
from ..types.type_model import OBJECT, TypeDescriptor, TypeSystem
from .classifier import TypeCategory, TypeClassifier
from .controllers import ControllerInspector
from .type_mapper import TypeMapper

logger = logging.getLogger(__name__)

DependencyGraph = Dict[TypeDescriptor, Set[TypeDescriptor]]


class DependencyGraphBuilder:
    """Обход типов, достижимых из точек входа"""

    def __init__(
        self,
        type_system: TypeSystem,
        classifier: TypeClassifier,
        type_mapper: TypeMapper,
        inspector: ControllerInspector,
    ):
        self.type_system = type_system
        self.classifier = classifier
        self.type_mapper = type_mapper
        self.inspector = inspector

    def build(self, entry_types: Iterable[TypeDescriptor]) -> DependencyGraph:
        graph: DependencyGraph = {}
        queue = deque()
        queued: Set[TypeDescriptor] = set()

        for descriptor in entry_types:
            descriptor = descriptor.definition

            if descriptor not in queued and self.classifier.passes_filter(descriptor):
                queue.append(descriptor)
                queued.add(descriptor)

        while queue:
            descriptor = queue.popleft()
            dependencies: Set[TypeDescriptor] = set()

            for occurrence in self.occurrences(descriptor):
                for dependency in self.type_mapper.dependencies(occurrence):
                    if not self.classifier.passes_filter(dependency):
                        continue

                    dependencies.add(dependency)

                    if dependency not in queued:
                        logger.debug("Найден тип %s (из %s)", dependency, descriptor)
                        queue.append(dependency)
                        queued.add(dependency)

            graph[descriptor] = dependencies

        logger.debug("Граф зависимостей: %d типов", len(graph))
        return graph

    def occurrences(
        self, descriptor: TypeDescriptor
    ) -> List[TypeWithNullabilityContext]:
        """Вхождения типов, от которых напрямую зависит тип"""
        category = self.classifier.classify(descriptor)
        mapper = self.type_mapper

        if category == TypeCategory.CONTROLLER:
            result = []

            for action in self.inspector.actions(descriptor):
                method = action.method
                result.append(
                    mapper.occurrence(
                        mapper.unwrap_return_type(method.return_type),
                        method.return_attributes,
                    )
                )
                result.extend(
                    mapper.occurrence(parameter.type, parameter.attributes)
                    for parameter in method.parameters
                )

            return result

        if category == TypeCategory.DTO:
            declaration = self.type_system.declaration(descriptor)
            result = []

            if declaration.base_type is not None and declaration.base_type.full_name != OBJECT:
                result.append(mapper.occurrence(declaration.base_type))

            result.extend(mapper.occurrence(interface) for interface in declaration.interfaces)
            result.extend(
                mapper.occurrence(member.type, member.attributes)
                for member in dto_members(declaration)
            )

            return result

        return []


def dto_members(declaration):
    """Читаемые публичные члены экземпляра, объявленные в самом типе"""
    return [
        member
        for member in declaration.members
        if member.can_read and member.is_public and not member.is_static
    ]
