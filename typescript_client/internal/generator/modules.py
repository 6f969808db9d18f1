import logging
from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from ..types.type_model import TypeDescriptor
from .classifier import Modules, TypeClassifier
from .dependency_graph import DependencyGraph

logger = logging.getLogger(__name__)


def _rank(module_name: str) -> int:
    if module_name in Modules.ALL:
        return Modules.ALL.index(module_name)
    return len(Modules.ALL)


@dataclass(frozen=True)
class TypeScriptModule:
    name: str
    types: Tuple[TypeDescriptor, ...] = ()
    imports: Tuple[str, ...] = ()

    @property
    def file_name(self) -> str:
        return f"{self.name}.ts"


class ModuleAssembler:
    """Распределение типов графа по модулям и расчет импортов"""

    def __init__(self, classifier: TypeClassifier):
        self.classifier = classifier

    def assemble(self, graph: DependencyGraph) -> List[TypeScriptModule]:
        types: Dict[str, List[TypeDescriptor]] = {name: [] for name in Modules.ALL}
        imports: Dict[str, Set[str]] = {name: set() for name in Modules.ALL}

        for descriptor, dependencies in graph.items():
            module_name = self.classifier.module_of(descriptor)

            if module_name is None:
                continue

            types.setdefault(module_name, []).append(descriptor)
            module_imports = imports.setdefault(module_name, set())

            for dependency in dependencies:
                dependency_module = self.classifier.module_of(dependency)

                if dependency_module is not None and dependency_module != module_name:
                    module_imports.add(dependency_module)

        modules = {
            name: TypeScriptModule(
                name=name,
                types=tuple(sorted(types[name], key=str)),
                imports=tuple(sorted(imports[name])),
            )
            for name in types
        }

        ordered = [modules[name] for name in self._emission_order(imports)]
        logger.debug(
            "Модули: %s", ", ".join(f"{m.name}({len(m.types)})" for m in ordered)
        )
        return ordered

    @staticmethod
    def _emission_order(imports: Dict[str, Set[str]]) -> List[str]:
        """Топологический порядок по импортам, циклы разрываются по числу незакрытых импортов"""
        remaining = set(imports)
        result = []

        while remaining:
            pending = {
                name: len(imports[name] & remaining) for name in remaining
            }
            name = min(remaining, key=lambda name: (pending[name], _rank(name), name))
            result.append(name)
            remaining.remove(name)

        return result
