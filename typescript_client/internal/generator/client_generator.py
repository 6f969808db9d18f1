import logging
from itertools import groupby
from typing import Dict, List, Optional, Tuple

from ..types.exceptions import GenerationError
from ..types.models import CodeBlock, CodeFile, Namespace
from ..types.nullability import NullabilityResolver
from ..types.type_model import TypeDescriptor, TypeSystem
from ..utils.naming import format_code
from .classifier import Modules, TypeClassifier
from .code_generators import ControllerGenerator, DtoGenerator, EnumGenerator
from .context import GenerationContext
from .controllers import ControllerInspector
from .dependency_graph import DependencyGraphBuilder
from .modules import ModuleAssembler, TypeScriptModule
from .templates import templates
from .type_mapper import TypeMapper

logger = logging.getLogger(__name__)


class ClientGenerator:
    """Генератор TypeScript модулей из модели типов.

    Каждый этап (классификация, nullability, маппинг типов, разбор контроллеров,
    генерация кода по видам типов) можно заменить, передав свою реализацию.
    """

    def __init__(
        self,
        type_system: TypeSystem,
        options,
        classifier: Optional[TypeClassifier] = None,
        nullability: Optional[NullabilityResolver] = None,
        type_mapper: Optional[TypeMapper] = None,
        inspector: Optional[ControllerInspector] = None,
        generators: Optional[Dict[str, object]] = None,
    ):
        self.type_system = type_system
        self.options = options

        self.classifier = classifier or TypeClassifier(type_system, options.type_filter)
        self.nullability = nullability or NullabilityResolver(options)
        self.type_mapper = type_mapper or TypeMapper(
            type_system, self.nullability, self.classifier
        )
        self.inspector = inspector or ControllerInspector(type_system, options.type_filter)

        self.generators = {
            Modules.ENUMS: EnumGenerator(),
            Modules.DTO: DtoGenerator(self.type_mapper, options),
            Modules.API: ControllerGenerator(self.type_mapper, self.inspector, options),
        }
        self.generators.update(generators or {})

    def entry_types(self) -> List[TypeDescriptor]:
        """Контроллеры из сборок точек входа и дополнительные типы"""
        result = [
            descriptor
            for descriptor in self.type_system.exported_types(self.options.entry_assemblies)
            if self.classifier.is_controller(descriptor)
        ]

        for name in self.options.additional_entry_types:
            declaration = self.type_system.find(name)

            if declaration is None:
                raise GenerationError(f"Дополнительный тип точки входа не найден: {name}")

            result.append(declaration.descriptor)

        return result

    def generate(self) -> List[Tuple[str, str]]:
        """Основная генерация: список (имя модуля, код)"""
        graph = DependencyGraphBuilder(
            self.type_system, self.classifier, self.type_mapper, self.inspector
        ).build(self.entry_types())

        modules = ModuleAssembler(self.classifier).assemble(graph)

        return [(module.name, format_code(str(self.generate_module(module)))) for module in modules]

    def generate_module(self, module: TypeScriptModule) -> CodeFile:
        context = GenerationContext(module, self.type_system, self.classifier, self.options)

        code_file = CodeFile(
            file_name=module.file_name,
            header=self.options.header,
            imports=[templates.module_import.format(name=name) for name in module.imports]
            + list(self.options.additional_module_imports(module.name)),
            content=list(self.options.additional_module_content(module.name)),
        )

        if not module.types:
            code_file.add_block(templates.empty_module)
            return code_file

        generator = self.generators[module.name]
        declarations = sorted(
            (self.type_system.declaration(descriptor) for descriptor in module.types),
            key=lambda declaration: (
                context.namespace_of(module.name, declaration.descriptor),
                declaration.name,
                declaration.full_name,
            ),
        )

        for namespace, group in groupby(
            declarations,
            key=lambda declaration: context.namespace_of(module.name, declaration.descriptor),
        ):
            code_file.add_block(
                Namespace(
                    name=namespace,
                    blocks=[generator.generate(context, declaration) for declaration in group],
                )
            )

        logger.debug("Модуль %s: %d типов", module.name, len(module.types))
        return code_file
