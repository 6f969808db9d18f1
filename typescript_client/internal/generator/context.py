from ..types.type_model import TypeDescriptor, TypeSystem
from ..types.type_ref import TypeRef
from .classifier import TypeClassifier
from .modules import TypeScriptModule


class GenerationContext:
    """Текущий модуль и разрешение квалифицированных имен типов"""

    def __init__(
        self,
        module: TypeScriptModule,
        type_system: TypeSystem,
        classifier: TypeClassifier,
        options,
    ):
        self.module = module
        self.type_system = type_system
        self.classifier = classifier
        self.options = options

    def namespace_of(self, module_name: str, descriptor: TypeDescriptor) -> str:
        declaration = self.type_system.declaration(descriptor.definition)
        return self.options.namespace_calculator(module_name, declaration) or ""

    def qualified_name(self, descriptor: TypeDescriptor) -> str:
        """module.namespace.Name, модуль опускается для текущего модуля"""
        module_name = self.classifier.module_of(descriptor)

        if module_name is None:
            return "any"

        return ".".join(
            filter(
                bool,
                [
                    module_name if module_name != self.module.name else "",
                    self.namespace_of(module_name, descriptor),
                    descriptor.name,
                ],
            )
        )

    def render(self, type_ref: TypeRef) -> str:
        return type_ref.render(self.qualified_name)
