"""
Главный модуль генератора - чистый интерфейс
"""

import os
from typing import Any, Dict, List, Optional, Tuple, Union

from .internal.generator.client_generator import ClientGenerator
from .internal.parser.type_model import TypeModelParser
from .internal.types.type_model import TypeSystem
from .options import GeneratorOptions


class TypeScriptGenerator:
    """Чистый интерфейс для генерации TypeScript клиентов"""

    def __init__(
        self,
        model: Union[Dict[str, Any], TypeSystem],
        options: Optional[GeneratorOptions] = None,
    ):
        self.options = options or GeneratorOptions()
        self.type_system = (
            model if isinstance(model, TypeSystem) else TypeModelParser(model).parse()
        )

    def generate(self) -> List[Tuple[str, str]]:
        """Генерация модулей: список (имя модуля, код). Без ввода-вывода"""
        return ClientGenerator(self.type_system, self.options).generate()

    def generate_and_save(
        self, destination: str, force_create_destination: bool = False
    ) -> List[Tuple[str, str]]:
        """Генерация и запись <module>.ts в папку назначения"""
        log = self.options.logger

        try:
            log("Generating typescript files")
            modules = self.generate()

            if force_create_destination:
                os.makedirs(destination, exist_ok=True)

            for module_name, code in modules:
                path = os.path.join(destination, f"{module_name}.ts")

                with open(path, "w", encoding="utf-8") as f:
                    f.write(code)

                log(f"    {module_name}.ts generated at {os.path.abspath(path)}")

            return modules

        except Exception as e:
            log(f"ERROR GENERATING TYPESCRIPT FILES: {e}")
            raise


def generate_typescript(
    model: Union[Dict[str, Any], TypeSystem], options: Optional[GeneratorOptions] = None
) -> List[Tuple[str, str]]:
    """Генерация TypeScript модулей из модели типов"""
    return TypeScriptGenerator(model, options).generate()
