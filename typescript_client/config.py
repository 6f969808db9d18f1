"""
Конфигурация для генерации TypeScript клиента
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

import toml

from .options import DEFAULT_HEADER, GeneratorOptions, NullableTypeMapping

CONFIG_FILE_NAME = "typescript.toml"


@dataclass
class TypeScriptConfig:
    """Конфигурация генератора TypeScript клиента"""

    model: Optional[str] = None
    output: Optional[str] = None

    strings_nullable: bool = True
    nullable_mapping: str = NullableTypeMapping.NULL_OR_UNDEFINED.value
    parameter_nullable_mapping: Optional[str] = None
    property_nullable_mapping: Optional[str] = None
    optional_properties: bool = True
    optional_parameters: bool = True

    entry_assemblies: Optional[List[str]] = None
    additional_entry_types: List[str] = field(default_factory=list)
    header: str = DEFAULT_HEADER

    @classmethod
    def from_file(
        cls, config_path: str = CONFIG_FILE_NAME, search_dir: str = None
    ) -> Optional["TypeScriptConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, CONFIG_FILE_NAME)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except toml.TomlDecodeError:
            return None

        defaults = cls()
        return cls(
            model=config_data.get("model"),
            output=config_data.get("output", "typescript"),
            strings_nullable=config_data.get("strings_nullable", defaults.strings_nullable),
            nullable_mapping=config_data.get("nullable_mapping", defaults.nullable_mapping),
            parameter_nullable_mapping=config_data.get("parameter_nullable_mapping"),
            property_nullable_mapping=config_data.get("property_nullable_mapping"),
            optional_properties=config_data.get(
                "optional_properties", defaults.optional_properties
            ),
            optional_parameters=config_data.get(
                "optional_parameters", defaults.optional_parameters
            ),
            entry_assemblies=config_data.get("entry_assemblies"),
            additional_entry_types=config_data.get("additional_entry_types", []),
            header=config_data.get("header", defaults.header),
        )

    def save_to_file(self, config_path: str = CONFIG_FILE_NAME) -> None:
        """Сохранение конфигурации в файл"""
        config_data = {
            "model": self.model,
            "output": self.output,
            "strings_nullable": self.strings_nullable,
            "nullable_mapping": self.nullable_mapping,
            "parameter_nullable_mapping": self.parameter_nullable_mapping,
            "property_nullable_mapping": self.property_nullable_mapping,
            "optional_properties": self.optional_properties,
            "optional_parameters": self.optional_parameters,
            "entry_assemblies": self.entry_assemblies,
            "additional_entry_types": self.additional_entry_types,
            "header": self.header,
        }

        # toml не хранит None
        config_data = {key: value for key, value in config_data.items() if value is not None}

        with open(config_path, "w") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "TypeScriptConfig":
        """Объединение с аргументами командной строки"""
        return TypeScriptConfig(
            model=getattr(args, "url", None) or getattr(args, "model", None) or self.model,
            output=getattr(args, "output", None) or self.output,
            strings_nullable=self.strings_nullable,
            nullable_mapping=self.nullable_mapping,
            parameter_nullable_mapping=self.parameter_nullable_mapping,
            property_nullable_mapping=self.property_nullable_mapping,
            optional_properties=self.optional_properties,
            optional_parameters=self.optional_parameters,
            entry_assemblies=self.entry_assemblies,
            additional_entry_types=list(self.additional_entry_types),
            header=self.header,
        )

    def to_options(self, **overrides) -> GeneratorOptions:
        """Опции генератора из конфигурации"""
        return GeneratorOptions(
            strings_are_nullable_by_default=self.strings_nullable,
            default_nullable_type_mapping=NullableTypeMapping(self.nullable_mapping),
            parameter_nullable_type_mapping=(
                NullableTypeMapping(self.parameter_nullable_mapping)
                if self.parameter_nullable_mapping
                else None
            ),
            property_nullable_type_mapping=(
                NullableTypeMapping(self.property_nullable_mapping)
                if self.property_nullable_mapping
                else None
            ),
            make_undefined_properties_optional=self.optional_properties,
            make_undefined_parameters_optional=self.optional_parameters,
            entry_assemblies=self.entry_assemblies,
            additional_entry_types=list(self.additional_entry_types),
            header=self.header,
            **overrides,
        )
