"""
Тесты для системы конфигурации
"""

import os
import tempfile

from typescript_client.config import CONFIG_FILE_NAME, TypeScriptConfig
from typescript_client.options import DEFAULT_HEADER, NullableTypeMapping


class TestTypeScriptConfig:
    """Тесты конфигурации генератора TypeScript"""

    def test_config_creation(self):
        """Тест создания конфигурации"""
        config = TypeScriptConfig(model="model.json", output="client")

        assert config.model == "model.json"
        assert config.output == "client"

    def test_default_values(self):
        """Тест значений по умолчанию"""
        config = TypeScriptConfig()

        assert config.model is None
        assert config.output is None
        assert config.strings_nullable is True
        assert config.nullable_mapping == "null_or_undefined"
        assert config.entry_assemblies is None
        assert config.additional_entry_types == []
        assert config.header == DEFAULT_HEADER

    def test_config_save_and_load(self):
        """Тест сохранения и загрузки конфигурации"""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = os.path.join(temp_dir, "test_typescript.toml")

            # Создаем и сохраняем конфиг
            original_config = TypeScriptConfig(
                model="http://api.example.com/model.json",
                output="frontend/api",
                strings_nullable=False,
                parameter_nullable_mapping="undefined",
                entry_assemblies=["Web"],
                additional_entry_types=["Web.Models.Extra"],
            )
            original_config.save_to_file(config_path)

            # Загружаем конфиг
            loaded_config = TypeScriptConfig.from_file(config_path)

            assert loaded_config == original_config

    def test_config_found_in_search_dir(self):
        """Тест поиска конфига в директории"""
        with tempfile.TemporaryDirectory() as temp_dir:
            TypeScriptConfig(model="model.json").save_to_file(
                os.path.join(temp_dir, CONFIG_FILE_NAME)
            )

            loaded_config = TypeScriptConfig.from_file("missing.toml", search_dir=temp_dir)

            assert loaded_config.model == "model.json"
            assert loaded_config.output == "typescript"

    def test_config_file_not_exists(self):
        """Тест загрузки несуществующего конфига"""
        config = TypeScriptConfig.from_file("nonexistent.toml")
        assert config is None

    def test_broken_config_file(self):
        """Тест некорректного toml"""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = os.path.join(temp_dir, CONFIG_FILE_NAME)
            with open(config_path, "w") as f:
                f.write("model = [")

            assert TypeScriptConfig.from_file(config_path) is None

    def test_config_merge_with_args(self):
        """Тест объединения конфига с аргументами"""
        config = TypeScriptConfig(
            model="model.json", output="original", strings_nullable=False
        )

        # Мокаем args
        class MockArgs:
            def __init__(self):
                self.url = "http://api.new.com/model.json"
                self.model = None
                self.output = None

        merged = config.merge_with_args(MockArgs())

        assert merged.model == "http://api.new.com/model.json"  # Переписан из args
        assert merged.output == "original"  # Остался из config
        assert merged.strings_nullable is False

    def test_to_options(self):
        """Тест опций генератора из конфигурации"""
        config = TypeScriptConfig(
            strings_nullable=False,
            nullable_mapping="null",
            property_nullable_mapping="undefined",
            optional_parameters=False,
            entry_assemblies=["Web"],
            header="// header",
        )

        messages = []
        options = config.to_options(logger=messages.append)

        assert options.strings_are_nullable_by_default is False
        assert options.default_nullable_type_mapping == NullableTypeMapping.NULL
        assert options.parameter_mapping == NullableTypeMapping.NULL
        assert options.property_mapping == NullableTypeMapping.UNDEFINED
        assert options.make_undefined_parameters_optional is False
        assert options.make_undefined_properties_optional is True
        assert options.entry_assemblies == ["Web"]
        assert options.header == "// header"

        options.logger("message")
        assert messages == ["message"]
