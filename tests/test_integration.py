"""
Интеграционные тесты для генератора и командной строки
"""

import json
import os
import sys

import pytest

from conftest import SAMPLE_MODEL
from typescript_client import GeneratorOptions, RouteResolutionError, TypeScriptGenerator
from typescript_client.cli import generate, load_model
from typescript_client.config import CONFIG_FILE_NAME, TypeScriptConfig


class TestIntegration:
    """Интеграционные тесты"""

    def test_complete_generation_workflow(self, sample_model, tmp_path):
        """Тест полного процесса генерации с записью файлов"""
        messages = []
        generator = TypeScriptGenerator(
            sample_model, GeneratorOptions(logger=messages.append)
        )

        modules = generator.generate_and_save(str(tmp_path))

        assert sorted(os.listdir(tmp_path)) == ["api.ts", "dto.ts", "enums.ts"]
        for module_name, code in modules:
            with open(tmp_path / f"{module_name}.ts", encoding="utf-8") as f:
                assert f.read() == code

        assert messages[0] == "Generating typescript files"
        assert messages[1] == f"    enums.ts generated at {tmp_path / 'enums.ts'}"
        assert len(messages) == 4

    def test_force_create_destination(self, sample_model, tmp_path):
        """Тест создания папки назначения"""
        destination = tmp_path / "frontend" / "api"
        generator = TypeScriptGenerator(sample_model, GeneratorOptions(logger=lambda _: None))

        generator.generate_and_save(str(destination), force_create_destination=True)

        assert (destination / "api.ts").exists()

    def test_missing_destination(self, sample_model, tmp_path):
        """Тест отсутствующей папки без принудительного создания"""
        messages = []
        generator = TypeScriptGenerator(
            sample_model, GeneratorOptions(logger=messages.append)
        )

        with pytest.raises(FileNotFoundError):
            generator.generate_and_save(str(tmp_path / "missing"))

        assert messages[-1].startswith("ERROR GENERATING TYPESCRIPT FILES: ")

    def test_generation_error_is_logged(self, tmp_path):
        """Тест записи ошибки генерации в лог"""
        messages = []
        model = {
            "types": [
                {"name": "BrokenController", "attributes": ["ApiController"], "methods": [{"name": "Run"}]}
            ]
        }
        generator = TypeScriptGenerator(model, GeneratorOptions(logger=messages.append))

        with pytest.raises(RouteResolutionError):
            generator.generate_and_save(str(tmp_path))

        assert messages == [
            "Generating typescript files",
            "ERROR GENERATING TYPESCRIPT FILES: Could not determine the route "
            "for api controller action BrokenController.Run",
        ]
        assert os.listdir(tmp_path) == []


@pytest.fixture
def model_file(tmp_path):
    path = tmp_path / "model.json"
    path.write_text(json.dumps(SAMPLE_MODEL), encoding="utf-8")
    return path


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["typescript-client", *args])
    generate()


class TestLoadModel:
    """Тесты загрузки модели"""

    def test_refs_are_resolved(self, tmp_path):
        """Тест разрешения $ref в документе модели"""
        path = tmp_path / "model.json"
        path.write_text(
            json.dumps(
                {
                    "definitions": {"route": {"name": "Route", "template": "api/[controller]"}},
                    "types": [
                        {
                            "name": "PingController",
                            "attributes": ["ApiController", {"$ref": "#/definitions/route"}],
                            "methods": [{"name": "Ping"}],
                        }
                    ],
                }
            ),
            encoding="utf-8",
        )

        model = load_model(str(path))

        assert model["types"][0]["attributes"][1]["template"] == "api/[controller]"
        api = dict(TypeScriptGenerator(model).generate())["api"]
        assert "url: '/api/Ping'," in api

    def test_missing_source(self, tmp_path):
        """Тест несуществующего источника"""
        with pytest.raises(ValueError):
            load_model(str(tmp_path / "missing.json"))


class TestCli:
    """Тесты командной строки"""

    def test_generate_with_force(self, monkeypatch, tmp_path, model_file):
        """Тест генерации без подтверждений с сохранением конфига"""
        monkeypatch.chdir(tmp_path)

        run_cli(monkeypatch, "--model", str(model_file), "--output", "client", "--force")

        assert sorted(os.listdir(tmp_path / "client")) == ["api.ts", "dto.ts", "enums.ts"]

        config = TypeScriptConfig.from_file(str(tmp_path / CONFIG_FILE_NAME))
        assert config.model == str(model_file)
        assert config.output == "client"

    def test_generate_from_saved_config(self, monkeypatch, tmp_path, model_file):
        """Тест генерации по сохраненному конфигу"""
        monkeypatch.chdir(tmp_path)
        TypeScriptConfig(model=str(model_file), output="generated").save_to_file()

        run_cli(monkeypatch, "--force-create")

        assert (tmp_path / "generated" / "dto.ts").exists()

    def test_declined_destination(self, monkeypatch, tmp_path, model_file):
        """Тест отказа от создания директории"""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("builtins.input", lambda message: "n")

        run_cli(monkeypatch, "--model", str(model_file), "--output", "client")

        assert not (tmp_path / "client").exists()
        assert not (tmp_path / CONFIG_FILE_NAME).exists()

    def test_init_config(self, monkeypatch, tmp_path):
        """Тест создания конфига"""
        monkeypatch.chdir(tmp_path)

        run_cli(monkeypatch, "--init-config", "--url", "http://localhost:5000/model.json")

        config = TypeScriptConfig.from_file()
        assert config.model == "http://localhost:5000/model.json"
        assert config.output == "typescript"

    def test_missing_model(self, monkeypatch, tmp_path, capsys):
        """Тест запуска без модели"""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(SystemExit) as error:
            run_cli(monkeypatch)

        assert error.value.code == 1
        assert "❌" in capsys.readouterr().out

    def test_generation_failure(self, monkeypatch, tmp_path):
        """Тест ошибки загрузки модели"""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(SystemExit) as error:
            run_cli(
                monkeypatch, "--model", "missing.json", "--output", ".", "--force"
            )

        assert error.value.code == 1
        assert not (tmp_path / CONFIG_FILE_NAME).exists()
