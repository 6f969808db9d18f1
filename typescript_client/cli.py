import argparse
import json
import os
import pathlib
import sys
from typing import Any, Dict

import httpx
import jsonref

from typescript_client.config import CONFIG_FILE_NAME, TypeScriptConfig
from typescript_client.generator import TypeScriptGenerator


def confirm_choice(message: str) -> bool:
    """Запрос подтверждения у пользователя"""
    while True:
        choice = input(f"{message} (y/n): ").lower().strip()
        if choice in ["y", "yes", "да", ""]:
            return True
        elif choice in ["n", "no", "нет"]:
            return False
        print("Введите y/n")


def load_model(source: str) -> Dict[str, Any]:
    """Загрузка документа модели типов из файла или по URL, с разрешением $ref"""
    print(f"📥 Загрузка модели типов из {source}...")

    if source.startswith(("http://", "https://")):
        response = httpx.get(source, follow_redirects=True)
        response.raise_for_status()
        document = response.json()
        base_uri = source
    elif os.path.exists(source):
        with open(source, "r", encoding="utf-8") as f:
            document = json.load(f)
        base_uri = pathlib.Path(source).absolute().as_uri()
    else:
        raise ValueError(
            f"Не удалось загрузить модель из {source}. Проверьте URL или путь к файлу."
        )

    # Фрагменты модели могут переиспользоваться через $ref
    return jsonref.loads(json.dumps(document), base_uri=base_uri, proxies=False)


def _generate(config: TypeScriptConfig, force: bool, force_create: bool) -> bool:
    if not os.path.isdir(config.output) and not force_create:
        if force or confirm_choice(
            f"Директория {config.output} не существует. Создать?"
        ):
            force_create = True
        else:
            return False

    document = load_model(config.model)

    print("⚙️ Генерация кода...")
    generator = TypeScriptGenerator(document, config.to_options(logger=print))
    modules = generator.generate_and_save(
        config.output, force_create_destination=force_create
    )

    print(f"✅ Генерация завершена успешно! Модулей: {len(modules)}")
    print(f"📦 Файлы созданы в: {os.path.abspath(config.output)}")
    return True


def generate():
    """Команда генерации TypeScript клиента"""
    parser = argparse.ArgumentParser(
        description="Генерация TypeScript клиента из модели контроллеров и DTO"
    )
    parser.add_argument("--model", type=str, help="Путь к JSON файлу модели типов")
    parser.add_argument("--url", type=str, help="URL модели типов")
    parser.add_argument("--output", type=str, help="Директория для .ts файлов")
    parser.add_argument(
        "--init-config",
        action="store_true",
        help=f"Создать конфиг файл {CONFIG_FILE_NAME}",
    )
    parser.add_argument(
        "--force", action="store_true", help="Генерировать без подтверждения"
    )
    parser.add_argument(
        "--force-create",
        action="store_true",
        help="Создать директорию назначения при необходимости",
    )

    args = parser.parse_args()

    # Инициализация конфига
    if args.init_config:
        config = TypeScriptConfig(
            model=args.url or args.model,
            output=args.output or "typescript",
        )
        config.save_to_file()
        print(f"✅ Создан конфиг файл {CONFIG_FILE_NAME}")
        return

    # Загрузка конфига из файла
    file_config = TypeScriptConfig.from_file(search_dir=args.output)

    if file_config:
        print(f"📋 Используется конфиг {CONFIG_FILE_NAME}")
        final_config = file_config.merge_with_args(args)
    elif args.url or args.model:
        final_config = TypeScriptConfig(
            model=args.url or args.model, output=args.output or "typescript"
        )
    else:
        print(
            "❌ Ошибка: Укажите --model или --url, либо создайте конфиг с --init-config"
        )
        sys.exit(1)

    if not final_config.model:
        print("❌ Ошибка: модель не указана ни в конфиге, ни в аргументах")
        sys.exit(1)

    print(f"🚀 Генерация TypeScript клиента в {final_config.output}")

    try:
        if not _generate(final_config, args.force, args.force_create):
            return

        if not file_config and (
            args.force or confirm_choice(f"Сохранить настройки в {CONFIG_FILE_NAME}?")
        ):
            final_config.save_to_file()
            print(f"💾 Конфиг сохранен в {CONFIG_FILE_NAME}")

    except Exception as e:
        print(f"❌ Ошибка генерации: {e}")
        sys.exit(1)


if __name__ == "__main__":
    generate()
