"""Утилиты для работы с именами и текстом генерируемого кода"""

import re


def to_camel_case(name: str) -> str:
    """
    Переводит первую букву имени в нижний регистр, если она заглавная.

    Examples:
        >>> to_camel_case("GetRegisteredUsers")
        'getRegisteredUsers'
        >>> to_camel_case("value")
        'value'
    """
    if not name or not name[0].isupper():
        return name

    return name[0].lower() + name[1:]


def to_sentence_case(name: str) -> str:
    """
    Вставляет пробелы на границах camelCase, слова после первого в нижнем регистре.

    Examples:
        >>> to_sentence_case("SuperAdmin")
        'Super admin'
    """
    return re.sub(
        "[a-z][A-Z]",
        lambda match: match.group(0)[0] + " " + match.group(0)[1].lower(),
        name,
    )


def escape_for_js_string(text: str) -> str:
    """Экранирование текста для строкового литерала в одинарных кавычках"""
    return (
        text.replace("'", "\\'")
        .replace('"', '\\"')
        .replace("\r", "\\r")
        .replace("\n", "\\n")
    )


def replace_ignore_case(text: str, old: str, new: str) -> str:
    return re.sub(re.escape(old), lambda _: new, text, flags=re.IGNORECASE)


def strip_suffix_ignore_case(text: str, suffix: str) -> str:
    if text.lower().endswith(suffix.lower()):
        return text[: -len(suffix)]

    return text


def combine_route(class_template: str, method_template: str) -> str:
    """
    Объединяет шаблоны маршрутов класса и метода в /class/method.

    Examples:
        >>> combine_route("[controller]/[action]", "")
        '/[controller]/[action]'
        >>> combine_route("api/", "/items/")
        '/api/items'
        >>> combine_route("/", "")
        ''
    """
    route = re.sub("/{2,}", "/", f"/{class_template}/{method_template}")

    if route.endswith("/"):
        route = route[:-1]

    return route


def format_code(code: str) -> str:
    """Удаляет пробелы в конце строк, схлопывает пустые строки, одна \\n в конце"""
    lines = [line.rstrip() for line in code.replace("\r\n", "\n").split("\n")]

    result = []
    for line in lines:
        if not line and (not result or not result[-1]):
            continue
        result.append(line)

    while result and not result[-1]:
        result.pop()

    return "\n".join(result) + "\n"
