"""
Парсер документа модели типов (JSON) в TypeSystem
"""

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..types.exceptions import TypeModelError
from ..types.type_model import (
    ARRAY,
    NULLABLE,
    AttributeInfo,
    EnumValueInfo,
    MemberInfo,
    MethodInfo,
    ParameterInfo,
    TypeDeclaration,
    TypeDescriptor,
    TypeKind,
    TypeSystem,
    builtin_declarations,
)

# Имена CLR типов, которые модель может использовать вместо ключевых слов
TYPE_ALIASES = {
    "Void": "void",
    "Object": "object",
    "String": "string",
    "Boolean": "bool",
    "Char": "char",
    "Byte": "byte",
    "SByte": "sbyte",
    "Int16": "short",
    "UInt16": "ushort",
    "Int32": "int",
    "UInt32": "uint",
    "Int64": "long",
    "UInt64": "ulong",
    "Single": "float",
    "Double": "double",
    "Decimal": "decimal",
}

# Пространства имен фреймворка: полные имена встроенных типов сводятся к коротким
FRAMEWORK_NAMESPACES = frozenset(
    {
        "System",
        "System.Collections",
        "System.Collections.Generic",
        "System.Threading.Tasks",
        "Microsoft.AspNetCore.Http",
        "Microsoft.AspNetCore.Mvc",
    }
)

_TOKEN = re.compile(r"\s*(?:(?P<name>[A-Za-z_][\w.]*)|(?P<symbol>\[\]|[<>,?]))")


def tokenize(expression: str) -> List[str]:
    tokens = []
    position = 0
    expression = expression.rstrip()

    while position < len(expression):
        match = _TOKEN.match(expression, position)

        if match is None:
            raise TypeModelError(
                f"некорректное выражение типа '{expression}' (позиция {position})"
            )

        tokens.append(match.group("name") or match.group("symbol"))
        position = match.end()

    if not tokens:
        raise TypeModelError("пустое выражение типа")

    return tokens


class TypeExpressionParser:
    """Разбор выражений вида Ns.Name<A, B[]>?"""

    def __init__(self, resolve_name, generic_parameters: Sequence[str] = ()):
        self.resolve_name = resolve_name
        self.generic_parameters = set(generic_parameters)

    def parse(self, expression: str) -> TypeDescriptor:
        self.expression = expression
        self.tokens = tokenize(expression)
        self.position = 0

        descriptor = self._parse_type()

        if self.position != len(self.tokens):
            self._fail(f"лишний токен '{self.tokens[self.position]}'")

        return descriptor

    def _fail(self, message: str):
        raise TypeModelError(f"{message} в выражении типа '{self.expression}'")

    def _peek(self) -> Optional[str]:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def _take(self) -> str:
        token = self._peek()
        if token is None:
            self._fail("неожиданный конец")
        self.position += 1
        return token

    def _expect(self, token: str):
        if self._take() != token:
            self._fail(f"ожидался '{token}'")

    def _parse_type(self) -> TypeDescriptor:
        name = self._take()

        if name in ("<", ">", ",", "?", "[]"):
            self._fail(f"ожидалось имя типа, получено '{name}'")

        arguments = []
        if self._peek() == "<":
            self._take()
            arguments.append(self._parse_type())

            while self._peek() == ",":
                self._take()
                arguments.append(self._parse_type())

            self._expect(">")

        if name in self.generic_parameters and not arguments:
            descriptor = TypeDescriptor(name=name, is_generic_parameter=True)
        else:
            descriptor = self.resolve_name(name).with_arguments(arguments)

        while self._peek() in ("?", "[]"):
            wrapper = NULLABLE if self._take() == "?" else ARRAY
            descriptor = TypeDescriptor(name=wrapper, generic_arguments=(descriptor,))

        return descriptor


class TypeModelParser:
    """Парсер модели типов"""

    def __init__(self, model_dict: Dict[str, Any]):
        self.model_dict = model_dict
        # полное имя -> (namespace, name)
        self._known: Dict[str, Tuple[str, str]] = {}
        self._by_short_name: Dict[str, List[str]] = {}
        self._builtin_names = {
            declaration.name
            for declaration in builtin_declarations()
            if not declaration.namespace
        }

    def parse(self) -> TypeSystem:
        """Парсинг модели в TypeSystem"""
        types = self.model_dict.get("types")

        if not isinstance(types, list):
            raise TypeModelError("документ модели должен содержать список 'types'")

        for declaration in builtin_declarations():
            self._remember(declaration.namespace, declaration.name)

        for type_dict in types:
            self._remember(type_dict.get("namespace", ""), self._require(type_dict, "name"))

        return TypeSystem(self._parse_declaration(type_dict) for type_dict in types)

    def _remember(self, namespace: str, name: str):
        full_name = f"{namespace}.{name}" if namespace else name

        if full_name not in self._known:
            self._known[full_name] = (namespace, name)
            self._by_short_name.setdefault(name, []).append(full_name)

    @staticmethod
    def _require(data: Dict[str, Any], key: str, owner: str = None) -> Any:
        if key not in data:
            raise TypeModelError(f"отсутствует обязательное поле '{key}'", owner)

        return data[key]

    def _framework_name(self, name: str) -> str:
        """System.Guid -> Guid, Microsoft.AspNetCore.Http.IFormFile -> IFormFile"""
        namespace, _, short_name = name.rpartition(".")

        if namespace not in FRAMEWORK_NAMESPACES:
            return name

        short_name = TYPE_ALIASES.get(short_name, short_name)
        return short_name if short_name in self._builtin_names else name

    def _resolve_name(self, name: str, current_namespace: str = "") -> TypeDescriptor:
        name = TYPE_ALIASES.get(name, name)

        if name not in self._known:
            name = self._framework_name(name)

        if name in self._known:
            namespace, short_name = self._known[name]
            return TypeDescriptor(name=short_name, namespace=namespace)

        candidates = self._by_short_name.get(name, [])

        if len(candidates) > 1:
            # Неоднозначное короткое имя: приоритет у текущего пространства имен
            local = f"{current_namespace}.{name}" if current_namespace else name

            if local not in candidates:
                raise TypeModelError(
                    f"неоднозначное имя типа '{name}': " + ", ".join(sorted(candidates))
                )

            candidates = [local]

        if len(candidates) == 1:
            namespace, short_name = self._known[candidates[0]]
            return TypeDescriptor(name=short_name, namespace=namespace)

        # Необъявленный тип: при генерации превратится в any
        namespace, _, short_name = name.rpartition(".")
        return TypeDescriptor(name=short_name, namespace=namespace)

    def _type(
        self, expression: str, scope: Dict[str, Any], generic_parameters=()
    ) -> TypeDescriptor:
        namespace = scope.get("namespace", "")
        parser = TypeExpressionParser(
            lambda name: self._resolve_name(name, namespace), generic_parameters
        )

        try:
            return parser.parse(expression)
        except TypeModelError as e:
            raise TypeModelError(e.message, scope.get("name")) from e

    @staticmethod
    def _attributes(attributes: List[Any]) -> List[AttributeInfo]:
        result = []

        for attribute in attributes or []:
            if isinstance(attribute, str):
                result.append(AttributeInfo(name=attribute))
                continue

            properties = {
                key: value
                for key, value in attribute.items()
                if key not in ("name", "properties")
            }
            properties.update(attribute.get("properties", {}))
            result.append(AttributeInfo(name=attribute["name"], properties=properties))

        return result

    def _parse_declaration(self, type_dict: Dict[str, Any]) -> TypeDeclaration:
        name = type_dict["name"]
        generic_parameters = list(type_dict.get("generic_parameters", []))

        try:
            kind = TypeKind(type_dict.get("kind", "class"))
        except ValueError:
            raise TypeModelError(f"неизвестный вид типа '{type_dict.get('kind')}'", name)

        def parse_type(expression: str) -> TypeDescriptor:
            return self._type(expression, type_dict, generic_parameters)

        return TypeDeclaration(
            name=name,
            namespace=type_dict.get("namespace", ""),
            kind=kind,
            assembly=type_dict.get("assembly", ""),
            is_abstract=type_dict.get("abstract", False),
            is_public=type_dict.get("public", True),
            generic_parameters=generic_parameters,
            base_type=parse_type(type_dict["base"]) if type_dict.get("base") else None,
            interfaces=[parse_type(expression) for expression in type_dict.get("interfaces", [])],
            attributes=self._attributes(type_dict.get("attributes")),
            members=[
                self._parse_member(member_dict, parse_type)
                for member_dict in type_dict.get("members", [])
            ],
            methods=[
                self._parse_method(method_dict, type_dict, generic_parameters)
                for method_dict in type_dict.get("methods", [])
            ],
            enum_values=self._parse_enum_values(type_dict.get("values", []), name),
        )

    def _parse_member(self, member_dict: Dict[str, Any], parse_type) -> MemberInfo:
        return MemberInfo(
            name=self._require(member_dict, "name"),
            type=parse_type(self._require(member_dict, "type", member_dict["name"])),
            kind=member_dict.get("kind", "property"),
            attributes=self._attributes(member_dict.get("attributes")),
            can_read=member_dict.get("can_read", True),
            is_public=member_dict.get("public", True),
            is_static=member_dict.get("static", False),
        )

    def _parse_method(
        self,
        method_dict: Dict[str, Any],
        type_dict: Dict[str, Any],
        generic_parameters: List[str],
    ) -> MethodInfo:
        # generic параметры метода видны в его сигнатуре
        scope = list(generic_parameters) + list(method_dict.get("generic_parameters", []))

        def parse_type(expression: str) -> TypeDescriptor:
            return self._type(expression, type_dict, scope)

        return MethodInfo(
            name=self._require(method_dict, "name"),
            return_type=parse_type(method_dict.get("returns", "void")),
            parameters=[
                ParameterInfo(
                    name=self._require(parameter, "name"),
                    type=parse_type(self._require(parameter, "type", parameter["name"])),
                    attributes=self._attributes(parameter.get("attributes")),
                    has_default_value=parameter.get("has_default_value", False),
                )
                for parameter in method_dict.get("parameters", [])
            ],
            attributes=self._attributes(method_dict.get("attributes")),
            return_attributes=self._attributes(method_dict.get("return_attributes")),
            is_public=method_dict.get("public", True),
            is_static=method_dict.get("static", False),
            is_special_name=method_dict.get("special_name", False),
        )

    def _parse_enum_values(self, values: List[Any], owner: str) -> List[EnumValueInfo]:
        result = []
        next_value = 0

        for value in values:
            if isinstance(value, str):
                value = {"name": value}

            number = value.get("value", next_value)
            if not isinstance(number, int):
                raise TypeModelError(f"значение '{value.get('name')}' должно быть целым", owner)

            result.append(
                EnumValueInfo(
                    name=self._require(value, "name", owner),
                    value=number,
                    attributes=self._attributes(value.get("attributes")),
                )
            )
            next_value = number + 1

        return result
