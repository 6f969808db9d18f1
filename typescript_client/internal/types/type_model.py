from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict

from .exceptions import TypeModelError


class TypeKind(str, Enum):
    CLASS = "class"
    STRUCT = "struct"
    ENUM = "enum"
    INTERFACE = "interface"


class TypeDescriptor(BaseModel):
    """Ссылка на тип из модели: имя, пространство имен и generic аргументы"""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = ""
    generic_arguments: Tuple["TypeDescriptor", ...] = ()
    is_generic_parameter: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    @property
    def definition(self) -> "TypeDescriptor":
        """Generic определение типа (без аргументов)"""
        if not self.generic_arguments:
            return self

        return TypeDescriptor(name=self.name, namespace=self.namespace)

    def with_arguments(self, arguments: Iterable["TypeDescriptor"]) -> "TypeDescriptor":
        return TypeDescriptor(
            name=self.name,
            namespace=self.namespace,
            generic_arguments=tuple(arguments),
        )

    def __str__(self) -> str:
        if not self.generic_arguments:
            return self.full_name

        return f"{self.full_name}<{', '.join(map(str, self.generic_arguments))}>"


TypeDescriptor.model_rebuild()


class AttributeInfo(BaseModel):
    """Атрибут (маркер) на типе, члене, параметре или возвращаемом значении"""

    name: str
    properties: Dict[str, Any] = {}

    @property
    def short_name(self) -> str:
        """Нормализованное имя: без пространства имен и суффикса Attribute"""
        short_name = self.name.rsplit(".", 1)[-1]

        if short_name.lower().endswith("attribute") and len(short_name) > len(
            "attribute"
        ):
            short_name = short_name[: -len("attribute")]

        return short_name.lower()

    def is_(self, *names: str) -> bool:
        return self.short_name in {name.lower() for name in names}

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)


class MemberInfo(BaseModel):
    """Поле или свойство типа"""

    name: str
    type: TypeDescriptor
    kind: str = "property"
    attributes: List[AttributeInfo] = []
    can_read: bool = True
    is_public: bool = True
    is_static: bool = False


class ParameterInfo(BaseModel):
    name: str
    type: TypeDescriptor
    attributes: List[AttributeInfo] = []
    has_default_value: bool = False


class MethodInfo(BaseModel):
    name: str
    return_type: TypeDescriptor = TypeDescriptor(name="void")
    parameters: List[ParameterInfo] = []
    attributes: List[AttributeInfo] = []
    return_attributes: List[AttributeInfo] = []
    is_public: bool = True
    is_static: bool = False
    # get_/set_ методы свойств
    is_special_name: bool = False

    @property
    def is_property_accessor(self) -> bool:
        return self.is_special_name or self.name.startswith(("get_", "set_"))


class EnumValueInfo(BaseModel):
    name: str
    value: int
    attributes: List[AttributeInfo] = []


class TypeDeclaration(BaseModel):
    """Объявление типа: все, что модель знает о нем"""

    name: str
    namespace: str = ""
    kind: TypeKind = TypeKind.CLASS
    assembly: str = ""
    is_abstract: bool = False
    is_public: bool = True
    # Типы фреймворка не генерируются и не считаются "своими"
    is_framework: bool = False

    generic_parameters: List[str] = []
    base_type: Optional[TypeDescriptor] = None
    interfaces: List[TypeDescriptor] = []

    members: List[MemberInfo] = []
    methods: List[MethodInfo] = []
    attributes: List[AttributeInfo] = []
    enum_values: List[EnumValueInfo] = []

    @property
    def full_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    @property
    def descriptor(self) -> TypeDescriptor:
        return TypeDescriptor(name=self.name, namespace=self.namespace)


# Имена встроенных типов, на которые опирается маппинг
VOID = "void"
OBJECT = "object"
STRING = "string"
BOOLEAN = "bool"
CHAR = "char"
GUID = "Guid"
NULLABLE = "Nullable"
ARRAY = "Array"
TASK = "Task"
VALUE_TASK = "ValueTask"
FORM_FILE = "IFormFile"
FILE_RESULT = "FileResult"
ACTION_RESULT = "ActionResult"
ACTION_RESULT_INTERFACE = "IActionResult"
ENUMERABLE = "IEnumerable"

NUMERIC_TYPES = frozenset(
    {
        "byte",
        "sbyte",
        "short",
        "ushort",
        "int",
        "uint",
        "long",
        "ulong",
        "float",
        "double",
        "decimal",
    }
)

DATE_TYPES = frozenset(
    {
        "DateTime",
        "DateTimeOffset",
        "NodaTime.Instant",
        "NodaTime.LocalDate",
        "NodaTime.LocalDateTime",
    }
)

DICTIONARY_TYPES = frozenset({"IDictionary", "IReadOnlyDictionary"})


def _generic(name: str, *arguments: str) -> TypeDescriptor:
    return TypeDescriptor(
        name=name,
        generic_arguments=tuple(
            TypeDescriptor(name=argument, is_generic_parameter=True)
            for argument in arguments
        ),
    )


def _builtin(
    name: str, kind: TypeKind = TypeKind.STRUCT, namespace: str = "", **kwargs
) -> TypeDeclaration:
    return TypeDeclaration(
        name=name, namespace=namespace, kind=kind, is_framework=True, **kwargs
    )


def builtin_declarations() -> List[TypeDeclaration]:
    """Объявления встроенных типов и типов фреймворка"""
    key_value_pair = TypeDescriptor(
        name="KeyValuePair",
        generic_arguments=(
            TypeDescriptor(name="TKey", is_generic_parameter=True),
            TypeDescriptor(name="TValue", is_generic_parameter=True),
        ),
    )
    enumerable_of_pairs = TypeDescriptor(
        name=ENUMERABLE, generic_arguments=(key_value_pair,)
    )

    declarations = [
        _builtin(VOID),
        _builtin(OBJECT, TypeKind.CLASS),
        _builtin(
            STRING,
            TypeKind.CLASS,
            interfaces=[
                TypeDescriptor(
                    name=ENUMERABLE, generic_arguments=(TypeDescriptor(name=CHAR),)
                )
            ],
        ),
        _builtin(BOOLEAN),
        _builtin(CHAR),
        _builtin(GUID),
        _builtin("TimeSpan"),
        _builtin("DateTime"),
        _builtin("DateTimeOffset"),
        _builtin("Instant", namespace="NodaTime"),
        _builtin("LocalDate", namespace="NodaTime"),
        _builtin("LocalDateTime", namespace="NodaTime"),
        _builtin(NULLABLE, generic_parameters=["T"]),
        _builtin("KeyValuePair", generic_parameters=["TKey", "TValue"]),
        _builtin(FORM_FILE, TypeKind.INTERFACE),
        _builtin(ACTION_RESULT_INTERFACE, TypeKind.INTERFACE),
        _builtin(
            FILE_RESULT,
            TypeKind.CLASS,
            is_abstract=True,
            interfaces=[TypeDescriptor(name=ACTION_RESULT_INTERFACE)],
        ),
        _builtin(
            ACTION_RESULT,
            TypeKind.CLASS,
            generic_parameters=["TValue"],
            interfaces=[TypeDescriptor(name=ACTION_RESULT_INTERFACE)],
        ),
        _builtin(TASK, TypeKind.CLASS, generic_parameters=["TResult"]),
        _builtin(VALUE_TASK, generic_parameters=["TResult"]),
        # IEnumerable без аргументов - негенерический вариант
        _builtin(ENUMERABLE, TypeKind.INTERFACE, generic_parameters=["T"]),
        _builtin(
            "ICollection",
            TypeKind.INTERFACE,
            generic_parameters=["T"],
            interfaces=[_generic(ENUMERABLE, "T")],
        ),
        _builtin(
            "IReadOnlyCollection",
            TypeKind.INTERFACE,
            generic_parameters=["T"],
            interfaces=[_generic(ENUMERABLE, "T")],
        ),
        _builtin(
            "IList",
            TypeKind.INTERFACE,
            generic_parameters=["T"],
            interfaces=[_generic("ICollection", "T")],
        ),
        _builtin(
            "IReadOnlyList",
            TypeKind.INTERFACE,
            generic_parameters=["T"],
            interfaces=[_generic("IReadOnlyCollection", "T")],
        ),
        _builtin(
            "ISet",
            TypeKind.INTERFACE,
            generic_parameters=["T"],
            interfaces=[_generic("ICollection", "T")],
        ),
        _builtin(
            "List",
            TypeKind.CLASS,
            generic_parameters=["T"],
            interfaces=[_generic("IList", "T"), _generic("IReadOnlyList", "T")],
        ),
        _builtin(
            "HashSet",
            TypeKind.CLASS,
            generic_parameters=["T"],
            interfaces=[_generic("ISet", "T")],
        ),
        _builtin(
            ARRAY,
            TypeKind.CLASS,
            generic_parameters=["T"],
            interfaces=[_generic("IList", "T"), _generic("IReadOnlyList", "T")],
        ),
        _builtin(
            "ArrayList",
            TypeKind.CLASS,
            interfaces=[TypeDescriptor(name=ENUMERABLE)],
        ),
        _builtin(
            "IDictionary",
            TypeKind.INTERFACE,
            generic_parameters=["TKey", "TValue"],
            interfaces=[enumerable_of_pairs],
        ),
        _builtin(
            "IReadOnlyDictionary",
            TypeKind.INTERFACE,
            generic_parameters=["TKey", "TValue"],
            interfaces=[enumerable_of_pairs],
        ),
        _builtin(
            "Dictionary",
            TypeKind.CLASS,
            generic_parameters=["TKey", "TValue"],
            interfaces=[
                _generic("IDictionary", "TKey", "TValue"),
                _generic("IReadOnlyDictionary", "TKey", "TValue"),
            ],
        ),
        _builtin("ControllerBase", TypeKind.CLASS, is_abstract=True),
        _builtin(
            "Controller",
            TypeKind.CLASS,
            is_abstract=True,
            base_type=TypeDescriptor(name="ControllerBase"),
        ),
    ]

    declarations.extend(_builtin(name) for name in sorted(NUMERIC_TYPES))
    return declarations


class TypeSystem:
    """Модель типов: объявления, наследование, generic подстановки, атрибуты"""

    def __init__(self, declarations: Iterable[TypeDeclaration] = ()):
        self._declarations: Dict[str, TypeDeclaration] = {}

        for declaration in builtin_declarations():
            self.register(declaration)

        for declaration in declarations:
            self.register(declaration)

    def register(self, declaration: TypeDeclaration):
        """Регистрация объявления типа"""
        existing = self._declarations.get(declaration.full_name)

        if existing is not None and not existing.is_framework:
            raise TypeModelError("тип уже объявлен", declaration.full_name)

        self._declarations[declaration.full_name] = declaration

    @property
    def declarations(self) -> List[TypeDeclaration]:
        return list(self._declarations.values())

    def declaration(self, descriptor: TypeDescriptor) -> Optional[TypeDeclaration]:
        if descriptor.is_generic_parameter:
            return None

        return self._declarations.get(descriptor.full_name)

    def find(self, name: str) -> Optional[TypeDeclaration]:
        """Поиск объявления по полному или короткому имени"""
        if name in self._declarations:
            return self._declarations[name]

        matches = [
            declaration
            for declaration in self._declarations.values()
            if declaration.name == name
        ]

        return matches[0] if len(matches) == 1 else None

    def exported_types(
        self, assemblies: Optional[Iterable[str]] = None
    ) -> List[TypeDescriptor]:
        """Публичные собственные типы (опционально только из указанных сборок)"""
        assemblies = set(assemblies) if assemblies is not None else None

        return [
            declaration.descriptor
            for declaration in self._declarations.values()
            if not declaration.is_framework
            and declaration.is_public
            and (assemblies is None or declaration.assembly in assemblies)
        ]

    # Generic подстановки

    def substitute(
        self, descriptor: TypeDescriptor, mapping: Dict[str, TypeDescriptor]
    ) -> TypeDescriptor:
        if descriptor.is_generic_parameter:
            return mapping.get(descriptor.name, descriptor)

        if not descriptor.generic_arguments:
            return descriptor

        return descriptor.with_arguments(
            self.substitute(argument, mapping)
            for argument in descriptor.generic_arguments
        )

    def _generic_mapping(self, descriptor: TypeDescriptor) -> Dict[str, TypeDescriptor]:
        declaration = self.declaration(descriptor)

        if declaration is None:
            return {}

        return dict(zip(declaration.generic_parameters, descriptor.generic_arguments))

    def base_type(self, descriptor: TypeDescriptor) -> Optional[TypeDescriptor]:
        declaration = self.declaration(descriptor)

        if declaration is None or declaration.base_type is None:
            return None

        return self.substitute(declaration.base_type, self._generic_mapping(descriptor))

    def interfaces(self, descriptor: TypeDescriptor) -> List[TypeDescriptor]:
        declaration = self.declaration(descriptor)

        if declaration is None:
            return []

        mapping = self._generic_mapping(descriptor)
        return [
            self.substitute(interface, mapping) for interface in declaration.interfaces
        ]

    def ancestors(self, descriptor: TypeDescriptor) -> List[TypeDescriptor]:
        """Цепочка базовых классов (без самого типа)"""
        result = []
        seen: Set[str] = {descriptor.full_name}
        current = self.base_type(descriptor)

        while current is not None and current.full_name not in seen:
            result.append(current)
            seen.add(current.full_name)
            current = self.base_type(current)

        return result

    def find_generic_implementation(
        self, descriptor: TypeDescriptor, definitions: Iterable[str]
    ) -> Optional[TypeDescriptor]:
        """Поиск реализации одного из generic определений среди самого типа, его баз и интерфейсов"""
        definitions = set(definitions)
        queue = [descriptor]
        seen: Set[TypeDescriptor] = set()

        while queue:
            current = queue.pop(0)

            if current in seen:
                continue
            seen.add(current)

            if current.full_name in definitions and current.generic_arguments:
                return current

            base_type = self.base_type(current)
            if base_type is not None:
                queue.append(base_type)
            queue.extend(self.interfaces(current))

        return None

    def is_assignable_to(self, descriptor: TypeDescriptor, full_name: str) -> bool:
        """Проверка (негенерическая), что тип является или наследует указанный"""
        queue = [descriptor]
        seen: Set[TypeDescriptor] = set()

        while queue:
            current = queue.pop(0)

            if current in seen:
                continue
            seen.add(current)

            if current.full_name == full_name:
                return True

            base_type = self.base_type(current)
            if base_type is not None:
                queue.append(base_type)
            queue.extend(self.interfaces(current))

        return False

    # Классификация значений

    def is_nullable_value_type(self, descriptor: TypeDescriptor) -> bool:
        return descriptor.full_name == NULLABLE and len(descriptor.generic_arguments) == 1

    def unwrap_nullable(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        if self.is_nullable_value_type(descriptor):
            return descriptor.generic_arguments[0]

        return descriptor

    def is_value_type(self, descriptor: TypeDescriptor) -> bool:
        declaration = self.declaration(descriptor)
        return declaration is not None and declaration.kind in (
            TypeKind.STRUCT,
            TypeKind.ENUM,
        )

    def is_enum(self, descriptor: TypeDescriptor) -> bool:
        declaration = self.declaration(descriptor)
        return declaration is not None and declaration.kind == TypeKind.ENUM

    def is_class(self, descriptor: TypeDescriptor) -> bool:
        declaration = self.declaration(descriptor)
        return declaration is not None and declaration.kind == TypeKind.CLASS

    # Атрибуты

    def attributes(
        self, descriptor: TypeDescriptor, inherit: bool = False
    ) -> List[AttributeInfo]:
        """Атрибуты типа, с inherit=True включая атрибуты базовых классов"""
        declaration = self.declaration(descriptor)

        if declaration is None:
            return []

        attributes = list(declaration.attributes)

        if inherit:
            for ancestor in self.ancestors(descriptor):
                ancestor_declaration = self.declaration(ancestor)
                if ancestor_declaration is not None:
                    attributes.extend(ancestor_declaration.attributes)

        return attributes

    def has_attribute(
        self, descriptor: TypeDescriptor, *names: str, inherit: bool = False
    ) -> bool:
        return any(
            attribute.is_(*names)
            for attribute in self.attributes(descriptor, inherit=inherit)
        )
