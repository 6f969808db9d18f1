"""
Разбор контроллеров: действия, маршруты, HTTP методы и параметры тела запроса
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..types.exceptions import AmbiguousBodyParameterError, RouteResolutionError
from ..types.type_model import (
    FORM_FILE,
    STRING,
    AttributeInfo,
    MethodInfo,
    ParameterInfo,
    TypeDescriptor,
    TypeSystem,
)
from ..utils.naming import combine_route, replace_ignore_case, strip_suffix_ignore_case

HTTP_VERB_ATTRIBUTES = {
    "httpget": "GET",
    "httppost": "POST",
    "httpput": "PUT",
    "httpdelete": "DELETE",
    "httppatch": "PATCH",
    "httphead": "HEAD",
    "httpoptions": "OPTIONS",
}

FROM_BODY_ATTRIBUTE = "FromBody"


def _value(attribute: AttributeInfo, *keys: str):
    """Первое заданное свойство атрибута: ключи в snake_case или PascalCase"""
    for key in keys:
        value = attribute.get(key)
        if value is not None:
            return value

    return None


@dataclass
class ControllerAction:
    """Действие контроллера вместе с типом, в котором оно объявлено"""

    controller: TypeDescriptor
    declaring_type: TypeDescriptor
    method: MethodInfo


@dataclass
class HttpRequestSpec:
    url: str
    http_method: str = "GET"
    query_parameters: List[ParameterInfo] = field(default_factory=list)
    body_parameter: Optional[ParameterInfo] = None


class ControllerInspector:
    def __init__(self, type_system: TypeSystem, type_filter=lambda declaration: True):
        self.type_system = type_system
        self.type_filter = type_filter

    def _own_chain(self, controller: TypeDescriptor) -> List[TypeDescriptor]:
        """Контроллер и его предки, пока они не принадлежат фреймворку"""
        chain = []

        for descriptor in [controller] + self.type_system.ancestors(controller):
            declaration = self.type_system.declaration(descriptor)

            if (
                declaration is None
                or declaration.is_framework
                or not self.type_filter(declaration)
            ):
                break

            chain.append(descriptor)

        return chain

    def _substituted(self, descriptor: TypeDescriptor, method: MethodInfo) -> MethodInfo:
        declaration = self.type_system.declaration(descriptor)
        mapping = dict(zip(declaration.generic_parameters, descriptor.generic_arguments))

        if not mapping:
            return method

        return method.model_copy(
            update={
                "return_type": self.type_system.substitute(method.return_type, mapping),
                "parameters": [
                    parameter.model_copy(
                        update={
                            "type": self.type_system.substitute(parameter.type, mapping)
                        }
                    )
                    for parameter in method.parameters
                ],
            }
        )

    def actions(self, controller: TypeDescriptor) -> List[ControllerAction]:
        """Публичные методы экземпляра, объявленные в собственных типах"""
        result = []
        seen: set[Tuple[str, Tuple[str, ...]]] = set()

        for descriptor in self._own_chain(controller):
            declaration = self.type_system.declaration(descriptor)

            for method in declaration.methods:
                if not method.is_public or method.is_static or method.is_property_accessor:
                    continue

                method = self._substituted(descriptor, method)

                # Переопределенный в наследнике метод не дублируется
                signature = (
                    method.name,
                    tuple(str(parameter.type) for parameter in method.parameters),
                )
                if signature in seen:
                    continue
                seen.add(signature)

                result.append(ControllerAction(controller, descriptor, method))

        return result

    @staticmethod
    def controller_name(controller: TypeDescriptor) -> str:
        return strip_suffix_ignore_case(controller.name, "Controller")

    @staticmethod
    def _route_template(attributes: List[AttributeInfo]) -> Optional[str]:
        providers = [
            attribute
            for attribute in attributes
            if _value(attribute, "template", "Template") is not None
        ]

        if not providers:
            return None

        first = sorted(
            providers, key=lambda attribute: _value(attribute, "order", "Order") or 0
        )[0]
        return _value(first, "template", "Template")

    def url(self, action: ControllerAction) -> str:
        method_template = self._route_template(action.method.attributes)
        class_template = self._route_template(
            self.type_system.attributes(action.declaring_type, inherit=True)
        )

        if method_template is None and class_template is None:
            raise RouteResolutionError(action.controller.name, action.method.name)

        controller_name = self.controller_name(action.controller)
        url = combine_route(class_template or "", method_template or "")

        for placeholder, value in (
            ("[controller]", controller_name),
            ("{controller}", controller_name),
            ("[action]", action.method.name),
            ("{action}", action.method.name),
        ):
            url = replace_ignore_case(url, placeholder, value)

        return url

    @staticmethod
    def http_method(method: MethodInfo) -> str:
        """Первый HTTP метод из атрибутов действия, по умолчанию GET"""
        for attribute in method.attributes:
            if attribute.short_name in HTTP_VERB_ATTRIBUTES:
                return HTTP_VERB_ATTRIBUTES[attribute.short_name]

            http_methods = _value(attribute, "http_methods", "HttpMethods")
            if http_methods:
                return str(http_methods[0]).upper()

        return "GET"

    def _is_body_candidate(self, parameter: ParameterInfo) -> bool:
        descriptor = parameter.type

        if descriptor.is_generic_parameter:
            return False

        if descriptor.full_name == FORM_FILE:
            return True

        return self.type_system.is_class(descriptor) and descriptor.full_name != STRING

    def body_parameter(self, action: ControllerAction) -> Optional[ParameterInfo]:
        parameters = action.method.parameters

        explicit = [
            parameter
            for parameter in parameters
            if any(attribute.is_(FROM_BODY_ATTRIBUTE) for attribute in parameter.attributes)
        ]
        candidates = explicit or [
            parameter for parameter in parameters if self._is_body_candidate(parameter)
        ]

        if len(candidates) > 1:
            raise AmbiguousBodyParameterError(
                action.controller.name,
                action.method.name,
                [parameter.name for parameter in candidates],
            )

        return candidates[0] if candidates else None

    def request_spec(self, action: ControllerAction) -> HttpRequestSpec:
        body_parameter = self.body_parameter(action)

        return HttpRequestSpec(
            url=self.url(action),
            http_method=self.http_method(action.method),
            query_parameters=[
                parameter
                for parameter in action.method.parameters
                if parameter is not body_parameter
            ],
            body_parameter=body_parameter,
        )
