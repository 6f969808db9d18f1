"""
Генераторы кода для отдельных видов типов: enum, DTO и контроллеров
"""

from typing import Optional

from ..types.models import CodeBlock, Function, Interface, Namespace, Parameter, Property
from ..types.nullability import NullabilityResolver
from ..types.type_model import (
    OBJECT,
    AttributeInfo,
    MemberInfo,
    TypeDeclaration,
)
from ..utils.naming import escape_for_js_string, to_camel_case, to_sentence_case
from .context import GenerationContext
from .controllers import ControllerAction, ControllerInspector
from .dependency_graph import dto_members
from .templates import templates
from .type_mapper import TypeMapper


def _find_attribute(attributes, *names: str) -> Optional[AttributeInfo]:
    for attribute in attributes:
        if attribute.is_(*names):
            return attribute
    return None


def _property(attribute: Optional[AttributeInfo], *keys: str):
    if attribute is None:
        return None

    for key in keys:
        value = attribute.get(key)
        if value is not None:
            return value

    return None


class EnumGenerator:
    """export enum + namespace с getDescription, getShortName и allEnums"""

    def generate(self, context: GenerationContext, declaration: TypeDeclaration) -> CodeBlock:
        name = declaration.name
        members, description_cases, short_name_cases = [], [], []

        for value in declaration.enum_values:
            display = _find_attribute(value.attributes, "Display")
            short_name = _property(display, "short_name", "ShortName")
            description = _property(display, "description", "Description")

            short_name = short_name if short_name is not None else to_sentence_case(value.name)
            description = description if description is not None else short_name

            members.append(templates.enum_member.format(name=value.name, value=value.value))
            description_cases.append(
                templates.enum_case.format(
                    enum=name, name=value.name, text=escape_for_js_string(description)
                )
            )
            short_name_cases.append(
                templates.enum_case.format(
                    enum=name, name=value.name, text=escape_for_js_string(short_name)
                )
            )

        return CodeBlock(
            code=templates.enum.format(
                name=name,
                members="\n".join(members),
                description_cases="\n".join(description_cases),
                short_name_cases="\n".join(short_name_cases),
                all_values=", ".join(
                    f"{name}.{value.name}" for value in declaration.enum_values
                ),
            )
        )


class DtoGenerator:
    """export interface с полями DTO"""

    def __init__(self, type_mapper: TypeMapper, options):
        self.type_mapper = type_mapper
        self.options = options

    def member_name(self, member: MemberInfo) -> str:
        """Имя из JsonProperty / JsonPropertyName, иначе camelCase"""
        json_property = _find_attribute(member.attributes, "JsonProperty")
        name = _property(json_property, "property_name", "PropertyName")
        if name:
            return name

        json_property_name = _find_attribute(member.attributes, "JsonPropertyName")
        name = _property(json_property_name, "name", "Name", "value")
        if name:
            return name

        return to_camel_case(member.name)

    def extends(self, context: GenerationContext, declaration: TypeDeclaration) -> Optional[str]:
        base_type = declaration.base_type

        if base_type is None or base_type.full_name == OBJECT:
            return None

        type_ref = self.type_mapper.user_type_ref(base_type)
        return context.render(type_ref) if type_ref is not None else None

    def generate(self, context: GenerationContext, declaration: TypeDeclaration) -> Interface:
        interface = Interface(
            name=declaration.name,
            generic_parameters=declaration.generic_parameters,
            extends=self.extends(context, declaration),
        )

        for member in dto_members(declaration):
            occurrence = self.type_mapper.occurrence(member.type, member.attributes)
            type_ref = self.type_mapper.to_type_ref(
                occurrence, self.options.property_mapping
            )
            type_ref, optional = NullabilityResolver.promote_optional(
                type_ref, self.options.make_undefined_properties_optional
            )

            interface.add_property(
                Property(
                    name=self.member_name(member),
                    var_type=context.render(type_ref),
                    optional=optional,
                )
            )

        return interface


class ControllerGenerator:
    """Пространство имен с async функциями для действий контроллера"""

    def __init__(self, type_mapper: TypeMapper, inspector: ControllerInspector, options):
        self.type_mapper = type_mapper
        self.inspector = inspector
        self.options = options

    def generate(self, context: GenerationContext, declaration: TypeDeclaration) -> Namespace:
        namespace = Namespace(name=declaration.name)

        for action in self.inspector.actions(declaration.descriptor):
            namespace.add_block(self.generate_action(context, action))

        return namespace

    def generate_action(self, context: GenerationContext, action: ControllerAction) -> Function:
        mapper = self.type_mapper
        method = action.method
        parameters = []

        for parameter in method.parameters:
            type_ref = mapper.to_type_ref(
                mapper.occurrence(parameter.type, parameter.attributes),
                self.options.parameter_mapping,
            )
            type_ref, optional = NullabilityResolver.promote_optional(
                type_ref, self.options.make_undefined_parameters_optional
            )

            parameters.append(
                Parameter(
                    name=parameter.name,
                    var_type=context.render(type_ref),
                    optional=optional or parameter.has_default_value,
                )
            )

        return_type = mapper.to_type_ref(
            mapper.occurrence(
                mapper.unwrap_return_type(method.return_type), method.return_attributes
            )
        )

        return Function(
            name=to_camel_case(method.name),
            parameters=parameters,
            response=f"Promise<{context.render(return_type)}>",
        ).set_code_block(self.generate_body(action))

    def generate_body(self, action: ControllerAction) -> str:
        spec = self.inspector.request_spec(action)

        return templates.http_request.format(
            url=self.options.request_url_expression(spec.url),
            method=spec.http_method,
            params=", ".join(parameter.name for parameter in spec.query_parameters),
            data=spec.body_parameter.name if spec.body_parameter else "null",
        )
