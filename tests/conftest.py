"""
Общие модели типов для тестов
"""

import copy

import pytest

from typescript_client.internal.parser.type_model import TypeModelParser

SAMPLE_MODEL = {
    "types": [
        {
            "name": "UserType",
            "namespace": "Sample.Controllers",
            "assembly": "Sample",
            "kind": "enum",
            "values": ["Regular", "Admin"],
        },
        {
            "name": "SampleController",
            "namespace": "Sample.Controllers",
            "assembly": "Sample",
            "base": "Controller",
            "attributes": [
                {"name": "ApiController"},
                {"name": "Route", "template": "[controller]/[action]"},
            ],
            "methods": [
                {
                    "name": "GetRegisteredUsers",
                    "returns": "IList<UserDto>",
                    "parameters": [{"name": "userType", "type": "UserType"}],
                },
                {
                    "name": "GetRegisteredUsersWithNullableParam",
                    "returns": "IList<UserDto>",
                    "parameters": [{"name": "userType", "type": "UserType?"}],
                },
                {"name": "GetIntegers", "returns": "IList<int?>"},
                {
                    "name": "GetUserDtoWithWrapper",
                    "returns": "GenericDtoWrapper<string, UserDto>",
                },
                {
                    "name": "GetIntWithWrapper",
                    "returns": "GenericDtoWrapper<int, IList<string>>",
                },
                {
                    "name": "GetWrappedDateTime",
                    "returns": "NullableValueTypeWrapper<DateTime>",
                },
                {
                    "name": "GetMaybeNullReturn",
                    "returns": "NonGenericDto",
                    "return_attributes": ["MaybeNull"],
                    "parameters": [
                        {"name": "str", "type": "string", "attributes": ["AllowNull"]}
                    ],
                },
                {"name": "GetNumberDictionary", "returns": "Dictionary<int, string>"},
                {"name": "GetEnumDictionary", "returns": "Dictionary<UserType, bool>"},
                {
                    "name": "GetMaybeNullObjectReturn",
                    "returns": "object",
                    "return_attributes": ["MaybeNullAttribute"],
                    "parameters": [
                        {"name": "number", "type": "int", "attributes": ["AllowNull"]}
                    ],
                },
                {
                    "name": "SaveUser",
                    "returns": "Task",
                    "attributes": ["HttpPost"],
                    "parameters": [
                        {"name": "user", "type": "UserDto", "attributes": ["FromBody"]}
                    ],
                },
                {"name": "get_Version", "returns": "string", "special_name": True},
                {"name": "CreateDefault", "returns": "UserDto", "static": True},
            ],
        },
        {
            "name": "UserDto",
            "namespace": "Sample.Controllers",
            "assembly": "Sample",
            "members": [
                {
                    "name": "ValueNullableByMaybeNull",
                    "type": "NonGenericDto",
                    "attributes": ["MaybeNull"],
                },
                {"name": "FirstName", "type": "string"},
                {
                    "name": "LastNameNotNull",
                    "type": "string",
                    "attributes": ["System.Diagnostics.CodeAnalysis.NotNullAttribute"],
                },
            ],
        },
        {
            "name": "NonGenericDto",
            "namespace": "Sample.Models",
            "assembly": "Sample",
            "members": [
                {"name": "Value", "type": "string", "kind": "field"},
                {"name": "PrivateGetterProperty", "type": "int", "can_read": False},
            ],
        },
        {
            "name": "GenericDtoWrapper",
            "namespace": "Sample.Models",
            "assembly": "Sample",
            "generic_parameters": ["K", "V"],
            "members": [
                {"name": "Key", "type": "K"},
                {"name": "Value", "type": "V"},
            ],
        },
        {
            "name": "NullableValueTypeWrapper",
            "namespace": "Sample.Models",
            "assembly": "Sample",
            "generic_parameters": ["T"],
            "members": [
                {"name": "NullableValue", "type": "T?"},
                {"name": "NotNullValue", "type": "T"},
            ],
        },
    ]
}


@pytest.fixture
def sample_model():
    return copy.deepcopy(SAMPLE_MODEL)


@pytest.fixture
def sample_type_system(sample_model):
    return TypeModelParser(sample_model).parse()


def controller(name: str, methods, **kwargs):
    """Описание контроллера с маршрутом [controller]/[action]"""
    return {
        "name": name,
        "namespace": kwargs.pop("namespace", "App.Controllers"),
        "assembly": kwargs.pop("assembly", "App"),
        "base": "ControllerBase",
        "attributes": [
            {"name": "ApiController"},
            {"name": "Route", "template": "[controller]/[action]"},
        ],
        "methods": methods,
        **kwargs,
    }
