"""
Тесты графа зависимостей и сборки модулей
"""

from conftest import controller
from typescript_client.internal.generator.classifier import TypeClassifier
from typescript_client.internal.generator.controllers import ControllerInspector
from typescript_client.internal.generator.dependency_graph import DependencyGraphBuilder
from typescript_client.internal.generator.modules import ModuleAssembler
from typescript_client.internal.generator.type_mapper import TypeMapper
from typescript_client.internal.parser.type_model import TypeModelParser
from typescript_client.internal.types.nullability import NullabilityResolver
from typescript_client.options import GeneratorOptions


def build(type_system, **options):
    options = GeneratorOptions(**options)
    classifier = TypeClassifier(type_system, options.type_filter)
    mapper = TypeMapper(type_system, NullabilityResolver(options), classifier)
    builder = DependencyGraphBuilder(
        type_system,
        classifier,
        mapper,
        ControllerInspector(type_system, options.type_filter),
    )
    return builder, classifier


def names(descriptors):
    return {descriptor.name for descriptor in descriptors}


CYCLIC_MODEL = {
    "types": [
        controller(
            "TreeController",
            [
                {"name": "GetRoot", "returns": "Task<ActionResult<Node>>"},
                {"name": "Rename", "parameters": [{"name": "node", "type": "Node"}]},
            ],
        ),
        {
            "name": "Node",
            "namespace": "App.Models",
            "base": "Entity",
            "interfaces": ["IHasOwner"],
            "members": [
                {"name": "Parent", "type": "Node"},
                {"name": "Children", "type": "List<Node>"},
                {"name": "Kind", "type": "NodeKind?"},
                {"name": "Hidden", "type": "Secret", "public": False},
                {"name": "Counter", "type": "Stats", "static": True},
                {"name": "WriteOnly", "type": "Stats", "can_read": False},
            ],
        },
        {
            "name": "Entity",
            "namespace": "App.Models",
            "abstract": True,
            "members": [{"name": "Tags", "type": "Dictionary<string, Tag>"}],
        },
        {"name": "IHasOwner", "namespace": "App.Models", "kind": "interface",
         "members": [{"name": "Owner", "type": "Owner"}]},
        {"name": "Owner", "namespace": "App.Models", "members": [{"name": "Pet", "type": "Node"}]},
        {"name": "Tag", "namespace": "App.Models"},
        {"name": "NodeKind", "namespace": "App.Models", "kind": "enum", "values": ["Leaf", "Branch"]},
        {"name": "Secret", "namespace": "App.Models"},
        {"name": "Stats", "namespace": "App.Models"},
        {"name": "Unused", "namespace": "App.Models"},
    ]
}


class TestDependencyGraph:
    """Тесты обхода типов"""

    def test_sample_graph(self, sample_type_system):
        """Тест графа из контроллера"""
        builder, _ = build(sample_type_system)
        graph = builder.build([sample_type_system.find("SampleController").descriptor])

        assert names(graph) == {
            "SampleController",
            "UserType",
            "UserDto",
            "NonGenericDto",
            "GenericDtoWrapper",
            "NullableValueTypeWrapper",
        }
        assert names(graph[sample_type_system.find("UserDto").descriptor]) == {"NonGenericDto"}
        assert graph[sample_type_system.find("UserType").descriptor] == set()

    def test_cycles_and_members(self):
        """Тест циклических зависимостей, баз, интерфейсов и видимости членов"""
        type_system = TypeModelParser(CYCLIC_MODEL).parse()
        builder, _ = build(type_system)
        graph = builder.build([type_system.find("TreeController").descriptor])

        assert names(graph) == {
            "TreeController",
            "Node",
            "Entity",
            "IHasOwner",
            "Owner",
            "Tag",
            "NodeKind",
        }
        assert names(graph[type_system.find("Node").descriptor]) == {
            "Node",
            "Entity",
            "IHasOwner",
            "NodeKind",
        }
        assert names(graph[type_system.find("Owner").descriptor]) == {"Node"}

    def test_graph_is_closed(self):
        """Тест полноты графа: каждая зависимость является ключом"""
        type_system = TypeModelParser(CYCLIC_MODEL).parse()
        builder, _ = build(type_system)
        graph = builder.build([type_system.find("TreeController").descriptor])

        for dependencies in graph.values():
            assert dependencies <= set(graph)

    def test_type_filter(self):
        """Тест фильтрации обнаруженных типов"""
        type_system = TypeModelParser(CYCLIC_MODEL).parse()
        builder, _ = build(
            type_system, type_filter=lambda declaration: declaration.name != "Entity"
        )
        graph = builder.build([type_system.find("TreeController").descriptor])

        assert "Entity" not in names(graph)
        assert "Tag" not in names(graph)

    def test_filtered_entry_type(self):
        """Тест исключенной точки входа"""
        type_system = TypeModelParser(CYCLIC_MODEL).parse()
        builder, _ = build(type_system, type_filter=lambda declaration: False)

        assert builder.build([type_system.find("TreeController").descriptor]) == {}


class TestModuleAssembler:
    """Тесты сборки модулей"""

    def test_sample_modules(self, sample_type_system):
        """Тест модулей, импортов и порядка"""
        builder, classifier = build(sample_type_system)
        graph = builder.build([sample_type_system.find("SampleController").descriptor])
        modules = ModuleAssembler(classifier).assemble(graph)

        assert [module.name for module in modules] == ["enums", "dto", "api"]

        by_name = {module.name: module for module in modules}
        assert by_name["api"].imports == ("dto", "enums")
        assert by_name["dto"].imports == ()
        assert names(by_name["enums"].types) == {"UserType"}
        assert by_name["api"].file_name == "api.ts"

    def test_empty_modules_are_kept(self):
        """Тест пустых модулей"""
        type_system = TypeModelParser(
            {"types": [controller("PingController", [{"name": "Ping", "returns": "string"}])]}
        ).parse()
        builder, classifier = build(type_system)
        graph = builder.build([type_system.find("PingController").descriptor])

        modules = ModuleAssembler(classifier).assemble(graph)

        assert [module.name for module in modules] == ["enums", "dto", "api"]
        assert all(module.imports == () for module in modules)
        assert modules[0].types == () and modules[1].types == ()

    def test_emission_order_follows_imports(self):
        """Тест топологического порядка с циклом"""
        order = ModuleAssembler._emission_order(
            {"api": {"dto"}, "dto": {"enums", "extra"}, "enums": set(), "extra": {"dto"}}
        )

        assert order == ["enums", "dto", "api", "extra"]
