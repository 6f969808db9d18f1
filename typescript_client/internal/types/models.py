from typing import List, Optional, Union

from pydantic import BaseModel


def indent(code: str) -> str:
    return code.replace("\n", "\n    ")


class CodeBlock(BaseModel):
    code: str = ""

    def __str__(self):
        return self.code.replace("\t", "    ")


class Parameter(BaseModel):
    name: str
    var_type: str = "any"
    optional: bool = False

    def __str__(self):
        return f"{self.name}{'?' if self.optional else ''}: {self.var_type}"


class Property(Parameter):
    def __str__(self):
        return super().__str__() + ";"


class Function(BaseModel):
    name: str
    parameters: list[Parameter] = []
    response: str = "void"
    code: CodeBlock = CodeBlock()

    def __str__(self) -> str:
        return (
            f"export async function {self.name}("
            + ", ".join(map(str, self.parameters))
            + f"): {self.response} {{\n"
            + indent("\t" + str(self.code)).rstrip(" ")
            + "\n}"
        ).replace("\t", "    ")

    def set_code_block(self, code_block: Union["CodeBlock", str]) -> "Function":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block)

        self.code = code_block
        return self


class Interface(BaseModel):
    name: str
    generic_parameters: list[str] = []
    extends: Optional[str] = None
    properties: list[Property] = []

    @property
    def declaration(self) -> str:
        return (
            self.name
            + (f"<{', '.join(self.generic_parameters)}>" if self.generic_parameters else "")
            + (f" extends {self.extends}" if self.extends else "")
        )

    def __str__(self) -> str:
        return (
            f"export interface {self.declaration} {{"
            + "".join("\n    " + str(prop) for prop in self.properties)
            + "\n}"
        )

    def add_property(self, prop: Union["Property", str], **kwargs) -> "Property":
        if isinstance(prop, str):
            prop = Property(name=prop, **kwargs)

        self.properties.append(prop)
        return prop


Block = Union[CodeBlock, Function, Interface, "Namespace"]


class Namespace(BaseModel):
    """Пространство имен TypeScript. Пустое имя - блоки выводятся без обертки"""

    name: str = ""
    blocks: List[Block] = []

    def __str__(self) -> str:
        body = "\n\n".join(map(str, self.blocks))

        if not self.name:
            return body

        return (
            f"export namespace {self.name} {{\n    " + indent(body).rstrip(" ") + "\n}"
        )

    def add_block(self, block: Union[Block, str], **kwargs) -> Block:
        if isinstance(block, str):
            block = CodeBlock(code=block, **kwargs)

        self.blocks.append(block)
        return block


Namespace.model_rebuild()


class CodeFile(BaseModel):
    file_name: str

    header: str = ""
    imports: list[str] = []
    content: list[str] = []
    blocks: list[Block] = []

    def __str__(self):
        return (
            "\n\n".join(
                filter(
                    bool,
                    [
                        "\n".join(filter(bool, [self.header] + self.imports)),
                        "\n\n".join(self.content),
                        "\n\n".join(map(str, self.blocks)),
                    ],
                )
            )
            + "\n"
        ).replace("\t", "    ")

    def add_block(self, block: Union[Block, str], **kwargs) -> Block:
        if isinstance(block, str):
            block = CodeBlock(code=block, **kwargs)

        self.blocks.append(block)
        return block
