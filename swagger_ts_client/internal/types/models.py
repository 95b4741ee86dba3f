from typing import Annotated, Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..utils import line_comment


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class PrimitiveSchema(_Node):
    kind: Literal["primitive"] = "primitive"
    type: Literal["boolean", "integer", "string", "file", "number"]


class EnumSchema(_Node):
    kind: Literal["enum"] = "enum"
    values: List[str] = []


class ArraySchema(_Node):
    kind: Literal["array"] = "array"
    items: "SchemaNode"


class ObjectSchema(_Node):
    kind: Literal["object"] = "object"
    properties: Dict[str, "SchemaNode"] = {}
    required: List[str] = []
    additional_properties: Optional["SchemaNode"] = None

    def is_required(self, name: str) -> bool:
        return name in self.required


class RefSchema(_Node):
    kind: Literal["ref"] = "ref"
    name: str


class PlaceholderSchema(_Node):
    """Параметр generic-типа (T0, T1, ...)"""

    kind: Literal["placeholder"] = "placeholder"
    name: str


class UnknownSchema(_Node):
    """Узел, не подходящий ни под одну известную форму"""

    kind: Literal["unknown"] = "unknown"
    raw: Any = None


SchemaNode = Annotated[
    Union[
        PrimitiveSchema,
        EnumSchema,
        ArraySchema,
        ObjectSchema,
        RefSchema,
        PlaceholderSchema,
        UnknownSchema,
    ],
    Field(discriminator="kind"),
]

ArraySchema.model_rebuild()
ObjectSchema.model_rebuild()


Location = Literal["path", "query", "header", "formData", "body"]


class Parameter(_Node):
    """Параметр операции из Swagger"""

    location: Location
    key: str
    schema_node: SchemaNode
    required: bool = False
    default: Optional[Any] = None


class ParameterGroups(_Node):
    """Параметры операции, сгруппированные по location"""

    path: List[Parameter] = []
    query: List[Parameter] = []
    body: Optional[Parameter] = None
    header: List[Parameter] = []
    form_data: List[Parameter] = []


class Operation(_Node):
    identifier: str
    http_method: str
    path_template: str
    tag: str
    summary: Optional[str] = None
    parameters: ParameterGroups = ParameterGroups()
    # None - ответ без содержимого
    response: Optional[SchemaNode] = None


class ServiceGroup(_Node):
    tag_name: str
    operations: List[Operation] = []
    description: Optional[str] = None


class Argument(BaseModel):
    """Объявление аргумента TypeScript метода"""

    name: str
    var_type: str = ""
    optional: bool = False
    default: Optional[str] = None

    def __str__(self):
        if self.default is not None:
            return f"{self.name}: {self.var_type} = {self.default}"

        return f"{self.name}{'?' if self.optional else ''}: {self.var_type}"


class Method(BaseModel):
    name: str
    arguments: List[Argument] = []
    response: str = "void"
    summary: Optional[str] = None
    code: str = ""

    def __str__(self) -> str:
        lines = []
        if self.summary and self.summary.strip():
            lines.append(line_comment(self.summary))

        lines.append(
            f"public static {self.name}("
            + ", ".join(map(str, self.arguments))
            + f"): Promise<{self.response}> {{"
        )
        lines.append("\t" + self.code)
        lines.append("}")

        return "\n".join(lines).replace("\t", "  ")


class ServiceClass(BaseModel):
    name: str
    description: Optional[str] = None
    methods: Dict[str, Method] = {}

    def __str__(self) -> str:
        body = "".join(
            "\n\n  " + str(method).replace("\n", "\n  ")  # Отступ для тела класса
            for method in self.methods.values()
        )

        comment = line_comment(self.description or "")

        return (
            (comment + "\n" if comment else "")
            + f"export class {self.name} {{"
            + body
            + "\n}"
        )

    def add_method(self, method: Union["Method", str], **kwargs) -> "Method":
        if isinstance(method, str):
            method = Method(name=method, **kwargs)

        self.methods[method.name] = method
        return method


class CodeFile(BaseModel):
    """Сгенерированный файл: имя и текст (str)"""

    file_name: str

    header: Optional[str] = None
    imports: List[str] = []
    code_blocks: List[str] = []
    classes: Dict[str, ServiceClass] = {}

    def __str__(self):
        return "\n\n".join(
            filter(
                bool,
                [
                    self.header or "",
                    "\n".join(self.imports),
                    "\n\n".join(self.code_blocks),
                    "\n\n".join(map(str, self.classes.values())),
                ],
            )
        ) + "\n"

    def add_class(self, cls: Union["ServiceClass", str], **kwargs) -> "ServiceClass":
        if isinstance(cls, str):
            cls = ServiceClass(name=cls, **kwargs)

        self.classes[cls.name] = cls
        return cls

    def add_code_block(self, code_block: str) -> "CodeFile":
        self.code_blocks.append(code_block)
        return self


class Project(BaseModel):
    name: str
    files: List[CodeFile] = []

    def add_file(self, file_name: Union["CodeFile", str], **kwargs) -> "CodeFile":
        if isinstance(file_name, str):
            file_name = CodeFile(file_name=file_name, **kwargs)

        self.files.append(file_name)
        return file_name

    def get_file(self, file_name: str) -> Optional["CodeFile"]:
        for code_file in self.files:
            if code_file.file_name == file_name:
                return code_file
        return None


ApiRename = Callable[[str], str]
