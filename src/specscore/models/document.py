"""OpenAPIドキュメントグラフのデータモデル。

$ref を持つ要素は ``Reference`` と実体モデルの直和型として表現する。
判別は ``$ref`` キーの有無で行う。
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

# パスアイテム内のHTTPメソッドの正規順序
HTTP_METHODS: tuple[str, ...] = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

_DOCUMENT_MODEL_CONFIG = ConfigDict(populate_by_name=True, extra="ignore")


def _ref_or_object(value: Any) -> str:
    if isinstance(value, dict):
        return "ref" if "$ref" in value else "object"
    return "ref" if isinstance(value, Reference) else "object"


def _is_extension(key: Any) -> bool:
    return isinstance(key, str) and key.startswith("x-")


class Reference(BaseModel):
    """``#/components/...`` を指す参照オブジェクト。"""

    model_config = _DOCUMENT_MODEL_CONFIG

    ref: str = Field(alias="$ref")
    summary: str | None = None
    description: str | None = None


class Schema(BaseModel):
    """スキーマオブジェクト。"""

    model_config = _DOCUMENT_MODEL_CONFIG

    type: str | list[str] | None = None
    format: str | None = None
    title: str | None = None
    description: str | None = None
    properties: "dict[str, SchemaOrRef] | None" = None
    items: "SchemaOrRef | None" = None
    all_of: "list[SchemaOrRef] | None" = Field(default=None, alias="allOf")
    one_of: "list[SchemaOrRef] | None" = Field(default=None, alias="oneOf")
    any_of: "list[SchemaOrRef] | None" = Field(default=None, alias="anyOf")
    required: list[str] | None = None
    enum: list[Any] | None = None
    example: Any = None

    @property
    def composed(self) -> "list[SchemaOrRef]":
        """allOf/oneOf/anyOf の全ブランチ。"""
        return [*(self.all_of or []), *(self.one_of or []), *(self.any_of or [])]


SchemaOrRef = Annotated[
    Annotated[Reference, Tag("ref")] | Annotated[Schema, Tag("object")],
    Discriminator(_ref_or_object),
]

Schema.model_rebuild()


class MediaType(BaseModel):
    """リクエスト/レスポンスのメディアタイプごとの内容定義。"""

    model_config = _DOCUMENT_MODEL_CONFIG

    schema_: SchemaOrRef | None = Field(default=None, alias="schema")
    example: Any = None
    examples: dict[str, Any] | None = None

    @property
    def has_examples(self) -> bool:
        return self.example is not None or bool(self.examples)


class Parameter(BaseModel):
    model_config = _DOCUMENT_MODEL_CONFIG

    name: str | None = None
    in_: str | None = Field(default=None, alias="in")
    description: str | None = None
    required: bool | None = None
    schema_: SchemaOrRef | None = Field(default=None, alias="schema")


ParameterOrRef = Annotated[
    Annotated[Reference, Tag("ref")] | Annotated[Parameter, Tag("object")],
    Discriminator(_ref_or_object),
]


class RequestBody(BaseModel):
    model_config = _DOCUMENT_MODEL_CONFIG

    description: str | None = None
    content: dict[str, MediaType] | None = None
    required: bool | None = None


RequestBodyOrRef = Annotated[
    Annotated[Reference, Tag("ref")] | Annotated[RequestBody, Tag("object")],
    Discriminator(_ref_or_object),
]


class Response(BaseModel):
    model_config = _DOCUMENT_MODEL_CONFIG

    description: str | None = None
    content: dict[str, MediaType] | None = None


ResponseOrRef = Annotated[
    Annotated[Reference, Tag("ref")] | Annotated[Response, Tag("object")],
    Discriminator(_ref_or_object),
]


class Operation(BaseModel):
    """単一のHTTPオペレーション。"""

    model_config = _DOCUMENT_MODEL_CONFIG

    operation_id: str | None = Field(default=None, alias="operationId")
    summary: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    parameters: list[ParameterOrRef] | None = None
    request_body: RequestBodyOrRef | None = Field(default=None, alias="requestBody")
    responses: dict[str, ResponseOrRef] | None = None
    security: list[dict[str, list[str]]] | None = None
    deprecated: bool | None = None

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_status_codes(cls, value: Any) -> Any:
        # YAMLでは 200: のようなキーが整数として読み込まれる。x- 拡張キーは除く
        # YAMLでは 200: のようなキーが整数として読み込まれる
        if isinstance(value, dict):
            return {str(code): response for code, response in value.items() if not _is_extension(code)}
        return value


class PathItem(BaseModel):
    """パスごとのオペレーション集合。"""

    model_config = _DOCUMENT_MODEL_CONFIG

    summary: str | None = None
    description: str | None = None
    parameters: list[ParameterOrRef] | None = None
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None

    def operations(self) -> dict[str, Operation]:
        """定義済みオペレーションを正規のメソッド順で返す。"""
        result: dict[str, Operation] = {}
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                result[method] = operation
        return result


class Contact(BaseModel):
    model_config = _DOCUMENT_MODEL_CONFIG

    name: str | None = None
    url: str | None = None
    email: str | None = None


class License(BaseModel):
    model_config = _DOCUMENT_MODEL_CONFIG

    name: str | None = None
    url: str | None = None


class Info(BaseModel):
    model_config = _DOCUMENT_MODEL_CONFIG

    title: str | None = None
    version: str | None = None
    description: str | None = None
    contact: Contact | None = None
    license: License | None = None

    @field_validator("version", mode="before")
    @classmethod
    def _stringify_version(cls, value: Any) -> Any:
        # version: 1.0 はYAMLでfloatになる
        if isinstance(value, int | float):
            return str(value)
        return value


class Server(BaseModel):
    model_config = _DOCUMENT_MODEL_CONFIG

    url: str | None = None
    description: str | None = None


class SecurityScheme(BaseModel):
    model_config = _DOCUMENT_MODEL_CONFIG

    type: str | None = None
    description: str | None = None
    name: str | None = None
    in_: str | None = Field(default=None, alias="in")
    scheme: str | None = None
    bearer_format: str | None = Field(default=None, alias="bearerFormat")
    flows: dict[str, Any] | None = None
    open_id_connect_url: str | None = Field(default=None, alias="openIdConnectUrl")


class Components(BaseModel):
    """再利用可能なコンポーネント定義。"""

    model_config = _DOCUMENT_MODEL_CONFIG

    schemas: dict[str, SchemaOrRef] | None = None
    responses: dict[str, ResponseOrRef] | None = None
    parameters: dict[str, ParameterOrRef] | None = None
    examples: dict[str, Any] | None = None
    request_bodies: dict[str, RequestBodyOrRef] | None = Field(default=None, alias="requestBodies")
    headers: dict[str, Any] | None = None
    security_schemes: dict[str, SecurityScheme] | None = Field(default=None, alias="securitySchemes")


class TagDefinition(BaseModel):
    model_config = _DOCUMENT_MODEL_CONFIG

    name: str
    description: str | None = None


class OpenAPIDocument(BaseModel):
    """パース済みのOpenAPIドキュメント全体。"""

    model_config = _DOCUMENT_MODEL_CONFIG

    openapi: str | None = None
    info: Info | None = None
    servers: list[Server] | None = None
    paths: dict[str, PathItem] | None = None
    components: Components | None = None
    security: list[dict[str, list[str]]] | None = None
    tags: list[TagDefinition] | None = None

    @field_validator("paths", mode="before")
    @classmethod
    def _drop_path_extensions(cls, value: Any) -> Any:
        # Paths オブジェクトは x- で始まる拡張キーを持てる
        if isinstance(value, dict):
            return {path: item for path, item in value.items() if not _is_extension(path)}
        return value

    @field_validator("openapi", mode="before")
    @classmethod
    def _stringify_openapi(cls, value: Any) -> Any:
        if isinstance(value, int | float):
            return str(value)
        return value
