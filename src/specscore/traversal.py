"""ドキュメントグラフの走査ヘルパー。

各関数は (コンテキスト, 要素) を持つ軽量なタプルを文書順に返すジェネレータ。
存在しないオプショナルなコンテナ（paths, requestBody, responses, security）は
例外ではなく要素ゼロ件として扱う。
"""

from collections.abc import Iterator
from typing import Any, NamedTuple

from specscore.models.document import (
    MediaType,
    OpenAPIDocument,
    Operation,
    PathItem,
    Reference,
    RequestBody,
    Response,
    Schema,
    SecurityScheme,
)

# $ref のセクション名 → Components の属性名
_COMPONENT_SECTIONS: dict[str, str] = {
    "schemas": "schemas",
    "responses": "responses",
    "parameters": "parameters",
    "examples": "examples",
    "requestBodies": "request_bodies",
    "headers": "headers",
    "securitySchemes": "security_schemes",
}

_COMPONENTS_PREFIX = "#/components/"


def pointer(*parts: str) -> str:
    """ドキュメント内の位置を表す ``#/a/b/c`` 形式の文字列を組み立てる。"""
    return "#/" + "/".join(parts)


def operation_pointer(path: str, operation_id: str, *parts: str) -> str:
    return pointer("paths", path, "operations", operation_id, *parts)


class PathItemVisit(NamedTuple):
    path: str
    item: PathItem


class OperationVisit(NamedTuple):
    path: str
    method: str
    operation_id: str
    operation: Operation

    @property
    def location(self) -> str:
        return operation_pointer(self.path, self.operation_id)


class ParameterVisit(NamedTuple):
    path: str
    operation_id: str
    parameter: Any

    @property
    def name(self) -> str | None:
        return getattr(self.parameter, "name", None)

    @property
    def location(self) -> str:
        if isinstance(self.parameter, Reference):
            name = self.parameter.ref.rsplit("/", 1)[-1]
        else:
            name = self.name or "unnamed"
        return operation_pointer(self.path, self.operation_id, "parameters", name)


class ResponseVisit(NamedTuple):
    path: str
    operation_id: str
    status_code: str
    response: Any

    @property
    def location(self) -> str:
        return operation_pointer(self.path, self.operation_id, "responses", self.status_code)


class SchemaVisit(NamedTuple):
    name: str
    schema: Any

    @property
    def location(self) -> str:
        return pointer("components", "schemas", self.name)


class PropertyVisit(NamedTuple):
    schema_name: str
    property_name: str
    schema: Any

    @property
    def location(self) -> str:
        return pointer("components", "schemas", self.schema_name, "properties", self.property_name)


class RequestMediaVisit(NamedTuple):
    path: str
    operation_id: str
    media_type_name: str
    media_type: MediaType

    @property
    def location(self) -> str:
        return operation_pointer(self.path, self.operation_id, "requestBody", "content", self.media_type_name)


class ResponseMediaVisit(NamedTuple):
    path: str
    operation_id: str
    status_code: str
    media_type_name: str
    media_type: MediaType

    @property
    def location(self) -> str:
        return operation_pointer(
            self.path, self.operation_id, "responses", self.status_code, "content", self.media_type_name
        )


class SecuritySchemeVisit(NamedTuple):
    name: str
    scheme: SecurityScheme

    @property
    def location(self) -> str:
        return pointer("components", "securitySchemes", self.name)


class OperationSecurityVisit(NamedTuple):
    path: str
    operation_id: str
    scheme_name: str

    @property
    def location(self) -> str:
        return operation_pointer(self.path, self.operation_id, "security", self.scheme_name)


def iter_path_items(document: OpenAPIDocument) -> Iterator[PathItemVisit]:
    for path, item in (document.paths or {}).items():
        yield PathItemVisit(path, item)


def iter_operations(document: OpenAPIDocument) -> Iterator[OperationVisit]:
    """全オペレーションを走査する。operationId が無い場合はメソッド名の大文字で代用する。"""
    for path, item in iter_path_items(document):
        for method, operation in item.operations().items():
            operation_id = operation.operation_id if operation.operation_id is not None else method.upper()
            yield OperationVisit(path, method, operation_id, operation)


def iter_parameters(document: OpenAPIDocument) -> Iterator[ParameterVisit]:
    for visit in iter_operations(document):
        for parameter in visit.operation.parameters or []:
            yield ParameterVisit(visit.path, visit.operation_id, parameter)


def iter_responses(document: OpenAPIDocument) -> Iterator[ResponseVisit]:
    for visit in iter_operations(document):
        for status_code, response in (visit.operation.responses or {}).items():
            yield ResponseVisit(visit.path, visit.operation_id, status_code, response)


def iter_schemas(document: OpenAPIDocument) -> Iterator[SchemaVisit]:
    if document.components is None:
        return
    for name, schema in (document.components.schemas or {}).items():
        yield SchemaVisit(name, schema)


def iter_schema_properties(document: OpenAPIDocument) -> Iterator[PropertyVisit]:
    for name, schema in iter_schemas(document):
        if not isinstance(schema, Schema):
            continue
        for property_name, property_schema in (schema.properties or {}).items():
            yield PropertyVisit(name, property_name, property_schema)


def iter_request_media_types(document: OpenAPIDocument) -> Iterator[RequestMediaVisit]:
    """リクエストボディのメディアタイプを走査する。参照は解決できた場合のみ辿る。"""
    for visit in iter_operations(document):
        body = visit.operation.request_body
        if isinstance(body, Reference):
            body = resolve_reference(document, body)
        if not isinstance(body, RequestBody):
            continue
        for media_type_name, media_type in (body.content or {}).items():
            yield RequestMediaVisit(visit.path, visit.operation_id, media_type_name, media_type)


def iter_response_media_types(document: OpenAPIDocument) -> Iterator[ResponseMediaVisit]:
    for visit in iter_responses(document):
        response = visit.response
        if isinstance(response, Reference):
            response = resolve_reference(document, response)
        if not isinstance(response, Response):
            continue
        for media_type_name, media_type in (response.content or {}).items():
            yield ResponseMediaVisit(visit.path, visit.operation_id, visit.status_code, media_type_name, media_type)


def iter_security_schemes(document: OpenAPIDocument) -> Iterator[SecuritySchemeVisit]:
    if document.components is None:
        return
    for name, scheme in (document.components.security_schemes or {}).items():
        yield SecuritySchemeVisit(name, scheme)


def iter_operation_security_schemes(document: OpenAPIDocument) -> Iterator[OperationSecurityVisit]:
    for visit in iter_operations(document):
        for requirement in visit.operation.security or []:
            for scheme_name in requirement:
                yield OperationSecurityVisit(visit.path, visit.operation_id, scheme_name)


def iter_global_security_schemes(document: OpenAPIDocument) -> Iterator[str]:
    for requirement in document.security or []:
        yield from requirement


def resolve_reference(document: OpenAPIDocument, reference: Reference | str | None) -> Any | None:
    """``#/components/<section>/<name>`` 形式の参照を解決する。解決できなければ None。"""
    ref = reference.ref if isinstance(reference, Reference) else reference
    if not ref or not ref.startswith(_COMPONENTS_PREFIX) or document.components is None:
        return None

    section, _, name = ref[len(_COMPONENTS_PREFIX) :].partition("/")
    attribute = _COMPONENT_SECTIONS.get(section)
    if attribute is None or not name or "/" in name:
        return None

    entries = getattr(document.components, attribute) or {}
    return entries.get(name)


def reference_exists(document: OpenAPIDocument, reference: Reference | str | None) -> bool:
    return resolve_reference(document, reference) is not None


def schema_type(schema: Any, document: OpenAPIDocument | None = None) -> str | None:
    """スキーマの型を宣言された type フィールドから推定する。

    優先順位:
        1. 宣言された type（リストの場合は最初の非 "null" 要素）
        2. allOf/oneOf/anyOf の全ブランチが同じ型に揃う場合はその型
        3. properties があれば "object"、items があれば "array"

    参照は document が渡された場合のみ解決する。
    """
    return _schema_type(schema, document, set())


def _schema_type(schema: Any, document: OpenAPIDocument | None, seen: set[str]) -> str | None:
    if isinstance(schema, Reference):
        if document is None or schema.ref in seen:
            return None
        seen.add(schema.ref)
        return _schema_type(resolve_reference(document, schema), document, seen)

    if not isinstance(schema, Schema):
        return None

    if isinstance(schema.type, str):
        return schema.type
    if isinstance(schema.type, list):
        return next((t for t in schema.type if t != "null"), None)

    branches = schema.composed
    if branches:
        branch_types = {_schema_type(branch, document, set(seen)) for branch in branches}
        if len(branch_types) == 1:
            return branch_types.pop()

    if schema.properties:
        return "object"
    if schema.items is not None:
        return "array"
    return None
