"""スキーマ・データ型品質のスコアリング。"""

from dataclasses import dataclass
from typing import Any

from specscore.models.document import MediaType, OpenAPIDocument, Reference, Schema
from specscore.models.score import CategoryScore
from specscore.scorers.base import CategoryScorer, ScoringContext
from specscore.traversal import (
    iter_request_media_types,
    iter_response_media_types,
    iter_schema_properties,
    iter_schemas,
    pointer,
    reference_exists,
    schema_type,
)


@dataclass
class SchemaContext(ScoringContext):
    schema_issues: int = 0
    total_checked: int = 0


class SchemaScorer(CategoryScorer):
    """コンポーネントスキーマとメディアタイプごとのスキーマ定義を検証する。

    コンポーネント未定義はペナルティで減点し、プロパティとメディアタイプの
    問題件数の割合を最後に乗算で反映する。
    """

    category_name = "Schema & Types"

    @property
    def max_points(self) -> int:
        return self._config.weights.schema_and_types

    def score_category(self, document: OpenAPIDocument) -> CategoryScore:
        rules = self._config.validation.schema_
        context = SchemaContext(points=self.max_points)

        if not document.paths:
            context.points = 0
            context.add_issue(
                pointer("paths"),
                "No paths defined, so no request or response schemas can be evaluated",
                "HIGH",
                "Define API paths whose request and response bodies reference typed schemas",
            )
            return self._finish(context)

        if rules.require_schema_components:
            self._check_components(document, context)

        if rules.check_media_type_schemas:
            for request in iter_request_media_types(document):
                self._check_media_type(document, request.location, request.media_type, "request body", context)
            for response in iter_response_media_types(document):
                self._check_media_type(document, response.location, response.media_type, "response body", context)

        if context.total_checked > 0:
            issues, total = context.schema_issues, context.total_checked
            context.points = int(context.points * (1 - issues / total))

            if issues == 0:
                context.add_strength("All schemas have proper data types")
            else:
                context.add_issue(
                    pointer(),
                    f"Schema quality issues detected in {issues} out of {total} schemas ({issues / total * 100:.1f}%)",
                    "HIGH" if issues > total * 0.5 else "MEDIUM",
                    "Review and improve schema definitions to ensure proper typing",
                )

        return self._finish(context)

    def _check_components(self, document: OpenAPIDocument, context: SchemaContext) -> None:
        rules = self._config.validation.schema_
        schemas = document.components.schemas if document.components is not None else None

        if not schemas:
            context.deduct(rules.penalty_for_missing_schema)
            context.add_issue(
                pointer("components", "schemas"),
                "No schema components defined",
                "HIGH",
                "Define reusable schema components in the components/schemas section",
            )
            return

        context.add_strength("Schema components are defined")

        for visit in iter_schemas(document):
            if isinstance(visit.schema, Reference):
                continue
            if schema_type(visit.schema, document) is None:
                context.add_issue(
                    visit.location,
                    f"Schema '{visit.name}' has no declared type and is treated as an implicit object",
                    "LOW",
                    "Declare an explicit type for the schema",
                )

        for visit in iter_schema_properties(document):
            context.total_checked += 1
            prop = visit.schema

            if isinstance(prop, Reference):
                if reference_exists(document, prop):
                    continue
                context.schema_issues += 1
                context.add_issue(
                    visit.location,
                    f"Property '{visit.property_name}' of schema '{visit.schema_name}' "
                    f"references undefined component '{prop.ref}'",
                    "HIGH",
                    "Point the $ref at an existing component schema or declare an inline type",
                )
                continue

            prop_type = schema_type(prop, document)
            if prop_type is None:
                context.schema_issues += 1
                context.add_issue(
                    visit.location,
                    f"Property '{visit.property_name}' of schema '{visit.schema_name}' has no type",
                    "HIGH",
                    "Declare a type for the property or reference a component schema",
                )
            elif prop_type not in rules.required_data_types:
                context.schema_issues += 1
                context.add_issue(
                    visit.location,
                    f"Property '{visit.property_name}' of schema '{visit.schema_name}' "
                    f"uses unsupported data type '{prop_type}'",
                    "MEDIUM",
                    f"Use one of the allowed data types: {', '.join(rules.required_data_types)}",
                )

    def _check_media_type(
        self,
        document: OpenAPIDocument,
        location: str,
        media_type: MediaType,
        kind: str,
        context: SchemaContext,
    ) -> None:
        context.total_checked += 1
        schema = media_type.schema_

        if schema is None:
            context.schema_issues += 1
            context.add_issue(
                location,
                "Missing schema definition",
                "HIGH",
                f"Define a proper schema for the {kind}",
            )
        elif not self._config.validation.schema_.allow_generic_objects and self._is_generic_object(
            document, schema
        ):
            context.schema_issues += 1
            context.add_issue(
                location,
                "Generic object schema without properties",
                "MEDIUM",
                "Define specific properties for the object schema or use a $ref to a component schema",
            )

    @staticmethod
    def _is_generic_object(document: OpenAPIDocument, schema: Any) -> bool:
        # 参照は解決可否に関わらず汎用オブジェクトとはみなさない
        if not isinstance(schema, Schema):
            return False
        if schema.properties or schema.composed:
            return False
        return schema_type(schema, document) in (None, "object")
