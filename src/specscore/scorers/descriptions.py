"""説明・ドキュメント品質のスコアリング。"""

from dataclasses import dataclass, field
from typing import Any

from specscore.models.document import OpenAPIDocument, Reference
from specscore.models.score import CategoryScore
from specscore.scorers.base import CategoryScorer, ScoringContext
from specscore.traversal import (
    iter_operations,
    iter_parameters,
    iter_responses,
    iter_schemas,
    operation_pointer,
    pointer,
    reference_exists,
)

# サブカテゴリ → 全件記述済みの場合の長所メッセージ
_SUBCATEGORY_STRENGTHS: dict[str, str] = {
    "info": "API info has a description",
    "operations": "All operations have descriptions",
    "parameters": "All parameters have descriptions",
    "request_bodies": "All request bodies have descriptions",
    "responses": "All responses have descriptions",
    "schemas": "All schemas have descriptions",
}


@dataclass
class Coverage:
    total: int = 0
    missing: int = 0


@dataclass
class DescriptionContext(ScoringContext):
    coverage: dict[str, Coverage] = field(
        default_factory=lambda: {key: Coverage() for key in _SUBCATEGORY_STRENGTHS}
    )

    @property
    def total(self) -> int:
        return sum(c.total for c in self.coverage.values())

    @property
    def missing(self) -> int:
        return sum(c.missing for c in self.coverage.values())

    def record(self, subcategory: str, documented: bool) -> bool:
        """要素1件を集計し、記述が欠けている場合は True を返す。"""
        counter = self.coverage[subcategory]
        counter.total += 1
        if not documented:
            counter.missing += 1
        return not documented


class DescriptionScorer(CategoryScorer):
    """API要素の説明文の網羅率に基づいて採点する。"""

    category_name = "Descriptions & Documentation"

    @property
    def max_points(self) -> int:
        return self._config.weights.descriptions_and_documentation

    def score_category(self, document: OpenAPIDocument) -> CategoryScore:
        rules = self._config.validation.description
        context = DescriptionContext(points=0)

        if not rules.any_enabled:
            context.points = self.max_points
            return self._finish(context)

        if rules.require_info_description:
            self._check_info(document, context)
        if rules.require_operation_descriptions:
            self._check_operations(document, context)
        if rules.require_parameter_descriptions:
            self._check_parameters(document, context)
        if rules.require_request_body_descriptions:
            self._check_request_bodies(document, context)
        if rules.require_response_descriptions:
            self._check_responses(document, context)
        if rules.require_schema_descriptions:
            self._check_schemas(document, context)

        if context.total == 0:
            context.add_issue(
                pointer("paths"),
                "No API elements found to evaluate",
                "HIGH",
                "Define API info, paths and operations with proper documentation",
            )
            return self._finish(context)

        total, missing = context.total, context.missing
        context.points = int(self.max_points * (1 - missing / total))

        if missing > 0:
            context.add_issue(
                pointer(),
                (
                    f"Documentation coverage issues: {missing} out of {total} elements "
                    f"missing descriptions ({missing / total * 100:.1f}%)"
                ),
                "HIGH" if missing > total * 0.5 else "MEDIUM",
                "Add meaningful descriptions to all API elements for better developer experience",
            )
        else:
            context.add_strength("All API elements have proper descriptions")

        for subcategory, counter in context.coverage.items():
            if counter.total > 0 and counter.missing == 0:
                context.add_strength(_SUBCATEGORY_STRENGTHS[subcategory])

        return self._finish(context)

    def _is_valid(self, text: str | None) -> bool:
        if text is None or not text.strip():
            return False
        return len(text.strip()) >= self._config.validation.description.minimum_description_length

    def _is_documented(self, document: OpenAPIDocument, element: Any) -> bool:
        # 解決可能な参照は参照先の説明を継承するものとして扱う
        if isinstance(element, Reference) and reference_exists(document, element):
            return True
        return self._is_valid(getattr(element, "description", None))

    def _check_info(self, document: OpenAPIDocument, context: DescriptionContext) -> None:
        if document.info is None:
            return
        if context.record("info", self._is_valid(document.info.description)):
            context.add_issue(
                pointer("info", "description"),
                "API info lacks description",
                "MEDIUM",
                "Add a clear description of what your API does in the info section",
            )

    def _check_operations(self, document: OpenAPIDocument, context: DescriptionContext) -> None:
        for visit in iter_operations(document):
            operation = visit.operation
            documented = self._is_valid(operation.description) or self._is_valid(operation.summary)
            if context.record("operations", documented):
                context.add_issue(
                    visit.location,
                    f"Operation '{visit.operation_id}' on path '{visit.path}' lacks description",
                    "MEDIUM",
                    "Add a description or summary explaining what this operation does",
                )

    def _check_parameters(self, document: OpenAPIDocument, context: DescriptionContext) -> None:
        for visit in iter_parameters(document):
            if context.record("parameters", self._is_documented(document, visit.parameter)):
                name = visit.name or "unnamed"
                context.add_issue(
                    visit.location,
                    f"Parameter '{name}' in operation '{visit.operation_id}' on path '{visit.path}' lacks description",
                    "LOW",
                    f"Add a description explaining the purpose and expected format of parameter '{name}'",
                )

    def _check_request_bodies(self, document: OpenAPIDocument, context: DescriptionContext) -> None:
        for visit in iter_operations(document):
            body = visit.operation.request_body
            if body is None:
                continue
            if context.record("request_bodies", self._is_documented(document, body)):
                context.add_issue(
                    operation_pointer(visit.path, visit.operation_id, "requestBody"),
                    f"Request body in operation '{visit.operation_id}' on path '{visit.path}' lacks description",
                    "LOW",
                    "Add a description explaining the expected request body structure and purpose",
                )

    def _check_responses(self, document: OpenAPIDocument, context: DescriptionContext) -> None:
        for visit in iter_responses(document):
            if context.record("responses", self._is_documented(document, visit.response)):
                context.add_issue(
                    visit.location,
                    f"Response '{visit.status_code}' in operation '{visit.operation_id}' lacks description",
                    "LOW",
                    "Add a description explaining what this response means and when it occurs",
                )

    def _check_schemas(self, document: OpenAPIDocument, context: DescriptionContext) -> None:
        for visit in iter_schemas(document):
            if context.record("schemas", self._is_documented(document, visit.schema)):
                context.add_issue(
                    visit.location,
                    f"Schema '{visit.name}' lacks description",
                    "LOW",
                    "Add a description explaining what this schema represents",
                )
