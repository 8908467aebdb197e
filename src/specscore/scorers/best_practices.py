"""APIベストプラクティスのスコアリング。

各チェックは合否の二値で、有効なチェック数に対する合格数の割合で配点する。
"""

from dataclasses import dataclass

from specscore.models.document import OpenAPIDocument
from specscore.models.score import CategoryScore
from specscore.scorers.base import CategoryScorer, ScoringContext, ratio_points
from specscore.traversal import OperationVisit, iter_operations, pointer


@dataclass
class BestPracticeContext(ScoringContext):
    total_checks: int = 0
    passed_checks: int = 0

    def record(self, passed: bool) -> None:
        self.total_checks += 1
        if passed:
            self.passed_checks += 1


class BestPracticeScorer(CategoryScorer):
    category_name = "Best Practices"

    @property
    def max_points(self) -> int:
        return self._config.weights.best_practices

    def score_category(self, document: OpenAPIDocument) -> CategoryScore:
        rules = self._config.validation.best_practice
        context = BestPracticeContext(points=self.max_points)
        operations = list(iter_operations(document))

        if rules.require_versioning:
            context.record(self._check_versioning(document, context))
        if rules.require_servers_array:
            context.record(self._check_servers(document, context))
        if rules.require_tags:
            context.record(self._check_tags(operations, context))
        if rules.require_component_reuse:
            context.record(self._check_component_reuse(document, context))
        if rules.require_operation_ids:
            context.record(self._check_operation_ids(operations, context))
        if rules.require_contact_info:
            context.record(self._check_contact(document, context))
        if rules.require_license_info:
            context.record(self._check_license(document, context))

        if context.total_checks > 0:
            context.points = ratio_points(self.max_points, context.passed_checks, context.total_checks)

        return self._finish(context)

    @staticmethod
    def _check_versioning(document: OpenAPIDocument, context: BestPracticeContext) -> bool:
        version = document.info.version if document.info is not None else None
        if version and version.strip():
            context.add_strength(f"API version is specified: {version}")
            return True

        context.add_issue(
            pointer("info", "version"),
            "API version is not specified",
            "HIGH",
            "Specify the API version in info.version, e.g. using semantic versioning",
        )
        return False

    @staticmethod
    def _check_servers(document: OpenAPIDocument, context: BestPracticeContext) -> bool:
        if document.servers:
            context.add_strength("Server information is provided")
            return True

        context.add_issue(
            pointer("servers"),
            "No servers defined",
            "MEDIUM",
            "Define at least one server URL in the servers array",
        )
        return False

    @staticmethod
    def _check_tags(operations: list[OperationVisit], context: BestPracticeContext) -> bool:
        untagged = [visit for visit in operations if not visit.operation.tags]

        if operations and not untagged:
            context.add_strength("All operations are organized with tags")
            return True

        if len(untagged) == len(operations):
            context.add_issue(
                pointer("paths"),
                "No operations use tags for grouping",
                "MEDIUM",
                "Group related operations with tags to organize the API",
            )
            return False

        # 一部のみタグ付けされている場合は合格扱いにし、未タグ付けのオペレーションを個別に指摘する
        for visit in untagged:
            context.add_issue(
                visit.location,
                "Operation has no tags",
                "LOW",
                "Add tags to the operation to group it with related operations",
            )
        return True

    def _check_component_reuse(self, document: OpenAPIDocument, context: BestPracticeContext) -> bool:
        components = document.components
        schemas = components.schemas if components is not None else None

        if not schemas or len(schemas) <= 1:
            context.add_issue(
                pointer("components"),
                "Limited or no reusable components found",
                "MEDIUM",
                "Extract shared schemas, parameters and responses into reusable components",
            )
            return False

        context.add_strength(f"Uses {len(schemas)} reusable schema components")

        populated_types = sum(
            1
            for section in (components.schemas, components.parameters, components.responses, components.request_bodies)
            if section
        )
        if populated_types > self._config.validation.best_practice.minimum_reusable_components:
            context.add_strength(f"Good use of reusable components across {populated_types} component types")
        return True

    @staticmethod
    def _check_operation_ids(operations: list[OperationVisit], context: BestPracticeContext) -> bool:
        missing = [
            visit
            for visit in operations
            if not (visit.operation.operation_id and visit.operation.operation_id.strip())
        ]

        if operations and not missing:
            context.add_strength("All operations have operationIds")
            return True

        if len(missing) == len(operations):
            context.add_issue(
                pointer("paths"),
                "No operations have operationIds",
                "LOW",
                "Add a unique operationId to every operation",
            )
            return False

        for visit in missing:
            context.add_issue(
                visit.location,
                "Operation is missing an operationId",
                "LOW",
                "Add a unique operationId to the operation",
            )
        return False

    @staticmethod
    def _check_contact(document: OpenAPIDocument, context: BestPracticeContext) -> bool:
        if document.info is not None and document.info.contact is not None:
            context.add_strength("Contact information is provided")
            return True

        context.add_issue(
            pointer("info", "contact"),
            "No contact information provided",
            "LOW",
            "Add contact information to info.contact",
        )
        return False

    @staticmethod
    def _check_license(document: OpenAPIDocument, context: BestPracticeContext) -> bool:
        if document.info is not None and document.info.license is not None:
            context.add_strength("License information is provided")
            return True

        context.add_issue(
            pointer("info", "license"),
            "No license information provided",
            "LOW",
            "Add license information to info.license",
        )
        return False
