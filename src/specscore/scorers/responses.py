"""レスポンスコード定義のスコアリング。"""

from dataclasses import dataclass

from specscore.models.document import OpenAPIDocument
from specscore.models.score import CategoryScore
from specscore.scorers.base import CategoryScorer, ScoringContext, ratio_points
from specscore.traversal import OperationVisit, iter_operations, operation_pointer, pointer


@dataclass
class ResponseContext(ScoringContext):
    total_operations: int = 0
    passed_operations: int = 0


class ResponseScorer(CategoryScorer):
    """各オペレーションが成功・エラー・default レスポンスを備えているかを検査する。"""

    category_name = "Response Codes"

    @property
    def max_points(self) -> int:
        return self._config.weights.response_codes

    def score_category(self, document: OpenAPIDocument) -> CategoryScore:
        context = ResponseContext(points=0)

        for visit in iter_operations(document):
            context.total_operations += 1
            if self._check_operation(visit, context):
                context.passed_operations += 1

        if context.total_operations == 0:
            context.add_issue(
                pointer("paths"),
                "No operations found to evaluate",
                "HIGH",
                "Add API operations with proper response code definitions",
            )
            return self._finish(context)

        context.points = ratio_points(self.max_points, context.passed_operations, context.total_operations)
        if context.passed_operations == context.total_operations:
            context.add_strength("All operations have appropriate response codes")

        return self._finish(context)

    def _check_operation(self, visit: OperationVisit, context: ResponseContext) -> bool:
        rules = self._config.validation.response
        location = operation_pointer(visit.path, visit.operation_id, "responses")
        codes = set(visit.operation.responses or {})

        if not codes:
            context.add_issue(
                location,
                "Operation has no response codes defined",
                "HIGH",
                "Define response codes including success (2xx) and error (4xx/5xx) codes",
            )
            # 有効な要件が無ければ HIGH を残しつつ合格として数える
            return not (
                rules.require_success_responses or rules.require_error_responses or rules.require_default_response
            )

        passed = True

        if rules.require_success_responses and not any(code.startswith("2") for code in codes):
            passed = False
            context.add_issue(
                location,
                "Operation missing a success (2xx) response code",
                "MEDIUM",
                "Define appropriate success (2xx) response codes",
            )

        missing_errors = [code for code in rules.required_error_codes if code not in codes]
        if rules.require_error_responses and missing_errors:
            passed = False
            context.add_issue(
                location,
                f"Operation missing required error response codes: {', '.join(missing_errors)}",
                "MEDIUM",
                "Define appropriate error (4xx/5xx) response codes",
            )

        if rules.require_default_response and "default" not in codes:
            passed = False
            context.add_issue(
                location,
                "Operation missing required default response code",
                "MEDIUM",
                "Define a default response code for unexpected cases",
            )

        return passed
