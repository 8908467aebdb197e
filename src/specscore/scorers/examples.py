"""リクエスト/レスポンス例のスコアリング。"""

from dataclasses import dataclass

from specscore.models.document import OpenAPIDocument
from specscore.models.score import CategoryScore
from specscore.scorers.base import CategoryScorer, ScoringContext, ratio_points
from specscore.traversal import iter_request_media_types, iter_response_media_types, pointer


@dataclass
class ExampleContext(ScoringContext):
    total_media_types: int = 0
    media_types_with_examples: int = 0


class ExampleScorer(CategoryScorer):
    """メディアタイプごとに example / examples の有無を検査する。"""

    category_name = "Examples & Samples"

    @property
    def max_points(self) -> int:
        return self._config.weights.examples_and_samples

    def score_category(self, document: OpenAPIDocument) -> CategoryScore:
        rules = self._config.validation.example
        context = ExampleContext(points=0)

        if not document.paths:
            context.add_issue(
                pointer("paths"),
                "No paths defined, so no request or response examples can be evaluated",
                "HIGH",
                "Define API paths with request/response bodies and include examples",
            )
            return self._finish(context)

        if not (rules.require_request_examples or rules.require_response_examples):
            context.points = self.max_points
            return self._finish(context)

        if rules.require_request_examples:
            for request in iter_request_media_types(document):
                context.total_media_types += 1
                if request.media_type.has_examples:
                    context.media_types_with_examples += 1
                    continue
                context.add_issue(
                    request.location,
                    f"Request body missing examples for content type: {request.media_type_name}",
                    "MEDIUM",
                    "Add example or examples property to request body media type",
                )

        if rules.require_response_examples:
            for response in iter_response_media_types(document):
                context.total_media_types += 1
                if response.media_type.has_examples:
                    context.media_types_with_examples += 1
                    continue
                context.add_issue(
                    response.location,
                    f"Response ({response.status_code}) missing examples for content type: "
                    f"{response.media_type_name}",
                    "MEDIUM",
                    "Add example or examples property to response media type",
                )

        if context.total_media_types == 0:
            context.add_issue(
                pointer("paths"),
                "No request/response bodies found to evaluate",
                "LOW",
                "Add operations with request/response bodies and include examples",
            )
            return self._finish(context)

        with_examples, total = context.media_types_with_examples, context.total_media_types
        context.points = ratio_points(self.max_points, with_examples, total)

        coverage = with_examples / total
        if coverage > rules.minimum_example_coverage:
            context.add_strength(f"Good coverage of request/response examples: {int(coverage * 100)}%")

        return self._finish(context)
