"""ScoringServiceのユニットテスト。"""

import pytest

from specscore.models.document import OpenAPIDocument
from specscore.models.errors import UnknownCategoryError
from specscore.models.rules import ScoringConfig
from specscore.services.scoring import CATEGORY_KEYS, ScoringService

_EVERY_CHECK_DISABLED = {
    "validation": {
        "schema": {"require_schema_components": False, "check_media_type_schemas": False},
        "description": {
            "require_info_description": False,
            "require_operation_descriptions": False,
            "require_parameter_descriptions": False,
            "require_request_body_descriptions": False,
            "require_response_descriptions": False,
            "require_schema_descriptions": False,
        },
        "path": {
            "check_naming_consistency": False,
            "enforce_crud_operation_conventions": False,
            "check_for_redundant_paths": False,
        },
        "response": {
            "require_success_responses": False,
            "require_error_responses": False,
            "require_default_response": False,
        },
        "example": {"require_request_examples": False, "require_response_examples": False},
        "security": {
            "require_security_schemes": False,
            "require_operation_level_security": False,
            "require_global_security": False,
        },
        "best_practice": {
            "require_versioning": False,
            "require_servers_array": False,
            "require_tags": False,
            "require_component_reuse": False,
            "require_operation_ids": False,
        },
    }
}


class TestScore:
    def test_empty_document_scores_zero(self, scoring_service: ScoringService) -> None:
        result = scoring_service.score(OpenAPIDocument())
        assert result.total_score == 0
        assert result.grade == "F"
        assert [c.score for c in result.categories] == [0] * 7

    def test_petstore_scores_full_marks(self, scoring_service: ScoringService, petstore: OpenAPIDocument) -> None:
        result = scoring_service.score(petstore)
        assert [c.score for c in result.categories] == [20, 20, 15, 15, 10, 10, 10]
        assert result.total_score == 100
        assert result.grade == "A"

    def test_every_check_disabled_scores_max(self) -> None:
        service = ScoringService(ScoringConfig.model_validate(_EVERY_CHECK_DISABLED))
        doc = OpenAPIDocument.model_validate(
            {"openapi": "3.0.3", "paths": {"/pets": {"get": {"responses": {"200": {"description": "ok"}}}}}}
        )
        result = service.score(doc)
        assert [c.score for c in result.categories] == [c.max_score for c in result.categories]
        assert result.total_score == 100

    def test_every_check_disabled_without_responses(self) -> None:
        service = ScoringService(ScoringConfig.model_validate(_EVERY_CHECK_DISABLED))
        doc = OpenAPIDocument.model_validate({"openapi": "3.0.3", "paths": {"/pets": {"get": {}}}})
        assert service.score(doc).total_score == 100

    def test_scoring_is_idempotent(self, scoring_service: ScoringService, petstore: OpenAPIDocument) -> None:
        first = scoring_service.score(petstore)
        second = scoring_service.score(petstore)
        assert first == second
        assert first.model_dump() == second.model_dump()

    def test_total_is_sum_of_categories(self, scoring_service: ScoringService) -> None:
        doc = OpenAPIDocument.model_validate(
            {
                "openapi": "3.0.3",
                "info": {"title": "Pets", "version": "1.0.0"},
                "paths": {"/pets": {"get": {"operationId": "listPets", "responses": {"200": {"description": "ok"}}}}},
            }
        )
        result = scoring_service.score(doc)
        assert result.total_score == sum(c.score for c in result.categories)
        assert result.grade == scoring_service.grade(result.total_score)

    def test_category_names(self, scoring_service: ScoringService) -> None:
        result = scoring_service.score(OpenAPIDocument())
        assert [c.category_name for c in result.categories] == [
            "Schema & Types",
            "Descriptions & Documentation",
            "Paths & Operations",
            "Response Codes",
            "Examples & Samples",
            "Security",
            "Best Practices",
        ]


class TestGrade:
    @pytest.mark.parametrize(
        ("total", "expected"),
        [(100, "A"), (91, "A"), (90, "B"), (81, "B"), (80, "C"), (71, "C"), (70, "D"), (61, "D"), (60, "E"), (51, "E"), (50, "F"), (0, "F")],
    )
    def test_thresholds_are_strict(self, scoring_service: ScoringService, total: int, expected: str) -> None:
        assert scoring_service.grade(total) == expected

    def test_custom_thresholds(self) -> None:
        config = ScoringConfig.model_validate(
            {"thresholds": {"excellent": 40, "very_good": 30, "good": 20, "fair": 10, "poor": 5}}
        )
        service = ScoringService(config)
        assert service.grade(41) == "A"
        assert service.grade(6) == "E"
        assert service.grade(5) == "F"


class TestScoreCategory:
    def test_dispatch_matches_full_score(self, scoring_service: ScoringService, petstore: OpenAPIDocument) -> None:
        full = scoring_service.score(petstore)
        for key, expected in zip(CATEGORY_KEYS, full.categories, strict=True):
            assert scoring_service.score_category(petstore, key) == expected

    def test_unknown_category(self, scoring_service: ScoringService) -> None:
        with pytest.raises(UnknownCategoryError, match="performance"):
            scoring_service.score_category(OpenAPIDocument(), "performance")

    def test_default_config(self) -> None:
        assert ScoringService().config == ScoringConfig()
