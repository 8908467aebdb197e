"""DescriptionScorerのユニットテスト。"""

from typing import Any

from specscore.models.document import OpenAPIDocument
from specscore.models.rules import ScoringConfig
from specscore.scorers.descriptions import DescriptionScorer

_ALL_DISABLED = {
    "require_info_description": False,
    "require_operation_descriptions": False,
    "require_parameter_descriptions": False,
    "require_request_body_descriptions": False,
    "require_response_descriptions": False,
    "require_schema_descriptions": False,
}


def _document(**sections: Any) -> OpenAPIDocument:
    return OpenAPIDocument.model_validate({"openapi": "3.0.3", **sections})


def _info() -> dict[str, Any]:
    return {"title": "Petstore", "version": "1.0.0", "description": "Manage pets in the store"}


class TestDescriptionScorer:
    def test_empty_document_scores_zero(self, scoring_config: ScoringConfig) -> None:
        score = DescriptionScorer(scoring_config).score_category(_document())
        assert score.score == 0
        assert len(score.issues) == 1
        assert score.issues[0].severity == "HIGH"

    def test_fully_documented(self, scoring_config: ScoringConfig, petstore: OpenAPIDocument) -> None:
        score = DescriptionScorer(scoring_config).score_category(petstore)
        assert score.score == 20
        assert "All API elements have proper descriptions" in score.strengths
        assert "All operations have descriptions" in score.strengths

    def test_missing_ratio(self, scoring_config: ScoringConfig) -> None:
        doc = _document(info=_info(), paths={"/pets": {"get": {"operationId": "listPets"}}})
        score = DescriptionScorer(scoring_config).score_category(doc)
        assert score.score == 10
        operation_issue = score.issues[0]
        assert operation_issue.location == "#/paths//pets/operations/listPets"
        assert operation_issue.severity == "MEDIUM"
        # 欠落率50%はHIGHの閾値を超えない
        assert score.issues[-1].severity == "MEDIUM"
        assert score.strengths == ["API info has a description"]

    def test_adding_description_never_decreases_score(self, scoring_config: ScoringConfig) -> None:
        scorer = DescriptionScorer(scoring_config)
        before = scorer.score_category(_document(info=_info(), paths={"/pets": {"get": {"operationId": "listPets"}}}))
        after = scorer.score_category(
            _document(
                info=_info(),
                paths={"/pets": {"get": {"operationId": "listPets", "description": "List every pet in the store"}}},
            )
        )
        assert after.score > before.score
        assert after.score == 20

    def test_short_text_counts_as_missing(self, scoring_config: ScoringConfig) -> None:
        doc = _document(
            info={"title": "t", "version": "1", "description": "  Pets    "},
            paths={"/pets": {"get": {"operationId": "listPets", "summary": "List"}}},
        )
        score = DescriptionScorer(scoring_config).score_category(doc)
        assert score.score == 0
        assert score.issues[-1].severity == "HIGH"

    def test_more_than_half_missing_is_high(self, scoring_config: ScoringConfig) -> None:
        doc = _document(
            info=_info(),
            paths={"/pets": {"get": {"operationId": "listPets"}, "post": {"operationId": "createPet"}}},
        )
        score = DescriptionScorer(scoring_config).score_category(doc)
        assert score.score == 6
        assert score.issues[-1].severity == "HIGH"

    def test_resolvable_reference_is_documented(self, scoring_config: ScoringConfig) -> None:
        doc = _document(
            info=_info(),
            paths={
                "/pets": {
                    "get": {
                        "operationId": "listPets",
                        "summary": "List all pets in the store",
                        "parameters": [
                            {"$ref": "#/components/parameters/Limit"},
                            {"$ref": "#/components/parameters/Missing"},
                        ],
                    }
                }
            },
            components={"parameters": {"Limit": {"name": "limit", "in": "query"}}},
        )
        score = DescriptionScorer(scoring_config).score_category(doc)
        parameter_issues = [i for i in score.issues if "/parameters/" in i.location]
        assert len(parameter_issues) == 1
        assert parameter_issues[0].location.endswith("/parameters/Missing")
        assert parameter_issues[0].severity == "LOW"

    def test_request_bodies_and_responses(self, scoring_config: ScoringConfig) -> None:
        doc = _document(
            paths={
                "/pets": {
                    "post": {
                        "operationId": "createPet",
                        "summary": "Create a pet record",
                        "requestBody": {"content": {"application/json": {}}},
                        "responses": {"201": {"description": "Created"}},
                    }
                }
            }
        )
        score = DescriptionScorer(scoring_config).score_category(doc)
        locations = [i.location for i in score.issues]
        assert "#/paths//pets/operations/createPet/requestBody" in locations
        assert "#/paths//pets/operations/createPet/responses/201" in locations
        # 3要素中2要素が欠落
        assert score.score == 6

    def test_extension_keys_are_not_scored(self, scoring_config: ScoringConfig) -> None:
        doc = _document(
            info=_info(),
            paths={
                "x-internal": True,
                "/pets": {
                    "get": {
                        "operationId": "listPets",
                        "summary": "List all pets in the store",
                        "responses": {
                            "200": {"description": "A page of pets"},
                            "x-codegen": {"name": "list"},
                        },
                    }
                },
            },
        )
        score = DescriptionScorer(scoring_config).score_category(doc)
        assert score.issues == []
        assert score.score == 20

    def test_schema_descriptions(self, scoring_config: ScoringConfig) -> None:
        doc = _document(
            info=_info(),
            components={"schemas": {"Pet": {"type": "object", "description": "A pet in the store"}, "Tag": {"type": "string"}}},
        )
        score = DescriptionScorer(scoring_config).score_category(doc)
        assert any(i.location == "#/components/schemas/Tag" for i in score.issues)
        assert score.score == 13

    def test_all_checks_disabled_scores_max(self) -> None:
        config = ScoringConfig.model_validate({"validation": {"description": _ALL_DISABLED}})
        score = DescriptionScorer(config).score_category(_document())
        assert score.score == 20
        assert score.issues == []

    def test_enabled_checks_without_elements_scores_zero(self) -> None:
        rules = {**_ALL_DISABLED, "require_parameter_descriptions": True}
        config = ScoringConfig.model_validate({"validation": {"description": rules}})
        doc = _document(paths={"/pets": {"get": {"operationId": "listPets"}}})
        score = DescriptionScorer(config).score_category(doc)
        assert score.score == 0
        assert score.issues[0].severity == "HIGH"

    def test_minimum_length_is_configurable(self) -> None:
        config = ScoringConfig.model_validate({"validation": {"description": {"minimum_description_length": 3}}})
        doc = _document(info={"title": "t", "version": "1", "description": "Pets"})
        score = DescriptionScorer(config).score_category(doc)
        assert score.score == 20
