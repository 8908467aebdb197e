"""BestPracticeScorerのユニットテスト。"""

from typing import Any

from specscore.models.document import OpenAPIDocument
from specscore.models.rules import ScoringConfig
from specscore.scorers.best_practices import BestPracticeScorer

_ONLY = {
    "require_versioning": False,
    "require_servers_array": False,
    "require_tags": False,
    "require_component_reuse": False,
    "require_operation_ids": False,
}


def _only(**enabled: bool) -> ScoringConfig:
    return ScoringConfig.model_validate({"validation": {"best_practice": {**_ONLY, **enabled}}})


def _document(**sections: Any) -> OpenAPIDocument:
    return OpenAPIDocument.model_validate({"openapi": "3.0.3", **sections})


class TestBestPracticeScorer:
    def test_empty_document_scores_zero(self, scoring_config: ScoringConfig) -> None:
        score = BestPracticeScorer(scoring_config).score_category(_document())
        assert score.score == 0
        assert len(score.issues) == 5

    def test_petstore(self, scoring_config: ScoringConfig, petstore: OpenAPIDocument) -> None:
        score = BestPracticeScorer(scoring_config).score_category(petstore)
        assert score.score == 10
        assert score.issues == []
        assert "API version is specified: 1.0.0" in score.strengths

    def test_versioning(self) -> None:
        config = _only(require_versioning=True)
        missing = BestPracticeScorer(config).score_category(_document(info={"title": "t", "version": " "}))
        assert missing.score == 0
        assert missing.issues[0].severity == "HIGH"
        assert missing.issues[0].location == "#/info/version"

    def test_servers(self) -> None:
        config = _only(require_servers_array=True)
        scorer = BestPracticeScorer(config)
        assert scorer.score_category(_document(servers=[{"url": "https://api.example.com"}])).score == 10
        missing = scorer.score_category(_document(servers=[]))
        assert missing.score == 0
        assert missing.issues[0].severity == "MEDIUM"

    def test_partial_tags_pass_with_low_issues(self) -> None:
        config = _only(require_tags=True)
        doc = _document(
            paths={"/pets": {"get": {"operationId": "listPets", "tags": ["pets"]}, "post": {"operationId": "createPet"}}}
        )
        score = BestPracticeScorer(config).score_category(doc)
        assert score.score == 10
        assert [(i.severity, i.location) for i in score.issues] == [
            ("LOW", "#/paths//pets/operations/createPet")
        ]

    def test_no_tags_fail_with_summary(self) -> None:
        config = _only(require_tags=True)
        doc = _document(paths={"/pets": {"get": {"operationId": "listPets"}}})
        score = BestPracticeScorer(config).score_category(doc)
        assert score.score == 0
        assert [i.severity for i in score.issues] == ["MEDIUM"]

    def test_component_reuse(self) -> None:
        config = _only(require_component_reuse=True)
        scorer = BestPracticeScorer(config)
        single = scorer.score_category(_document(components={"schemas": {"Pet": {"type": "object"}}}))
        assert single.score == 0
        assert single.issues[0].severity == "MEDIUM"

        reused = scorer.score_category(
            _document(
                components={
                    "schemas": {"Pet": {"type": "object"}, "Error": {"type": "object"}},
                    "parameters": {"Limit": {"name": "limit", "in": "query"}},
                    "responses": {"NotFound": {"description": "Not found"}},
                }
            )
        )
        assert reused.score == 10
        assert reused.strengths == [
            "Uses 2 reusable schema components",
            "Good use of reusable components across 3 component types",
        ]

    def test_operation_ids(self) -> None:
        config = _only(require_operation_ids=True)
        scorer = BestPracticeScorer(config)
        partial = scorer.score_category(
            _document(paths={"/pets": {"get": {"operationId": "listPets"}, "post": {"summary": "Create a pet"}}})
        )
        assert partial.score == 0
        assert [i.location for i in partial.issues] == ["#/paths//pets/operations/POST"]

        none = scorer.score_category(_document(paths={"/pets": {"get": {}, "post": {}}}))
        assert [i.location for i in none.issues] == ["#/paths"]

    def test_contact_and_license_are_opt_in(self, petstore: OpenAPIDocument) -> None:
        config = ScoringConfig.model_validate(
            {"validation": {"best_practice": {"require_contact_info": True, "require_license_info": True}}}
        )
        score = BestPracticeScorer(config).score_category(petstore)
        # 7チェック中5件合格
        assert score.score == 7
        assert [i.location for i in score.issues] == ["#/info/contact", "#/info/license"]
        assert all(i.severity == "LOW" for i in score.issues)

    def test_checks_disabled_scores_max(self) -> None:
        score = BestPracticeScorer(_only()).score_category(_document())
        assert score.score == 10
        assert score.issues == []
