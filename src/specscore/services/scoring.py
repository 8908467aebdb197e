"""カテゴリスコアの集計とグレード判定を行うサービス。"""

from loguru import logger

from specscore.models.document import OpenAPIDocument
from specscore.models.errors import UnknownCategoryError
from specscore.models.rules import ScoringConfig
from specscore.models.score import CategoryScore, Grade, SpecScore
from specscore.scorers.base import CategoryScorer
from specscore.scorers.best_practices import BestPracticeScorer
from specscore.scorers.descriptions import DescriptionScorer
from specscore.scorers.examples import ExampleScorer
from specscore.scorers.paths import PathsScorer
from specscore.scorers.responses import ResponseScorer
from specscore.scorers.schema import SchemaScorer
from specscore.scorers.security import SecurityScorer

# score_category() が受け付けるカテゴリキー（SpecScore のフィールド順）
CATEGORY_KEYS: tuple[str, ...] = (
    "schema",
    "descriptions",
    "paths",
    "responses",
    "examples",
    "security",
    "best_practices",
)


class ScoringService:
    """7つのカテゴリスコアラーを束ね、ドキュメント全体のスコアを算出する。"""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config if config is not None else ScoringConfig()
        self._scorers: dict[str, CategoryScorer] = {
            "schema": SchemaScorer(self.config),
            "descriptions": DescriptionScorer(self.config),
            "paths": PathsScorer(self.config),
            "responses": ResponseScorer(self.config),
            "examples": ExampleScorer(self.config),
            "security": SecurityScorer(self.config),
            "best_practices": BestPracticeScorer(self.config),
        }

    def score(self, document: OpenAPIDocument) -> SpecScore:
        """ドキュメントを全カテゴリでスコアリングする。

        Args:
            document: パース済みのOpenAPIドキュメント。

        Returns:
            カテゴリ別スコア・合計点・グレードを含むSpecScore。
        """
        scores = {key: scorer.score_category(document) for key, scorer in self._scorers.items()}
        total = sum(score.score for score in scores.values())
        grade = self.grade(total)

        logger.info("Scored OpenAPI document: {total} points, grade {grade}", total=total, grade=grade)

        return SpecScore(
            total_score=total,
            grade=grade,
            schema_score=scores["schema"],
            description_score=scores["descriptions"],
            paths_score=scores["paths"],
            response_score=scores["responses"],
            example_score=scores["examples"],
            security_score=scores["security"],
            best_practices_score=scores["best_practices"],
        )

    def score_category(self, document: OpenAPIDocument, category: str) -> CategoryScore:
        """単一カテゴリのみをスコアリングする。

        Args:
            document: パース済みのOpenAPIドキュメント。
            category: カテゴリキー（schema, descriptions, paths, responses,
                examples, security, best_practices）。

        Returns:
            指定カテゴリのCategoryScore。

        Raises:
            UnknownCategoryError: 未知のカテゴリキーが指定された場合。
        """
        scorer = self._scorers.get(category)
        if scorer is None:
            raise UnknownCategoryError(category)
        return scorer.score_category(document)

    def grade(self, total_score: int) -> Grade:
        """合計点を閾値と比較してグレードを返す。閾値は超過（>）で判定する。"""
        thresholds = self.config.thresholds
        cut_points: tuple[tuple[int, Grade], ...] = (
            (thresholds.excellent, "A"),
            (thresholds.very_good, "B"),
            (thresholds.good, "C"),
            (thresholds.fair, "D"),
            (thresholds.poor, "E"),
        )
        for threshold, letter in cut_points:
            if total_score > threshold:
                return letter
        return "F"
