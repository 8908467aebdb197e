"""カテゴリスコアラーの共通基盤。"""

import math
from dataclasses import dataclass, field

from loguru import logger

from specscore.models.document import OpenAPIDocument
from specscore.models.rules import ScoringConfig
from specscore.models.score import CategoryScore, Issue, Severity


@dataclass
class ScoringContext:
    """1回の score_category 呼び出しが専有する可変の集計値。

    チェックごとに更新され、最後に build() で不変の CategoryScore に変換される。
    """

    points: int
    issues: list[Issue] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)

    def add_issue(self, location: str, description: str, severity: Severity, suggestion: str) -> None:
        self.issues.append(
            Issue(location=location, description=description, severity=severity, suggestion=suggestion)
        )

    def add_strength(self, strength: str) -> None:
        self.strengths.append(strength)

    def deduct(self, penalty: int) -> None:
        self.points -= penalty

    def build(self, category_name: str, max_score: int) -> CategoryScore:
        return CategoryScore(
            category_name=category_name,
            score=max(0, min(self.points, max_score)),
            max_score=max_score,
            issues=list(self.issues),
            strengths=list(self.strengths),
        )


def ratio_points(max_points: int, numerator: int, denominator: int) -> int:
    """floor(max_points * numerator / denominator)。呼び出し側で denominator > 0 を保証する。"""
    return int(max_points * numerator / denominator)


def proportional_penalty(penalty: int, wrong: int, total: int) -> int:
    """ceil(penalty * wrong / total)。違反が1件でもあれば少なくとも1点を減じる。"""
    if total == 0:
        return 0
    return math.ceil(penalty * wrong / total)


class CategoryScorer:
    """カテゴリスコアラーの基底クラス。

    サブクラスは category_name と max_points を定義し、score_category を実装する。
    """

    category_name: str = ""

    def __init__(self, config: ScoringConfig) -> None:
        self._config = config

    @property
    def max_points(self) -> int:
        raise NotImplementedError

    def score_category(self, document: OpenAPIDocument) -> CategoryScore:
        raise NotImplementedError

    def _finish(self, context: ScoringContext) -> CategoryScore:
        score = context.build(self.category_name, self.max_points)
        logger.debug(
            "Scored {category}: {score}/{max_score} ({issues} issues)",
            category=self.category_name,
            score=score.score,
            max_score=score.max_score,
            issues=len(score.issues),
        )
        return score
