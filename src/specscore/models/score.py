"""スコアリング結果のデータモデル。"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["LOW", "MEDIUM", "HIGH"]

Grade = Literal["A", "B", "C", "D", "E", "F"]


class Issue(BaseModel):
    """ドキュメント内の位置を伴う個別の指摘事項。"""

    model_config = ConfigDict(frozen=True)

    location: str
    description: str
    severity: Severity
    suggestion: str


class CategoryScore(BaseModel):
    """単一カテゴリのスコアと指摘・長所。"""

    model_config = ConfigDict(frozen=True)

    category_name: str
    score: int = Field(ge=0)
    max_score: int
    issues: list[Issue] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)


class SpecScore(BaseModel):
    """ドキュメント全体のスコア。"""

    model_config = ConfigDict(frozen=True)

    total_score: int
    grade: Grade
    schema_score: CategoryScore
    description_score: CategoryScore
    paths_score: CategoryScore
    response_score: CategoryScore
    example_score: CategoryScore
    security_score: CategoryScore
    best_practices_score: CategoryScore

    @property
    def categories(self) -> list[CategoryScore]:
        return [
            self.schema_score,
            self.description_score,
            self.paths_score,
            self.response_score,
            self.example_score,
            self.security_score,
            self.best_practices_score,
        ]
