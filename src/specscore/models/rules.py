"""スコアリングルール（重み・閾値・検証ルール）のデータモデル。"""

from pydantic import BaseModel, Field

_USER_AGENT = "specscore/0.1.0"


class CategoryWeights(BaseModel):
    """カテゴリごとの配点。合計100を想定するが強制はしない。"""

    schema_and_types: int = 20
    descriptions_and_documentation: int = 20
    paths_and_operations: int = 15
    response_codes: int = 15
    examples_and_samples: int = 10
    security: int = 10
    best_practices: int = 10

    @property
    def total_weight(self) -> int:
        return (
            self.schema_and_types
            + self.descriptions_and_documentation
            + self.paths_and_operations
            + self.response_codes
            + self.examples_and_samples
            + self.security
            + self.best_practices
        )


class QualityThresholds(BaseModel):
    """グレード判定の閾値。上から順に excellent > very_good > good > fair > poor。"""

    excellent: int = 90
    very_good: int = 80
    good: int = 70
    fair: int = 60
    poor: int = 50
    category_minimum_percentage: float = 0.5


class SchemaValidation(BaseModel):
    require_schema_components: bool = True
    check_media_type_schemas: bool = True
    allow_generic_objects: bool = False
    required_data_types: list[str] = Field(
        default_factory=lambda: ["string", "number", "integer", "boolean", "array", "object"]
    )
    penalty_for_missing_schema: int = 5


class DescriptionValidation(BaseModel):
    minimum_description_length: int = 10
    require_info_description: bool = True
    require_operation_descriptions: bool = True
    require_parameter_descriptions: bool = True
    require_request_body_descriptions: bool = True
    require_response_descriptions: bool = True
    require_schema_descriptions: bool = True

    @property
    def any_enabled(self) -> bool:
        return (
            self.require_info_description
            or self.require_operation_descriptions
            or self.require_parameter_descriptions
            or self.require_request_body_descriptions
            or self.require_response_descriptions
            or self.require_schema_descriptions
        )


class PathValidation(BaseModel):
    allowed_naming_conventions: list[str] = Field(
        default_factory=lambda: ["kebab-case", "snake_case", "camelCase"]
    )
    check_naming_consistency: bool = True
    penalty_for_naming_convention_mismatch: int = 5
    enforce_crud_operation_conventions: bool = True
    penalty_for_missing_crud_operations: int = 5
    check_for_redundant_paths: bool = True
    penalty_for_redundant_paths: int = 5


class ResponseValidation(BaseModel):
    require_success_responses: bool = True
    require_error_responses: bool = True
    required_error_codes: list[str] = Field(default_factory=lambda: ["400", "500"])
    require_default_response: bool = False


class ExampleValidation(BaseModel):
    require_request_examples: bool = True
    require_response_examples: bool = True
    minimum_example_coverage: float = 0.5


class SecurityValidation(BaseModel):
    require_security_schemes: bool = True
    require_operation_level_security: bool = True
    require_global_security: bool = True
    recommended_security_types: list[str] = Field(default_factory=lambda: ["oauth2", "apiKey", "http"])
    penalty_for_weak_security_schemes: int = 4
    penalty_for_weak_operation_security: int = 3
    penalty_for_weak_global_security: int = 3


class BestPracticeValidation(BaseModel):
    require_versioning: bool = True
    require_servers_array: bool = True
    require_tags: bool = True
    require_component_reuse: bool = True
    minimum_reusable_components: int = 2
    require_operation_ids: bool = True
    require_contact_info: bool = False
    require_license_info: bool = False


class ValidationRules(BaseModel):
    """カテゴリ別の検証ルール一式。"""

    schema_: SchemaValidation = Field(default_factory=SchemaValidation, alias="schema")
    description: DescriptionValidation = Field(default_factory=DescriptionValidation)
    path: PathValidation = Field(default_factory=PathValidation)
    response: ResponseValidation = Field(default_factory=ResponseValidation)
    example: ExampleValidation = Field(default_factory=ExampleValidation)
    security: SecurityValidation = Field(default_factory=SecurityValidation)
    best_practice: BestPracticeValidation = Field(default_factory=BestPracticeValidation)

    model_config = {"populate_by_name": True}


class LoaderSettings(BaseModel):
    """リモート仕様書取得時のHTTP設定。"""

    connection_timeout_ms: int = 10000
    read_timeout_ms: int = 30000
    follow_redirects: bool = True
    max_redirects: int = 5
    default_headers: dict[str, str] = Field(
        default_factory=lambda: {
            "User-Agent": _USER_AGENT,
            "Accept": "application/json,application/yaml,text/yaml",
        }
    )


class ScoringConfig(BaseModel):
    """スコアリング全体の設定。YAMLのルールファイルから読み込み可能。"""

    weights: CategoryWeights = Field(default_factory=CategoryWeights)
    thresholds: QualityThresholds = Field(default_factory=QualityThresholds)
    validation: ValidationRules = Field(default_factory=ValidationRules)
    parser: LoaderSettings = Field(default_factory=LoaderSettings)
