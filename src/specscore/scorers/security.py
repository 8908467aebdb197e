"""セキュリティ定義のスコアリング。

セキュリティスキーム定義・オペレーション単位の要件・グローバル要件の
3つのチェックが共通の持ち点から減点する。
"""

from dataclasses import dataclass, field

from specscore.models.document import OpenAPIDocument
from specscore.models.score import CategoryScore
from specscore.scorers.base import CategoryScorer, ScoringContext, proportional_penalty
from specscore.traversal import (
    iter_global_security_schemes,
    iter_operation_security_schemes,
    iter_security_schemes,
    pointer,
)


@dataclass
class SecurityContext(ScoringContext):
    declared_schemes: list[str] = field(default_factory=list)
    used_schemes: set[str] = field(default_factory=set)


class SecurityScorer(CategoryScorer):
    category_name = "Security"

    @property
    def max_points(self) -> int:
        return self._config.weights.security

    def score_category(self, document: OpenAPIDocument) -> CategoryScore:
        rules = self._config.validation.security
        context = SecurityContext(points=self.max_points)

        if not document.paths:
            context.points = 0
            context.add_issue(
                pointer("paths"),
                "No paths defined, so security cannot be evaluated",
                "HIGH",
                "Define API paths and protect them with security requirements",
            )
            return self._finish(context)

        context.declared_schemes = [visit.name for visit in iter_security_schemes(document)]

        if rules.require_security_schemes:
            self._check_security_schemes(document, context)
        if rules.require_operation_level_security:
            self._check_operation_security(document, context)
        if rules.require_global_security:
            self._check_global_security(document, context)

        return self._finish(context)

    def _check_security_schemes(self, document: OpenAPIDocument, context: SecurityContext) -> None:
        rules = self._config.validation.security
        penalty = rules.penalty_for_weak_security_schemes

        if not context.declared_schemes:
            context.deduct(penalty)
            context.add_issue(
                pointer("components", "securitySchemes"),
                "No security schemes defined",
                "HIGH",
                "Define security schemes in components section (e.g., Bearer token, API key, OAuth2)",
            )
            return

        # apiKey と apikey を同一視する
        recommended = {t.lower() for t in rules.recommended_security_types}
        wrong = 0
        for visit in iter_security_schemes(document):
            scheme_type = visit.scheme.type
            if scheme_type is not None and scheme_type.lower() in recommended:
                continue
            wrong += 1
            context.add_issue(
                visit.location,
                (
                    f"Security scheme '{visit.name}' has type '{scheme_type or 'undefined'}', "
                    f"not one of the recommended types: {', '.join(rules.recommended_security_types)}"
                ),
                "MEDIUM",
                "Configure the security scheme with a recommended type",
            )

        context.deduct(proportional_penalty(penalty, wrong, len(context.declared_schemes)))
        if wrong == 0:
            context.add_strength("Security schemes are defined")

    def _check_operation_security(self, document: OpenAPIDocument, context: SecurityContext) -> None:
        total = 0
        wrong = 0

        for visit in iter_operation_security_schemes(document):
            total += 1
            if visit.scheme_name in context.declared_schemes:
                context.used_schemes.add(visit.scheme_name)
                continue
            wrong += 1
            context.add_issue(
                visit.location,
                f"Security scheme '{visit.scheme_name}' not defined in components",
                "HIGH",
                "Define security scheme in components section",
            )

        for scheme_name in context.declared_schemes:
            if scheme_name in context.used_schemes:
                continue
            context.add_issue(
                pointer("components", "securitySchemes", scheme_name),
                f"Security scheme '{scheme_name}' defined but not used in any operation",
                "LOW",
                "Consider removing unused security scheme or applying it to operations",
            )

        if total > 0:
            penalty = self._config.validation.security.penalty_for_weak_operation_security
            context.deduct(proportional_penalty(penalty, wrong, total))
            if wrong == 0:
                context.add_strength("All operations have valid security requirements")

    def _check_global_security(self, document: OpenAPIDocument, context: SecurityContext) -> None:
        penalty = self._config.validation.security.penalty_for_weak_global_security

        if not document.security:
            context.deduct(penalty)
            context.add_issue(
                pointer("security"),
                "No global security requirements defined",
                "HIGH",
                "Define global security requirements in the OpenAPI spec",
            )
            return

        total = 0
        wrong = 0
        for scheme_name in iter_global_security_schemes(document):
            total += 1
            if scheme_name in context.declared_schemes:
                continue
            wrong += 1
            context.add_issue(
                pointer("security", scheme_name),
                f"Global security requirement '{scheme_name}' not defined in components",
                "HIGH",
                "Define security scheme in components section",
            )

        if wrong == 0:
            context.add_strength("Global security requirements are defined")
        else:
            context.deduct(proportional_penalty(penalty, wrong, total))
