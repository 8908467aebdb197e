"""パス・オペレーション設計のスコアリング。"""

import re
from collections import Counter

from specscore.models.document import OpenAPIDocument
from specscore.models.score import CategoryScore
from specscore.scorers.base import CategoryScorer, ScoringContext
from specscore.traversal import iter_path_items, pointer

# 一般的なRESTパスの命名規則（判定順）
_NAMING_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("kebab-case", re.compile(r"^[a-z]+(-[a-z]+)*$")),
    ("snake_case", re.compile(r"^[a-z]+(_[a-z]+)*$")),
    ("camelCase", re.compile(r"^[a-z]+([A-Z][a-z]*)*$")),
)

UNKNOWN_PATTERN = "unknown"

_ITEM_METHODS = frozenset({"put", "patch", "delete"})


def split_segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def is_parameter_segment(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")


def detect_naming_pattern(segment: str, allowed: list[str]) -> str:
    """パスセグメントの命名規則を判定する。許可リスト外の規則は unknown になる。"""
    for name, pattern in _NAMING_PATTERNS:
        if name in allowed and pattern.match(segment):
            return name
    return UNKNOWN_PATTERN


def dominant_pattern(counts: Counter[str]) -> str:
    """最多の命名規則を返す。同数の場合は先に出現した規則を優先する。"""
    recognized = {name: count for name, count in counts.items() if name != UNKNOWN_PATTERN}
    if not recognized:
        return UNKNOWN_PATTERN
    return max(recognized, key=recognized.__getitem__)


def paths_overlap(first: str, second: str) -> bool:
    """構造が同一でパラメータ名だけが異なる2つのパスを検出する。"""
    first_segments = split_segments(first)
    second_segments = split_segments(second)
    if len(first_segments) != len(second_segments):
        return False

    differs_by_parameter_name = False
    for left, right in zip(first_segments, second_segments, strict=True):
        left_param, right_param = is_parameter_segment(left), is_parameter_segment(right)
        if left_param and right_param:
            if left != right:
                differs_by_parameter_name = True
        elif left_param or right_param or left != right:
            return False
    return differs_by_parameter_name


class PathsScorer(CategoryScorer):
    """パス命名の一貫性・CRUD規約・重複パスを検査する。"""

    category_name = "Paths & Operations"

    @property
    def max_points(self) -> int:
        return self._config.weights.paths_and_operations

    def score_category(self, document: OpenAPIDocument) -> CategoryScore:
        rules = self._config.validation.path
        context = ScoringContext(points=self.max_points)

        if not document.paths:
            context.points = 0
            context.add_issue(
                pointer("paths"),
                "No paths defined in the API specification",
                "HIGH",
                "Define API paths and operations to create a functional API",
            )
            return self._finish(context)

        path_names = list(document.paths)

        if rules.check_naming_consistency:
            consistent, pattern = self._check_naming_consistency(path_names, context)
            if consistent:
                context.add_strength(f"Consistent path naming conventions ({pattern})")
            else:
                context.deduct(rules.penalty_for_naming_convention_mismatch)

        if rules.enforce_crud_operation_conventions:
            if self._check_crud_conventions(document, context):
                context.add_strength("Proper CRUD operations implemented")
            else:
                context.deduct(rules.penalty_for_missing_crud_operations)

        if rules.check_for_redundant_paths:
            if self._check_overlapping_paths(path_names, context):
                context.deduct(rules.penalty_for_redundant_paths)
            else:
                context.add_strength("No overlapping or redundant paths detected")

        return self._finish(context)

    def _check_naming_consistency(self, path_names: list[str], context: ScoringContext) -> tuple[bool, str]:
        allowed = self._config.validation.path.allowed_naming_conventions
        counts: Counter[str] = Counter()
        path_patterns: dict[str, list[str]] = {}

        for path in path_names:
            patterns = [
                detect_naming_pattern(segment, allowed)
                for segment in split_segments(path)
                if not segment.startswith("{")
            ]
            path_patterns[path] = patterns
            counts.update(patterns)

        dominant = dominant_pattern(counts)
        inconsistent = [
            path
            for path, patterns in path_patterns.items()
            if any(p not in (dominant, UNKNOWN_PATTERN) for p in patterns)
        ]

        for path in inconsistent:
            context.add_issue(
                pointer("paths", path),
                "Path uses inconsistent naming convention",
                "LOW",
                f"Use consistent naming convention across all paths (detected dominant pattern: {dominant})",
            )

        if inconsistent:
            context.add_issue(
                pointer("paths"),
                f"Inconsistent path naming: {len(inconsistent)} paths don't follow the dominant {dominant} pattern",
                "MEDIUM",
                f"Standardize all path segments to use {dominant} naming convention",
            )

        return not inconsistent, dominant

    @staticmethod
    def _check_crud_conventions(document: OpenAPIDocument, context: ScoringContext) -> bool:
        issue_count = len(context.issues)

        for path, item in iter_path_items(document):
            methods = set(item.operations())
            segments = split_segments(path)
            targets_item = bool(segments) and is_parameter_segment(segments[-1])

            if "post" in methods and targets_item:
                context.add_issue(
                    pointer("paths", path, "post"),
                    "POST operation found on a path ending with a parameter, "
                    "which may not be suitable for resource creation",
                    "LOW",
                    "Use POST on the collection path without a trailing parameter",
                )

            if methods & _ITEM_METHODS and not targets_item:
                context.add_issue(
                    pointer("paths", path),
                    "PUT, PATCH, or DELETE operation found on a path without a trailing parameter, "
                    "which may not be suitable for resource management",
                    "LOW",
                    "Use these methods on an item path ending with a parameter such as /resources/{id}",
                )

        return len(context.issues) == issue_count

    @staticmethod
    def _check_overlapping_paths(path_names: list[str], context: ScoringContext) -> bool:
        overlaps = 0
        for i, first in enumerate(path_names):
            for second in path_names[i + 1 :]:
                if not paths_overlap(first, second):
                    continue
                overlaps += 1
                context.add_issue(
                    pointer("paths", first),
                    f"Path potentially overlaps with {second}",
                    "MEDIUM",
                    "Review path structure to ensure no ambiguous routing",
                )

        if overlaps:
            context.add_issue(
                pointer("paths"),
                f"Found {overlaps} potential path overlaps",
                "MEDIUM",
                "Redesign overlapping paths to have clear, unambiguous routing",
            )
        return overlaps > 0
