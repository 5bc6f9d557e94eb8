"""Whole-configuration validation gate.

Only the output of ``validate_page_config`` may be stored as a draft. All
violations are collected so a client can highlight every offending field at once.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from app.core.exceptions import InvalidConfigError
from app.schemas.common import Violation
from app.schemas.page_config import BACKGROUND_KINDS, SECTION_TYPES, PageConfig

logger = logging.getLogger(__name__)


def _violation_path(loc: tuple[int | str, ...]) -> str:
    """Dotted path for a pydantic error location, minus discriminator tag segments.

    Pydantic reports union members as ``('sections', 0, 'links', 'props', ...)``;
    the tag is not a field of the input document.
    """
    parts: list[str] = []
    for i, part in enumerate(loc):
        if isinstance(part, str) and i > 0:
            prev = loc[i - 1]
            if prev == "background" and part in BACKGROUND_KINDS:
                continue
            if (
                isinstance(prev, int)
                and i >= 2
                and loc[i - 2] == "sections"
                and part in SECTION_TYPES
            ):
                continue
        parts.append(str(part))
    return ".".join(parts)


def _duplicate_id_violations(sections: Any) -> list[Violation]:
    """One violation per repeated section id, naming both indices."""
    if not isinstance(sections, list):
        return []

    first_seen: dict[str, int] = {}
    violations: list[Violation] = []
    for index, section in enumerate(sections):
        if not isinstance(section, Mapping):
            continue
        section_id = section.get("id")
        if not isinstance(section_id, str):
            continue
        if section_id in first_seen:
            first = first_seen[section_id]
            violations.append(
                Violation(
                    path=f"sections.{index}.id",
                    reason=(
                        f"Duplicate section id '{section_id}' "
                        f"(also used by sections.{first})"
                    ),
                    code="duplicate_id",
                )
            )
        else:
            first_seen[section_id] = index
    return violations


def find_violations(candidate: Any) -> tuple[PageConfig | None, list[Violation]]:
    """Validate without raising. Returns (config, []) or (None, violations)."""
    if not isinstance(candidate, Mapping):
        return None, [
            Violation(path="", reason="Page configuration must be an object", code="type")
        ]

    violations: list[Violation] = []
    config: PageConfig | None = None
    try:
        config = PageConfig.model_validate(dict(candidate))
    except ValidationError as exc:
        violations.extend(
            Violation(path=_violation_path(err["loc"]), reason=err["msg"], code=err["type"])
            for err in exc.errors()
        )

    violations.extend(_duplicate_id_violations(candidate.get("sections")))

    if violations:
        return None, violations
    return config, []


def validate_page_config(candidate: Any) -> PageConfig:
    """Validate a candidate configuration, raising InvalidConfigError with all violations."""
    config, violations = find_violations(candidate)
    if config is None:
        logger.debug("Rejected page config with %d violation(s)", len(violations))
        raise InvalidConfigError(violations)
    return config
