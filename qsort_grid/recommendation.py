"""
Rule-based grid recommendation.
===============================

Maps qualitative study parameters to a catalog entry. Selection is an
ordered list of rules, first match wins:

1. Expert participants + complex topic      -> widest grid          (95)
2. General public + short session           -> simplest grid        (90)
3. Exploratory study + more than 30 people  -> extended grid        (88)
4. Confirmatory study + moderate complexity -> optimal standard     (92)
5. Anything else                            -> optimal standard     (85)

After selection two downgrades may apply, each lowering confidence:
a short session on a grid above the standard item count steps down through
the catalog until the grid fits (-5, taken once); a first-time researcher
on a grid above the standard item count is moved to the standard entry (-3).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Mapping, Union

from .catalog import (
    STANDARD_CONFIGS,
    corrected,
    get_next_smaller_config,
    get_simplest_config,
    get_standard_config,
    get_widest_config,
    list_configs,
)
from .config import get_config
from .distribution import generate_distribution
from .models import (
    Complexity,
    Expertise,
    GridRecommendation,
    ResearchExperience,
    StandardGridConfig,
    StudyParameters,
    StudyType,
    TimeConstraint,
)
from .validator import validate_distribution

logger = logging.getLogger(__name__)

SHORT_SESSION_PENALTY = 5
FIRST_STUDY_PENALTY = 3
ALTERNATIVE_CONFIDENCE_GAP = 10
MAX_ALTERNATIVES = 2
LARGE_STUDY_PARTICIPANTS = 30
EXTENDED_CONFIG_ID = "extended-44"


@dataclass(frozen=True)
class SelectionRule:
    name: str
    applies: Callable[[StudyParameters], bool]
    pick: Callable[[], StandardGridConfig]
    confidence: int
    reason: str


def _extended() -> StandardGridConfig:
    return corrected(STANDARD_CONFIGS[EXTENDED_CONFIG_ID])


SELECTION_RULES: List[SelectionRule] = [
    SelectionRule(
        name="expert_complex",
        applies=lambda p: p.participant_expertise == Expertise.EXPERT and p.complexity_level == Complexity.COMPLEX,
        pick=get_widest_config,
        confidence=95,
        reason="Expert participants sorting a complex topic can use the widest scale for fine-grained distinctions",
    ),
    SelectionRule(
        name="general_short",
        applies=lambda p: p.participant_expertise == Expertise.GENERAL and p.time_constraint == TimeConstraint.SHORT,
        pick=get_simplest_config,
        confidence=90,
        reason="General-public participants with limited time do best on the simplest grid",
    ),
    SelectionRule(
        name="exploratory_large",
        applies=lambda p: p.study_type == StudyType.EXPLORATORY and p.participant_count > LARGE_STUDY_PARTICIPANTS,
        pick=_extended,
        confidence=88,
        reason="Exploratory studies with a large participant pool benefit from an extended statement set",
    ),
    SelectionRule(
        name="confirmatory_moderate",
        applies=lambda p: p.study_type == StudyType.CONFIRMATORY and p.complexity_level == Complexity.MODERATE,
        pick=get_standard_config,
        confidence=92,
        reason="Confirmatory studies of moderate complexity are best served by the most validated standard grid",
    ),
    SelectionRule(
        name="default",
        applies=lambda p: True,
        pick=get_standard_config,
        confidence=85,
        reason="The optimal standard grid is a well-validated default for most Q studies",
    ),
]


def _coerce_params(params: Union[StudyParameters, Mapping[str, Any]]) -> StudyParameters:
    if isinstance(params, StudyParameters):
        return params
    return StudyParameters.from_dict(params)


def _is_compatible(config: StandardGridConfig, params: StudyParameters, standard_items: int) -> bool:
    """Hard constraints an alternative must respect."""
    if params.time_constraint == TimeConstraint.SHORT and config.total_items > standard_items:
        return False
    if params.participant_expertise == Expertise.GENERAL and config.expertise_level == "expert":
        return False
    if params.previous_experience == ResearchExperience.NONE and config.total_items > standard_items:
        return False
    return True


def _ensure_valid(config: StandardGridConfig, reasoning: List[str]) -> StandardGridConfig:
    """Swap in a generated shape if a corrected catalog distribution fails validation."""
    result = validate_distribution(config.distribution, config.total_items)
    if result.is_valid:
        return config
    logger.warning("Catalog entry %s failed validation (%s); regenerating", config.id, "; ".join(result.issues))
    generated = generate_distribution(config.range, config.total_items)
    reasoning.append("Distribution regenerated as a symmetric bell curve to meet structural checks")
    return replace(config, distribution=tuple(generated))


def recommend(params: Union[StudyParameters, Mapping[str, Any]]) -> GridRecommendation:
    """Recommend a grid configuration for the given study parameters."""
    p = _coerce_params(params)
    standard_items = get_config().standard_item_count

    rule = next(r for r in SELECTION_RULES if r.applies(p))
    selected = rule.pick()
    confidence = rule.confidence
    reasoning = [rule.reason]
    logger.info("Recommendation rule %s selected %s", rule.name, selected.id)

    if p.time_constraint == TimeConstraint.SHORT and selected.total_items > standard_items:
        original_items = selected.total_items
        while selected.total_items > standard_items:
            smaller = get_next_smaller_config(selected)
            if smaller is None:
                break
            selected = smaller
        if selected.total_items < original_items:
            reasoning.append(
                f"Short sessions: reduced from {original_items} to {selected.total_items} statements"
            )
            confidence -= SHORT_SESSION_PENALTY

    if p.previous_experience == ResearchExperience.NONE and selected.total_items > standard_items:
        standard = get_standard_config()
        reasoning.append(
            f"First Q study: the {standard.total_items}-statement standard grid is easier to administer and analyse"
        )
        selected = standard
        confidence -= FIRST_STUDY_PENALTY

    selected = _ensure_valid(selected, reasoning)

    alternatives = [
        c for c in list_configs()
        if c.id != selected.id and _is_compatible(c, p, standard_items)
    ][:MAX_ALTERNATIVES]

    reasoning.append(selected.citation)
    return GridRecommendation(
        config=selected,
        confidence=max(0, min(100, confidence)),
        reasoning=reasoning,
        alternatives=alternatives,
    )


def get_ai_recommendation(params: Union[StudyParameters, Mapping[str, Any]]) -> GridRecommendation:
    """Entry point used by the study wizard; same as ``recommend``."""
    return recommend(params)


def get_configuration_rationale(config: StandardGridConfig) -> List[str]:
    """Human-readable explanation of a configuration, derived only from its fields."""
    rationale: List[str] = []
    cols = config.columns
    if cols <= 7:
        scale_note = "keeps placement decisions simple for participants"
    elif cols <= 9:
        scale_note = "balances nuance with a manageable sorting effort"
    else:
        scale_note = "allows fine-grained discrimination between statements"
    rationale.append(f"{cols}-point scale ({config.range.min:+d} to {config.range.max:+d}) {scale_note}")

    if config.total_items <= 30:
        items_note = "a short sorting session"
    elif config.total_items <= 40:
        items_note = "a standard study length"
    else:
        items_note = "an extended sorting session"
    line = f"{config.total_items} statements make for {items_note}"
    if config.time_estimate:
        line += f" (about {config.time_estimate})"
    rationale.append(line)

    dist = list(config.distribution)
    if dist:
        peak = max(dist)
        peak_value = config.range.min + dist.index(peak)
        rationale.append(
            f"Peak of {peak} cells at position {peak_value:+d}, tapering to "
            f"{dist[0]} and {dist[-1]} cells at the extremes"
        )
    if config.citation:
        rationale.append(f"Based on {config.citation}")
    return rationale


def alternative_options(recommendation: GridRecommendation) -> List[Dict[str, Any]]:
    """Alternatives with their own rationale and a confidence below the main pick."""
    confidence = max(0, recommendation.confidence - ALTERNATIVE_CONFIDENCE_GAP)
    return [
        {
            "config": alt,
            "confidence": confidence,
            "reasoning": get_configuration_rationale(alt),
            "citation": alt.citation,
        }
        for alt in recommendation.alternatives
    ]
