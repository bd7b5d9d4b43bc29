"""
Value objects shared by the grid engine.
=========================================

Every object here is built fresh per call and owned by the caller; the only
long-lived state in the package is the read-only catalog in ``catalog.py``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import InvalidRangeError

# One cell count per column, left (most negative) to right (most positive).
Distribution = List[int]

MIN_EDGE_CELLS = 2


# =============================================================================
# SCALE GEOMETRY
# =============================================================================

@dataclass(frozen=True)
class GridRange:
    """Inclusive bipolar scale interval, e.g. -4..+4."""
    min: int
    max: int

    def __post_init__(self) -> None:
        for bound in (self.min, self.max):
            if isinstance(bound, bool) or not isinstance(bound, int):
                raise InvalidRangeError(f"Range bounds must be integers, got {self.min!r}..{self.max!r}")
        if self.min >= self.max:
            raise InvalidRangeError(f"Range min ({self.min}) must be below max ({self.max})")

    @property
    def columns(self) -> int:
        return self.max - self.min + 1

    def values(self) -> List[int]:
        return list(range(self.min, self.max + 1))

    @classmethod
    def coerce(cls, value: Any) -> "GridRange":
        """Accept a GridRange, a (min, max) pair or a {"min", "max"} mapping."""
        if isinstance(value, GridRange):
            return value
        if isinstance(value, Mapping):
            return cls(value["min"], value["max"])
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(value[0], value[1])
        raise InvalidRangeError(f"Cannot interpret {value!r} as a grid range")

    def to_dict(self) -> Dict[str, int]:
        return {"min": self.min, "max": self.max}


@dataclass
class GridColumn:
    """One scale position and the number of item slots it holds."""
    value: int
    label: str
    cells: int
    custom_label: Optional[str] = None

    def display_label(self) -> str:
        return self.custom_label or self.label

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"value": self.value, "label": self.label, "cells": self.cells}
        if self.custom_label:
            d["customLabel"] = self.custom_label
        return d


# =============================================================================
# CATALOG ENTRY
# =============================================================================

@dataclass(frozen=True)
class StandardGridConfig:
    """A vetted reference configuration.

    ``distribution`` is stored exactly as authored and may not sum to
    ``total_items``; read it through ``correct_distribution`` (or
    ``catalog.get_config_by_id``, which does that for you).
    """
    id: str
    name: str
    range: GridRange
    total_items: int
    distribution: Tuple[int, ...]
    description: str = ""
    citation: str = ""                      # APA-style reference shown to researchers
    recommended_for: Tuple[str, ...] = ()
    expertise_level: str = "intermediate"   # beginner / intermediate / advanced / expert
    time_estimate: str = ""

    def __post_init__(self) -> None:
        if len(self.distribution) != self.range.columns:
            raise ValueError(
                f"Config {self.id!r}: distribution has {len(self.distribution)} values "
                f"but range {self.range.min}..{self.range.max} has {self.range.columns} columns"
            )

    @property
    def columns(self) -> int:
        return self.range.columns

    @property
    def peak_cells(self) -> int:
        return max(self.distribution)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "range": self.range.to_dict(),
            "totalItems": self.total_items,
            "distribution": list(self.distribution),
            "description": self.description,
            "citation": self.citation,
            "recommendedFor": list(self.recommended_for),
            "expertiseLevel": self.expertise_level,
            "timeEstimate": self.time_estimate,
        }


# =============================================================================
# VALIDATION
# =============================================================================

@dataclass
class ValidationResult:
    is_valid: bool
    issues: List[str] = field(default_factory=list)
    score: int = 100

    @property
    def quality(self) -> str:
        """Traffic-light band used by the grid builder score bar."""
        if self.score >= 80:
            return "optimal"
        if self.score >= 60:
            return "acceptable"
        return "poor"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "issues": list(self.issues),
            "score": self.score,
            "quality": self.quality,
        }


# =============================================================================
# RECOMMENDATION INPUTS / OUTPUTS
# =============================================================================

class StudyType(str, Enum):
    EXPLORATORY = "exploratory"
    CONFIRMATORY = "confirmatory"
    MIXED = "mixed"


class Expertise(str, Enum):
    """Participants' familiarity with the topic."""
    EXPERT = "expert"
    GENERAL = "general"
    MIXED = "mixed"


class Complexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class TimeConstraint(str, Enum):
    SHORT = "short"     # 10-15 minutes
    MEDIUM = "medium"   # 15-30 minutes
    LONG = "long"       # 30+ minutes


class ResearchExperience(str, Enum):
    """The researcher's own prior Q-methodology experience."""
    NONE = "none"
    SOME = "some"
    EXTENSIVE = "extensive"


# camelCase keys used by the study wizard -> dataclass field names
_PARAM_ALIASES = {
    "studyType": "study_type",
    "participantCount": "participant_count",
    "participantExpertise": "participant_expertise",
    "complexityLevel": "complexity_level",
    "timeConstraint": "time_constraint",
    "previousExperience": "previous_experience",
}


@dataclass
class StudyParameters:
    """Qualitative description of a planned study."""
    study_type: StudyType = StudyType.EXPLORATORY
    participant_count: int = 30
    participant_expertise: Expertise = Expertise.GENERAL
    complexity_level: Complexity = Complexity.MODERATE
    time_constraint: TimeConstraint = TimeConstraint.MEDIUM
    previous_experience: ResearchExperience = ResearchExperience.NONE

    def __post_init__(self) -> None:
        # Plain strings are accepted; unknown values raise ValueError
        self.study_type = StudyType(self.study_type)
        self.participant_expertise = Expertise(self.participant_expertise)
        self.complexity_level = Complexity(self.complexity_level)
        self.time_constraint = TimeConstraint(self.time_constraint)
        self.previous_experience = ResearchExperience(self.previous_experience)
        if isinstance(self.participant_count, bool) or not isinstance(self.participant_count, int):
            raise ValueError(f"participant_count must be an integer, got {self.participant_count!r}")
        if self.participant_count < 0:
            raise ValueError("participant_count must not be negative")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StudyParameters":
        """Build from wizard answers; camelCase or snake_case keys, None means default."""
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _PARAM_ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise ValueError(f"Unknown study parameter: {key}")
            if value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "studyType": self.study_type.value,
            "participantCount": self.participant_count,
            "participantExpertise": self.participant_expertise.value,
            "complexityLevel": self.complexity_level.value,
            "timeConstraint": self.time_constraint.value,
            "previousExperience": self.previous_experience.value,
        }


@dataclass
class GridRecommendation:
    config: StandardGridConfig
    confidence: int
    reasoning: List[str] = field(default_factory=list)
    alternatives: List[StandardGridConfig] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "confidence": self.confidence,
            "reasoning": list(self.reasoning),
            "alternatives": [alt.to_dict() for alt in self.alternatives],
        }
