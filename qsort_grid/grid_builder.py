"""
Grid builder helpers: labelled columns, symmetric cell edits and the
serialisable grid configuration handed to the study persistence layer.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from jsonschema import validate as js_validate

from .config import get_config
from .distribution import generate_distribution, generate_flat_distribution
from .errors import InvalidTotalError
from .models import GridColumn, GridRange, ValidationResult
from .validator import validate_distribution

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent / "schema" / "grid_configuration_schema.json"

DEFAULT_INSTRUCTIONS = "Please sort the items according to your level of agreement."
DISTRIBUTION_KINDS = ("bell", "flat", "custom")

# Pre-defined label themes for Q-sort columns, keyed by scale value
LABEL_THEMES: Dict[str, Dict[str, Any]] = {
    "agreement": {
        "name": "Agreement Scale",
        "labels": {
            -6: "Strongly Disagree", -5: "Disagree", -4: "Moderately Disagree",
            -3: "Somewhat Disagree", -2: "Slightly Disagree", -1: "Tend to Disagree",
            0: "Neutral",
            1: "Tend to Agree", 2: "Slightly Agree", 3: "Somewhat Agree",
            4: "Moderately Agree", 5: "Agree", 6: "Strongly Agree",
        },
    },
    "importance": {
        "name": "Importance Scale",
        "labels": {
            -6: "Extremely Unimportant", -5: "Very Unimportant", -4: "Quite Unimportant",
            -3: "Somewhat Unimportant", -2: "Slightly Unimportant", -1: "Of Little Importance",
            0: "Neutral",
            1: "Of Some Importance", 2: "Slightly Important", 3: "Somewhat Important",
            4: "Quite Important", 5: "Very Important", 6: "Extremely Important",
        },
    },
    "frequency": {
        "name": "Frequency Scale",
        "labels": {
            -6: "Never", -5: "Very Rarely", -4: "Rarely",
            -3: "Infrequently", -2: "Occasionally", -1: "Sometimes",
            0: "Neutral",
            1: "Fairly Often", 2: "Often", 3: "Frequently",
            4: "Very Frequently", 5: "Almost Always", 6: "Always",
        },
    },
    "satisfaction": {
        "name": "Satisfaction Scale",
        "labels": {
            -6: "Extremely Dissatisfied", -5: "Very Dissatisfied", -4: "Quite Dissatisfied",
            -3: "Somewhat Dissatisfied", -2: "Slightly Dissatisfied", -1: "A Little Dissatisfied",
            0: "Neutral",
            1: "A Little Satisfied", 2: "Slightly Satisfied", 3: "Somewhat Satisfied",
            4: "Quite Satisfied", 5: "Very Satisfied", 6: "Extremely Satisfied",
        },
    },
    "likelihood": {
        "name": "Likelihood Scale",
        "labels": {
            -6: "Extremely Unlikely", -5: "Very Unlikely", -4: "Quite Unlikely",
            -3: "Somewhat Unlikely", -2: "Slightly Unlikely", -1: "Probably Not",
            0: "Uncertain",
            1: "Possibly", 2: "Slightly Likely", 3: "Somewhat Likely",
            4: "Quite Likely", 5: "Very Likely", 6: "Extremely Likely",
        },
    },
    "preference": {
        "name": "Preference Scale",
        "labels": {
            -6: "Strongly Dislike", -5: "Dislike", -4: "Moderately Dislike",
            -3: "Somewhat Dislike", -2: "Slightly Dislike", -1: "Tend to Dislike",
            0: "No Preference",
            1: "Tend to Like", 2: "Slightly Like", 3: "Somewhat Like",
            4: "Moderately Like", 5: "Like", 6: "Strongly Like",
        },
    },
    "characteristic": {
        "name": "Characteristic Scale",
        "labels": {
            -6: "Extremely Uncharacteristic", -5: "Very Uncharacteristic", -4: "Quite Uncharacteristic",
            -3: "Somewhat Uncharacteristic", -2: "Slightly Uncharacteristic", -1: "A Little Uncharacteristic",
            0: "Neutral",
            1: "A Little Characteristic", 2: "Slightly Characteristic", 3: "Somewhat Characteristic",
            4: "Quite Characteristic", 5: "Very Characteristic", 6: "Extremely Characteristic",
        },
    },
    "custom": {"name": "Custom Labels", "labels": {}},
}


def label_for(value: int, theme: str) -> str:
    """Theme label for a scale value, with a generic fallback outside the theme."""
    if theme not in LABEL_THEMES:
        raise ValueError(f"Unknown label theme: {theme!r} (choose from {sorted(LABEL_THEMES)})")
    label = LABEL_THEMES[theme]["labels"].get(value)
    if label:
        return label
    return "Neutral" if value == 0 else f"Position {value}"


def build_columns(
    grid_range: Any,
    distribution: Sequence[int],
    theme: Optional[str] = None,
    custom_labels: Optional[Mapping[int, str]] = None,
) -> List[GridColumn]:
    """Pair each scale value with its label and cell count."""
    rng = GridRange.coerce(grid_range)
    if len(distribution) != rng.columns:
        raise ValueError(f"Distribution has {len(distribution)} values for {rng.columns} columns")
    theme = theme or get_config().default_label_theme
    custom_labels = custom_labels or {}
    return [
        GridColumn(
            value=value,
            label=label_for(value, theme),
            cells=int(cells),
            custom_label=custom_labels.get(value) or None,
        )
        for value, cells in zip(rng.values(), distribution)
    ]


def follows_bell_shape(distribution: Sequence[int], tolerance: float = 0.2, symmetric: bool = True) -> bool:
    """Loose bell check used after manual edits.

    Center must beat the edge average; moving outwards a column may exceed
    its inner neighbour by at most ``tolerance``; mirrored columns may differ
    by at most ``tolerance`` of their mean.
    """
    dist = list(distribution)
    if not dist:
        return True
    n = len(dist)
    center = n // 2
    if dist[center] <= (dist[0] + dist[-1]) / 2:
        return False
    for i in range(center):
        if dist[i] > dist[i + 1] * (1 + tolerance):
            return False
    for i in range(n - 1, center, -1):
        if dist[i] > dist[i - 1] * (1 + tolerance):
            return False
    if symmetric:
        for i in range(n // 2):
            left, right = dist[i], dist[n - 1 - i]
            avg = (left + right) / 2
            if avg > 0 and abs(left - right) / avg > tolerance:
                return False
    return True


def adjust_cells(
    columns: Sequence[GridColumn],
    index: int,
    delta: int,
    max_cells: Optional[int] = None,
) -> List[GridColumn]:
    """Change one column and its mirror by ``delta`` cells.

    Returns new column objects. An edit that would take a column below zero
    or the grid above ``max_cells`` is refused and the columns come back
    unchanged.
    """
    if not 0 <= index < len(columns):
        raise IndexError(f"Column index {index} out of range for {len(columns)} columns")
    if max_cells is None:
        max_cells = get_config().max_cells

    updated = [replace(c) for c in columns]
    mirror = len(updated) - 1 - index
    targets = [index] if mirror == index else [index, mirror]

    new_total = sum(c.cells for c in updated) + delta * len(targets)
    if delta > 0 and new_total > max_cells:
        logger.debug("Cell edit refused: %s cells would exceed the %s-cell limit", new_total, max_cells)
        return updated
    if any(updated[i].cells + delta < 0 for i in targets):
        logger.debug("Cell edit refused: column %s cannot drop below zero", index)
        return updated

    for i in targets:
        updated[i].cells += delta
    return updated


@dataclass
class GridConfiguration:
    """A labelled grid as handed to the grid editor and the study record."""
    range: GridRange
    columns: List[GridColumn]
    kind: str = "bell"
    instructions: str = DEFAULT_INSTRUCTIONS
    label_theme: str = "agreement"
    symmetry: bool = True

    def __post_init__(self) -> None:
        if self.kind not in DISTRIBUTION_KINDS:
            raise ValueError(f"Unknown distribution kind: {self.kind!r}")
        if len(self.columns) != self.range.columns:
            raise ValueError(f"Grid {self.range.min}..{self.range.max} needs {self.range.columns} columns, got {len(self.columns)}")
        values = [c.value for c in self.columns]
        if values != self.range.values():
            raise ValueError(f"Column values {values} do not match range {self.range.min}..{self.range.max}")

    @property
    def distribution(self) -> List[int]:
        return [c.cells for c in self.columns]

    @property
    def total_cells(self) -> int:
        return sum(c.cells for c in self.columns)

    def validate(self, total_items: Optional[int] = None) -> ValidationResult:
        """Score the grid; ``total_items`` defaults to the grid's own cell count."""
        return validate_distribution(self.distribution, self.total_cells if total_items is None else total_items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rangeMin": self.range.min,
            "rangeMax": self.range.max,
            "columns": [c.to_dict() for c in self.columns],
            "totalCells": self.total_cells,
            "distribution": self.kind,
            "instructions": self.instructions,
            "labelTheme": self.label_theme,
            "symmetry": self.symmetry,
            "distributionScore": self.validate().score,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GridConfiguration":
        """Rebuild from the persisted JSON shape.

        Raises jsonschema.ValidationError on documents that break the schema and
        ValueError when the column values do not cover the range in order.
        """
        schema = json.loads(_SCHEMA_PATH.read_text(encoding="utf-8"))
        js_validate(instance=dict(data), schema=schema)
        columns = [
            GridColumn(
                value=c["value"],
                label=c.get("label", ""),
                cells=c["cells"],
                custom_label=c.get("customLabel"),
            )
            for c in data["columns"]
        ]
        return cls(
            range=GridRange(data["rangeMin"], data["rangeMax"]),
            columns=columns,
            kind=data.get("distribution", "custom"),
            instructions=data.get("instructions", DEFAULT_INSTRUCTIONS),
            label_theme=data.get("labelTheme", "agreement"),
            symmetry=data.get("symmetry", True),
        )


def build_grid_configuration(
    grid_range: Any,
    total_items: int,
    kind: str = "bell",
    theme: Optional[str] = None,
    custom_labels: Optional[Mapping[int, str]] = None,
    instructions: str = DEFAULT_INSTRUCTIONS,
) -> GridConfiguration:
    """Generate a labelled bell or flat grid for ``total_items`` statements."""
    rng = GridRange.coerce(grid_range)
    max_cells = get_config().max_cells
    if total_items > max_cells:
        raise InvalidTotalError(f"{total_items} items exceed the {max_cells}-cell grid limit")
    if kind == "bell":
        dist = generate_distribution(rng, total_items)
    elif kind == "flat":
        dist = generate_flat_distribution(rng, total_items)
    else:
        raise ValueError(f"Can only generate 'bell' or 'flat' grids, not {kind!r}")
    theme = theme or get_config().default_label_theme
    return GridConfiguration(
        range=rng,
        columns=build_columns(rng, dist, theme=theme, custom_labels=custom_labels),
        kind=kind,
        instructions=instructions,
        label_theme=theme,
        symmetry=True,
    )


def apply_cell_adjustment(grid: GridConfiguration, index: int, delta: int) -> GridConfiguration:
    """Apply a mirrored cell edit; an accepted edit turns the grid into a 'custom' one."""
    columns = adjust_cells(grid.columns, index, delta)
    if [c.cells for c in columns] == grid.distribution:
        return replace(grid, columns=columns)
    if not follows_bell_shape([c.cells for c in columns], symmetric=grid.symmetry):
        logger.info("Grid does not follow a bell shape after editing column %+d", grid.columns[index].value)
    return replace(grid, columns=columns, kind="custom")
