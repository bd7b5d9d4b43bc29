# Q-sort grid configuration and distribution engine
"""
Grid configuration and forced-distribution engine for Q-methodology studies.

Version: 1.2.0 - Symmetric correction for even grids, pandas reports

Changes (v1.2.0):
    - NEW: CorrectionMode.SYMMETRIC splits catalog corrections over the two
      middle columns of even grids (CorrectionMode.CENTER keeps the old behaviour)
    - NEW: catalog_frame / grid_frame / distribution_summary report tables
    - FIXED: generator rejects totals below two cells per column instead of
      emitting a grid that breaks its own edge rule

Previous (v1.1.0):
    - Label themes, flat distributions, mirrored cell editing, JSON schema
      validation of persisted grid configurations

Modules:
    - catalog: Read-only table of vetted grid configurations with citations
    - distribution: Catalog correction and bell/flat distribution generation
    - validator: Structural 0-100 scoring of any distribution
    - recommendation: Rule-based grid recommendation from study parameters
    - grid_builder: Labelled columns, mirrored edits, GridConfiguration
    - report: pandas tables for the catalog and individual grids
    - config: Environment-driven engine settings
    - cli: ``qsort-grid`` command line interface
"""

__version__ = "1.2.0"

from .errors import (
    GridEngineError,
    InvalidRangeError,
    InvalidTotalError,
    DegenerateCorrectionError,
)
from .models import (
    GridRange,
    GridColumn,
    StandardGridConfig,
    ValidationResult,
    StudyParameters,
    StudyType,
    Expertise,
    Complexity,
    TimeConstraint,
    ResearchExperience,
    GridRecommendation,
)
from .config import CorrectionMode, GridEngineConfig, get_config, set_config
from .distribution import (
    correct_distribution,
    generate_distribution,
    generate_flat_distribution,
)
from .validator import validate_distribution
from .catalog import (
    STANDARD_CONFIGS,
    get_config_by_id,
    get_raw_config,
    list_configs,
    get_catalog_summary,
)
from .recommendation import (
    recommend,
    get_ai_recommendation,
    get_configuration_rationale,
    alternative_options,
)
from .grid_builder import (
    LABEL_THEMES,
    GridConfiguration,
    build_grid_configuration,
    adjust_cells,
    apply_cell_adjustment,
    follows_bell_shape,
)
from .report import catalog_frame, grid_frame, distribution_summary

__all__ = [
    '__version__',
    # Errors
    'GridEngineError',
    'InvalidRangeError',
    'InvalidTotalError',
    'DegenerateCorrectionError',
    # Value objects
    'GridRange',
    'GridColumn',
    'StandardGridConfig',
    'ValidationResult',
    'StudyParameters',
    'StudyType',
    'Expertise',
    'Complexity',
    'TimeConstraint',
    'ResearchExperience',
    'GridRecommendation',
    # Config
    'CorrectionMode',
    'GridEngineConfig',
    'get_config',
    'set_config',
    # Distributions
    'correct_distribution',
    'generate_distribution',
    'generate_flat_distribution',
    'validate_distribution',
    # Catalog
    'STANDARD_CONFIGS',
    'get_config_by_id',
    'get_raw_config',
    'list_configs',
    'get_catalog_summary',
    # Recommendation
    'recommend',
    'get_ai_recommendation',
    'get_configuration_rationale',
    'alternative_options',
    # Grid builder
    'LABEL_THEMES',
    'GridConfiguration',
    'build_grid_configuration',
    'adjust_cells',
    'apply_cell_adjustment',
    'follows_bell_shape',
    # Reports
    'catalog_frame',
    'grid_frame',
    'distribution_summary',
]
