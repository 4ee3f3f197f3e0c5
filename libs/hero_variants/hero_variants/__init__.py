"""Hero Variants - Duplication et migration des blocs hero entre variantes."""
from .errors import HeroVariantError, UnknownVariantError, UnknownStrategyError, SchemaValidationError
from .models import VariantId, HeroBlock, VARIANT_MODELS
from .registry import (
    REGISTRY, SchemaRegistry, VariantSchema, FieldSpec, FieldDependency,
    get_schema, default_instance, all_variants, validate_schema, validate_instance,
)
from .duplication import DuplicateOptions, duplicate
from .strategies import MigrationStrategy, get_strategy, list_strategies, register_strategy
from .compatibility import CompatibilityVerdict, classify, rank_targets
from .migration import MigrationResult, MigrationReport, migrate, preview_migration, batch_migrate
from .config import configure_logging

__version__ = "0.1.0"
__all__ = [
    "HeroVariantError", "UnknownVariantError", "UnknownStrategyError", "SchemaValidationError",
    "VariantId", "HeroBlock", "VARIANT_MODELS",
    "REGISTRY", "SchemaRegistry", "VariantSchema", "FieldSpec", "FieldDependency",
    "get_schema", "default_instance", "all_variants", "validate_schema", "validate_instance",
    "DuplicateOptions", "duplicate",
    "MigrationStrategy", "get_strategy", "list_strategies", "register_strategy",
    "CompatibilityVerdict", "classify", "rank_targets",
    "MigrationResult", "MigrationReport", "migrate", "preview_migration", "batch_migrate",
    "configure_logging",
]
