"""
Booster data checks.

Schema validation, index reconciliation and the Scryfall range audit.
"""

from boostercheck.services.external_audit import (
    EXCLUDED_FRAME_EFFECTS,
    EXCLUDED_PROMO_TYPES,
    AuditOutcome,
    AuditSummary,
    is_likely_collector_exclusive,
    partition_cards,
    run_audit,
    write_audit_results,
)
from boostercheck.services.index_reconciler import (
    check_booster_type_coverage,
    check_collector_superset,
    check_collector_supersets,
    check_index_files,
    load_index,
    reconcile_index,
)
from boostercheck.services.pool_membership import (
    is_in_any_pool,
    iter_pool_ranges,
    max_collector_number,
    unique_ranges,
)
from boostercheck.services.schema_validator import validate_document, validate_file
from boostercheck.services.scryfall_client import (
    RetryPolicy,
    ScryfallClient,
    ScryfallError,
    check_url,
    create_http_client,
)
from boostercheck.services.source_checks import check_scryfall_card_counts, check_source_urls

__all__ = [
    "EXCLUDED_FRAME_EFFECTS",
    "EXCLUDED_PROMO_TYPES",
    "AuditOutcome",
    "AuditSummary",
    "RetryPolicy",
    "ScryfallClient",
    "ScryfallError",
    "check_booster_type_coverage",
    "check_collector_superset",
    "check_collector_supersets",
    "check_index_files",
    "check_scryfall_card_counts",
    "check_source_urls",
    "check_url",
    "create_http_client",
    "is_in_any_pool",
    "is_likely_collector_exclusive",
    "iter_pool_ranges",
    "load_index",
    "max_collector_number",
    "partition_cards",
    "reconcile_index",
    "run_audit",
    "unique_ranges",
    "validate_document",
    "validate_file",
    "write_audit_results",
]
