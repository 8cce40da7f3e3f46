# src/mdqa_kit/observability/names.py

"""Standard metric names for mdqa-kit observability.

Use these constants instead of hardcoded strings.

All duration metrics are in milliseconds.
"""

# ============================================================================
# Loading Metrics
# ============================================================================

# Counters
DOCUMENTS_DISCOVERED = "documents_discovered"
DOCUMENTS_LOADED = "documents_loaded"
DOCUMENTS_FAILED = "documents_failed"


# ============================================================================
# Segmentation Metrics
# ============================================================================

# Duration
SEGMENTATION_DURATION = "segmentation_duration"

# Counters
SECTIONS_CREATED = "sections_created"
STRUCTURAL_WARNINGS_TOTAL = "structural_warnings_total"


# ============================================================================
# Extraction Metrics
# ============================================================================

# Duration
EXTRACTION_DURATION = "extraction_duration"

# Counters (follow-ups included)
ENTRIES_EXTRACTED = "entries_extracted"
CODE_BLOCKS_EXTRACTED = "code_blocks_extracted"


# ============================================================================
# Index Metrics
# ============================================================================

# Duration
INDEX_BUILD_DURATION = "index_build_duration"
PIPELINE_DURATION = "pipeline_duration"

# Gauges
INDEX_ENTRIES = "index_entries"
INDEX_TERMS = "index_terms"
