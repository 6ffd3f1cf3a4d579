# ==============================================================================
# SCHEMAS PACKAGE
# ==============================================================================

from ticketdb.schemas.options import (
    OVERRIDE_PARSERS,
    Options,
    apply_override,
    options_to_json,
    options_to_yaml,
    parse_options_text,
)

__all__ = [
    "OVERRIDE_PARSERS",
    "Options",
    "apply_override",
    "options_to_json",
    "options_to_yaml",
    "parse_options_text",
]
