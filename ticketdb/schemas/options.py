# ==============================================================================
# OPTIONS SCHEMA
# ==============================================================================
# Command-line options record, override file loading and dumps
# ==============================================================================

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field

from ticketdb.core.exceptions import OptionsOverrideError

logger = logging.getLogger(__name__)


class Options(BaseModel):
    """
    Effective options for one run.

    Built from the command line, optionally replaced wholesale by the
    contents of an override file, then never changed.

    Attributes:
        target_host: Target hostname to do things on
        db: Database connection string (``sqlite://`` or ``postgres://``)
        options_override: Path of a JSON/YAML file replacing these options
        verbose: Verbosity level, one per ``-v``
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    target_host: str = Field(
        default="localhost",
        description="Target hostname to do things on",
    )
    db: str = Field(
        ...,
        description="Database connection string",
    )
    options_override: Optional[str] = Field(
        default=None,
        description="Override options from this yaml/json file",
    )
    verbose: int = Field(
        default=0,
        ge=0,
        description="A level of verbosity, can be used multiple times",
    )


# ==============================================================================
# SERIALIZATION
# ==============================================================================

def options_to_json(options: Options) -> str:
    """Pretty JSON rendering of ``options``."""
    return options.model_dump_json(indent=2)


def options_to_yaml(options: Options) -> str:
    """YAML rendering of ``options``, fields in declaration order."""
    return yaml.safe_dump(
        options.model_dump(),
        sort_keys=False,
        default_flow_style=False,
    )


# ==============================================================================
# OVERRIDE PIPELINE
# ==============================================================================

OptionsParser = Callable[[str], Options]


def parse_json(data: str) -> Options:
    return Options.model_validate_json(data)


def parse_yaml(data: str) -> Options:
    loaded = yaml.safe_load(data)
    if not isinstance(loaded, dict):
        raise ValueError(f"expected a mapping, got {type(loaded).__name__}")
    return Options.model_validate(loaded)


# Tried in order; the first parser that yields valid Options wins
OVERRIDE_PARSERS: Tuple[Tuple[str, OptionsParser], ...] = (
    ("json", parse_json),
    ("yaml", parse_yaml),
)


def parse_options_text(
    data: str,
    source: str = "<string>",
    parsers: Sequence[Tuple[str, OptionsParser]] = OVERRIDE_PARSERS,
) -> Options:
    """
    Parse override text with each parser in turn.

    Args:
        data: File contents
        source: Name used in errors and logs
        parsers: ``(name, parser)`` pairs, in precedence order

    Returns:
        Options from the first parser that succeeds

    Raises:
        OptionsOverrideError: If every parser fails
    """
    errors: Dict[str, str] = {}
    for name, parser in parsers:
        try:
            options = parser(data)
        except (ValueError, yaml.YAMLError) as e:
            logger.debug(f"{source} is not valid {name}: {e}")
            errors[name] = str(e)
            continue
        logger.info(f"Loaded options override from {source} as {name}")
        return options
    raise OptionsOverrideError(source, errors)


def read_override_text(path: str) -> Optional[str]:
    """
    Read an override file.

    Returns:
        File contents, or None if the file is missing or unreadable
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Options override {path} not readable, keeping options: {e}")
        return None


def apply_override(options: Options) -> Options:
    """
    Replace ``options`` with the contents of its override file, if any.

    - No override path, or the file cannot be read: ``options`` unchanged.
    - File parses as JSON, else as YAML: the parsed options.
    - File parses as neither: :class:`OptionsOverrideError`.
    """
    if not options.options_override:
        return options

    data = read_override_text(options.options_override)
    if data is None:
        return options

    return parse_options_text(data, source=options.options_override)
