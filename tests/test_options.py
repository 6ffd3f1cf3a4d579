# ==============================================================================
# OPTIONS TESTS
# ==============================================================================
# Options record, serialisation and the override pipeline
# ==============================================================================

import json

import pytest
import yaml
from pydantic import ValidationError

from ticketdb.core.exceptions import OptionsOverrideError
from ticketdb.schemas.options import (
    OVERRIDE_PARSERS,
    Options,
    apply_override,
    options_to_json,
    options_to_yaml,
    parse_options_text,
)


@pytest.fixture
def options() -> Options:
    return Options(
        target_host="example.org",
        db="sqlite://test.db",
        options_override=None,
        verbose=3,
    )


class TestOptionsModel:
    """The options record itself."""

    def test_defaults(self):
        opts = Options(db="sqlite://test.db")

        assert opts.target_host == "localhost"
        assert opts.options_override is None
        assert opts.verbose == 0

    def test_db_is_required(self):
        with pytest.raises(ValidationError):
            Options()

    def test_negative_verbosity_rejected(self):
        with pytest.raises(ValidationError):
            Options(db="sqlite://test.db", verbose=-1)

    def test_is_immutable(self, options: Options):
        with pytest.raises(ValidationError):
            options.db = "postgres://localhost/t"

    def test_unknown_fields_ignored(self):
        opts = Options.model_validate({"db": "sqlite://x.db", "colour": "blue"})
        assert not hasattr(opts, "colour")


class TestSerialization:
    """JSON and YAML dumps."""

    def test_json_is_pretty(self, options: Options):
        dumped = options_to_json(options)

        assert dumped.startswith("{\n  ")
        assert json.loads(dumped) == {
            "target_host": "example.org",
            "db": "sqlite://test.db",
            "options_override": None,
            "verbose": 3,
        }

    def test_yaml_keeps_field_order(self, options: Options):
        dumped = options_to_yaml(options)

        assert list(yaml.safe_load(dumped)) == [
            "target_host", "db", "options_override", "verbose",
        ]

    def test_json_round_trip(self, options: Options):
        assert parse_options_text(options_to_json(options)) == options

    def test_yaml_round_trip(self, options: Options):
        assert parse_options_text(options_to_yaml(options)) == options


class TestParsePipeline:
    """Precedence of the override parsers."""

    def test_parser_order(self):
        assert [name for name, _ in OVERRIDE_PARSERS] == ["json", "yaml"]

    def test_json_wins_when_it_parses(self):
        calls = []

        def first(data):
            calls.append("first")
            return Options(db="sqlite://first.db")

        def second(data):
            calls.append("second")
            return Options(db="sqlite://second.db")

        result = parse_options_text("ignored", parsers=[("a", first), ("b", second)])

        assert result.db == "sqlite://first.db"
        assert calls == ["first"]

    def test_falls_back_to_next_parser(self):
        def failing(data):
            raise ValueError("nope")

        result = parse_options_text(
            "ignored",
            parsers=[("a", failing), ("b", lambda data: Options(db="sqlite://b.db"))],
        )

        assert result.db == "sqlite://b.db"

    def test_yaml_only_text(self):
        text = "target_host: yaml.example\ndb: postgres://localhost/t\nverbose: 2\n"

        result = parse_options_text(text)

        assert result == Options(
            target_host="yaml.example",
            db="postgres://localhost/t",
            verbose=2,
        )

    def test_all_parsers_fail(self):
        with pytest.raises(OptionsOverrideError) as exc_info:
            parse_options_text("db: [unclosed", source="broken.yaml")

        error = exc_info.value
        assert error.path == "broken.yaml"
        assert list(error.errors) == ["json", "yaml"]
        assert error.error_code == "OPTIONS_OVERRIDE_ERROR"

    def test_valid_yaml_scalar_is_not_options(self):
        with pytest.raises(OptionsOverrideError):
            parse_options_text("just a string")

    def test_missing_db_fails_both_formats(self):
        with pytest.raises(OptionsOverrideError):
            parse_options_text('{"target_host": "x"}')


class TestApplyOverride:
    """Whole-record replacement from a file."""

    def test_no_override_keeps_options(self, options: Options):
        assert apply_override(options) is options

    def test_missing_file_keeps_options(self, tmp_path):
        opts = Options(db="sqlite://cli.db", options_override=str(tmp_path / "nope.json"))

        assert apply_override(opts) is opts

    def test_json_file_replaces_everything(self, write_file):
        path = write_file(
            "override.json",
            json.dumps({"target_host": "json.example", "db": "sqlite://json.db", "verbose": 1}),
        )
        opts = Options(db="sqlite://cli.db", options_override=path, verbose=4)

        result = apply_override(opts)

        assert result == Options(target_host="json.example", db="sqlite://json.db", verbose=1)

    def test_yaml_file_replaces_everything(self, write_file):
        path = write_file("override.yaml", "db: sqlite://yaml.db\n")
        opts = Options(target_host="cli.example", db="sqlite://cli.db", options_override=path)

        result = apply_override(opts)

        assert result.db == "sqlite://yaml.db"
        assert result.target_host == "localhost"
        assert result.options_override is None

    def test_only_db_is_required_in_file(self, write_file):
        # target_host and verbose are optional in the file and fall back to
        # the model defaults, never to the command-line values
        path = write_file("minimal.json", '{"db": "sqlite://file.db"}')
        opts = Options(
            target_host="cli.example",
            db="sqlite://cli.db",
            options_override=path,
            verbose=3,
        )

        result = apply_override(opts)

        assert result == Options(db="sqlite://file.db")
        assert result.target_host == "localhost"
        assert result.verbose == 0

    def test_unparseable_file_aborts(self, write_file):
        path = write_file("bad.conf", "{{{ not: [valid")
        opts = Options(db="sqlite://cli.db", options_override=path)

        with pytest.raises(OptionsOverrideError):
            apply_override(opts)
