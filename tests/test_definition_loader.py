"""
Tests for YAML field definitions

Tests parsing, schema checks, custom handler resolution and loading from
paths, file:// URIs and http(s) URLs.
"""
import pytest
import requests

from formify import DefinitionError, InvalidPatternError, errors
from formify import definition_loader
from formify import operators as op
from formify.definition_loader import (
    build_fields,
    load_definitions,
    operators_from_definition,
    parse_definitions,
    resolve_custom_handler,
)


SIGNUP_YAML = """
fields:
  email:
    required: true
    email: true
  nickname:
    min_length: 3
    max_length: 10
    pattern: "[a-z]+"
  code:
    initial: "  123  "
    custom: "builtins:str.isdigit"
  notes:
    trim: false
  website:
"""


@pytest.fixture
def signup_file(tmp_path):
    """Write the signup definitions to a temporary file."""
    path = tmp_path / "signup.yaml"
    path.write_text(SIGNUP_YAML)
    return path


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")


class TestOperatorsFromDefinition:
    """Test operators_from_definition()."""

    def test_empty_definition(self):
        """Test that a missing definition produces no operators."""
        assert operators_from_definition(None) == []
        assert operators_from_definition({}) == []

    def test_fixed_order(self):
        """Test that operators come out in a fixed order."""
        operators = operators_from_definition({
            "url_with_scheme": True,
            "trim": False,
            "pattern": "[a-z]+",
            "max_length": 4,
            "min_length": 1,
            "required": True,
        })
        assert operators == [
            op.Required(),
            op.MinLength(1),
            op.MaxLength(4),
            op.Pattern("[a-z]+"),
            op.UrlWithScheme(),
            op.DisableTrimming(),
        ]

    def test_false_flags_skipped(self):
        """Test that flags set to false add nothing."""
        operators = operators_from_definition({"required": False, "email": False, "trim": True})
        assert operators == []

    def test_custom_resolved(self):
        """Test that a custom reference becomes a Custom operator."""
        operators = operators_from_definition({"custom": "builtins:str.isdigit"})
        assert operators == [op.Custom(str.isdigit)]


class TestResolveCustomHandler:
    """Test resolve_custom_handler()."""

    def test_resolves_dotted_attribute(self):
        """Test module:attribute.path references."""
        assert resolve_custom_handler("builtins:str.isdigit") is str.isdigit

    def test_missing_module(self):
        """Test that an unknown module raises DefinitionError."""
        with pytest.raises(DefinitionError, match="Failed to import"):
            resolve_custom_handler("formify_no_such_module:check")

    def test_missing_attribute(self):
        """Test that an unknown attribute raises DefinitionError."""
        with pytest.raises(DefinitionError, match="not found"):
            resolve_custom_handler("math:no_such_function")

    def test_not_callable(self):
        """Test that a non-callable target raises DefinitionError."""
        with pytest.raises(DefinitionError, match="not callable"):
            resolve_custom_handler("math:pi")

    def test_malformed_reference(self):
        """Test that a reference without a colon is rejected."""
        with pytest.raises(DefinitionError):
            resolve_custom_handler("math.pi")


class TestParseDefinitions:
    """Test parse_definitions() and build_fields()."""

    def test_builds_fields_in_document_order(self):
        """Test that every declared field is built, in order."""
        fields = parse_definitions(SIGNUP_YAML)
        assert list(fields) == ["email", "nickname", "code", "notes", "website"]

    def test_field_configuration(self):
        """Test that definition keys configure the fields."""
        fields = parse_definitions(SIGNUP_YAML)

        assert fields["email"].is_required
        assert fields["email"].errors == (errors.Required(),)

        nickname = fields["nickname"]
        assert nickname.min_length == 3
        assert nickname.max_length == 10
        nickname.value = "AB"
        assert nickname.errors == (errors.MinLength(2), errors.Pattern())

        assert fields["notes"].disable_trimming
        assert fields["website"].is_valid

    def test_initial_value_and_custom(self):
        """Test that the initial value is trimmed and checked by the custom handler."""
        code = parse_definitions(SIGNUP_YAML)["code"]
        assert code.value == "123"
        assert code.is_touched
        assert code.is_valid

        code.value = "12a"
        assert code.errors == (errors.Custom(),)

    def test_invalid_yaml(self):
        """Test that unparseable text raises DefinitionError."""
        with pytest.raises(DefinitionError, match="Failed to parse"):
            parse_definitions("fields: [")

    @pytest.mark.parametrize("document", [
        None,
        {},
        {"fields": []},
        {"fields": {"a": {"minlength": 3}}},
        {"fields": {"a": {"min_length": -1}}},
        {"fields": {"a": {"required": "yes"}}},
        {"fields": {"a": {"custom": "no colon"}}},
        {"fields": {}, "extra": 1},
    ])
    def test_schema_violations(self, document):
        """Test that malformed documents are rejected before building."""
        with pytest.raises(DefinitionError, match="Field definitions invalid"):
            build_fields(document)

    def test_invalid_pattern(self):
        """Test that a bad pattern surfaces as InvalidPatternError."""
        with pytest.raises(InvalidPatternError):
            build_fields({"fields": {"a": {"pattern": "[a-z"}}})


class TestLoadDefinitions:
    """Test load_definitions()."""

    def test_load_from_path(self, signup_file):
        """Test loading from a filesystem path."""
        fields = load_definitions(str(signup_file))
        assert "email" in fields

    def test_load_from_relative_path(self, signup_file, monkeypatch):
        """Test that relative paths resolve against the working directory."""
        monkeypatch.chdir(signup_file.parent)
        fields = load_definitions("signup.yaml")
        assert "nickname" in fields

    def test_load_from_file_uri(self, signup_file):
        """Test loading from a file:// URI."""
        fields = load_definitions(signup_file.as_uri())
        assert len(fields) == 5

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises DefinitionError."""
        with pytest.raises(DefinitionError, match="Failed to read"):
            load_definitions(str(tmp_path / "missing.yaml"))

    def test_non_utf8_file(self, tmp_path):
        """Test that undecodable bytes raise DefinitionError."""
        path = tmp_path / "broken.yaml"
        path.write_bytes(b'fields:\n  a:\n    initial: "\xff\xfe"\n')

        with pytest.raises(DefinitionError, match="Failed to read"):
            load_definitions(str(path))

    def test_load_from_https(self, monkeypatch):
        """Test that http(s) URLs are fetched with requests."""
        requested = []

        def fake_get(url, timeout=None):
            requested.append((url, timeout))
            return FakeResponse(SIGNUP_YAML)

        monkeypatch.setattr(definition_loader.requests, "get", fake_get)
        fields = load_definitions("https://example.com/forms/signup.yaml")

        assert "email" in fields
        assert requested == [("https://example.com/forms/signup.yaml", definition_loader.FETCH_TIMEOUT)]

    def test_http_error(self, monkeypatch):
        """Test that HTTP errors become DefinitionError."""
        monkeypatch.setattr(
            definition_loader.requests, "get", lambda url, timeout=None: FakeResponse("", 404)
        )
        with pytest.raises(DefinitionError, match="Failed to fetch"):
            load_definitions("https://example.com/missing.yaml")

    def test_connection_error(self, monkeypatch):
        """Test that network failures become DefinitionError."""
        def fail(url, timeout=None):
            raise requests.exceptions.ConnectionError("unreachable")

        monkeypatch.setattr(definition_loader.requests, "get", fail)
        with pytest.raises(DefinitionError, match="unreachable"):
            load_definitions("http://example.com/signup.yaml")

    def test_unsupported_scheme(self):
        """Test that other schemes are rejected."""
        with pytest.raises(DefinitionError, match="Unsupported URI scheme"):
            load_definitions("ftp://example.com/signup.yaml")
