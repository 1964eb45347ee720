"""
Field definitions loaded from YAML.

A definition document declares named fields and their rules:

    fields:
      email:
        required: true
        email: true
      nickname:
        min_length: 3
        max_length: 20
        pattern: "[a-z]+"
        trim: false
        custom: "myapp.checks:is_not_reserved"

Documents are checked against the bundled field-definitions.schema.yaml
before any field is built. They can be read from a local path, a file:// URI
or an http(s):// URL.
"""

import importlib
import logging
import os
import urllib.parse
from importlib.resources import files
from typing import Any, Dict, List, Optional

import requests
import yaml
from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from . import operators as op
from .errors import DefinitionError
from .field import Field

logger = logging.getLogger(__name__)

SCHEMA_RESOURCE = "field-definitions.schema.yaml"

# Seconds before an http(s) definition fetch is abandoned
FETCH_TIMEOUT = 10

# Keys mapped to argument-free operators, in the order they are emitted.
# The pattern shortcuts come after "pattern", so the last one given wins.
_FLAG_OPERATORS = (
    ("email", op.Email),
    ("phone_number", op.PhoneNumber),
    ("url_no_scheme", op.UrlNoScheme),
    ("url_with_scheme", op.UrlWithScheme),
)

_schema_validator: Optional[Draft7Validator] = None


def _get_schema_validator() -> Draft7Validator:
    """Load the bundled schema once and return a validator for it."""
    global _schema_validator
    if _schema_validator is None:
        schema_file = files("formify").joinpath(SCHEMA_RESOURCE)
        with schema_file.open("r") as f:
            schema = yaml.safe_load(f)
        _schema_validator = Draft7Validator(schema)
    return _schema_validator


def validate_document(document: Any) -> Dict[str, Any]:
    """
    Check a parsed definition document against the bundled schema.

    Args:
        document: Parsed YAML content

    Returns:
        The same document, once it is known to be well formed

    Raises:
        DefinitionError: On the first schema violation, naming its path
    """
    validator = _get_schema_validator()
    error = best_match(validator.iter_errors(document))
    if error is not None:
        error_path = " -> ".join(str(p) for p in error.path) if error.path else "root"
        raise DefinitionError(
            f"Field definitions invalid at {error_path}: {error.message}"
        )
    return document


def resolve_custom_handler(reference: str) -> op.CustomValidationHandler:
    """
    Import a custom predicate from a ``"module:attribute"`` reference.

    Args:
        reference: Import path, e.g. "myapp.checks:is_not_reserved"

    Returns:
        The callable found at the reference

    Raises:
        DefinitionError: If the module or attribute cannot be found, or the
            attribute is not callable
    """
    module_name, _, attr_path = reference.partition(":")
    if not module_name or not attr_path:
        raise DefinitionError(
            f"Custom handler reference must look like 'module:attribute', got {reference!r}"
        )

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise DefinitionError(
            f"Failed to import module for custom handler {reference}: {e}"
        ) from e

    for name in attr_path.split("."):
        if not hasattr(target, name):
            raise DefinitionError(
                f"Custom handler '{attr_path}' not found in module {module_name}"
            )
        target = getattr(target, name)

    if not callable(target):
        raise DefinitionError(f"Custom handler {reference} is not callable")
    return target


def operators_from_definition(definition: Optional[Dict[str, Any]]) -> List[op.Operator]:
    """
    Translate one field definition into an operator list.

    Operators are emitted in a fixed order: required, min_length, max_length,
    pattern, email, phone_number, url_no_scheme, url_with_scheme, trim,
    custom. Keys set to false are skipped.

    Args:
        definition: Mapping of definition keys (None means no rules)

    Returns:
        Operators ready to pass to Field
    """
    definition = definition or {}
    operators: List[op.Operator] = []

    if definition.get("required"):
        operators.append(op.Required())
    if definition.get("min_length") is not None:
        operators.append(op.MinLength(definition["min_length"]))
    if definition.get("max_length") is not None:
        operators.append(op.MaxLength(definition["max_length"]))
    if definition.get("pattern") is not None:
        operators.append(op.Pattern(definition["pattern"]))
    for key, operator_class in _FLAG_OPERATORS:
        if definition.get(key):
            operators.append(operator_class())
    if definition.get("trim") is False:
        operators.append(op.DisableTrimming())
    if definition.get("custom"):
        operators.append(op.Custom(resolve_custom_handler(definition["custom"])))

    return operators


def build_fields(document: Dict[str, Any]) -> Dict[str, Field]:
    """
    Build fields from a parsed definition document.

    Args:
        document: Parsed YAML content with a top-level "fields" mapping

    Returns:
        Dict mapping field name to Field, in document order

    Raises:
        DefinitionError: If the document does not match the schema or a
            custom handler cannot be resolved
        InvalidPatternError: If a field declares an invalid pattern
    """
    validate_document(document)

    fields = {}
    for name, definition in document["fields"].items():
        operators = operators_from_definition(definition)
        initial = (definition or {}).get("initial", "")
        fields[name] = Field(initial, operators)
        logger.debug(f"Built field {name} with {len(operators)} operators")
    return fields


def parse_definitions(text: str) -> Dict[str, Field]:
    """
    Build fields from YAML text.

    Raises:
        DefinitionError: If the text is not valid YAML or not a valid document
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DefinitionError(f"Failed to parse field definitions: {e}") from e
    return build_fields(document)


def load_definitions(uri: str) -> Dict[str, Field]:
    """
    Load field definitions from a path or URI.

    Supports:
    - Plain paths, absolute or relative to the working directory
    - file:// - Local filesystem
    - https:// and http:// - Remote, fetched with requests

    Args:
        uri: Location of the YAML definition document

    Returns:
        Dict mapping field name to Field, in document order

    Raises:
        DefinitionError: If the document cannot be read, fetched or parsed,
            or the URI scheme is unsupported
    """
    parsed = urllib.parse.urlparse(uri)

    if not parsed.scheme:
        text = _read_file(os.path.abspath(uri))
    elif parsed.scheme == "file":
        text = _read_file(urllib.parse.unquote(parsed.path))
    elif parsed.scheme in ("http", "https"):
        text = _fetch_uri(uri)
    else:
        raise DefinitionError(f"Unsupported URI scheme: {parsed.scheme} in {uri}")

    logger.debug(f"Loaded field definitions from {uri}")
    return parse_definitions(text)


def _read_file(path: str) -> str:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DefinitionError(f"Failed to read field definitions from {path}: {e}") from e


def _fetch_uri(uri: str) -> str:
    """Fetch content from HTTP/HTTPS URI."""
    try:
        response = requests.get(uri, timeout=FETCH_TIMEOUT)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise DefinitionError(f"Failed to fetch field definitions from {uri}: {e}") from e
    return response.text
