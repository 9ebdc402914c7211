"""Return input loader for JSON and YAML files.

A return file holds one TaxReturnInput: filing status, people, manual
entries and a ``documents`` list whose items are discriminated by
``form_type``. Read and parse failures are not wrapped; they propagate with
a note naming the file.

Example:
    >>> from taxengine.documents.loader import load_return_input
    >>> tax_return = load_return_input("returns/smith-2025.yaml")
    >>> tax_return.filing_status
    <FilingStatus.MARRIED_FILING_JOINTLY: 'married_filing_jointly'>
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
from pydantic import ValidationError
from ruamel.yaml import YAML, YAMLError

from taxengine.core.config import settings
from taxengine.core.logging import get_logger
from taxengine.documents.models import InputFormType
from taxengine.personal_tax.calculator import TaxReturnInput
from taxengine.tax.errors import InvalidValueError, SchemaNotFoundError

logger = get_logger(__name__)

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")

_KNOWN_FORM_TYPES = {form_type.value for form_type in InputFormType}


def _parse_json(path: Path) -> Any:
    return orjson.loads(path.read_bytes())


def _parse_yaml(path: Path) -> Any:
    yaml = YAML(typ="safe")
    with open(path, encoding="utf-8") as f:
        return yaml.load(f)


def check_form_types(data: dict[str, Any]) -> None:
    """Reject documents whose ``form_type`` the engine has no model for.

    Raises:
        SchemaNotFoundError: For the first unknown form type.
    """
    year = data.get("tax_year", settings.default_tax_year)
    for document in data.get("documents") or []:
        form_type = document.get("form_type") if isinstance(document, dict) else None
        if form_type not in _KNOWN_FORM_TYPES:
            raise SchemaNotFoundError(str(form_type), year)


def parse_return_input(data: Any) -> TaxReturnInput:
    """Validate already-decoded data into a TaxReturnInput.

    Raises:
        InvalidValueError: If the top level is not a mapping.
        SchemaNotFoundError: If a document has an unknown form type.
        pydantic.ValidationError: If the data doesn't fit the model.
    """
    if not isinstance(data, dict):
        raise InvalidValueError(
            "return input", f"must be a mapping, got {type(data).__name__}"
        )
    check_form_types(data)
    return TaxReturnInput.model_validate(data)


def load_return_input(path: str | Path) -> TaxReturnInput:
    """Load a return from a ``.json``, ``.yaml`` or ``.yml`` file.

    Args:
        path: Path to the return file.

    Returns:
        The validated TaxReturnInput.

    Raises:
        InvalidValueError: If the file extension is not supported.
        SchemaNotFoundError: If a document has an unknown form type.
        OSError, orjson.JSONDecodeError, ruamel.yaml.YAMLError,
        pydantic.ValidationError: Propagated with a note naming the file.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        parse = _parse_json
    elif suffix in YAML_SUFFIXES:
        parse = _parse_yaml
    else:
        raise InvalidValueError("path", f"unsupported return file type {suffix!r}")

    try:
        data = parse(path)
        tax_return = parse_return_input(data)
    except (OSError, orjson.JSONDecodeError, YAMLError, ValidationError) as exc:
        exc.add_note(f"while loading return input from {path}")
        raise

    logger.info(
        "return_input_loaded",
        path=str(path),
        documents=len(tax_return.documents),
        tax_year=tax_return.tax_year,
    )
    return tax_return
