# validator.py

import json
from pathlib import Path
from typing import Optional, Tuple

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError

SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schemas"


class SchemaValidator:
    """Validates sheet data against the JSON schemas shipped with the package."""

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        self.schema_dir = Path(schema_dir)
        self.schema_store = self._load_schemas()
        self._validators = {}

    def _load_schemas(self):
        """Load every .json and key the store by both filename and $id (if present)."""
        store = {}
        for schema_file in self.schema_dir.glob("*.json"):
            schema = json.loads(schema_file.read_text(encoding="utf-8"))
            store[schema_file.name] = schema
            sid = schema.get("$id")
            if sid:
                store[sid] = schema
        return store

    def _validator_for(self, schema_name: str) -> Draft7Validator:
        validator = self._validators.get(schema_name)
        if validator is None:
            schema = self.schema_store.get(schema_name)
            if not schema:
                raise FileNotFoundError(f"Schema '{schema_name}' not found in {self.schema_dir!r}")
            validator = Draft7Validator(schema)
            self._validators[schema_name] = validator
        return validator

    def validate(self, data, schema_name: str) -> Tuple[bool, Optional[str]]:
        """
        Validate ``data`` against ``schema_name``.
        Returns (True, None) on success, or (False, "Error message") on failure.
        """
        try:
            self._validator_for(schema_name).validate(data)
            return True, None
        except ValidationError as e:
            # build a human-friendly path like "objects->0->center"
            path = "->".join(map(str, e.path)) or "(root)"
            return False, f"Validation Error in {path}: {e.message}"
