"""YAML persistence for the exposure document."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from gqlporter.exposure.reconciler import ExposureDocument

logger = logging.getLogger(__name__)


class ExposureConfigError(Exception):
    """Raised when the exposure document cannot be read or written."""


class ExposureStore:
    """
    Reads and writes ``exposed.yaml``.

    A missing or empty file is an empty document. A file that exists but
    cannot be parsed or validated is an error, as is any failure to write.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> ExposureDocument:
        if not self.path.exists():
            logger.info("%s not found, will create new configuration", self.path.name)
            return ExposureDocument()

        try:
            with open(self.path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ExposureConfigError(f"Failed to load {self.path}: {e}")

        if data is None:
            logger.info("%s is empty, starting from a new configuration", self.path.name)
            return ExposureDocument()
        if not isinstance(data, dict):
            raise ExposureConfigError(f"Invalid {self.path}: expected a mapping at the top level")

        try:
            document = ExposureDocument.model_validate(data)
        except ValidationError as e:
            raise ExposureConfigError(f"Invalid {self.path}: {e}")

        logger.info("Loaded %s configuration", self.path.name)
        return document

    def save(self, document: ExposureDocument) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                yaml.dump(document.model_dump(), f, default_flow_style=False, sort_keys=False)
        except (OSError, yaml.YAMLError) as e:
            raise ExposureConfigError(f"Failed to save {self.path}: {e}")

        logger.info("Saved %s configuration", self.path.name)
