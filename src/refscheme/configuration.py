"""Scheme configuration loaded from user-supplied properties or YAML files.

Configuration layers accept scheme tokens as plain strings. This module
turns them into ReferenceScheme values through the same validator the rest
of the package uses, so an invalid scheme in a config file fails with the
usual ``scheme is not valid`` message.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any, Self

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    ValidationError,
    model_validator,
)

from refscheme.errors import SchemeConfigError
from refscheme.scheme import ReferenceScheme

logger = logging.getLogger(__name__)


def _to_scheme(value: Any) -> ReferenceScheme:
    if isinstance(value, ReferenceScheme):
        return value
    if not isinstance(value, str):
        raise ValueError(f"scheme must be a string, got {type(value).__name__}")
    # InvalidSchemeError is a ValueError, which pydantic reports as a validation error
    return ReferenceScheme.parse(value)


SchemeField = Annotated[
    ReferenceScheme,
    PlainValidator(_to_scheme),
    PlainSerializer(str, return_type=str),
]
"""Pydantic field type accepting a scheme string and producing a ReferenceScheme."""


class SchemeConfiguration(BaseModel):
    """Set of schemes a component is allowed to handle.

    Features:
        - Every entry validated with the scheme grammar
        - Immutable (frozen) once created
        - Strict validation (no extra fields allowed)

    Example:
        ```python
        config = SchemeConfiguration.from_properties({
            "schemes": ["file", "https"],
            "default_scheme": "file",
        })
        ```

    """

    model_config = ConfigDict(
        # Immutable - configuration cannot be modified after creation
        frozen=True,
        # Strict - extra fields not in the model are rejected
        extra="forbid",
    )

    schemes: list[SchemeField] = Field(
        min_length=1,
        description="Schemes accepted by the component",
    )
    default_scheme: SchemeField | None = Field(
        default=None,
        description="Scheme assumed for references without one (must be listed in schemes)",
    )

    @model_validator(mode="after")
    def check_schemes_consistent(self) -> Self:
        """Reject duplicate schemes and a default scheme that is not listed."""
        seen: set[ReferenceScheme] = set()
        for scheme in self.schemes:
            if scheme in seen:
                raise ValueError(f"Duplicate scheme: {scheme.value!r}")
            seen.add(scheme)

        if self.default_scheme is not None and self.default_scheme not in seen:
            raise ValueError(
                f"Default scheme {self.default_scheme.value!r} is not one of the "
                f"configured schemes"
            )
        return self

    def find(self, reference: str) -> ReferenceScheme | None:
        """Return the configured scheme whose prefix reference starts with, if any."""
        for scheme in self.schemes:
            if scheme.matches(reference):
                return scheme
        return None

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a properties dictionary with validation.

        Args:
            properties: Dictionary containing:
                - schemes (list[str]): Accepted schemes.
                - default_scheme (str, optional): One of the accepted schemes.

        Returns:
            Validated configuration instance

        Raises:
            SchemeConfigError: If validation fails

        """
        try:
            return cls.model_validate(properties)
        except ValidationError as e:
            raise SchemeConfigError(f"Invalid scheme configuration: {e}") from e

    @classmethod
    def from_yaml(cls, path: Path) -> Self:
        """Load configuration from a YAML file.

        Args:
            path: Path to a YAML mapping with the same keys as from_properties()

        Returns:
            Validated configuration instance

        Raises:
            SchemeConfigError: If the file cannot be read, parsed or validated

        """
        try:
            with open(path, encoding="utf-8") as f:
                properties = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SchemeConfigError(f"Failed to parse YAML config {path}: {e}") from e
        except OSError as e:
            raise SchemeConfigError(f"Failed to read config file {path}: {e}") from e

        if not isinstance(properties, dict):
            raise SchemeConfigError(f"Invalid configuration format in {path}")

        logger.debug("Loaded scheme configuration from %s", path)
        return cls.from_properties(properties)
