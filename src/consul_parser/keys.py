"""
Key descriptors: what to fetch, how to type it, and whether it must exist.

A descriptor list can be given inline as dicts, as KeyDescriptor objects,
or loaded from a YAML file:

    keys:
      - key: db/host
        require: true
      - key: db/port
        type: number
      - key: features
        type: object
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import yaml as _yaml

import consul_parser.errors as errors
import consul_parser.paths as paths

_logger = _logging.getLogger(__name__)


class ValueType(str, _enum.Enum):
    """How a raw store value is coerced before it is placed in the tree."""

    STRING = "string"
    NUMBER = "number"
    OBJECT = "object"


class KeyDescriptor(_pydantic.BaseModel):
    """
    One remote key to fetch.

    Unknown fields are rejected so that typos such as ``requried`` do not
    silently turn a required key into an optional one.
    """

    model_config = _pydantic.ConfigDict(extra="forbid", frozen=True)

    key: str = _pydantic.Field(min_length=1)
    """Slash-delimited path; its segments decide where the value lands."""

    type: ValueType = ValueType.STRING
    """Coercion applied to the raw value."""

    require: _pydantic.StrictBool = False
    """Fail the whole parse if the store has no value for this key."""

    @property
    def segments(self) -> tuple[str, ...]:
        """Path segments of the (unprefixed) key."""
        return paths.split_key(self.key)


_KEY_LIST_ADAPTER = _pydantic.TypeAdapter(list[KeyDescriptor])


def validate_keys(
    keys: _abc.Sequence[KeyDescriptor | _abc.Mapping[str, _typing.Any]] | None,
) -> list[KeyDescriptor]:
    """
    Validate a descriptor list and return it as KeyDescriptor objects.

    Args:
        keys: Descriptors as dicts or KeyDescriptor instances.

    Returns:
        The validated descriptors, in input order.

    Raises:
        KeysValidationError: If keys is missing or empty, or if any item is
            malformed. All malformed items are reported, by list index.
    """
    if not keys:
        raise errors.KeysValidationError("Keys array is required!")

    try:
        return _KEY_LIST_ADAPTER.validate_python(keys)
    except _pydantic.ValidationError as e:
        raise errors.KeysValidationError(
            f"Some keys have incorrect format!\n{errors.format_validation_errors(e)}",
            errors=e.errors(),
        ) from e


def load_key_descriptors(path: _pathlib.Path | str) -> list[KeyDescriptor]:
    """
    Load and validate descriptors from a YAML file.

    The file holds either a list of descriptors or a mapping with a
    ``keys`` list.

    Raises:
        KeysFileError: If the file cannot be read or is not valid YAML, or
            does not contain a descriptor list.
        KeysValidationError: If the descriptors themselves are malformed.
    """
    path = _pathlib.Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise errors.KeysFileError(path, f"cannot read file: {e}") from e

    try:
        data = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise errors.KeysFileError(path, f"invalid YAML: {e}") from e

    if isinstance(data, dict):
        if "keys" not in data:
            raise errors.KeysFileError(path, "mapping has no 'keys' entry")
        data = data["keys"]

    if not isinstance(data, list):
        raise errors.KeysFileError(
            path, f"expected a list of key descriptors, got {type(data).__name__}"
        )

    descriptors = validate_keys(data)
    _logger.debug("Loaded %d key descriptors from %s", len(descriptors), path)
    return descriptors
