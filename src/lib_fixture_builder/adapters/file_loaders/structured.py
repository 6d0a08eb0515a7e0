"""Structured base-value file loaders.

Purpose
-------
Turn fixture files on disk into base mappings so the CLI (and suites that keep
their canonical fixtures as data files) can feed them to
:func:`lib_fixture_builder.core.create_builder`. Adapters are small wrappers
around ``tomllib``/``json``/``yaml.safe_load`` so error handling and
observability live in one place.

Contents
--------
* :class:`BaseFileLoader` – shared helpers for reading files and validating
  mapping outputs.
* :class:`TOMLFileLoader` / :class:`JSONFileLoader` / :class:`YAMLFileLoader`.
* :func:`load_base` – pick a loader by file suffix.

System Role
-----------
Outer layer; only the CLI depends on it. TOML and YAML parse native dates and
datetimes, which then flow through the temporal rule of the deep-copy engine.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from ...domain.errors import InvalidBase, InvalidFormat
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    format_name = "unknown"

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`FileNotFoundError` when missing."""

        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Base file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("base_file_read", field=None, path=path, size=len(payload))
        return payload

    def _ensure_mapping(self, data: object, *, path: str) -> Mapping[str, Any]:
        """Ensure *data* is a mapping, otherwise raise :class:`InvalidBase`.

        Examples
        --------
        >>> JSONFileLoader()._ensure_mapping({"key": 1}, path="demo")
        {'key': 1}
        >>> JSONFileLoader()._ensure_mapping([1], path="demo")
        Traceback (most recent call last):
        ...
        lib_fixture_builder.domain.errors.InvalidBase: File demo did not produce a mapping (got list)
        """

        if not isinstance(data, Mapping):
            raise InvalidBase(f"File {path} did not produce a mapping (got {type(data).__name__})")
        log_debug("base_file_loaded", field=None, path=path, format=self.format_name)
        return data

    def _invalid(self, path: str, exc: Exception) -> InvalidFormat:
        log_error("base_file_invalid", field=None, path=path, format=self.format_name, error=str(exc))
        return InvalidFormat(f"Invalid {self.format_name.upper()} in {path}: {exc}")


class TOMLFileLoader(BaseFileLoader):
    """Load TOML documents using the standard library parser."""

    format_name = "toml"

    def load(self, path: str) -> Mapping[str, Any]:
        try:
            data = tomllib.loads(self._read(path).decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc
        return self._ensure_mapping(data, path=path)


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents."""

    format_name = "json"

    def load(self, path: str) -> Mapping[str, Any]:
        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc
        return self._ensure_mapping(data, path=path)


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents; an empty document yields an empty base."""

    format_name = "yaml"

    def load(self, path: str) -> Mapping[str, Any]:
        try:
            data = yaml.safe_load(self._read(path))
        except yaml.YAMLError as exc:
            raise self._invalid(path, exc) from exc
        return self._ensure_mapping({} if data is None else data, path=path)


_FILE_LOADERS: dict[str, BaseFileLoader] = {
    ".toml": TOMLFileLoader(),
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}


def load_base(path: str | Path) -> Mapping[str, Any]:
    """Load the base mapping stored at *path*, choosing the parser by suffix.

    Raises
    ------
    InvalidFormat
        For unsupported suffixes and unparsable content.
    InvalidBase
        When the document is not a mapping.
    FileNotFoundError
        When *path* does not exist.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / "person.toml"
    >>> _ = target.write_text('name = "John"\\nage = 20\\n', encoding="utf-8")
    >>> dict(load_base(target))
    {'name': 'John', 'age': 20}
    >>> tmp.cleanup()
    """

    loader = _FILE_LOADERS.get(Path(path).suffix.lower())
    if loader is None:
        supported = ", ".join(sorted(_FILE_LOADERS))
        raise InvalidFormat(f"Unsupported base file {path}; expected one of {supported}")
    return loader.load(str(path))
