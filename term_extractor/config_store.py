"""
Configuration Store

Loads pipeline definitions from a Java-style .properties file or a YAML
file into a flat, read-only key/value mapping.

Keys are dotted strings such as "nouns_pipeline.annotators". YAML files may
nest them instead:

    nouns_pipeline:
      annotators: [tokenize, ssplit, pos]
      method: extractNouns

Loading never raises for missing or unparseable files. The caller gets a
ConfigLoadResult whose status tells "loaded", "bundled default used",
"not found" and "malformed" apart, and decides what to do.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator

import yaml

from term_extractor.config import DEFAULT_PROPERTIES_FILE
from term_extractor.errors import ConfigurationMalformed
from term_extractor.logging_config import debug_log

YAML_SUFFIXES = {'.yaml', '.yml'}

_ESCAPES = {'t': '\t', 'n': '\n', 'r': '\r', 'f': '\f'}


class ConfigStore(Mapping):
    """
    Read-only string to string mapping of configuration keys.

    Example:
        store = ConfigStore({"tokens_pipeline.method": "extractTokens"})
        store.get("tokens_pipeline.method")  # "extractTokens"
        store.get("missing.key")             # None
    """

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values = dict(values or {})

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ConfigStore({len(self._values)} keys)"


class ConfigLoadStatus(Enum):
    LOADED = "loaded"
    DEFAULT = "default"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


@dataclass
class ConfigLoadResult:
    """
    Outcome of loading a configuration file.

    Attributes:
        status: What happened (see ConfigLoadStatus)
        store: Parsed configuration; empty for NOT_FOUND and MALFORMED
        source: The file that was read (or attempted)
        error: The underlying exception for NOT_FOUND and MALFORMED
    """
    status: ConfigLoadStatus
    store: ConfigStore = field(default_factory=ConfigStore)
    source: Path | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status in (ConfigLoadStatus.LOADED, ConfigLoadStatus.DEFAULT)


def load_config_store(path: str | Path | None = None) -> ConfigLoadResult:
    """
    Load a configuration store from a file, or the bundled default.

    Args:
        path: Properties or YAML file. None selects the bundled
              application.properties resource.

    Returns:
        ConfigLoadResult describing the outcome
    """
    if path is None:
        source = DEFAULT_PROPERTIES_FILE
        loaded_status = ConfigLoadStatus.DEFAULT
    else:
        source = Path(path)
        loaded_status = ConfigLoadStatus.LOADED

    try:
        with open(source, encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError as e:
        debug_log(f"[CONFIG] Configuration file not found: {source}")
        return ConfigLoadResult(ConfigLoadStatus.NOT_FOUND, source=source, error=e)
    except (OSError, UnicodeDecodeError) as e:
        debug_log(f"[CONFIG] Could not read {source}: {e}")
        return ConfigLoadResult(ConfigLoadStatus.MALFORMED, source=source, error=e)

    try:
        if source.suffix.lower() in YAML_SUFFIXES:
            values = parse_yaml(content, source)
        else:
            values = parse_properties(content, source)
    except ConfigurationMalformed as e:
        debug_log(f"[CONFIG] {e}")
        return ConfigLoadResult(ConfigLoadStatus.MALFORMED, source=source, error=e)

    debug_log(f"[CONFIG] Loaded {len(values)} keys from {source}")
    return ConfigLoadResult(loaded_status, store=ConfigStore(values), source=source)


def parse_yaml(content: str, source=None) -> dict[str, str]:
    """
    Parse YAML content into flat dotted keys.

    Nested mappings become "outer.inner" keys, lists are joined with
    commas and scalars are converted to strings.

    Raises:
        ConfigurationMalformed: Invalid YAML or a non-mapping document
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationMalformed(source, str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationMalformed(source, "top level must be a mapping")

    values: dict[str, str] = {}
    _flatten(data, "", values)
    return values


def _flatten(node: dict, prefix: str, out: dict[str, str]):
    for key, value in node.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            _flatten(value, f"{full_key}.", out)
        elif isinstance(value, list):
            out[full_key] = ",".join(str(item) for item in value)
        elif value is None:
            out[full_key] = ""
        else:
            out[full_key] = str(value)


def parse_properties(content: str, source=None) -> dict[str, str]:
    """
    Parse Java .properties content.

    Supports '#' and '!' comments, '=', ':' or whitespace separators,
    backslash line continuations and the common escapes (\\t, \\n, \\uXXXX).

    Raises:
        ConfigurationMalformed: Invalid \\u escape
    """
    values: dict[str, str] = {}

    for logical_line in _logical_lines(content):
        raw_key, raw_value = _split_key_value(logical_line)
        try:
            key = _unescape(raw_key)
            value = _unescape(raw_value)
        except ValueError as e:
            raise ConfigurationMalformed(source, str(e)) from e
        values[key] = value

    return values


def _logical_lines(content: str) -> Iterator[str]:
    """Join continuation lines and drop blanks and comments."""
    pending = ""
    for raw_line in content.splitlines():
        line = raw_line.lstrip()
        if not pending and (not line or line[0] in '#!'):
            continue

        # An odd number of trailing backslashes continues the line
        trailing = len(line) - len(line.rstrip('\\'))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue

        yield pending + line
        pending = ""

    if pending:
        yield pending


def _split_key_value(line: str) -> tuple[str, str]:
    """
    Split a logical line at the first unescaped '=', ':' or whitespace.

    A backslash escapes the character after it, so in 'a\\\\=b' the '='
    ends the key 'a\\\\' while in 'a\\=b' it belongs to the key.
    """
    i = 0
    while i < len(line):
        char = line[i]
        if char == '\\':
            i += 2
            continue
        if char in '=:' or char.isspace():
            break
        i += 1
    key = line[:i]

    # Whitespace, then at most one '=' or ':', then more whitespace
    while i < len(line) and line[i].isspace():
        i += 1
    if i < len(line) and line[i] in '=:':
        i += 1
        while i < len(line) and line[i].isspace():
            i += 1

    return key, line[i:]


def _unescape(text: str) -> str:
    out = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != '\\' or i + 1 == len(text):
            out.append(char)
            i += 1
            continue

        nxt = text[i + 1]
        if nxt == 'u':
            code = text[i + 2:i + 6]
            if len(code) != 4 or not all(c in '0123456789abcdefABCDEF' for c in code):
                raise ValueError(f"invalid \\u escape in '{text}'")
            out.append(chr(int(code, 16)))
            i += 6
        else:
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2

    return "".join(out)
