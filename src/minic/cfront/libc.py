"""
Standard Library Capability Table
=================================

The interpreter does not read header files. Instead it knows a fixed set
of library headers and the functions each one exports. Including a
known header registers those functions in the interpreter environment,
each bound to a location string "<namespace>/<function>".

Default Table
-------------
| Header  | Namespace | Functions |
|---------|-----------|-----------|
| stdio.h | libc      | printf    |

Tables are immutable. Extending one returns a new table, so a table
can be shared between interpreters safely:

    >>> table = DEFAULT_LIBC.with_header(HeaderSpec("math.h", "libm", ("sqrt",)))
    >>> table.lookup("math.h").location_of("sqrt")
    'libm/sqrt'

JSON Format
-----------
    {
      "headers": {
        "math.h": {"namespace": "libm", "functions": ["sqrt", "abs"]}
      }
    }
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from minic.errors import ConfigurationError


logger = logging.getLogger(__name__)


# =============================================================================
# Header Specification
# =============================================================================

@dataclass(frozen=True)
class HeaderSpec:
    """
    One recognised header.

    Attributes:
        name: Header path as written in #include, e.g. "stdio.h"
        namespace: Logical namespace prefixed to each function location
        functions: Exported function names, in registration order
    """
    name: str
    namespace: str
    functions: tuple[str, ...] = ()

    def location_of(self, function: str) -> str:
        """Synthesized location string for an exported function."""
        return f"{self.namespace}/{function}"


# =============================================================================
# Capability Table
# =============================================================================

@dataclass(frozen=True)
class CapabilityTable:
    """
    Immutable mapping from header name to HeaderSpec.

    Attributes:
        headers: Read-only view of the header specifications
    """
    headers: Mapping[str, HeaderSpec] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def __contains__(self, name: str) -> bool:
        return name in self.headers

    def __iter__(self) -> Iterator[HeaderSpec]:
        return iter(self.headers.values())

    def __len__(self) -> int:
        return len(self.headers)

    def lookup(self, name: str) -> Optional[HeaderSpec]:
        """Return the spec for a header, or None if it is not recognised."""
        return self.headers.get(name)

    def header_names(self) -> list[str]:
        """Recognised header names, sorted."""
        return sorted(self.headers)

    def with_header(self, spec: HeaderSpec) -> "CapabilityTable":
        """Return a new table with spec added (replacing any same-named header)."""
        headers = dict(self.headers)
        headers[spec.name] = spec
        return CapabilityTable(headers)

    def merged(self, other: "CapabilityTable") -> "CapabilityTable":
        """Return a new table with every header of other laid over this one."""
        headers = dict(self.headers)
        headers.update(other.headers)
        return CapabilityTable(headers)

    # =========================================================================
    # Construction from configuration data
    # =========================================================================

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CapabilityTable":
        """
        Build a table from decoded JSON data.

        Raises:
            ConfigurationError: If the data does not have the expected shape
        """
        headers_data = data.get("headers") if isinstance(data, Mapping) else None
        if not isinstance(headers_data, Mapping):
            raise ConfigurationError("capability table must contain a 'headers' object")

        headers = {}
        for name, entry in headers_data.items():
            if not isinstance(entry, Mapping):
                raise ConfigurationError(f"header '{name}' must be an object")

            namespace = entry.get("namespace")
            if not isinstance(namespace, str) or not namespace:
                raise ConfigurationError(f"header '{name}' needs a non-empty 'namespace' string")

            functions = entry.get("functions", [])
            if not isinstance(functions, list) or not all(isinstance(f, str) for f in functions):
                raise ConfigurationError(f"header '{name}': 'functions' must be a list of strings")

            headers[name] = HeaderSpec(name, namespace, tuple(functions))

        return cls(headers)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "CapabilityTable":
        """
        Load a table from a JSON file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(f"cannot read capability table {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"invalid JSON in capability table {path}: {e}") from e

        table = cls.from_mapping(data)
        logger.debug("Loaded %d headers from %s", len(table), path)
        return table

    def to_mapping(self) -> dict[str, Any]:
        """Inverse of from_mapping."""
        return {
            "headers": {
                spec.name: {"namespace": spec.namespace, "functions": list(spec.functions)}
                for spec in self
            }
        }


# =============================================================================
# Default Table
# =============================================================================

STDIO = HeaderSpec("stdio.h", "libc", ("printf",))

DEFAULT_LIBC = CapabilityTable({STDIO.name: STDIO})
