"""
valuemerger - values merging for templated deployments

Combines values files and --set style overrides into a single nested
document, following the value precedence rules of Helm.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("valuemerger")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from valuemerger.errors import (  # noqa: E402
    AssignmentConflictError,
    ParseError,
    ReadError,
    ValuesError,
)
from valuemerger.merge import merge_maps  # noqa: E402
from valuemerger.values import Options, merge_values  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "AssignmentConflictError",
    "Options",
    "ParseError",
    "ReadError",
    "ValuesError",
    "merge_maps",
    "merge_values",
]
