"""
Clairvoyant: a compiler for a small declarative entity language.

A ``.cvt`` file declares reusable property bundles (components), entity
blueprints built from them (templates) and processing units (systems).
The compiler turns that description into JavaScript modules for the
Psykick entity-component-system runtimes.

The code is organised into several modules:

* ``preprocessor`` expands ``#include`` directives until the text settles.
* ``parser`` is a hand written lexer and recursive descent parser that
  produces the dataclasses of ``ast``.
* ``compiler`` resolves template inheritance and system requirements and
  asks ``codegen`` to render artifacts.
* ``writer`` and ``reporters`` persist the artifacts and describe the
  build; ``build`` ties the steps together and ``cli`` exposes them.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata


def _local_version() -> str | None:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("clairvoyant")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "1.0.0"

__all__ = ["__version__"]
