"""naclseal — anonymous NaCl sealed boxes from the command line.

Built on PyNaCl (libsodium) with a strict layered architecture.
"""

from naclseal.version import __version__

__all__: list[str] = ["__version__"]
