"""
Detecting the library's own version.

The codebase does not contain the version directly: releases depend
on tagging rather than in-code version bumps.

The version is determined only once at startup when the code is loaded.
"""
version: str | None = None

try:
    import importlib.metadata
except ImportError:
    pass
else:
    try:
        name, *_ = __name__.split('.')  # usually "kapply", unless renamed/forked.
        version = importlib.metadata.version(name)
    except Exception:
        pass  # installed from a source tree without metadata, etc.
