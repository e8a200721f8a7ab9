"""Module entry point for `python -m idl_compat_checker`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
