"""
Build script for justsanitize with optional mypyc compilation.

Usage:
    # Pure Python build (default)
    python -m build

    # Compiled with mypyc
    JUSTSANITIZE_USE_MYPYC=1 pip install .
"""

import os
import sys
from pathlib import Path

from setuptools import find_packages, setup

# Determine if we should use mypyc
USE_MYPYC = os.environ.get("JUSTSANITIZE_USE_MYPYC", "0") == "1"

# Modules on the per-node path of every sanitize() call.
# node.py is excluded: the subclasses only differ in constructors and mypyc
# gains nothing there.
MYPYC_MODULES = [
    "src/justsanitize/url.py",
    "src/justsanitize/attributes.py",
    "src/justsanitize/transform.py",
    "src/justsanitize/serialize.py",
    "src/justsanitize/entities.py",
]


def build_with_mypyc() -> list:
    """Build extension modules using mypyc."""
    try:
        from mypyc.build import mypycify
    except ImportError:
        print(
            "ERROR: mypyc is not installed. Install with: pip install mypy",
            file=sys.stderr,
        )
        print("Or install with mypyc support: pip install justsanitize[mypyc]", file=sys.stderr)
        sys.exit(1)

    # Verify all modules exist
    for module_path in MYPYC_MODULES:
        if not Path(module_path).exists():
            print(f"ERROR: Module not found: {module_path}", file=sys.stderr)
            sys.exit(1)

    print("=" * 70)
    print("Building justsanitize with mypyc compilation")
    print("=" * 70)
    print(f"Compiling {len(MYPYC_MODULES)} modules:")
    for module in MYPYC_MODULES:
        print(f"  - {module}")
    print("=" * 70)

    opt_level = os.environ.get("MYPYC_OPT_LEVEL", "3")
    debug_level = os.environ.get("MYPYC_DEBUG_LEVEL", "0")

    mypyc_options = {
        "opt_level": opt_level,
        "debug_level": debug_level,
        "verbose": True,
        "separate": False,
        "multi_file": False,
    }

    return mypycify(MYPYC_MODULES, **mypyc_options)


if __name__ == "__main__":
    ext_modules = []

    if USE_MYPYC:
        ext_modules = build_with_mypyc()
    else:
        print("Building justsanitize in pure Python mode (no mypyc compilation)")
        print("To enable mypyc: JUSTSANITIZE_USE_MYPYC=1 pip install .")

    setup(
        name="justsanitize",
        version="0.1.0",
        description="Whitelist based HTML sanitizer built on an HTML5 parser",
        python_requires=">=3.10",
        package_dir={"": "src"},
        packages=find_packages("src"),
        install_requires=["html5lib>=1.1"],
        extras_require={
            "test": ["pytest"],
            "mypyc": ["mypy"],
        },
        ext_modules=ext_modules,
    )
