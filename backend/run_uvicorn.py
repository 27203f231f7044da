#!/usr/bin/env python3
"""
Uvicorn runner script for the Huddle chat service.
Works from a source checkout without installing the package.
"""

import sys
from pathlib import Path

src_dir = Path(__file__).parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from huddle.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
