#!/usr/bin/env python3
"""
fastmatch launcher

Runs the command-line matcher from the src/fastmatch package without
installing it first.
"""

import sys
from pathlib import Path

# Add the src directory to Python path so we can import fastmatch
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from fastmatch.main import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
