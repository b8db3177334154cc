"""DevTools Preferences - main entry point.

Run this file to start the app:
    python main.py

Or run it as a module:
    python -m devtools_prefs
"""

import sys
from pathlib import Path

# Add src to the path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from devtools_prefs.app import main

if __name__ == "__main__":
    main()
