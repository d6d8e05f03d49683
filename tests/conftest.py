"""Root conftest: sets env vars BEFORE any wsnav module is imported.

Pins the config directory to a throwaway location so tests never read a
developer's real ~/.wsnav/settings.toml or .env.
"""

import os
import tempfile

# Force-set (not setdefault) to prevent real env vars from leaking into tests
os.environ["WSNAV_DIR"] = tempfile.mkdtemp(prefix="wsnav-test-")
