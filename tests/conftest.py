"""
pytest configuration for onfido_client tests.

Adds src directory to Python path for imports and clears client environment
variables so tests never pick up a developer's real credentials.
"""

import os
import sys
from pathlib import Path

# Add src directory to Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))

for _var in (
    "ONFIDO_API_TOKEN",
    "ONFIDO_API_ENDPOINT",
    "ONFIDO_TIMEOUT_SECONDS",
    "ONFIDO_MAX_CONCURRENT",
    "ONFIDO_USER_AGENT",
):
    os.environ.pop(_var, None)
