import sys
from pathlib import Path

# Add project root to sys.path to allow importing root modules
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

# Import all fixtures and hooks from the main Insider conftest
# This enables the run logging and failure artifact hooks
from Insider_Conftest import *
