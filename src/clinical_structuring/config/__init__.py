# ============================================================================
# src/clinical_structuring/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .structuring_config import StructuringSettings, structuring_settings
from .logging_config import LoggingSettings, logging_settings
