"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations used by the real-browser suite.

Each page class encapsulates:
    - Element selectors
    - Page-specific actions

Author: Automation Team
License: MIT
================================================================================
"""

from .form_page import FORM_HTML, FormPage

__all__ = [
    "FORM_HTML",
    "FormPage",
]
