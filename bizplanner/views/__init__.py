"""
View-state helpers: pure derivations (dates, filters, aggregates), the form
lifecycle, resolved branding and user notifications.
"""

from .branding import BrandingSettings, THEME_PRESETS, resolve_branding, apply_theme_preset
from .forms import FormDialog, FormMode
from .notifications import Notifier, Toast

__all__ = [
    'BrandingSettings',
    'THEME_PRESETS',
    'resolve_branding',
    'apply_theme_preset',
    'FormDialog',
    'FormMode',
    'Notifier',
    'Toast',
]
