"""
License gate for the AP Set Planner.

The UI entry point validates the license before showing the calculator; the
calculation engine itself never imports this package.
"""

from .license import (
    LicenseFile,
    LicenseManager,
    LicenseError,
    LicenseNotFoundError,
    InvalidLicenseFormatError,
    SignatureVerificationError,
    UserNotAuthorizedError,
    LicenseExpiredError,
    HardwareMismatchError,
    current_windows_user,
    hardware_fingerprint
)

__all__ = [
    'LicenseFile',
    'LicenseManager',
    'LicenseError',
    'LicenseNotFoundError',
    'InvalidLicenseFormatError',
    'SignatureVerificationError',
    'UserNotAuthorizedError',
    'LicenseExpiredError',
    'HardwareMismatchError',
    'current_windows_user',
    'hardware_fingerprint'
]
