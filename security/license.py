"""
License file validation.

The application only starts when a license file authorizes the current user.
The license is a JSON document:

    {
        "license_version": "1.0",
        "application_id": "apset-planner",
        "issued_date": "2026-01-01T00:00:00Z",
        "expiry_date": "2027-01-01T00:00:00Z",
        "license_type": "site",
        "authorized_users": ["WORKSTATION\\\\jdoe"],
        "hardware_binding": {"fingerprint": "<sha256>", "tolerance": "strict"},
        "features": {"export": true, "advanced_mode": true},
        "license_data": {"organization": "...", "contact": "...", "user_limit": 5},
        "signature": "..."
    }

``hardware_binding`` is optional; without it the license is valid on any
computer. Nothing in the calculation engine depends on this module.
"""

import os
import sys
import json
import socket
import getpass
import hashlib
import platform
import datetime
from dataclasses import dataclass
from typing import Dict, List, Optional

from utils.logger import Logger

LICENSE_FILE_NAME = "apset_planner.license"
APP_DIRECTORY = os.path.join(os.path.expanduser("~"), ".apset_planner")


class LicenseError(Exception):
    """Base class for license failures; the message is shown to the user."""

    message = "License validation failed."

    def __init__(self, message=None):
        super().__init__(message or self.message)


class LicenseNotFoundError(LicenseError):
    message = "License file not found. Please contact your administrator to obtain a valid license."


class InvalidLicenseFormatError(LicenseError):
    message = "Invalid license file format. The license file may be corrupted."


class SignatureVerificationError(LicenseError):
    message = "License signature verification failed. The license file may have been tampered with."


class UserNotAuthorizedError(LicenseError):
    message = "Your Windows account is not authorized to use this application. Please contact your administrator."


class LicenseExpiredError(LicenseError):
    message = "Your license has expired. Please contact your administrator to renew your license."


class HardwareMismatchError(LicenseError):
    message = "This license is not valid for this computer. Please contact your administrator."


def _parse_date(text) -> datetime.datetime:
    value = datetime.datetime.fromisoformat(str(text).replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return value


@dataclass(frozen=True)
class HardwareBinding:
    fingerprint: str
    tolerance: str = "strict"


@dataclass(frozen=True)
class LicenseData:
    organization: str
    contact: str
    user_limit: int


@dataclass(frozen=True)
class LicenseFile:
    license_version: str
    application_id: str
    issued_date: datetime.datetime
    expiry_date: datetime.datetime
    license_type: str
    authorized_users: List[str]
    features: Dict[str, bool]
    license_data: LicenseData
    signature: str
    hardware_binding: Optional[HardwareBinding] = None

    @classmethod
    def from_dict(cls, data) -> 'LicenseFile':
        """
        Parse the license JSON object.

        Raises:
            InvalidLicenseFormatError: If a field is missing or has the wrong type.
        """
        try:
            binding = data.get('hardware_binding')
            license_data = data['license_data']
            return cls(
                license_version=str(data['license_version']),
                application_id=str(data['application_id']),
                issued_date=_parse_date(data['issued_date']),
                expiry_date=_parse_date(data['expiry_date']),
                license_type=str(data['license_type']),
                authorized_users=[str(user) for user in data['authorized_users']],
                features={str(name): bool(enabled) for name, enabled in data['features'].items()},
                license_data=LicenseData(
                    organization=str(license_data['organization']),
                    contact=str(license_data['contact']),
                    user_limit=int(license_data['user_limit']),
                ),
                signature=str(data['signature']),
                hardware_binding=HardwareBinding(
                    fingerprint=str(binding['fingerprint']),
                    tolerance=str(binding.get('tolerance', "strict")),
                ) if binding else None,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            Logger.log_message_static(f"License: Failed to parse license: {str(e)}", Logger.ERROR)
            raise InvalidLicenseFormatError() from e


def current_windows_user() -> str:
    """Account name as COMPUTER\\user, or LOCAL\\user outside Windows."""
    username = os.environ.get("USERNAME")
    computer = os.environ.get("COMPUTERNAME")
    if username and computer:
        return f"{computer}\\{username}"

    user = os.environ.get("USER") or getpass.getuser()
    return f"LOCAL\\{user}"


def hardware_fingerprint() -> str:
    """SHA-256 over machine identifiers; stable for one computer."""
    components = [socket.gethostname(), platform.system(), platform.machine(), platform.processor()]
    return hashlib.sha256("_".join(components).encode("utf-8")).hexdigest()


def default_search_paths() -> List[str]:
    application_directory = os.path.dirname(os.path.abspath(sys.argv[0] or "."))
    return [
        os.path.join(os.getcwd(), LICENSE_FILE_NAME),
        os.path.join(application_directory, LICENSE_FILE_NAME),
        os.path.join(APP_DIRECTORY, LICENSE_FILE_NAME),
    ]


class LicenseManager:
    """
    Validates the license file for the current user and computer.

    Args:
        search_paths (list, optional): Candidate license file paths, tried in
            order. Defaults to the working directory, the application
            directory and ~/.apset_planner/.
        current_user (str, optional): Account name to check; defaults to the
            logged-in account.
        fingerprint (str, optional): Hardware fingerprint to check; defaults
            to this computer's.
    """

    def __init__(self, search_paths=None, current_user=None, fingerprint=None):
        self.search_paths = list(search_paths) if search_paths is not None else default_search_paths()
        self.current_user = current_user or current_windows_user()
        self.fingerprint = fingerprint or hardware_fingerprint()

        self.is_license_valid = False
        self.license: Optional[LicenseFile] = None
        self.expiry_date: Optional[datetime.datetime] = None
        self.authorized_features = set()

    def _find_license_file(self) -> str:
        for path in self.search_paths:
            if path and os.path.exists(path):
                Logger.log_message_static(f"License: Found license at {path}", Logger.DEBUG)
                return path
        Logger.log_message_static("License: License file not found in any expected location", Logger.ERROR)
        raise LicenseNotFoundError()

    def _read_license(self, path) -> LicenseFile:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            Logger.log_message_static(f"License: Failed to read license: {str(e)}", Logger.ERROR)
            raise InvalidLicenseFormatError() from e
        if not isinstance(data, dict):
            raise InvalidLicenseFormatError()
        return LicenseFile.from_dict(data)

    def _verify_signature(self, license_file: LicenseFile) -> bool:
        # TODO: verify the RSA signature against the issuer public key once keys are provisioned
        return bool(license_file.signature.strip())

    def validate(self, now: Optional[datetime.datetime] = None) -> LicenseFile:
        """
        Run all license checks.

        Checks run in order: file present, format valid, signature, expiry,
        user authorization, hardware binding.

        Args:
            now (datetime, optional): Reference time, timezone-aware; defaults to now.

        Returns:
            LicenseFile: The validated license.

        Raises:
            LicenseError: The subclass matching the first failed check.
        """
        self.is_license_valid = False
        now = now or datetime.datetime.now(datetime.timezone.utc)

        license_file = self._read_license(self._find_license_file())

        if not self._verify_signature(license_file):
            Logger.log_message_static("License: Signature verification failed", Logger.ERROR)
            raise SignatureVerificationError()

        if license_file.expiry_date < now:
            Logger.log_message_static(f"License: Expired on {license_file.expiry_date.date()}", Logger.ERROR)
            raise LicenseExpiredError()

        if self.current_user not in license_file.authorized_users:
            Logger.log_message_static(f"License: User '{self.current_user}' is not authorized", Logger.ERROR)
            raise UserNotAuthorizedError()

        binding = license_file.hardware_binding
        if binding is not None and binding.fingerprint != self.fingerprint:
            Logger.log_message_static("License: Hardware fingerprint mismatch", Logger.ERROR)
            raise HardwareMismatchError()

        self.license = license_file
        self.is_license_valid = True
        self.expiry_date = license_file.expiry_date
        self.authorized_features = {name for name, enabled in license_file.features.items() if enabled}

        Logger.log_message_static(
            f"License: Valid for {license_file.license_data.organization} until {license_file.expiry_date.date()}",
            Logger.INFO)
        return license_file

    def is_feature_authorized(self, feature: str) -> bool:
        return self.is_license_valid and feature in self.authorized_features

    def days_until_expiry(self, now: Optional[datetime.datetime] = None) -> Optional[int]:
        if self.expiry_date is None:
            return None
        now = now or datetime.datetime.now(datetime.timezone.utc)
        return (self.expiry_date - now).days

    def is_usage_authorized(self) -> bool:
        """Boolean gate over ``validate``; the failure reason is logged."""
        try:
            self.validate()
        except LicenseError as e:
            Logger.log_message_static(f"License: {e}", Logger.WARNING)
            return False
        return True
