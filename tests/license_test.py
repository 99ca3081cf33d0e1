"""
Tests for license validation
"""
import unittest
import sys
import os
import json
import datetime
import tempfile
from pathlib import Path
from unittest import mock

# Add parent directory to import path
parent_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(parent_dir))

from utils.logger import Logger
Logger.log_to_file = False

from security.license import (
    LicenseManager, LicenseFile, LicenseNotFoundError, InvalidLicenseFormatError,
    SignatureVerificationError, UserNotAuthorizedError, LicenseExpiredError,
    HardwareMismatchError, current_windows_user, hardware_fingerprint,
)

USER = "WORKSTATION\\jdoe"
FINGERPRINT = "a" * 64
NOW = datetime.datetime(2026, 6, 1, tzinfo=datetime.timezone.utc)


def license_data(**overrides):
    data = {
        "license_version": "1.0",
        "application_id": "apset-planner",
        "issued_date": "2026-01-01T00:00:00Z",
        "expiry_date": "2027-01-01T00:00:00Z",
        "license_type": "site",
        "authorized_users": [USER],
        "hardware_binding": {"fingerprint": FINGERPRINT, "tolerance": "strict"},
        "features": {"export": True, "advanced_mode": False},
        "license_data": {"organization": "Plant 4", "contact": "reliability@example.com", "user_limit": 5},
        "signature": "c2lnbmF0dXJl",
    }
    data.update(overrides)
    return data


class TestLicenseManager(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.temp_dir.name, "apset_planner.license")

    def tearDown(self):
        self.temp_dir.cleanup()

    def write(self, data):
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write(data if isinstance(data, str) else json.dumps(data))

    def manager(self, user=USER, fingerprint=FINGERPRINT):
        missing = os.path.join(self.temp_dir.name, "missing.license")
        return LicenseManager(search_paths=[missing, self.path], current_user=user, fingerprint=fingerprint)

    def test_valid_license(self):
        self.write(license_data())
        manager = self.manager()
        license_file = manager.validate(NOW)

        self.assertIsInstance(license_file, LicenseFile)
        self.assertTrue(manager.is_license_valid)
        self.assertTrue(manager.is_feature_authorized("export"))
        self.assertFalse(manager.is_feature_authorized("advanced_mode"))
        self.assertEqual(manager.days_until_expiry(NOW), 214)

    def test_not_found(self):
        with self.assertRaises(LicenseNotFoundError) as context:
            self.manager().validate(NOW)
        self.assertIn("License file not found", str(context.exception))

    def test_invalid_format(self):
        self.write("{not json")
        with self.assertRaises(InvalidLicenseFormatError):
            self.manager().validate(NOW)

        self.write(license_data(license_data="missing fields"))
        with self.assertRaises(InvalidLicenseFormatError):
            self.manager().validate(NOW)

    def test_empty_signature(self):
        self.write(license_data(signature=""))
        with self.assertRaises(SignatureVerificationError):
            self.manager().validate(NOW)

    def test_expired(self):
        self.write(license_data(expiry_date="2026-05-31T23:59:59Z"))
        with self.assertRaises(LicenseExpiredError):
            self.manager().validate(NOW)

    def test_user_not_authorized(self):
        self.write(license_data())
        with self.assertRaises(UserNotAuthorizedError):
            self.manager(user="WORKSTATION\\someone").validate(NOW)

    def test_hardware_mismatch(self):
        self.write(license_data())
        with self.assertRaises(HardwareMismatchError):
            self.manager(fingerprint="b" * 64).validate(NOW)

    def test_license_without_hardware_binding(self):
        self.write(license_data(hardware_binding=None))
        self.manager(fingerprint="b" * 64).validate(NOW)

    def test_expiry_checked_before_user(self):
        self.write(license_data(expiry_date="2026-01-02T00:00:00Z"))
        with self.assertRaises(LicenseExpiredError):
            self.manager(user="WORKSTATION\\someone").validate(NOW)

    def test_usage_gate(self):
        manager = self.manager()
        self.assertFalse(manager.is_usage_authorized())
        self.assertFalse(manager.is_license_valid)


class TestIdentity(unittest.TestCase):

    def test_windows_user(self):
        with mock.patch.dict(os.environ, {"USERNAME": "jdoe", "COMPUTERNAME": "WORKSTATION"}):
            self.assertEqual(current_windows_user(), "WORKSTATION\\jdoe")

    def test_fingerprint_is_stable(self):
        fingerprint = hardware_fingerprint()
        self.assertEqual(len(fingerprint), 64)
        self.assertEqual(fingerprint, hardware_fingerprint())


if __name__ == "__main__":
    unittest.main()
