"""
Test script for persisted settings

Usage:
    python tests/test_settings.py
"""

import json
import sys
import tempfile
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gridpath import settings


def _with_settings_file(test):
    """Point SETTINGS_FILE at a temporary path for the duration of a test."""
    def wrapper():
        original = settings.SETTINGS_FILE
        with tempfile.TemporaryDirectory() as tmp:
            settings.SETTINGS_FILE = Path(tmp) / "config.json"
            try:
                test()
            finally:
                settings.SETTINGS_FILE = original
    wrapper.__name__ = test.__name__
    wrapper.__doc__ = test.__doc__
    return wrapper


@_with_settings_file
def test_defaults_when_missing():
    """No file means the defaults, as an independent copy."""
    loaded = settings.load_settings()
    assert loaded == settings.DEFAULT_SETTINGS
    loaded["solver_name"] = "heap"
    assert settings.DEFAULT_SETTINGS["solver_name"] == "linear"

    print("  [PASS] Default settings tests")


@_with_settings_file
def test_save_and_load():
    """Saved values come back; missing keys are filled from defaults."""
    settings.save_settings({"solver_name": "heap", "detour_budget": 20})
    loaded = settings.load_settings()

    assert loaded["solver_name"] == "heap"
    assert loaded["detour_budget"] == 20
    assert loaded["detour_threshold"] == settings.DEFAULT_SETTINGS["detour_threshold"]
    assert json.loads(settings.SETTINGS_FILE.read_text(encoding="utf-8"))["detour_budget"] == 20

    print("  [PASS] Save/load tests")


@_with_settings_file
def test_invalid_file():
    """Corrupt JSON or a non-object falls back to defaults."""
    for content in ("{not json", "[1, 2, 3]"):
        settings.SETTINGS_FILE.write_text(content, encoding="utf-8")
        assert settings.load_settings() == settings.DEFAULT_SETTINGS, content

    print("  [PASS] Invalid file tests")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# SETTINGS TESTS")
    print("#"*60)

    tests = [
        ("Defaults", test_defaults_when_missing),
        ("Save/Load", test_save_and_load),
        ("Invalid File", test_invalid_file),
    ]

    failed = 0
    for name, test in tests:
        try:
            test()
            print(f"  {name}: [PASS]")
        except AssertionError as e:
            failed += 1
            print(f"  {name}: [FAIL] {e}")

    print()
    print("All tests PASSED!" if not failed else f"{failed} tests FAILED!")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
