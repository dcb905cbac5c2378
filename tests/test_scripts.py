#!/usr/bin/env python3
"""
Script Test: sha1sum.py and gen_dhparams.py
Tests the command-line entry points end to end.
"""

import sys
import os
import tempfile
import importlib.util

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from dhcore.crypto.generators import MODP_GROUP14_P


def load_script(name: str):
    path = os.path.join(ROOT, "scripts", f"{name}.py")
    spec = importlib.util.spec_from_file_location(f"scripts_{name}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_sha1sum_streams_file():
    sha1sum = load_script("sha1sum")

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "abc.txt")
        with open(path, "wb") as f:
            f.write(b"abc")

        assert sha1sum.sha1_file(path) == "a9993e364706816aba3e25717850c26c9cd0d89d"
        assert sha1sum.main([path, "--expect", "a9993e364706816aba3e25717850c26c9cd0d89d"]) == 0
        assert sha1sum.main([path, "--expect", "da39a3ee5e6b4b0d3255bfef95601890afd80709"]) == 1
        assert sha1sum.main([os.path.join(tmp, "missing.bin")]) == 1


def test_gen_dhparams_well_known_and_generated():
    gen_dhparams = load_script("gen_dhparams")

    assert gen_dhparams.main(["--well-known", "group14"]) == 0
    assert gen_dhparams.main(["--bits", "32", "--certainty", "10"]) == 0
    # below the minimum safe-prime size
    assert gen_dhparams.main(["--bits", "3"]) == 1

    text = gen_dhparams.describe(gen_dhparams.WELL_KNOWN["group14"]())
    assert f"{MODP_GROUP14_P:x}" in text
    assert "j: 2" in text


def main():
    """Run script tests."""
    print("\n" + "=" * 70)
    print("TEST SUITE: COMMAND-LINE SCRIPTS")
    print("=" * 70)

    tests = [
        ("sha1sum", test_sha1sum_streams_file),
        ("gen_dhparams", test_gen_dhparams_well_known_and_generated),
    ]

    results = {}
    for test_name, test_func in tests:
        try:
            test_func()
            results[test_name] = True
        except Exception as e:
            print(f"\n✗ Test '{test_name}' failed: {e!r}")
            results[test_name] = False

    for test_name, passed in results.items():
        status = "✓ PASS" if passed else "✗ FAIL"
        print(f"  {status}: {test_name}")

    return all(results.values())


if __name__ == '__main__':
    sys.exit(0 if main() else 1)
