#!/usr/bin/env python3
"""
Randomness Test: SecureRandom, digest PRNG and ParametersWithRandom
Tests the randomness sources and their binding to parameter objects.

Test Cases:
1. DigestRandomGenerator is deterministic for identical seed material
2. SecureRandom front-end (bit widths, signed ints, ranges)
3. Process-default SecureRandom is a lazily created singleton
4. ParametersWithRandom null checks and identity of held objects
"""

import sys
import os

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dhcore.common.errors import InvalidParameterError, NullArgumentError, OutOfRangeError
from dhcore.crypto.dh import DHParameters
from dhcore.crypto.hashdigest import HashDigest, create_digest
from dhcore.crypto.params import ParametersWithRandom
from dhcore.crypto.securerandom import (
    DigestRandomGenerator,
    OsRandomGenerator,
    SecureRandom,
    get_default_random,
)
from dhcore.crypto.sha1 import new_sha1


def seeded_generator(seed: bytes, digest=None) -> DigestRandomGenerator:
    prng = DigestRandomGenerator(digest or new_sha1())
    prng.add_seed_material(seed)
    return prng


def test_digest_prng_is_deterministic():
    """Test 1: same seed material, same stream."""
    print("\n" + "=" * 70)
    print("TEST 1: Deterministic Digest PRNG")
    print("=" * 70)

    a = seeded_generator(b"fixed seed")
    b = seeded_generator(b"fixed seed")
    c = seeded_generator(b"other seed")

    out_a, out_b, out_c = bytearray(64), bytearray(64), bytearray(64)
    a.next_bytes(out_a)
    b.next_bytes(out_b)
    c.next_bytes(out_c)

    assert out_a == out_b
    assert out_a != out_c

    # successive calls keep advancing
    again = bytearray(64)
    a.next_bytes(again)
    assert again != out_a
    print("  ✓ Stream reproducible from seed")


def test_digest_prng_integer_seed_material():
    a = DigestRandomGenerator(new_sha1())
    b = DigestRandomGenerator(new_sha1())
    a.add_seed_material(42)
    b.add_seed_material(42)

    out_a, out_b = bytearray(20), bytearray(20)
    a.next_bytes(out_a)
    b.next_bytes(out_b)
    assert out_a == out_b

    # negative counters are encoded as two's complement, not rejected
    a.add_seed_material(-1)


def test_digest_prng_long_requests_cycle_seed():
    prng = seeded_generator(b"long", HashDigest("SHA-256"))
    assert prng.algorithm_name == "SHA-256"

    buf = bytearray(1000)
    prng.next_bytes(buf)
    # 1000 bytes from 32-byte states: the state must keep changing
    blocks = {bytes(buf[i:i + 32]) for i in range(0, 992, 32)}
    assert len(blocks) == 31


def test_digest_prng_window_and_bounds():
    prng = seeded_generator(b"window")
    buf = bytearray(10)
    prng.next_bytes(buf, 3, 4)
    assert buf[:3] == bytes(3)
    assert buf[7:] == bytes(3)

    with pytest.raises(OutOfRangeError):
        prng.next_bytes(buf, 8, 4)
    with pytest.raises(NullArgumentError):
        DigestRandomGenerator(None)


def test_os_generator_fills_window():
    buf = bytearray(8)
    OsRandomGenerator().next_bytes(buf, 2, 4)
    assert buf[:2] == bytes(2)
    assert buf[6:] == bytes(2)

    with pytest.raises(OutOfRangeError):
        OsRandomGenerator().next_bytes(buf, -1, 2)


def test_secure_random_front_end():
    """Test 2: random.Random API driven by the generator."""
    print("\n" + "=" * 70)
    print("TEST 2: SecureRandom Front-end")
    print("=" * 70)

    rng = SecureRandom(seeded_generator(b"front end"))

    assert rng.getrandbits(0) == 0
    for bits in (1, 7, 8, 9, 31, 64, 161):
        assert 0 <= rng.getrandbits(bits) < (1 << bits)

    for _ in range(50):
        assert -(1 << 31) <= rng.next_int() < (1 << 31)
        assert -(1 << 63) <= rng.next_long() < (1 << 63)
        assert 0 <= rng.next_below(10) < 10
        assert 5 <= rng.randint(5, 9) <= 9
        assert 0.0 <= rng.random() < 1.0

    assert rng.next_below(0) == 0
    assert rng.next_below(1) == 0
    with pytest.raises(InvalidParameterError):
        rng.next_below(-1)
    with pytest.raises(ValueError):
        rng.getrandbits(-1)

    assert len(rng.next_bytes(33)) == 33
    assert len(rng.generate_seed(16)) == 16

    buf = bytearray(6)
    rng.fill(buf, 1, 4)
    assert buf[0] == 0 and buf[5] == 0
    print("  ✓ Ranges respected")


def test_secure_random_reproducible_with_seeded_generator():
    a = SecureRandom(seeded_generator(b"same"))
    b = SecureRandom(seeded_generator(b"same"))
    assert [a.randrange(1000) for _ in range(10)] == [b.randrange(1000) for _ in range(10)]

    a.set_seed(b"diverge")
    a.seed("also diverge")
    a.seed(None)


def test_secure_random_state_is_opaque():
    rng = SecureRandom(OsRandomGenerator())
    with pytest.raises(NotImplementedError):
        rng.getstate()
    with pytest.raises(NotImplementedError):
        rng.setstate(None)


def test_default_construction_uses_digest_prng():
    rng = SecureRandom()
    assert isinstance(rng.generator, DigestRandomGenerator)
    assert rng.next_bytes(16) != rng.next_bytes(16)

    # two auto-seeded instances must not share a stream
    assert SecureRandom().next_bytes(32) != SecureRandom().next_bytes(32)


def test_default_random_singleton():
    """Test 3: one lazily created process-wide instance."""
    print("\n" + "=" * 70)
    print("TEST 3: Process-default SecureRandom")
    print("=" * 70)

    first = get_default_random()
    assert isinstance(first, SecureRandom)
    assert get_default_random() is first
    print("  ✓ Same instance on every call")


def test_create_digest():
    assert create_digest("SHA-1").algorithm_name == "SHA-1"
    assert create_digest("SHA-256").digest_size == 32

    with pytest.raises(InvalidParameterError):
        create_digest("MD5")


def test_hash_digest_surface():
    digest = HashDigest("SHA-1")
    digest.block_update(b"xxabcxx", 2, 3)
    fork = digest.copy()
    assert digest.hexdigest() == "a9993e364706816aba3e25717850c26c9cd0d89d"
    # reset after do_final
    assert digest.hexdigest() == "da39a3ee5e6b4b0d3255bfef95601890afd80709"
    fork.update(ord("d"))
    assert fork.digest() == new_sha1(b"abcd").digest()


def test_parameters_with_random():
    """Test 4: wrapper null checks and identity."""
    print("\n" + "=" * 70)
    print("TEST 4: ParametersWithRandom")
    print("=" * 70)

    params = DHParameters(23, 5)
    rng = SecureRandom(seeded_generator(b"wrapper"))

    wrapped = ParametersWithRandom(params, rng)
    assert wrapped.parameters is params
    assert wrapped.random is rng

    with pytest.raises(NullArgumentError) as excinfo:
        ParametersWithRandom(None, rng)
    assert excinfo.value.field == "parameters"

    with pytest.raises(NullArgumentError) as excinfo:
        ParametersWithRandom(params, None)
    assert excinfo.value.field == "random"

    defaulted = ParametersWithRandom(params)
    assert defaulted.parameters is params
    assert defaulted.random is get_default_random()
    print("  ✓ Null checks and identity hold")


def main():
    """Run all randomness tests."""
    print("\n" + "=" * 70)
    print("TEST SUITE: SECURE RANDOM AND PARAMETER WRAPPER")
    print("=" * 70)

    tests = [
        ("Deterministic PRNG", test_digest_prng_is_deterministic),
        ("Integer Seed", test_digest_prng_integer_seed_material),
        ("Seed Cycling", test_digest_prng_long_requests_cycle_seed),
        ("PRNG Bounds", test_digest_prng_window_and_bounds),
        ("OS Generator", test_os_generator_fills_window),
        ("Front-end", test_secure_random_front_end),
        ("Reproducible", test_secure_random_reproducible_with_seeded_generator),
        ("Opaque State", test_secure_random_state_is_opaque),
        ("Default Construction", test_default_construction_uses_digest_prng),
        ("Default Singleton", test_default_random_singleton),
        ("Digest Factory", test_create_digest),
        ("HashDigest", test_hash_digest_surface),
        ("ParametersWithRandom", test_parameters_with_random),
    ]

    results = {}
    for test_name, test_func in tests:
        try:
            test_func()
            results[test_name] = True
        except Exception as e:
            print(f"\n✗ Test '{test_name}' failed: {e!r}")
            import traceback
            traceback.print_exc()
            results[test_name] = False

    print("\n" + "=" * 70)
    print("TEST RESULTS SUMMARY")
    print("=" * 70)

    for test_name, passed in results.items():
        status = "✓ PASS" if passed else "✗ FAIL"
        print(f"  {status}: {test_name}")

    passed_count = sum(1 for p in results.values() if p)
    total_count = len(results)
    print(f"\nTotal: {passed_count}/{total_count} tests passed")

    return passed_count == total_count


if __name__ == '__main__':
    sys.exit(0 if main() else 1)
