#!/usr/bin/env python3
# tools/invariants_runner.py
#
# Ordering invariants (property tests) for mkey.
#
# This runner:
# - generates random int64 values, texts and component tuples
# - checks round trip, monotonicity, int-before-text, and tuple hierarchy
# - prints the first counterexample and exits non-zero
#
# Exit code:
#   0 -> all checks passed
#   1 -> invariant violation

import os, sys, random
from typing import Any, List, Tuple

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

import mkey

SEED = int(os.environ.get("MKEY_SEED", "1337"))
TRIALS = int(os.environ.get("MKEY_TRIALS", "20000"))
MAX_STR = int(os.environ.get("MKEY_GEN_MAX_STR", "12"))
MAX_COMPONENTS = int(os.environ.get("MKEY_GEN_MAX_COMPONENTS", "5"))

random.seed(SEED)

def rand_int() -> int:
    # Bias toward small magnitudes and pair-count boundaries.
    r = random.random()
    if r < 0.30:
        return random.randint(-300, 300)
    if r < 0.50:
        n = 100 ** random.randint(1, 9)
        return random.choice([n - 1, n, n + 1]) * random.choice([-1, 1])
    if r < 0.55:
        return random.choice([mkey.INT64_MIN, mkey.INT64_MAX, mkey.INT64_MIN + 1, mkey.INT64_MAX - 1])
    return random.randint(mkey.INT64_MIN, mkey.INT64_MAX)

def rand_text() -> str:
    # Mostly ASCII with escapable bytes mixed in; no surrogates.
    out = []
    for _ in range(random.randint(0, MAX_STR)):
        r = random.random()
        if r < 0.70:
            out.append(chr(random.randint(0x20, 0x7E)))
        elif r < 0.80:
            out.append(chr(random.choice([0x00, 0x01, 0x02])))
        elif r < 0.95:
            out.append(chr(random.randint(0xA0, 0xD7FF)))
        else:
            out.append(chr(random.randint(0x10000, 0x10FFFF)))
    return "".join(out)

def rand_component() -> Any:
    return rand_int() if random.random() < 0.5 else mkey.Text(rand_text())

def tagged(components: List[Any]) -> List[Tuple[int, Any]]:
    # Logical order: every integer before every text; texts by UTF-8 bytes.
    out = []
    for c in components:
        if isinstance(c, mkey.Text):
            out.append((1, c.value.encode("utf-8")))
        else:
            out.append((0, c))
    return out

def cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)

def fail(label: str, *ctx: Any) -> int:
    print("INVARIANT FAIL:", label)
    for c in ctx:
        print("  ", repr(c))
    return 1

def only_low_escape_difference(x: List[Any], y: List[Any]) -> bool:
    # The escape transform swaps the order of 0x00 and 0x01 inside text.
    for a, b in zip(tagged(x), tagged(y)):
        if a == b:
            continue
        if a[0] == b[0] == 1:
            for ca, cb in zip(a[1], b[1]):
                if ca != cb:
                    return {ca, cb} == {0x00, 0x01}
        return False
    return False

def main() -> int:
    for t in range(TRIALS):
        # (1) scalar round trip and stability
        n = rand_int()
        e1 = mkey.encode_scalar(n)
        if e1 != mkey.encode_scalar(n):
            return fail("encode stability", n)
        if mkey.decode_scalar(e1) != n:
            return fail("integer round trip", n, e1.hex())

        s = rand_text()
        es = mkey.encode_scalar(s)
        if mkey.decode_scalar(es) != s:
            return fail("text round trip", s, es.hex())
        if mkey.KEY_DELIMITER in es:
            return fail("literal delimiter in text", s, es.hex())

        # (2) monotonicity
        m = rand_int()
        em = mkey.encode_scalar(m)
        if cmp(n, m) != mkey.compare(e1, em):
            return fail("monotonicity", n, m, e1.hex(), em.hex())

        # (3) integers before texts
        if not e1 < es:
            return fail("int before text", n, s)

        # (4) composite round trip and hierarchy
        x = [rand_component() for _ in range(random.randint(1, MAX_COMPONENTS))]
        y = [rand_component() for _ in range(random.randint(1, MAX_COMPONENTS))]
        if random.random() < 0.3:
            y = x[:random.randint(1, len(x))] + y  # shared prefix
        ex = mkey.encode_composite(x)
        ey = mkey.encode_composite(y)
        if mkey.Composite.decode(ex) != mkey.Composite(*x):
            return fail("composite round trip", x, ex.hex())

        want = cmp(tagged(x), tagged(y))
        got = mkey.compare(ex, ey)
        if want != got and not only_low_escape_difference(x, y):
            return fail("composite order", x, y, ex.hex(), ey.hex())

    print(f"OK: invariants passed for TRIALS={TRIALS} seed={SEED}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
