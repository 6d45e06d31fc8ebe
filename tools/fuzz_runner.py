#!/usr/bin/env python3
# tools/fuzz_runner.py
#
# Decoder fuzzing for mkey.
#
# Generates three fuzz categories:
#   A) random bytes -> decode_scalar / decode_composite (strict and lenient)
#   B) valid keys with one byte flipped, dropped or inserted
#   C) valid keys truncated at every offset
#
# Contract checked: decoders either return a value or raise MKeyError.
# Anything else (IndexError, KeyError, ...) prints a repro and exits non-zero.
# A strict decode that succeeds must re-encode to the exact input bytes.

import os, sys, random, traceback
from typing import Any, Callable

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

import mkey
from mkey._cli import setup_logging

SEED = int(os.environ.get("MKEY_SEED", "4242"))
ROUNDS = int(os.environ.get("MKEY_FUZZ_ROUNDS", "5000"))

random.seed(SEED)
setup_logging()

def crash(label: str, buf: bytes) -> None:
    print("CRASH:", label)
    print("INPUT:", buf.hex())
    traceback.print_exc()
    raise SystemExit(1)

def probe(label: str, fn: Callable[[bytes], Any], buf: bytes) -> Any:
    try:
        return fn(buf)
    except mkey.MKeyError:
        return None
    except Exception:
        crash(label, buf)

# --- generators ---

INTERESTING = [0x00, 0x01, 0x35, 0x3E, 0x3F, 0x40, 0x41, 0x4A, 0x4B, 0x9A, 0x9B, 0xFE, 0xFF]

def rand_bytes() -> bytes:
    n = random.randint(0, 16)
    return bytes(random.choice(INTERESTING) if random.random() < 0.4
                 else random.getrandbits(8) for _ in range(n))

def rand_key() -> bytes:
    comps = []
    for _ in range(random.randint(1, 4)):
        if random.random() < 0.5:
            comps.append(random.randint(mkey.INT64_MIN, mkey.INT64_MAX) >> random.randint(0, 63))
        else:
            comps.append(mkey.Text("".join(chr(random.choice([0x00, 0x01, 0x61, 0xE9]))
                                           for _ in range(random.randint(0, 6)))))
    return mkey.encode_composite(comps)

def mutate(buf: bytes) -> bytes:
    b = bytearray(buf)
    op = random.randint(0, 2)
    i = random.randrange(len(b) + 1)
    if op == 0 and i < len(b):
        b[i] = random.getrandbits(8)
    elif op == 1 and i < len(b):
        del b[i]
    else:
        b.insert(i, random.choice(INTERESTING))
    return bytes(b)

def check(buf: bytes) -> None:
    probe("decode_scalar", mkey.decode_scalar, buf)
    probe("decode_scalar lenient", lambda x: mkey.decode_scalar(x, lenient=True), buf)
    probe("decode_composite lenient", lambda x: mkey.decode_composite(x, lenient=True), buf)
    key = probe("Composite.decode", mkey.Composite.decode, buf)
    if key is not None and key.encoded != buf:
        print("NON-CANONICAL ACCEPTED:", buf.hex(), "->", key.encoded.hex())
        raise SystemExit(1)

def main() -> int:
    for _ in range(ROUNDS):
        check(rand_bytes())
        valid = rand_key()
        check(valid)
        check(mutate(valid))
        for i in range(len(valid)):
            check(valid[:i])

    print(f"OK: fuzz passed for ROUNDS={ROUNDS} seed={SEED}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
