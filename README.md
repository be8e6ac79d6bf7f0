# thresholdkit

Building blocks for threshold cryptography, in pure Python:

- `thresholdkit.groups`: a prime-order elliptic-curve group. `GroupElement`
  (written additively, with `generator()`, `zero()`, `hash_to_group_element()`,
  `to_bytes()` / `from_bytes()`) and its scalar field `Scalar` (with `rand()`,
  `hash_to_scalar()`, `inverse()`, `to_bytes()` / `from_bytes()`). Two group
  elements can be paired with `a @ b`. Malformed encodings raise `GroupError`.
- `thresholdkit.types`: `IndexedValue` (a value tagged with a share index) and
  `share_index()`, which accepts only integers in 1..2**32-1.
- `thresholdkit.random_oracle`: `RandomOracle`, a domain-separated oracle on
  SHA3-512, with `evaluate()` and `extend()`, and the deterministic
  `serialize()` encoding it hashes.
- `thresholdkit.polynomial`: `Poly`, a secret-sharing polynomial with `rand()`,
  `eval()`, `commit()`, `add()`, `degree()`, `c0()`, `is_valid_share()` and
  Lagrange recovery of the constant term with `recover_c0()`.
- `thresholdkit.tbls`: `ThresholdBls` with `sign()`, `verify()`,
  `partial_sign()`, `partial_verify()` and `aggregate()`. Failed checks raise
  `InvalidSignatureError`.
- `thresholdkit.ecies`: ECIES with AES-256-CTR (`PrivateKey`, `PublicKey`,
  `Encryption`) and recovery packages (`RecoveryPackage`). A recovery package
  lets anyone decrypt one given ciphertext and carries a proof (`DdhTupleNizk`)
  that it is correct. A proof that does not hold raises `InvalidProofError`.
- `thresholdkit.dkg`: a distributed key generation protocol between `Party`
  instances. Parties exchange `FirstMessage` and `SecondMessage` values, may
  file `NoShareComplaint` or `InvalidShareComplaint` against a dealer, and each
  ends with a `DkgOutput`. Invalid input raises `DkgError`.

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install .[test]
```

## Command line

The `encode-cli` command converts a value between base64 and hex:

```
encode-cli base64-to-hex --value SGVsbG8=
encode-cli hex-to-base64 --value 48656c6c6f
```

It prints the decoded bytes and the other encoding. When the input cannot be
decoded, it prints an error and exits with status 65.

## Threshold signatures

```python
import random

from thresholdkit.groups import GroupElement
from thresholdkit.polynomial import Poly
from thresholdkit.tbls import ThresholdBls

rng = random.SystemRandom()
t = 3
private_poly = Poly.rand(t - 1, rng)
public_poly = private_poly.commit(GroupElement)

shares = [private_poly.eval(i) for i in (1, 10, 100)]
partials = [ThresholdBls.partial_sign(s, b"message") for s in shares]
for p in partials:
    ThresholdBls.partial_verify(public_poly, b"message", p)

signature = ThresholdBls.aggregate(t, partials)
ThresholdBls.verify(public_poly.c0(), b"message", signature)
assert signature == ThresholdBls.sign(private_poly.c0(), b"message")
```

`aggregate` needs exactly `t` partial signatures with distinct indices.

## Distributed key generation

```python
import random

from thresholdkit.dkg import Party, PkiNode
from thresholdkit.ecies import PrivateKey, PublicKey
from thresholdkit.random_oracle import RandomOracle

rng = random.SystemRandom()
keys = [PrivateKey.new(rng=rng) for _ in range(4)]
nodes = [PkiNode(i + 1, PublicKey.from_private_key(sk)) for i, sk in enumerate(keys)]
parties = [Party(sk, nodes, 2, RandomOracle("dkg"), rng) for sk in keys]

first = [parties[0].create_first_message(rng), parties[1].create_first_message(rng)]
results = [p.create_second_message(first, rng) for p in parties]
second = [message for _, message in results]
outputs = [
    p.aggregate(first, p.process_responses(first, second, shares, 3))
    for p, (shares, _) in zip(parties, results)
]
```

Each party processes exactly `threshold` first messages. `process_responses`
drops the shares of dealers that were validly accused, and ignores accusers
whose complaints do not hold.

## What this package does not do

- The group is a supersingular curve y^2 = x^3 + x with a symmetric pairing,
  implemented with plain integers. It is not BLS12-381, so keys and signatures
  do not interoperate with other BLS implementations. It is also slow and is
  not written to resist timing attacks.
- There is no command for generating keys or for signing and verifying with
  Ed25519, secp256k1, secp256r1 or BLS. The only command is `encode-cli`.
- DKG messages have no wire format and no network transport. Parties exchange
  the Python objects, and delivering them is up to the caller.