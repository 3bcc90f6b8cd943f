# SPDX-License-Identifier: Apache-2.0
"""
Golden vectors.

Computed independently of this package (OpenSSL SHA-512/256 + Ed25519 and
RFC 4648 base32), so they pin the wire format rather than the implementation.
"""

ZERO_SEED = bytes(32)
ZERO_SEED_MNEMONIC = " ".join(["abandon"] * 24 + ["invest"])
ZERO_SEED_PK = bytes.fromhex("3b6a27bcceb6a42d62a3a8d02a6f0d73653215771de243a63ac048a18b59da29")
ZERO_SEED_ADDR = "HNVCPPGOW2SC2YVDVDICU3YNONSTEFLXDXREHJR2YBEKDC2Z3IUZSC6YGI"
ZERO_PK_ADDR = "A" * 52 + "Y5HFKQ"

SHA512_256_EMPTY = bytes.fromhex("c672b8d1ef56ed28ab87c3622c5114069bdd3ad7b8f9737498d0c01ecef0967a")
SHA512_256_ZERO32 = bytes.fromhex("af13c048991224a5e4c664446b688aaf48fb5456db3629601b00ec160c74e554")

SENDER_SEED = bytes(range(32))
SENDER_PK = bytes.fromhex("03a107bff3ce10be1d70dd18e74bc09967e4d6309ba50d5f1ddc8664125531b8")
SENDER_ADDR = "AOQQPP7TZYIL4HLQ3UMOOS6ATFT6JVRQTOSQ2XY53SDGIESVGG4MPFYUMQ"
RECEIVER_PK = b"\x11" * 32
RECEIVER_ADDR = "CEIRCEIRCEIRCEIRCEIRCEIRCEIRCEIRCEIRCEIRCEIRCEIRCEI7JH2AYM"

# amount=1000, fee=10 (flat), first_round=51, last_round=61, sender derived.
GOLDEN_TXN_FIELDS = {
    "to": RECEIVER_ADDR,
    "amount": 1000,
    "fee": 10,
    "firstRound": 51,
    "lastRound": 61,
}
GOLDEN_TXN_BYTES = bytes.fromhex(
    "87a3616d74cd03e8a36665650aa2667633a26c763da3726376c420"
    + "11" * 32
    + "a3736e64c420"
    + SENDER_PK.hex()
    + "a474797065a3706179"
)
GOLDEN_RAW_TXID = bytes.fromhex("a945d47df3a3d083e69eb25743a23300135bbd0088d8233f60c5cbe48a6b7c74")
GOLDEN_TXID = "VFC5I7PTUPIIHZU6WJLUHIRTAAJVXPIARDMCGP3AYXF6JCTLPR2LYZMM3Y"
GOLDEN_SIG = bytes.fromhex(
    "af345b857c07c7bed525bd65529b087d1aea29ea3b9360bd7a11c25fb7be2ee0"
    "d7cf7fb3a1a6375b133e0e39bc7fb04dfcb5a31d32424880a65ca1e4042e4f0b"
)
GOLDEN_BLOB = (
    bytes.fromhex("82a3736967c440") + GOLDEN_SIG + bytes.fromhex("a374786e") + GOLDEN_TXN_BYTES
)
# Signed blob size used for per-byte fees: 7 + 64 + 4 + 106.
GOLDEN_SIGNED_SIZE = 181
