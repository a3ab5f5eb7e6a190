"""
Fair Engine - Provably fair outcome engine for casino mini-games.

A commit-reveal randomness engine that lets players verify every result:
- Server seed committed by SHA-256 hash before any play
- Outcomes derived from HMAC-SHA256(server_seed, client_seed:nonce:block)
- Unbiased extraction of numbers, slot reels and shuffled decks
- Independent verification from the revealed inputs
- Session lifecycle with monotonic nonces and expiry
"""

__version__ = "0.1.0"
