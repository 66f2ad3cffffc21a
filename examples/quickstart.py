"""pwtoken Quickstart — hash once, verify forever."""

import asyncio

from pwtoken import (
    hash_password,
    hash_password_async,
    inspect_token,
    verify_password,
    verify_password_async,
)

# 1. Hash with the defaults (612484 rounds of PBKDF2-HMAC-SHA512)
token = hash_password("correct horse battery staple")
print(f"token: {token}")

# 2. Verify; the token carries its own salt, rounds and digest
print(f"match:    {verify_password('correct horse battery staple', token)}")
print(f"mismatch: {verify_password('Tr0ub4dor&3', token)}")

# 3. Override any subset of the parameters
fast = hash_password("hunter2", iterations=100_000, digest="sha256")
print("\n--- Token parameters ---")
print(inspect_token(fast))


# 4. Async callers keep the event loop free
async def main() -> None:
    t = await hash_password_async("hunter2", iterations=100_000)
    print(f"\nasync match: {await verify_password_async('hunter2', t)}")


asyncio.run(main())
