"""
login_load.py — simple async load script for register + login

Registers N fresh users, logs each one in, then hits a protected endpoint with
the returned token. Useful for eyeballing bcrypt cost vs throughput.

Usage:
  python login_load.py --base http://127.0.0.1:3000 --count 200 --concurrency 20
"""
import argparse
import asyncio
import secrets
import time
from datetime import datetime, timezone

import httpx

def _now_iso():
    return datetime.now(timezone.utc).isoformat()

async def _one_user(client: httpx.AsyncClient, base: str, run_id: str, idx: int) -> bool:
    creds = {"username": f"load-{run_id}-{idx}", "password": secrets.token_urlsafe(12)}
    try:
        r = await client.post(f"{base}/register", json=creds, timeout=30)
        r.raise_for_status()
        r = await client.post(f"{base}/login", json=creds, timeout=30)
        r.raise_for_status()
        token = r.json()["token"]
        r = await client.get(f"{base}/me", headers={"Authorization": f"Bearer {token}"}, timeout=10)
        r.raise_for_status()
        return r.json().get("username") == creds["username"]
    except (httpx.HTTPError, KeyError, ValueError):
        return False

async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://127.0.0.1:3000")
    parser.add_argument("--count", type=int, default=200)
    parser.add_argument("--concurrency", type=int, default=20)
    args = parser.parse_args()

    run_id = secrets.token_hex(4)
    start_iso = _now_iso()
    t0 = time.perf_counter()
    success = 0

    limit = httpx.Limits(max_connections=args.concurrency, max_keepalive_connections=args.concurrency)
    async with httpx.AsyncClient(limits=limit) as client:
        sem = asyncio.Semaphore(args.concurrency)

        async def _task(i):
            nonlocal success
            async with sem:
                if await _one_user(client, args.base, run_id, i):
                    success += 1

        await asyncio.gather(*(_task(i) for i in range(args.count)))

    dt = time.perf_counter() - t0
    end_iso = _now_iso()
    print(f"START: {start_iso}")
    print(f"END:   {end_iso}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"OPS:   users={args.count}, ok={success}, fail={args.count - success}")
    if dt > 0:
        print(f"UPS:   {success/dt:.1f} users/s (register+login+me)")

if __name__ == "__main__":
    asyncio.run(main())
