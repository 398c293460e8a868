#!/usr/bin/env python
"""
Smoke test of a running server: python scripts/smoke_http.py [base_url]
Restores the rates it changed before exiting.
"""
import sys

import requests

BASE_URL = (sys.argv[1] if len(sys.argv) > 1 else "http://127.0.0.1:3000").rstrip("/")
API = f"{BASE_URL}/api"


def check(title, ok, detail=""):
    icon = "✓" if ok else "✗"
    print(f"  {icon} {title} {detail}")
    return ok


def main():
    results = []

    resp = requests.get(f"{API}/health", timeout=5)
    results.append(check("GET /api/health", resp.status_code == 200, f"[{resp.status_code}]"))

    resp = requests.get(f"{API}/bonus-rates", timeout=5)
    original = resp.json() if resp.status_code == 200 else {}
    results.append(check("GET /api/bonus-rates", resp.status_code == 200, str(original)))

    if original:
        name = next(iter(original))
        new_rate = original[name] * 2
        resp = requests.post(f"{API}/bonus-rates", json={"rates": {name: new_rate}}, timeout=5)
        results.append(check("POST /api/bonus-rates", resp.status_code == 200, resp.text))

        after = requests.get(f"{API}/bonus-rates", timeout=5).json()
        results.append(check(f"{name} updated", after.get(name) == new_rate, str(after.get(name))))

        requests.post(f"{API}/bonus-rates", json={"rates": original}, timeout=5)

    resp = requests.post(f"{API}/bonus-rates", json={"rates": None}, timeout=5)
    results.append(check("POST invalid rates -> 400", resp.status_code == 400, f"[{resp.status_code}]"))

    print(f"\nPassed: {sum(results)}/{len(results)}")
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
