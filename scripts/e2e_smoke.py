from __future__ import annotations

import os

import httpx


def main() -> int:
    base = os.getenv("API_BASE", "http://localhost:3001")
    ok = True
    with httpx.Client(timeout=5.0) as client:
        for u in (f"{base}/healthz", f"{base}/readyz"):
            try:
                r = client.get(u)
                print(u, r.status_code)
                if r.status_code != 200:
                    ok = False
            except Exception as e:
                print(u, "ERROR", e)
                ok = False
        records = [
            {"subject": "A", "label": "x", "confidence": 0.8},
            {"subject": "B", "label": "y", "confidence": 0.3},
        ]
        for rec in records:
            try:
                r = client.post(f"{base}/api/record", json=rec)
                print("record", r.status_code, r.json().get("block", {}).get("digest"))
                ok = ok and r.status_code == 200
            except Exception as e:
                print("record", "ERROR", e)
                ok = False
        try:
            r = client.get(f"{base}/api/chain/verify")
            print("verify", r.status_code, r.json())
            ok = ok and r.status_code == 200 and r.json().get("valid") is True
        except Exception as e:
            print("verify", "ERROR", e)
            ok = False
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
