#!/usr/bin/env python3
"""
Smoke check for a running order ledger.

Places one order for a known user and one for an unknown user, then checks
that the ledger answered 201 and 404 with the expected envelopes.
"""

import os
import sys
from typing import Any, Dict, List

import requests

KNOWN_ORDER = {"userId": "1", "product": "Laptop", "quantity": 1, "total": 999}
UNKNOWN_ORDER = {"userId": "999", "product": "Laptop", "quantity": 1, "total": 999}


class OrderSmokeTester:
    def __init__(self, order_service_url: str = "http://localhost:4000", timeout: float = 5.0):
        self.base_url = order_service_url.rstrip("/")
        self.timeout = timeout
        self.failures: List[str] = []

    def check_health(self) -> bool:
        try:
            response = requests.get(f"{self.base_url}/health", timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.failures.append(f"health check failed: {e}")
            return False
        if response.status_code != 200:
            self.failures.append(f"health check returned {response.status_code}")
            return False
        print(f"✅ Order service health: {response.json().get('status', 'unknown')}")
        return True

    def place_order(self, payload: Dict[str, Any]) -> requests.Response:
        return requests.post(f"{self.base_url}/orders", json=payload, timeout=self.timeout)

    def check_known_user(self) -> bool:
        response = self.place_order(KNOWN_ORDER)
        body = response.json()
        data = body.get("data") or {}
        if response.status_code != 201 or not body.get("success") or data.get("userId") != KNOWN_ORDER["userId"]:
            self.failures.append(f"known user: expected 201, got {response.status_code} {body}")
            return False
        print(f"✅ Order {data.get('id')} created for user {data['userId']}")
        return True

    def check_unknown_user(self) -> bool:
        response = self.place_order(UNKNOWN_ORDER)
        body = response.json()
        if response.status_code != 404 or body != {"success": False, "error": "User not found"}:
            self.failures.append(f"unknown user: expected 404, got {response.status_code} {body}")
            return False
        print("✅ Order for unknown user rejected with 404")
        return True

    def run(self) -> bool:
        if not self.check_health():
            return False
        try:
            results = [self.check_known_user(), self.check_unknown_user()]
        except (requests.exceptions.RequestException, ValueError) as e:
            self.failures.append(f"order request failed: {e}")
            return False
        return all(results)


def main(argv: List[str] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    url = argv[0] if argv else os.getenv("ORDER_SERVICE_URL", "http://localhost:4000")

    print(f"🔧 Smoke testing order service at {url}")
    tester = OrderSmokeTester(url)
    if tester.run():
        print("🎉 Smoke test PASSED")
        return 0

    for failure in tester.failures:
        print(f"❌ {failure}")
    print("⚠️  Smoke test FAILED")
    return 1


if __name__ == "__main__":
    sys.exit(main())
