"""
Smoke script that exercises the CRUD endpoints of a running server.

Usage:
  python scripts/smoke_api.py [BASE_URL] [TOKEN]

Defaults to http://localhost:8000 and the seeded token ``test_token_alice``.
"""

import json
import os
import sys

import requests

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")
TOKEN = os.getenv("API_TOKEN", "test_token_alice")


def check(response: requests.Response, expected: int, label: str) -> dict:
    ok = response.status_code == expected
    print(f"{'✅' if ok else '❌'} {label}: {response.status_code} (expected {expected})")
    if not ok:
        print(f"   {response.text}")
    try:
        return response.json()
    except ValueError:
        return {}


def run(base_url: str, token: str) -> bool:
    headers = {"Authorization": f"Bearer {token}"}
    api = f"{base_url}/api"
    results = []

    print("🧪 Testing Wellness Tracker API")
    print(f"Backend URL: {base_url}")
    print("-" * 60)

    r = requests.get(f"{base_url}/health", timeout=10)
    results.append(r.status_code == 200)
    check(r, 200, "Health")

    r = requests.get(f"{api}/tasks", timeout=10)
    results.append(r.status_code == 401)
    check(r, 401, "Tasks without token")

    r = requests.post(
        f"{api}/tasks",
        json={"title": "Meditate", "status": "pending", "priority": "high"},
        headers=headers,
        timeout=10,
    )
    results.append(r.status_code == 201)
    task = check(r, 201, "Create task")

    if task.get("id"):
        r = requests.get(f"{api}/tasks", params={"id": task["id"]}, headers=headers, timeout=10)
        results.append(r.status_code == 200 and r.json() == task)
        check(r, 200, "Fetch task by id")

        r = requests.put(
            f"{api}/tasks", params={"id": task["id"]}, json={"status": "completed"}, headers=headers, timeout=10
        )
        results.append(r.status_code == 200)
        check(r, 200, "Complete task")

        r = requests.delete(f"{api}/tasks", params={"id": task["id"]}, headers=headers, timeout=10)
        results.append(r.status_code == 200)
        check(r, 200, "Delete task")

    r = requests.post(
        f"{api}/mood-tracking", json={"moodValue": 11, "moodLabel": "happy"}, headers=headers, timeout=10
    )
    results.append(r.status_code == 400)
    print(f"   {json.dumps(check(r, 400, 'Reject moodValue 11'))}")

    r = requests.post(f"{api}/chat-companion", json={"message": "I feel anxious today"}, headers=headers, timeout=10)
    results.append(r.status_code == 201)
    reply = check(r, 201, "Companion reply")
    if reply:
        print(f"   🤖 {reply['assistantMessage']['message']}")

    r = requests.get(f"{api}/dashboard/stats", headers=headers, timeout=10)
    results.append(r.status_code == 200)
    check(r, 200, "Dashboard stats")

    print("-" * 60)
    print(f"{sum(results)}/{len(results)} checks passed")
    return all(results)


if __name__ == "__main__":
    base = sys.argv[1] if len(sys.argv) > 1 else BACKEND_URL
    token = sys.argv[2] if len(sys.argv) > 2 else TOKEN
    sys.exit(0 if run(base.rstrip("/"), token) else 1)
