#!/usr/bin/env python
"""
verify_service.py - Live verification of a running Fashion AI Stylist service

Walks the full user flow against a real server and a real model:
upload a photo, generate a look, rate it, read the statistics.

Usage:
    python scripts/verify_service.py --image shirt.jpg [--base-url http://localhost:8000]
"""
import sys
import argparse
import mimetypes
import requests
from pathlib import Path

DEFAULT_BASE_URL = "http://localhost:8000"


def print_result(test_name: str, passed: bool, details: str = ""):
    """Print test result."""
    status = "✅ PASS" if passed else "❌ FAIL"
    print(f"  {status}: {test_name}")
    if details and not passed:
        print(f"         → {details}")


def test_health(base_url: str) -> bool:
    try:
        r = requests.get(f"{base_url}/health", timeout=5)
        return r.status_code == 200
    except requests.RequestException as e:
        print(f"  Health check error: {e}")
        return False


def upload_item(base_url: str, image_path: Path) -> dict:
    """POST the photo to /api/clothing-classify and return the JSON body (or error)."""
    mime = mimetypes.guess_type(image_path.name)[0] or "image/jpeg"
    with open(image_path, "rb") as f:
        r = requests.post(
            f"{base_url}/api/clothing-classify",
            files={"image": (image_path.name, f, mime)},
            timeout=90,
        )
    if r.status_code != 201:
        return {"error": f"{r.status_code}: {r.text[:200]}"}
    return r.json()


def generate_look(base_url: str, occasion: str, season: str, city: str = None) -> dict:
    body = {"occasion": occasion, "season": season}
    if city:
        body["city"] = city
    r = requests.post(f"{base_url}/api/generate-look", json=body, timeout=90)
    if r.status_code != 201:
        return {"error": f"{r.status_code}: {r.text[:200]}"}
    return r.json()


def run_all_tests(base_url: str, image_path: Path, city: str = None) -> bool:
    """Run the end-to-end flow."""
    print("\n" + "=" * 60)
    print("FASHION AI STYLIST VERIFICATION")
    print("=" * 60 + "\n")

    print("[1] Testing /health endpoint...")
    health_ok = test_health(base_url)
    print_result("Health check", health_ok)
    if not health_ok:
        print("\n❌ Server not healthy. Aborting.\n")
        return False

    print()
    print(f"[2] Classifying {image_path.name}...")
    uploaded = upload_item(base_url, image_path)
    item = uploaded.get("item")
    print_result("Item stored", item is not None, uploaded.get("error", ""))
    if item is None:
        return False
    print(f"      type={item['type']}, colors={item['colors']}, styles={item['styles']}")

    print()
    print("[3] Generating a look...")
    look = generate_look(base_url, "Casual", "Verão", city)
    suggestion = look.get("suggestion")
    print_result("Suggestion created", suggestion is not None, look.get("error", ""))
    if suggestion is None:
        return False
    print(f"      {suggestion['title']}: {suggestion['items']}")
    print_result("Suggestion only references catalog items",
                 len(look["items"]) == len(suggestion["items"]))

    print()
    print("[4] Rating the look...")
    r = requests.post(
        f"{base_url}/api/feedback",
        json={"lookId": suggestion["id"], "rating": "approve", "comments": "verify_service"},
        timeout=10,
    )
    print_result("Feedback recorded", r.status_code == 201, r.text[:200])

    print()
    print("[5] Reading statistics...")
    stats = requests.get(f"{base_url}/api/stats", timeout=10).json()["stats"]
    stats_ok = stats["totalItems"] >= 1 and stats["totalFeedbacks"] >= 1
    print_result("Stats updated", stats_ok, str(stats))

    print()
    print("=" * 60)
    all_passed = r.status_code == 201 and stats_ok
    print("🎉 ALL CHECKS PASSED!" if all_passed else "⚠️  SOME CHECKS FAILED - Review above")
    print("=" * 60 + "\n")
    return all_passed


def main():
    parser = argparse.ArgumentParser(description="Fashion AI Stylist live verification")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Base URL of API")
    parser.add_argument("--image", required=True, type=Path, help="Clothing photo to upload")
    parser.add_argument("--city", default=None, help="City for weather context")
    args = parser.parse_args()

    if not args.image.exists():
        parser.error(f"Image not found: {args.image}")

    success = run_all_tests(args.base_url, args.image, args.city)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
