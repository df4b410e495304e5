#!/usr/bin/env python3
"""
Smoke check against a running mock server (python app.py)
"""
import re
import sys
import time

import requests

from mock_hls.config import BASE_PATH, PLAYLIST_FILENAME, PORT, TARGET_SEGMENT_LENGTH, VARIANT_FILENAME

API_URL = f"http://localhost:{PORT}"
STREAM_URL = f"{API_URL}/{BASE_PATH}"

MEDIA_SEQUENCE_RE = re.compile(r"#EXT-X-MEDIA-SEQUENCE:(\d+)")


def media_sequence(playlist):
    match = MEDIA_SEQUENCE_RE.search(playlist)
    return int(match.group(1)) if match else None


def check_master():
    print("🔍 Master playlist...")
    try:
        response = requests.get(f"{STREAM_URL}/{PLAYLIST_FILENAME}", timeout=5)
    except requests.exceptions.ConnectionError:
        print("❌ Server unavailable")
        print("   Start it with: python app.py")
        return False
    print(f"   {response.status_code} {response.headers.get('Content-Type')}")
    return response.status_code == 200 and VARIANT_FILENAME in response.text


def check_variant():
    print("\n🔍 Variant playlist...")
    first = requests.get(f"{STREAM_URL}/{VARIANT_FILENAME}", timeout=5).text
    delta = requests.get(f"{STREAM_URL}/{VARIANT_FILENAME}", params={"_HLS_skip": "YES"}, timeout=5).text
    print(f"   full: {first.count('#EXTINF')} segments, media sequence {media_sequence(first)}")
    print(f"   delta: {delta.count('#EXTINF')} segments, {delta.count('#EXT-X-SKIP')} skip tag")

    print(f"   waiting {TARGET_SEGMENT_LENGTH + 1}s for the next update...")
    time.sleep(TARGET_SEGMENT_LENGTH + 1)
    second = requests.get(f"{STREAM_URL}/{VARIANT_FILENAME}", timeout=5).text
    before, after = media_sequence(first), media_sequence(second)
    print(f"   media sequence {before} -> {after}")
    return before is not None and after is not None and after > before


def check_segment():
    print("\n🔍 Segment...")
    response = requests.get(f"{STREAM_URL}/segments/0.ts", timeout=5)
    print(f"   {response.status_code} {response.headers.get('Content-Type')} {len(response.content)} bytes")
    return response.status_code == 200


def main():
    print("="*60)
    print("📺 Mock HLS server check")
    print("="*60 + "\n")

    if not check_master():
        sys.exit(1)

    results = [check_variant(), check_segment()]
    print("\n" + ("✅ All checks passed" if all(results) else "❌ Some checks failed"))
    sys.exit(0 if all(results) else 1)


if __name__ == "__main__":
    main()
