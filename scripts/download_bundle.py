#!/usr/bin/env python3
"""
Log in to a running ApparelCreative server and save an order's asset bundle.

Example:
    python scripts/download_bundle.py <order-id> \
        --server http://127.0.0.1:8000 \
        --email admin@apparelcreative.studio \
        --password admin123
"""

from __future__ import annotations

import argparse
import asyncio
import json
import re
import sys
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Any, Optional

from apparel_studio.core.config import get_settings
from apparel_studio.modules.bundles import FileArchiveDelivery

_FILENAME_STAR = re.compile(r"filename\*=UTF-8''([^;]+)", re.IGNORECASE)
_FILENAME = re.compile(r'filename="([^"]*)"', re.IGNORECASE)


def http_request(
    url: str,
    payload: Optional[dict[str, Any]] = None,
    headers: Optional[dict[str, str]] = None,
    timeout: int = 30,
) -> tuple[int, dict[str, str], bytes]:
    data = json.dumps(payload).encode("utf-8") if payload is not None else None
    req_headers = {"Content-Type": "application/json"} if data is not None else {}
    if headers:
        req_headers.update(headers)
    req = urllib.request.Request(url, data=data, headers=req_headers, method="POST" if data else "GET")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.status, dict(resp.headers.items()), resp.read()
    except urllib.error.HTTPError as exc:
        return exc.code, dict(exc.headers.items()), exc.read()


def filename_from_disposition(header: Optional[str], fallback: str) -> str:
    if header:
        match = _FILENAME_STAR.search(header)
        if match:
            return urllib.parse.unquote(match.group(1).strip())
        match = _FILENAME.search(header)
        if match and match.group(1):
            return match.group(1)
    return fallback


def login(server: str, email: str, password: str) -> str:
    url = server.rstrip("/") + "/api/auth/login"
    print(f"[api] login {url}")
    status, _, body = http_request(url, {"email": email, "password": password}, timeout=15)
    if status != 200:
        raise SystemExit(f"login failed: {status} {body.decode(errors='ignore')}")
    token = json.loads(body.decode("utf-8")).get("access_token")
    if not token:
        raise SystemExit("login response missing access_token")
    return token


def fetch_bundle(server: str, token: str, order_id: str, timeout: int) -> tuple[str, bytes]:
    url = f"{server.rstrip('/')}/api/orders/{urllib.parse.quote(order_id)}/bundle"
    print(f"[api] downloading bundle from {url}")
    status, headers, body = http_request(url, headers={"Authorization": f"Bearer {token}"}, timeout=timeout)
    if status != 200:
        raise SystemExit(f"download failed: {status} {body.decode(errors='ignore')}")
    disposition = next((value for key, value in headers.items() if key.lower() == "content-disposition"), None)
    return filename_from_disposition(disposition, f"{order_id}_Bundle.zip"), body


def main() -> None:
    parser = argparse.ArgumentParser(description="Download the zip bundle of an order")
    parser.add_argument("order_id", help="Order identifier")
    parser.add_argument("--server", default="http://127.0.0.1:8000", help="Server base URL")
    parser.add_argument("--email", default="admin@apparelcreative.studio", help="Login e-mail")
    parser.add_argument("--password", default="admin123", help="Login password")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Target directory (defaults to the configured bundle output_dir)",
    )
    parser.add_argument("--timeout", type=int, default=300, help="Download timeout in seconds")
    args = parser.parse_args()

    output_dir = args.output_dir or get_settings().bundle.output_dir
    token = login(args.server, args.email, args.password)
    filename, data = fetch_bundle(args.server, token, args.order_id, args.timeout)

    path = asyncio.run(FileArchiveDelivery(output_dir).deliver(data, filename))
    print(f"[done] saved {len(data)} bytes to {path}")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit("aborted by user")
