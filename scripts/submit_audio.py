"""Submit an audio file to a running proxy and save the transcript it returns.

Usage: python scripts/submit_audio.py path/to/audio.wav [response_format] [proxy_url]
"""
import asyncio
import os
import re
import sys

import httpx

DEFAULT_PROXY_URL = "http://127.0.0.1:8000/api/stt"
# Matches the proxy's own upper bound plus a little slack.
CLIENT_TIMEOUT_SECONDS = 12 * 60


def _filename_from_disposition(header: str | None) -> str | None:
    if not header:
        return None
    match = re.search(r'filename="([^"]+)"', header)
    return match.group(1) if match else None


async def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/submit_audio.py path/to/audio.wav [response_format] [proxy_url]")
        return

    file_path = sys.argv[1]
    response_format = sys.argv[2] if len(sys.argv) > 2 else "text"
    proxy_url = sys.argv[3] if len(sys.argv) > 3 else DEFAULT_PROXY_URL

    if not os.path.exists(file_path):
        print(f"File '{file_path}' not found.")
        return

    print(f"Uploading {file_path} to {proxy_url} (format={response_format})...")
    async with httpx.AsyncClient(timeout=CLIENT_TIMEOUT_SECONDS) as client:
        with open(file_path, "rb") as f:
            response = await client.post(
                proxy_url,
                data={"response_format": response_format},
                files={"file": (os.path.basename(file_path), f, "audio/wav")},
            )

    if response.status_code >= 400:
        print(f"Proxy returned {response.status_code}: {response.text}")
        return

    output_name = _filename_from_disposition(response.headers.get("content-disposition"))
    output_name = output_name or f"{os.path.splitext(os.path.basename(file_path))[0]}.txt"
    with open(output_name, "wb") as out:
        out.write(response.content)

    print(f"Saved transcript to {output_name} ({len(response.content)} bytes)")


if __name__ == "__main__":
    asyncio.run(main())
