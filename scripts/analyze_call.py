#!/usr/bin/env python3
"""Analyze a Gong call against a running Transcript Analyzer backend.

Usage:
    python scripts/analyze_call.py --call-id 1234567890
    python scripts/analyze_call.py --transcript-file notes.txt

Fetches the call transcript (unless a file is given), posts it to
/api/analyze-transcript and prints the analysis as it streams in.
"""

import argparse
import asyncio
import sys

import httpx

from transcript_analyzer.client import AnalysisRequestError, error_message, stream_analysis


async def fetch_transcript(client: httpx.AsyncClient, call_id: str) -> str:
    resp = await client.get("/api/gong/transcript", params={"callId": call_id})
    if resp.status_code != 200:
        print(f"ERROR: {error_message(resp)}")
        sys.exit(1)
    return resp.json()["transcript"]


async def main(args: argparse.Namespace) -> None:
    async with httpx.AsyncClient(base_url=args.base_url, timeout=args.timeout) as client:
        if args.transcript_file:
            with open(args.transcript_file, encoding="utf-8") as f:
                transcript = f.read()
        else:
            print(f"Fetching transcript for call {args.call_id}...")
            transcript = await fetch_transcript(client, args.call_id)

        shown = ""

        def show(display: str) -> None:
            nonlocal shown
            # The display only grows, unless an error replaced it
            if display.startswith(shown):
                sys.stdout.write(display[len(shown):])
            else:
                sys.stdout.write("\n" + display)
            sys.stdout.flush()
            shown = display

        try:
            await stream_analysis(client, transcript, on_update=show)
        except AnalysisRequestError as e:
            print(f"ERROR ({e.status_code}): {e.message}")
            sys.exit(1)
        print()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--call-id", help="Gong call id")
    source.add_argument("--transcript-file", help="Analyze a local transcript instead")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--timeout", type=float, default=300.0)
    asyncio.run(main(parser.parse_args()))
