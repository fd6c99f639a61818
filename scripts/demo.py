#!/usr/bin/env python3
"""
Demo script for the voice commands client.

This script sends a few example commands to the report backend, shows the
cache at work, prints the history and saves a PDF of the first report.
Pass --voice to dictate one command through the microphone.
"""

import argparse
import asyncio
import time

from voice_commands.catalog import EXAMPLES, report_name
from voice_commands.repositories import HttpCommandGateway, JsonFileSessionStore
from voice_commands.services import CommandInput, CommandPipeline, SpeechCapture, session
from voice_commands.utils import (
    format_confidence,
    format_processing_time,
    status_display,
    truncate_text,
)


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def print_outcome(command: str, pipeline: CommandPipeline) -> None:
    result = pipeline.result
    print(f"\n  Command: {command}")
    if result is not None:
        report_info = (result.result_data or {}).get("report_info") or {}
        report_type = report_info.get("type")
        print(f"  ✓ {report_name(report_type)}")
        print(f"  Confidence: {format_confidence(result.confidence_score or 0.0)}")
        print(f"  Time: {format_processing_time(result.processing_time_ms or 0)}")
    elif pipeline.error:
        print(f"  ✗ {pipeline.error}")
        for suggestion in pipeline.suggestions:
            print(f"    → {suggestion.name}: {suggestion.description or ''}")


async def demo_commands(pipeline: CommandPipeline) -> int | None:
    """Process one example per category and return the first report id."""
    print_section("Example Commands")

    first_id = None
    for examples in EXAMPLES.values():
        command = examples[0]
        outcome = await pipeline.process(command)
        print_outcome(command, pipeline)
        if outcome.success and first_id is None and outcome.data is not None:
            first_id = outcome.data.id
    return first_id


async def demo_cache(pipeline: CommandPipeline) -> None:
    """Show that repeating a command is answered from the cache."""
    print_section("Command Cache")

    command = EXAMPLES["basic"][0]
    for attempt in ("first", "repeat"):
        start = time.time()
        outcome = await pipeline.process(f"  {command.upper()}  ")
        duration = (time.time() - start) * 1000
        source = "cache" if outcome.from_cache else "backend"
        print(f"  {attempt:<7} {source:<8} {duration:.2f}ms")

    print(f"\n  Stats: {pipeline.cache.get_stats()}")


async def demo_history(pipeline: CommandPipeline) -> None:
    print_section("History")

    response = await pipeline.fetch_history()
    if not response.success:
        print(f"  ✗ {response.error}")
        return
    for entry in pipeline.history[:10]:
        print(f"  {status_display(entry.status):<16} {truncate_text(entry.command_text, 50)}")


async def demo_download(pipeline: CommandPipeline, command_id: int) -> None:
    print_section("Download")

    outcome = await pipeline.download_as("pdf", command_id)
    if outcome.success:
        print(f"  ✓ Saved {outcome.filename} to {outcome.path}")
    else:
        print(f"  ✗ {outcome.error}")


async def demo_voice(pipeline: CommandPipeline) -> None:
    """Dictate one command; it is submitted when the recognizer finishes."""
    print_section("Voice Command")

    with SpeechCapture.create() as capture:
        command_input = CommandInput(pipeline=pipeline, capture=capture)
        if not capture.is_supported:
            print("  ✗ No microphone available")
            return

        print("  🎤 Speak now...")
        command_input.toggle_voice()
        while capture.is_listening:
            await asyncio.sleep(0.1)

        if capture.error:
            print(f"  ✗ {capture.error}")
            return

        for task in command_input.pending_tasks:
            await task
        print_outcome(command_input.text, pipeline)
        command_input.close()


async def run(voice: bool, token: str | None) -> None:
    store = JsonFileSessionStore.create()
    if token:
        session.login(store, token)
    if not session.is_authenticated(store):
        print("⚠️  No auth token stored; pass --token or the backend may reject requests.")

    gateway = HttpCommandGateway.create(session_store=store)
    pipeline = CommandPipeline.create(gateway=gateway)
    try:
        first_id = await demo_commands(pipeline)
        await demo_cache(pipeline)
        await demo_history(pipeline)
        if first_id is not None:
            await demo_download(pipeline, first_id)
        if voice:
            await demo_voice(pipeline)
    finally:
        await gateway.close()


def main() -> None:
    """Run all demos."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--voice", action="store_true", help="dictate one command")
    parser.add_argument("--token", help="backend auth token to store in the session file")
    args = parser.parse_args()

    print("\n🚀 Voice Commands Demo")
    print("=" * 70)

    try:
        asyncio.run(run(args.voice, args.token))

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure the report backend is running and VOICE_API_URL points to it.")


if __name__ == "__main__":
    main()
