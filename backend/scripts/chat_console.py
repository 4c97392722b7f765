"""Interactive console for the store assistant against a live backend.

Drives the same StoreAssistant the HTTP surface uses, so the whole flow can
be tried from a terminal: send messages, attach invoices or prescriptions,
press follow-up buttons and clear the conversation.

Commands:
  /attach <path>   upload and stage an image or PDF for the next message
  /remove <id>     unstage a document
  /action <n>      press follow-up button number n
  /clear           clear the conversation
  /quit            exit

Requires:
  - The package installed (pip install -e .)
  - Store-manager backend reachable at API_BASE_URL (or --base-url)
  - API_TOKEN set in .env when the backend requires auth

Usage:
  python backend/scripts/chat_console.py
  python backend/scripts/chat_console.py --base-url http://localhost:5000/api/store-manager
  python backend/scripts/chat_console.py --ask "Show me low stock medicines"
"""

import argparse
import asyncio
import logging
import mimetypes
from pathlib import Path

from store_assistant.core.api_client import AssistantAPIClient
from store_assistant.core.errors import AttachmentError
from store_assistant.schemas.attachments import LocalFile
from store_assistant.schemas.turns import Turn
from store_assistant.services.assistant import StoreAssistant

INFO = "[INFO]"
WARN = "[WARN]"


def section(title: str):
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


def print_turn(turn: Turn):
    who = "You" if turn.author == "user" else "Assistant"
    prefix = "!" if turn.is_error else " "
    print(f"\n{prefix} {who}: {turn.content}")
    for suggestion in turn.suggestions:
        print(f"    - {suggestion}")


def print_actions(assistant: StoreAssistant):
    pending = assistant.session.pending_confirmation
    if pending:
        print(f"\n  {WARN} Awaiting confirmation for {pending.target_description}")
        if pending.warning:
            print(f"  {WARN} {pending.warning}")
    for i, proposal in enumerate(assistant.available_actions(), 1):
        print(f"  [{i}] {proposal.label}")


def print_status(assistant: StoreAssistant):
    staged = ", ".join(f"{a.name} ({a.id})" for a in assistant.session.attachments)
    line = f"  {INFO} {assistant.session.connection_state.value}"
    if staged:
        line += f" | staged: {staged}"
    print(line)


def read_local_file(path: str) -> LocalFile:
    file_path = Path(path).expanduser()
    mime_type, _ = mimetypes.guess_type(file_path.name)
    return LocalFile(
        name=file_path.name,
        mime_type=mime_type or "application/octet-stream",
        content=file_path.read_bytes(),
    )


async def handle_command(assistant: StoreAssistant, line: str) -> list[Turn]:
    command, _, arg = line.partition(" ")
    arg = arg.strip()

    if command == "/attach":
        before = len(assistant.session.turns)
        try:
            attachment = await assistant.attach(read_local_file(arg))
        except (AttachmentError, OSError) as exc:
            print(f"  {WARN} {exc}")
            return []
        if attachment is not None:
            print(f"  {INFO} Staged {attachment.name} as {attachment.id}")
        return list(assistant.session.turns[before:])

    if command == "/remove":
        try:
            removed = assistant.remove_attachment(arg)
        except KeyError:
            print(f"  {WARN} No staged document {arg!r}")
            return []
        print(f"  {INFO} Removed {removed.name}")
        return []

    if command == "/action":
        actions = assistant.available_actions()
        try:
            proposal = actions[int(arg) - 1]
        except (ValueError, IndexError):
            print(f"  {WARN} Pick a number between 1 and {len(actions)}")
            return []
        return await assistant.choose_action(proposal)

    if command == "/clear":
        await assistant.clear_conversation()
        return [assistant.session.turns[-1]]

    print(f"  {WARN} Unknown command {command}")
    return []


async def run(args):
    client = AssistantAPIClient(base_url=args.base_url) if args.base_url else None
    assistant = StoreAssistant(client=client)

    section("ShelfCure Store Assistant")
    print_turn(assistant.session.turns[0])
    print("\n  Try one of:")
    for entry in assistant.quick_start():
        print(f"    {entry.title}: {entry.query}")

    pending_input = [args.ask] if args.ask else []

    try:
        while True:
            print_status(assistant)
            if pending_input:
                line = pending_input.pop()
                print(f"> {line}")
            else:
                try:
                    line = input("> ").strip()
                except EOFError:
                    break
            if not line:
                continue
            if line == "/quit":
                break

            try:
                if line.startswith("/"):
                    new_turns = await handle_command(assistant, line)
                else:
                    new_turns = await assistant.send_message(line)
            except ValueError as exc:
                print(f"  {WARN} {exc}")
                continue

            for turn in new_turns:
                print_turn(turn)
            print_actions(assistant)
    finally:
        await assistant.aclose()


def main():
    parser = argparse.ArgumentParser(description="Chat with the store assistant from a terminal")
    parser.add_argument(
        "--base-url", default=None,
        help="Store-manager API base URL (default: from settings)",
    )
    parser.add_argument(
        "--ask", default=None,
        help="Send this message first, then continue interactively",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log debug output from the assistant",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
