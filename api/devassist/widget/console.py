"""
Terminal front-end for the chat widget.

Usage:
    devassist-widget --map css=style.css --map layout=index.html
    devassist-widget --api-base http://localhost:3000 --system-prompt "Be brief."

Commands typed at the prompt:
    /toggle   minimize or expand the panel
    /quit     exit
"""

import argparse
import asyncio
import logging

from devassist.widget.controller import ChatWidget, WidgetConfig
from devassist.widget.session import ChatMessage

logger = logging.getLogger(__name__)

PROMPT = "Ask about this project... > "


def parse_file_map(entries: list[str]) -> dict[str, str]:
    """Turn ``KEYWORD=FILENAME`` entries into an ordered file map."""
    file_map: dict[str, str] = {}
    for entry in entries:
        keyword, sep, filename = entry.partition("=")
        if not sep or not keyword or not filename:
            raise argparse.ArgumentTypeError(
                f"Invalid --map entry {entry!r}; expected KEYWORD=FILENAME"
            )
        file_map[keyword] = filename
    return file_map


def render(message: ChatMessage) -> str:
    return f"{message.label}: {message.text}"


async def run_console(widget: ChatWidget) -> None:
    session = widget.session
    shown = 0
    try:
        while True:
            line = await asyncio.to_thread(input, PROMPT)
            command = line.strip()
            if command == "/quit":
                break
            if command == "/toggle":
                state = "minimized" if session.toggle() else "expanded"
                print(f"[panel {state}]")
            else:
                session.draft = line
                await widget.submit_turn(line)

            if not session.minimized:
                for message in session.transcript[shown:]:
                    print(render(message))
                shown = len(session.transcript)
    except (EOFError, KeyboardInterrupt):
        print()
    finally:
        await widget.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Chat with the DevAssist relay")
    parser.add_argument("--api-base", default=WidgetConfig().api_base)
    parser.add_argument(
        "--map",
        action="append",
        default=[],
        metavar="KEYWORD=FILENAME",
        help="Attach FILENAME whenever KEYWORD appears in a message",
    )
    parser.add_argument("--system-prompt", default=WidgetConfig().system_prompt)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(message)s")

    try:
        file_map = parse_file_map(args.map)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    config = WidgetConfig(
        api_base=args.api_base,
        file_map=file_map,
        system_prompt=args.system_prompt,
    )
    asyncio.run(run_console(ChatWidget(config)))


if __name__ == "__main__":
    main()
