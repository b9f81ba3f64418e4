"""
Command-line interface for ilrbrowse.
"""
import os
import sys
import shlex
import argparse
import logging
import asyncio
from datetime import datetime
from typing import List, Optional

import tqdm

from ilrbrowse.config import Config, load_config
from ilrbrowse.core.loader import DatasetLoader
from ilrbrowse.core.notify import ConsoleNotifier
from ilrbrowse.core.preferences import Preferences
from ilrbrowse.core.search import ALL_LEVELS_LABEL, category_label
from ilrbrowse.core.session import BrowserSession, PageView, language_label
from ilrbrowse.formatters.html import HtmlRenderer
from ilrbrowse.formatters.text import TextRenderer

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

INTERACTIVE_HELP = """Commands:
  lang <key>      load a language
  q <text>        set the topic query (applied after a short pause)
  level [value]   filter by ILR level; no value shows all levels
  search          apply the current query now
  next / prev     change page
  levels          list ILR levels of the loaded language
  save <id>       save an article for later
  html <file>     write the current page as HTML
  dark            toggle dark mode
  help            show this message
  quit            exit"""


def parse_args(argv: Optional[List[str]] = None):
    """
    Parse command-line arguments.
    
    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="ILR Article Browser - filter and page through article datasets")
    parser.add_argument("--config", help="Path to a YAML or JSON config file")
    parser.add_argument("--manifest", help="Path or URL of the language manifest (available_files.json)")
    parser.add_argument("--list-languages", action="store_true", help="List languages in the manifest and exit")
    parser.add_argument("--language", help="Language to load")
    parser.add_argument("--query", default="", help="Topic to search for")
    parser.add_argument("--level", default="", help="ILR level to filter by")
    parser.add_argument("--page", type=int, default=1, help="Page of results to show")
    parser.add_argument("--format", choices=["text", "html"], default="text", help="Output format")
    parser.add_argument("--output", help="Write the page to this file instead of stdout")
    parser.add_argument("--dark-mode", choices=["on", "off", "toggle"], help="Set the persisted dark-mode preference")
    parser.add_argument("--interactive", action="store_true", help="Start an interactive browsing session")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def setup_logging(config: Config, verbose: bool = False) -> None:
    """
    Configure logging from the config and command-line flags.
    """
    level = logging.DEBUG if verbose else getattr(logging, str(config.get('logging.level', 'INFO')).upper(), logging.INFO)
    handlers = [logging.StreamHandler()]
    log_dir = config.get('logging.directory')
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, f"ilrbrowse_{datetime.now().strftime('%Y%m%d')}.log")
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def apply_dark_mode(preferences: Preferences, setting: Optional[str]) -> bool:
    """
    Apply a --dark-mode setting and return the resulting preference.
    """
    if setting == "on":
        preferences.dark_mode = True
    elif setting == "off":
        preferences.dark_mode = False
    elif setting == "toggle":
        preferences.toggle_dark_mode()
    return preferences.dark_mode


def emit(text: str, output: Optional[str] = None) -> None:
    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(text)
        logger.info(f"Wrote results to {output}")
    else:
        sys.stdout.write(text)


async def run_once(args, session: BrowserSession, preferences: Preferences) -> int:
    """
    Load a language, search once and print one page.
    """
    if not await session.select_language(args.language):
        return 1

    session.state.query = args.query
    session.state.category = args.level
    session.search()
    if args.page != 1 and not session.change_page(args.page - 1):
        logger.warning(f"Page {args.page} is out of range; showing page 1")

    view = session.current_page()
    if args.format == "html":
        emit(HtmlRenderer().render(view, dark_mode=preferences.dark_mode), args.output)
    else:
        emit(TextRenderer().render(view), args.output)
    return 0


async def run_interactive(session: BrowserSession, preferences: Preferences) -> int:
    """
    Read commands from stdin until 'quit' or end of input.
    """
    loop = asyncio.get_running_loop()
    print(INTERACTIVE_HELP)

    while True:
        try:
            line = await loop.run_in_executor(None, input, "> ")
        except EOFError:
            break

        try:
            parts = shlex.split(line)
        except ValueError as e:
            print(f"Could not parse command: {e}")
            continue
        if not parts:
            continue
        command, rest = parts[0].lower(), " ".join(parts[1:])

        if command in ("quit", "exit"):
            break
        elif command == "help":
            print(INTERACTIVE_HELP)
        elif command == "lang":
            await session.select_language(rest)
        elif command == "q":
            session.set_query(rest)
        elif command == "level":
            session.set_category(rest)
        elif command == "search":
            session.search()
        elif command in ("next", "prev"):
            if not session.change_page(1 if command == "next" else -1):
                print("No more pages in that direction")
        elif command == "levels":
            print(f"  (empty)  {ALL_LEVELS_LABEL}")
            for level in session.state.categories:
                print(f"  {level or '-':8} {category_label(level)}")
        elif command == "save":
            session.save_for_later(rest)
        elif command == "html":
            if not rest:
                print("Usage: html <file>")
                continue
            HtmlRenderer().write(session.current_page(), rest, dark_mode=preferences.dark_mode)
        elif command == "dark":
            print(f"Dark mode {'on' if preferences.toggle_dark_mode() else 'off'}")
        else:
            print(f"Unknown command: {command} (try 'help')")

    session.debouncer.cancel()
    return 0


async def async_main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the application.
    """
    args = parse_args(argv)
    config = load_config(args.config)
    setup_logging(config, args.verbose)

    preferences = Preferences(config.get('preferences.path'))
    dark_mode = apply_dark_mode(preferences, args.dark_mode)
    if args.dark_mode:
        print(f"Dark mode {'on' if dark_mode else 'off'}")

    progress = tqdm.tqdm(desc="Loading files", unit="file", leave=False, disable=args.interactive or None)
    text_renderer = TextRenderer()

    def render(view: PageView) -> None:
        sys.stdout.write(text_renderer.render(view))

    def loading(active: bool) -> None:
        if active:
            progress.reset()
        else:
            progress.refresh()

    async with DatasetLoader(
        manifest=args.manifest or config.get('data.manifest'),
        timeout=config.get('http.timeout_seconds', 30),
        progress=lambda location: progress.update(1),
    ) as loader:
        session = BrowserSession(
            loader,
            ConsoleNotifier(),
            page_size=config.get('pagination.page_size', 50),
            debounce_seconds=config.get('search.debounce_seconds', 0.3),
            on_render=render if args.interactive else None,
            on_loading=loading,
        )

        try:
            if args.list_languages:
                languages = await session.populate_languages()
                for language in languages:
                    print(f"{language}\t{language_label(language)}")
                return 0 if languages else 1

            if args.interactive:
                return await run_interactive(session, preferences)

            if args.language:
                return await run_once(args, session, preferences)

            if not args.dark_mode:
                logger.error("Nothing to do: pass --language, --list-languages or --interactive")
                return 2
            return 0
        finally:
            progress.close()


def main():
    """
    Entry point for the command-line script.
    """
    try:
        return asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"An error occurred: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
