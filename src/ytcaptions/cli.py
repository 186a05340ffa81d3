"""
Command-line interface for fetching YouTube captions.
"""

import argparse
import logging
import os
import pathlib
import sys
from typing import Optional

from dotenv import load_dotenv
from tqdm import tqdm

from .catalog import TranscriptCatalog, TranscriptTrack
from .errors import CouldNotRetrieveTranscript
from .formatters import EXTENSIONS, FORMATTERS, write_cues
from .service import TranscriptService

logger = logging.getLogger("ytcaptions")


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def _env_languages() -> list[str]:
    raw = os.getenv("YTCAPTIONS_LANGUAGES", "en")
    return [code.strip() for code in raw.split(",") if code.strip()]


def _video_id(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError("video id must not be empty")
    return value.strip()


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    ap = argparse.ArgumentParser(description="Fetch YouTube captions without an API key")

    ap.add_argument("video_ids", nargs="+", type=_video_id, help="One or more YouTube video ids")

    # Track selection
    ap.add_argument(
        "--languages",
        nargs="*",
        default=_env_languages(),
        help="Language codes in descending priority (default: $YTCAPTIONS_LANGUAGES or 'en')",
    )
    ap.add_argument(
        "--list-transcripts",
        action="store_true",
        help="List the available tracks instead of fetching one",
    )
    ap.add_argument("--exclude-generated", action="store_true", help="Only use manually created tracks")
    ap.add_argument(
        "--exclude-manually-created", action="store_true", help="Only use generated tracks"
    )
    ap.add_argument("--translate", default=None, help="Translate the selected track into this language")

    # Output
    ap.add_argument("--format", choices=sorted(FORMATTERS), default="text")
    ap.add_argument(
        "--output-dir",
        default=None,
        help="Write one file per video here instead of printing to stdout",
    )

    # Session
    ap.add_argument(
        "--cookies",
        default=os.getenv("YTCAPTIONS_COOKIES"),
        help="Netscape cookies.txt file (default: $YTCAPTIONS_COOKIES)",
    )
    ap.add_argument(
        "--timeout",
        type=float,
        default=os.getenv("YTCAPTIONS_TIMEOUT", "30"),
        help="HTTP timeout in seconds (default: $YTCAPTIONS_TIMEOUT or 30)",
    )
    ap.add_argument(
        "--continue-after-error",
        action="store_true",
        help="Keep going with the remaining videos when one fails",
    )

    # Logging
    ap.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    return ap.parse_args(argv)


def select_track(catalog: TranscriptCatalog, args: argparse.Namespace) -> TranscriptTrack:
    """Pick the track the flags ask for, translated if requested."""
    if args.exclude_manually_created:
        track = catalog.find_generated_transcript(args.languages)
    elif args.exclude_generated:
        track = catalog.find_manually_created_transcript(args.languages)
    else:
        track = catalog.find_transcript(args.languages)
    if args.translate:
        track = track.translate(args.translate)
    return track


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    # Project-root .env first, then the current directory
    env_path = pathlib.Path(__file__).parent.parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    else:
        load_dotenv()

    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.exclude_generated and args.exclude_manually_created:
        logger.warning("Both track kinds excluded, nothing to fetch")
        return 0

    failed: list[str] = []
    with TranscriptService(cookies=args.cookies, timeout=args.timeout) as service:
        for video_id in tqdm(
            args.video_ids, desc="Videos", unit="video", disable=args.output_dir is None
        ):
            try:
                catalog = service.list_transcripts(video_id)
                if args.list_transcripts:
                    print(catalog.describe())
                    continue
                track = select_track(catalog, args)
                logger.info(f"Using track {track} for {video_id}")
                cues = track.fetch()
            except CouldNotRetrieveTranscript as e:
                logger.error("%s", e)
                failed.append(video_id)
                if not args.continue_after_error:
                    break
                continue

            if args.output_dir:
                out_path = os.path.join(args.output_dir, f"{video_id}.{EXTENSIONS[args.format]}")
                write_cues(cues, out_path, args.format)
            else:
                print(FORMATTERS[args.format](cues))

    if failed:
        logger.error(f"Failed for {len(failed)} video(s): {', '.join(failed)}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
