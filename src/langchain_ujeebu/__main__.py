import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

import yaml
from langchain_core.documents import Document

from langchain_ujeebu.article import ExtractionFlags
from langchain_ujeebu.config import (
    DEFAULT_BASE_URL,
    LoaderConfig,
    load_config,
)
from langchain_ujeebu.document_loaders import UjeebuLoader
from langchain_ujeebu.errors import UjeebuConfigError
from langchain_ujeebu.tools import UjeebuExtractTool

logging.basicConfig(level=logging.INFO)

_LOGGER = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        return args.func(args)
    except UjeebuConfigError as e:
        _LOGGER.error(e)
        return 1


def _extract(args: argparse.Namespace) -> int:
    tool = UjeebuExtractTool(
        api_key=args.api_key, base_url=args.base_url or DEFAULT_BASE_URL
    )
    flags = ExtractionFlags(
        text=args.text,
        html=args.html,
        author=args.author,
        pub_date=args.pub_date,
        images=args.images,
        quick_mode=args.quick_mode,
    )
    tool_input: str = json.dumps({"url": args.url, **flags.model_dump()})
    print(tool.invoke(tool_input))
    return 0


def _load(args: argparse.Namespace) -> int:
    try:
        config: LoaderConfig = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise UjeebuConfigError(
            f"Can't read config {args.config}: {e}"
        ) from e

    urls: List[str] = config.urls + args.urls
    if not urls:
        raise UjeebuConfigError(
            "No URLs given on the command line or in the config file."
        )

    loader = UjeebuLoader.from_flags(
        urls=urls,
        flags=config.extraction,
        api_key=args.api_key,
        base_url=args.base_url or config.base_url,
    )
    documents: List[Document] = loader.load()

    if args.output_file:
        with open(args.output_file, "w") as file:
            _write_documents(documents, file)
    else:
        _write_documents(documents, sys.stdout)

    return 0


def _write_documents(documents: List[Document], out: TextIO) -> None:
    for document in documents:
        line: str = json.dumps(
            {
                "page_content": document.page_content,
                "metadata": document.metadata,
            }
        )
        out.write(line + "\n")


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="langchain_ujeebu")
    parser.add_argument(
        "--api-key",
        help=(
            "Optional parameter. "
            "Defaults to the UJEEBU_API_KEY environment variable."
        ),
    )
    parser.add_argument(
        "--base-url",
        help="Optional parameter. Defaults to https://api.ujeebu.com/extract.",
    )
    subparsers = parser.add_subparsers(required=True)

    extract = subparsers.add_parser(
        "extract", help="Extract a single article and print a summary of it."
    )
    extract.add_argument("url")
    _add_flag(extract, "text", True, "Extract article text.")
    _add_flag(extract, "html", False, "Extract article HTML.")
    _add_flag(extract, "author", True, "Extract article author.")
    _add_flag(extract, "pub-date", True, "Extract publication date.")
    _add_flag(extract, "images", False, "Extract article images.")
    _add_flag(
        extract,
        "quick-mode",
        default=False,
        help_text="Use quick mode (faster, slightly less accurate).",
    )
    extract.set_defaults(func=_extract)

    load = subparsers.add_parser(
        "load",
        help="Load articles as documents, one JSON object per line.",
    )
    load.add_argument("urls", nargs="*", default=[])
    load.add_argument(
        "-c",
        "--config",
        type=Path,
        help=(
            "Optional parameter. "
            "A YAML file with `urls`, `base_url` and `extraction` flags."
        ),
    )
    load.add_argument(
        "-o",
        "--output-file",
        type=Path,
        help="Optional parameter. Defaults to stdout.",
    )
    load.set_defaults(func=_load)

    return parser.parse_args(argv)


def _add_flag(
    parser: argparse.ArgumentParser, name: str, default: bool, help_text: str
) -> None:
    parser.add_argument(
        f"--{name}",
        action=argparse.BooleanOptionalAction,
        default=default,
        help=help_text,
    )


if __name__ == "__main__":
    sys.exit(main())
