import json
import sys

import httpx
from tqdm import tqdm

from pkginspect.models import (
    DecodeError,
    FetchError,
    decode,
    decode_mode,
    fetch_bytes,
    render_text,
    report_to_dict,
)
from pkginspect.models.fetch import is_url
from pkginspect.utils import get_parser, setup_logging


class ProgressBar:
    """Feeds download progress into a tqdm bar on stderr."""

    def __init__(self, source: str):
        self.bar = None
        self.source = source

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.bar is not None:
            self.bar.close()

    def __call__(self, progress):
        if self.bar is None:
            self.bar = tqdm(
                total=progress.total,
                desc=self.source.rsplit("/", 1)[-1],
                unit="B",
                unit_scale=True,
                file=sys.stderr,
            )
        self.bar.update(progress.loaded - self.bar.n)


def dump(source: str, *, as_json: bool = False, show_progress: bool = True):
    if show_progress and is_url(source):
        with ProgressBar(source) as bar:
            data = fetch_bytes(source, progress=bar)
    else:
        data = fetch_bytes(source)
    report = decode(data)
    if as_json:
        sys.stdout.write(json.dumps(report_to_dict(report), indent=2) + "\n")
    else:
        sys.stdout.write(render_text(report))
    return report


def show_mode(value: int):
    mode = decode_mode(value)
    sys.stdout.write(f"{mode.perm_octal} ({mode.perm_symbolic}), Type: {mode.kind}\n")
    return mode


def main(argv=None):
    parser = get_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    try:
        match args.command:
            case "dump":
                dump(
                    args.source,
                    as_json=args.json,
                    show_progress=not args.no_progress,
                )
            case "mode":
                show_mode(args.value)
            case _:
                parser.print_usage(sys.stderr)
                return 2
    except (DecodeError, FetchError, httpx.HTTPError, OSError) as e:
        sys.stderr.write(f"error: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
