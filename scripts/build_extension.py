"""Pack extension/ into public/extension/growtools-extension.zip."""
import argparse
import os
import sys
from pathlib import Path

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from growtools.backend.config import get_settings  # noqa: E402
from growtools.backend.logging_config import setup_logging  # noqa: E402
from growtools.backend.services.extension_files import (  # noqa: E402
    USER_ARTIFACTS,
    ExtensionBuildError,
    build_extension_zip,
)


def main(argv: list[str] | None = None) -> int:
    s = get_settings()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--source", default=os.path.join(ROOT, "extension"))
    parser.add_argument("--output", default=os.path.join(s.extension_dir, USER_ARTIFACTS[0]))
    parser.add_argument("--dashboard-url", default=s.dashboard_url)
    args = parser.parse_args(argv)

    setup_logging()
    try:
        out = build_extension_zip(Path(args.source), Path(args.output), args.dashboard_url)
    except ExtensionBuildError as e:
        print(f"Extension build failed: {e}")
        return 1
    print(f"Extension built: {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
