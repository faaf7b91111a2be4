"""Allow ``python -m inboxview``."""

from inboxview.cli.serve import main

if __name__ == "__main__":
    raise SystemExit(main())
