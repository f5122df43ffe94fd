# SPDX-License-Identifier: AGPL-3.0-only
"""Enable `python -m a11ycheck` invocation."""
from a11ycheck.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
