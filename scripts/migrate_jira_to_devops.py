from __future__ import annotations

from jira_migrator.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
