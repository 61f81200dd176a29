from __future__ import annotations

from lineparse.cli import main

raise SystemExit(main())
