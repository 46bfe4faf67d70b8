"""Allow ``python -m winplace``."""

from .cli import main

raise SystemExit(main())
