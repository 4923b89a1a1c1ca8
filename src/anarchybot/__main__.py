from __future__ import annotations

from anarchybot.cli import main

main()
