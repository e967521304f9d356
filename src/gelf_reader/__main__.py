"""Module entrypoint.

Allows:
    python -m gelf_reader
"""

from __future__ import annotations

from gelf_reader.server.gelf_server import main

if __name__ == "__main__":
    main()
