"""Entry point: python -m pagetree [shell|export|import]

- No args / "shell": Interactive shell over the default collection
- "export [file]":   Write a snapshot of all known collections
- "import <file>":   Replace local collections from a snapshot
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from pagetree.config import PagetreeConfig, load_config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _run_shell(config: PagetreeConfig) -> None:
    from pagetree.cli import Shell
    from pagetree.workspace import Workspace

    shell = Shell(Workspace.from_config(config))
    try:
        shell.run()
    except KeyboardInterrupt:
        shell.workspace.editor.close()


def _run_export(config: PagetreeConfig, target: str | None) -> None:
    from pagetree.storage.kv import KeyValueStore
    from pagetree.storage.sync import export_data

    snapshot = export_data(KeyValueStore(config.data_dir), config.export_keys)
    if target:
        Path(target).write_text(snapshot, encoding="utf-8")
    else:
        print(snapshot)


def _run_import(config: PagetreeConfig, source: str) -> None:
    from pagetree.storage.kv import KeyValueStore
    from pagetree.storage.sync import import_data

    snapshot = Path(source).read_text(encoding="utf-8")
    if not import_data(KeyValueStore(config.data_dir), snapshot):
        print(f"Error importing {source}.", file=sys.stderr)
        sys.exit(1)


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "shell"
    config = load_config()
    _setup_logging(config.log_level)

    if cmd == "shell":
        _run_shell(config)
    elif cmd == "export":
        _run_export(config, sys.argv[2] if len(sys.argv) > 2 else None)
    elif cmd == "import" and len(sys.argv) > 2:
        _run_import(config, sys.argv[2])
    else:
        print("Usage: python -m pagetree [shell|export [file]|import <file>]")
        print("  shell   Interactive shell (default)")
        print("  export  Write a snapshot of all known collections")
        print("  import  Replace local collections from a snapshot")
        sys.exit(1)


if __name__ == "__main__":
    main()
