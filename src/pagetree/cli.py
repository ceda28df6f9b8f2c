"""Interactive shell over a workspace.

Nodes can be referenced by id or, within the current folder, by exact title.
"""

from __future__ import annotations

import logging
import shlex
import sys
from typing import TYPE_CHECKING, TextIO

from pagetree import tree
from pagetree.models import NodeKind
from pagetree.storage.kv import StorageKeyError
from pagetree.storage.sync import export_page_markdown

if TYPE_CHECKING:
    from pagetree.models import Node
    from pagetree.workspace import Workspace

logger = logging.getLogger(__name__)

HELP = """\
ls                      list the current folder
cd <ref|..|/>           enter a folder, go up, or go to the root
pwd                     show the breadcrumb trail
mkdir <title>           create a folder here
touch <title>           create a page here and open it
open <ref>              open a page in the editor
show                    print the open page
title|subtitle|write <text>
                        edit the open page
save                    save the open page
close                   save and close the open page
cat <ref>               print a page as markdown
mv <ref> <folder-ref>   move a node into a folder
rm <ref>                delete a node (folders include their contents)
use <collection>        switch collection
collections             list stored collections
check                   report broken parent links and cycles
exit                    quit"""


class Shell:
    """Line-oriented REPL. Reads commands from `stdin`, writes to `stdout`."""

    def __init__(self, workspace: Workspace, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> None:
        self.workspace = workspace
        self.stdin = stdin
        self.stdout = stdout
        self._running = False
        workspace.confirm = self._confirm

    # ── I/O ──────────────────────────────────────────────────

    def _print(self, text: str = "") -> None:
        self.stdout.write(text + "\n")
        self.stdout.flush()

    def _read_line(self, prompt: str) -> str | None:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\n")

    def _confirm(self, message: str) -> bool:
        answer = self._read_line(f"{message} [y/N] ")
        return (answer or "").strip().lower() in ("y", "yes")

    def _prompt(self) -> str:
        crumbs = "/".join(n.title for n in self.workspace.navigation.trail())
        editing = self.workspace.editor.buffer
        suffix = f" [{editing.title}]" if editing else ""
        return f"\n{self.workspace.key}:/{crumbs}{suffix}> "

    # ── Loop ─────────────────────────────────────────────────

    def run(self) -> None:
        self._running = True
        self._print("pagetree shell (type 'help' for commands, 'exit' to quit)")
        self._print("-" * 48)
        while self._running:
            line = self._read_line(self._prompt())
            if line is None:
                self._print()
                break
            self.handle(line)
        self.workspace.editor.close()
        self._print("Bye!")

    def handle(self, line: str) -> None:
        try:
            argv = shlex.split(line)
        except ValueError as e:
            self._print(f"Parse error: {e}")
            return
        if not argv:
            return

        cmd, args = argv[0].lower(), argv[1:]
        handler = getattr(self, f"cmd_{cmd}", None)
        if handler is None:
            self._print(f"Unknown command: {cmd} (try 'help')")
            return
        handler(args)

    # ── Helpers ──────────────────────────────────────────────

    def _resolve(self, ref: str) -> Node | None:
        ws = self.workspace
        node = ws.collection.get(ref)
        if node is not None:
            return node
        for candidate in ws.navigation.listing():
            if candidate.title == ref:
                return candidate
        self._print(f"No such item: {ref}")
        return None

    def _format_row(self, node: Node) -> str:
        if node.kind is NodeKind.FOLDER:
            count = tree.child_count(self.workspace.collection.nodes, node.id)
            return f"d  {node.id}  {node.title}/  ({count} items inside)"
        return f"-  {node.id}  {node.title}  - {node.subtitle}"

    # ── Commands ─────────────────────────────────────────────

    def cmd_help(self, args: list[str]) -> None:
        self._print(HELP)

    def cmd_exit(self, args: list[str]) -> None:
        self._running = False

    cmd_quit = cmd_exit

    def cmd_ls(self, args: list[str]) -> None:
        listing = self.workspace.navigation.listing()
        if not listing:
            self._print("(empty)")
            return
        for node in listing:
            self._print(self._format_row(node))

    def cmd_pwd(self, args: list[str]) -> None:
        self._print("/" + "/".join(n.title for n in self.workspace.navigation.trail()))

    def cmd_cd(self, args: list[str]) -> None:
        nav = self.workspace.navigation
        target = args[0] if args else "/"
        if target == "/":
            nav.goto_breadcrumb(None)
        elif target == "..":
            nav.up()
        else:
            node = self._resolve(target)
            if node is None:
                return
            if not tree.is_folder(self.workspace.collection.nodes, node.id):
                self._print(f"Not a folder: {node.title}")
                return
            nav.enter(node.id)

    def cmd_mkdir(self, args: list[str]) -> None:
        node = self.workspace.create_folder(" ".join(args))
        if node is None:
            self._print("A title is required")

    def cmd_touch(self, args: list[str]) -> None:
        node = self.workspace.create_file(" ".join(args))
        if node is None:
            self._print("A title is required")

    def cmd_open(self, args: list[str]) -> None:
        node = self._resolve(" ".join(args))
        if node is None:
            return
        if not self.workspace.open_file(node.id):
            self._print(f"Not a page: {node.title}")

    def cmd_show(self, args: list[str]) -> None:
        buffer = self.workspace.editor.buffer
        if buffer is None:
            self._print("No page open")
            return
        self._print(f"# {buffer.title}\n{buffer.subtitle}\n\n{buffer.content}")

    def _edit(self, field_name: str, args: list[str]) -> None:
        if not self.workspace.editor.is_open:
            self._print("No page open")
            return
        self.workspace.editor.edit(**{field_name: " ".join(args)})

    def cmd_title(self, args: list[str]) -> None:
        self._edit("title", args)

    def cmd_subtitle(self, args: list[str]) -> None:
        self._edit("subtitle", args)

    def cmd_write(self, args: list[str]) -> None:
        self._edit("content", args)

    def cmd_save(self, args: list[str]) -> None:
        if self.workspace.editor.flush() is None:
            self._print("Nothing saved")

    def cmd_close(self, args: list[str]) -> None:
        self.workspace.editor.close()

    def cmd_cat(self, args: list[str]) -> None:
        node = self._resolve(" ".join(args))
        if node is None:
            return
        if node.kind is not NodeKind.FILE:
            self._print(f"Not a page: {node.title}")
            return
        self._print(export_page_markdown(node).rstrip("\n"))

    def cmd_mv(self, args: list[str]) -> None:
        if len(args) != 2:
            self._print("Usage: mv <ref> <folder-ref>")
            return
        source, target = self._resolve(args[0]), self._resolve(args[1])
        if source is None or target is None:
            return
        rejection = self.workspace.move(source.id, target.id)
        if rejection is not None:
            self._print(f"Cannot move {source.title} into {target.title} ({rejection.value})")

    def cmd_rm(self, args: list[str]) -> None:
        node = self._resolve(" ".join(args))
        if node is None:
            return
        removed = self.workspace.delete(node.id)
        if removed:
            self._print(f"Deleted {len(removed)} item(s)")

    def cmd_use(self, args: list[str]) -> None:
        if not args:
            self._print(f"Current collection: {self.workspace.key}")
            return
        try:
            self.workspace.switch(args[0])
        except StorageKeyError as e:
            self._print(str(e))

    def cmd_collections(self, args: list[str]) -> None:
        for key in self.workspace.repository.store.keys():
            marker = "*" if key == self.workspace.key else " "
            self._print(f"{marker} {key}")

    def cmd_check(self, args: list[str]) -> None:
        nodes = self.workspace.collection.nodes
        dangling = tree.dangling_ids(nodes)
        cyclic = tree.cyclic_ids(nodes)
        if not dangling and not cyclic:
            self._print("OK")
            return
        for node_id in dangling:
            self._print(f"dangling parent: {node_id} -> {self.workspace.collection.get(node_id).parent_id}")
        for node_id in cyclic:
            self._print(f"cycle: {node_id}")
