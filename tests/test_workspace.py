"""Tests for navigation, the editor session and the workspace hub."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pagetree import tree
from pagetree.config import CollectionsConfig, PagetreeConfig
from pagetree.controllers.reparent import Rejection
from pagetree.models import NodeKind
from pagetree.storage.kv import KeyValueStore
from pagetree.storage.repository import ItemRepository
from pagetree.storage.sync import import_data
from pagetree.workspace import Workspace

from conftest import KEY, OLD_TS, folder, page


@pytest.fixture
def ws(repo: ItemRepository) -> Workspace:
    return Workspace(repo, KEY)


class TestNavigation:
    def test_enter_up_and_breadcrumbs(self, ws: Workspace):
        work = ws.create_folder("Work")
        ws.navigation.enter(work.id)
        sub = ws.create_folder("Sub")
        ws.navigation.enter(sub.id)

        assert [n.title for n in ws.navigation.trail()] == ["Work", "Sub"]
        ws.navigation.up()
        assert ws.navigation.current_folder_id == work.id
        ws.navigation.up()
        assert ws.navigation.current_folder_id is None
        ws.navigation.up()
        assert ws.navigation.current_folder_id is None

    def test_goto_breadcrumb(self, ws: Workspace):
        work = ws.create_folder("Work")
        ws.navigation.enter(work.id)
        ws.navigation.enter(ws.create_folder("Sub").id)
        ws.navigation.goto_breadcrumb(work.id)
        assert ws.navigation.current_folder_id == work.id
        ws.navigation.goto_breadcrumb(None)
        assert ws.navigation.trail() == []

    def test_listing_folders_first(self, ws: Workspace):
        ws.create_file("b-page")
        ws.create_folder("a-folder")
        ws.editor.close()
        assert [n.title for n in ws.navigation.listing()] == ["a-folder", "b-page"]

    def test_up_from_vanished_folder(self, ws: Workspace):
        ws.navigation.enter("ghost")
        ws.navigation.up()
        assert ws.navigation.current_folder_id is None


class TestEditorSession:
    def test_new_file_opens_folder_does_not(self, ws: Workspace):
        ws.create_folder("Folder")
        assert not ws.editor.is_open
        node = ws.create_file("Page")
        assert ws.editor.node_id == node.id

    def test_flush_persists_and_stays_open(self, ws: Workspace, repo: ItemRepository):
        node = ws.create_file("Draft")
        ws.editor.edit(title="Final", subtitle="summary", content="<p>body</p>")
        saved = ws.editor.flush()

        assert ws.editor.is_open
        assert saved.title == "Final"
        stored = repo.load(KEY)[0]
        assert (stored.id, stored.title, stored.subtitle, stored.content) == (
            node.id,
            "Final",
            "summary",
            "<p>body</p>",
        )

    def test_flush_bumps_timestamp(self, repo: ItemRepository):
        repo.save(KEY, [page("p")])
        ws = Workspace(repo, KEY)
        ws.open_file("p")
        assert ws.editor.flush().updated_at != OLD_TS

    def test_close_always_saves(self, ws: Workspace, repo: ItemRepository):
        ws.create_file("Draft")
        ws.editor.edit(content="<p>unsaved</p>")
        ws.editor.close()
        assert not ws.editor.is_open
        assert repo.load(KEY)[0].content == "<p>unsaved</p>"

    def test_edit_without_session_is_noop(self, ws: Workspace):
        ws.editor.edit(title="x")
        assert ws.editor.flush() is None

    def test_open_file_rejects_folder(self, ws: Workspace):
        node = ws.create_folder("F")
        assert not ws.open_file(node.id)
        assert not ws.open_file("ghost")

    def test_opening_another_page_saves_the_first(self, ws: Workspace):
        first = ws.create_file("First")
        ws.editor.edit(content="<p>one</p>")
        second = ws.create_file("Second")
        assert ws.editor.node_id == second.id
        assert ws.collection.get(first.id).content == "<p>one</p>"

    def test_reopen_same_page_keeps_edits(self, ws: Workspace):
        node = ws.create_file("Page")
        ws.editor.edit(title="Renamed")
        assert ws.open_file(node.id)
        assert ws.editor.buffer.title == "Renamed"


class TestDeleteInteraction:
    def test_deleting_open_page_discards_edits(self, ws: Workspace):
        folder_node = ws.create_folder("F")
        ws.navigation.enter(folder_node.id)
        ws.create_file("Inside")
        ws.editor.edit(content="<p>lost</p>")

        removed = ws.delete(folder_node.id)
        assert len(removed) == 2
        assert not ws.editor.is_open
        assert len(ws.collection) == 0
        assert ws.navigation.current_folder_id is None

    def test_confirmation_declined(self, repo: ItemRepository):
        prompts = []

        def decline(message: str) -> bool:
            prompts.append(message)
            return False

        repo.save(KEY, [folder("f")])
        ws = Workspace(repo, KEY, confirm=decline)
        assert ws.delete("f") == set()
        assert prompts == ['Delete folder "f" and all its contents?']
        assert len(repo.load(KEY)) == 1


class TestCollections:
    def test_switch_saves_open_page(self, ws: Workspace, repo: ItemRepository):
        ws.create_file("Page")
        ws.editor.edit(content="<p>kept</p>")
        ws.switch("gh_learning_skills_v1")

        assert ws.key == "gh_learning_skills_v1"
        assert len(ws.collection) == 0
        assert repo.load(KEY)[0].content == "<p>kept</p>"

    def test_reload_after_import(self, ws: Workspace, store: KeyValueStore):
        ws.create_folder("Local")
        snapshot = json.dumps({KEY: json.dumps([page("remote").to_dict()])})
        assert import_data(store, snapshot)
        ws.reload()
        assert [n.id for n in ws.collection] == ["remote"]

    def test_from_config(self, tmp_path: Path):
        config = PagetreeConfig(
            collections=CollectionsConfig(default="journal"),
            data_dir=tmp_path / "data",
        )
        ws = Workspace.from_config(config)
        assert ws.key == "journal"
        assert ws.repository.store.root == tmp_path / "data"


class TestScenarios:
    def test_create_inside_folder(self, ws: Workspace):
        work = ws.create_folder("Work")
        ws.navigation.enter(work.id)
        notes = ws.create_file("Notes")

        assert len(ws.collection) == 2
        assert notes.parent_id == work.id

    def test_drag_folder_onto_file_rejected(self, ws: Workspace, repo: ItemRepository):
        work = ws.create_folder("Work")
        notes = ws.create_file("Notes")
        ws.editor.close()
        before = repo.load(KEY)

        assert ws.move(work.id, notes.id) is Rejection.TARGET_NOT_FOLDER
        assert repo.load(KEY) == before

    def test_reparent_into_descendant_rejected(self, ws: Workspace, repo: ItemRepository):
        outer = ws.create_folder("Outer")
        ws.navigation.enter(outer.id)
        inner = ws.create_folder("Inner")
        before = repo.load(KEY)

        assert ws.move(outer.id, inner.id) is Rejection.CYCLE
        assert repo.load(KEY) == before

    def test_cascade_delete_empties_collection(self, ws: Workspace, repo: ItemRepository):
        a = ws.create_folder("A")
        ws.navigation.enter(a.id)
        b = ws.create_folder("B")
        ws.navigation.enter(b.id)
        ws.create_file("C")

        ws.delete(a.id)
        assert repo.load(KEY) == []

    def test_import_with_dangling_parent(self, ws: Workspace, store: KeyValueStore):
        records = [
            folder("inner", "deleted-elsewhere").to_dict(),
            folder("leaf", "inner").to_dict(),
            page("doc", "leaf").to_dict(),
        ]
        assert import_data(store, json.dumps({KEY: json.dumps(records)}))
        ws.reload()

        ws.navigation.enter("leaf")
        assert [n.id for n in ws.navigation.trail()] == ["inner", "leaf"]
        assert [n.id for n in ws.navigation.listing()] == ["doc"]
        assert tree.children_of(ws.collection.nodes, "deleted-elsewhere") == [ws.collection.get("inner")]
        assert tree.children_of(ws.collection.nodes, "nowhere") == []
        assert tree.dangling_ids(ws.collection.nodes) == ["inner"]

    def test_moves_never_persist_cycles(self, ws: Workspace):
        ids = []
        for name in "abcd":
            node = ws.create_folder(name)
            ids.append(node.id)
            ws.navigation.enter(node.id)
        for source in ids:
            for target in ids:
                ws.move(source, target)
        assert tree.cyclic_ids(ws.collection.nodes) == []
        assert all(n.kind is NodeKind.FOLDER for n in ws.collection)
