"""Tests for the in-memory NodeStore and its JSON persistence."""

import json

import pytest

from doctreelib import (
    ContentNode,
    DocTreeError,
    MalformedInputError,
    MemoryNode,
    MemoryNodeStore,
    NodeExistsError,
    NodeTypeError,
    NodeTypeRegistry,
    SiteInfo,
    WorkspaceError,
)


class TestNodeTypeRegistry:

    def test_direct_and_transitive_inheritance(self):
        registry = NodeTypeRegistry()

        assert registry.is_of_type("Neos.NodeTypes:Page", "Neos.Neos:Document")
        assert registry.is_of_type("Neos.NodeTypes:Page", "Neos.Neos:Node")
        assert registry.is_of_type("Neos.NodeTypes:Page", "Neos.NodeTypes:Page")
        assert not registry.is_of_type("Neos.NodeTypes:Page", "Neos.Neos:Content")

    def test_unknown_type_matches_only_itself(self):
        registry = NodeTypeRegistry()

        assert registry.is_of_type("Acme:Thing", "Acme:Thing")
        assert not registry.is_of_type("Acme:Thing", "Neos.Neos:Document")

    def test_cyclic_declarations_terminate(self):
        registry = NodeTypeRegistry({"A": ["B"], "B": ["A"]})

        assert not registry.is_of_type("A", "C")


class TestNavigation:

    def test_paths(self, store):
        item = store.get_node("/sites/demo/news/item1")

        assert item.path() == "/sites/demo/news/item1"
        assert store.root.path() == "/"
        assert store.get_node("/") is store.root

    def test_missing_path(self, store):
        assert store.get_node("/sites/demo/nope") is None

    def test_identifier_lookup(self, store):
        assert store.get_node_by_identifier("page-team").path() == "/sites/demo/about/team"
        assert store.get_node_by_identifier("unknown") is None

    def test_children_of_type(self, store):
        news = store.get_node("/sites/demo/news")

        documents = store.children_of_type(news, "Neos.Neos:Document")
        everything = store.children_of_type(news)

        assert [n.name() for n in documents] == ["item1", "item2"]
        assert [n.name() for n in everything] == ["main", "item1", "item2"]

    def test_parent(self, store):
        item = store.get_node("/sites/demo/news/item1")

        assert store.get_parent(item).name() == "news"
        assert store.get_parent(store.root) is None

    def test_properties_are_copies(self, store):
        item = store.get_node("/sites/demo/news/item1")
        item.properties()["title"] = "changed"

        assert item.get_property("title") == "First item"

    def test_equality_by_identifier(self, store):
        a = store.get_node("/sites/demo/news")
        b = store.get_node_by_identifier("page-news")

        assert a == b
        assert len({a, b}) == 1


class TestModification:

    def test_create_and_remove(self, store):
        news = store.get_node("/sites/demo/news")

        node = store.create_node(news, "item3", "Neos.NodeTypes:Page")
        assert store.get_node("/sites/demo/news/item3") == node

        store.remove_node(node)
        assert store.get_node("/sites/demo/news/item3") is None

    def test_create_rejects_duplicate_name(self, store):
        news = store.get_node("/sites/demo/news")

        with pytest.raises(NodeExistsError):
            store.create_node(news, "item1", "Neos.NodeTypes:Page")

    def test_create_rejects_unknown_type(self, store):
        with pytest.raises(NodeTypeError):
            store.create_node(store.get_node("/sites/demo"), "x", "Acme:Unknown")

    def test_create_without_type_is_unstructured(self, store):
        node = store.create_node(store.get_node("/sites/demo"), "grid")

        assert node.node_type_name() == "unstructured"

    def test_root_cannot_be_removed(self, store):
        with pytest.raises(DocTreeError):
            store.remove_node(store.root)

    def test_rename(self, store):
        item = store.get_node("/sites/demo/news/item1")

        store.set_name(item, "first")

        assert item.path() == "/sites/demo/news/first"
        with pytest.raises(NodeExistsError):
            store.set_name(item, "item2")

    def test_hidden_and_properties(self, store):
        item = store.get_node("/sites/demo/news/item1")

        store.set_hidden(item, True)
        store.set_property(item, "title", "Renamed")

        assert item.is_hidden()
        assert item.get_property("title") == "Renamed"

    def test_unique_name(self, store):
        news = store.get_node("/sites/demo/news")

        assert store.generate_unique_name(news, "item1") == "item1-1"
        assert store.generate_unique_name(news, "Item 3") == "item-3"

    def test_foreign_nodes_rejected(self, store):
        class Foreign(ContentNode):
            def identifier(self): return "x"
            def path(self): return "/x"
            def name(self): return "x"
            def node_type_name(self): return "unstructured"
            def properties(self): return {}

        with pytest.raises(TypeError):
            store.get_children(Foreign())


class TestWorkspaces:

    def test_workspaces_are_independent(self, store):
        store.use_workspace("user-admin")
        store.remove_node(store.get_node("/sites/demo/about"))

        store.use_workspace("live")
        assert store.get_node("/sites/demo/about") is not None

    def test_unknown_workspace(self, store):
        with pytest.raises(WorkspaceError):
            store.use_workspace("nope")

    def test_publish_copies_tree(self, store):
        store.use_workspace("user-admin")
        store.create_node(store.get_node("/sites/demo"), "contact", "Neos.NodeTypes:Page")

        store.publish("user-admin", "live")

        store.use_workspace("live")
        assert store.get_node("/sites/demo/contact") is not None

    def test_publish_to_unknown_workspace(self, store):
        with pytest.raises(WorkspaceError):
            store.publish("user-admin", "staging")

    def test_default_store_has_site_page(self):
        store = MemoryNodeStore(SiteInfo("Shop", "shop"))

        site_page = store.get_node("/sites/shop")
        assert site_page.get_property("uriPathSegment") == "home"
        assert store.workspace_names() == ["live"]


class TestPersistence:

    def test_save_and_load(self, store, tmp_path):
        path = tmp_path / "repo.json"

        store.save(path)
        loaded = MemoryNodeStore.load(path)

        assert loaded.to_dict() == store.to_dict()
        assert loaded.site() == SiteInfo("Demo Site", "demo")
        assert json.loads(path.read_text())["site"]["nodeName"] == "demo"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "repo.json"
        path.write_text("{not json")

        with pytest.raises(MalformedInputError):
            MemoryNodeStore.load(path)

    def test_missing_site(self):
        with pytest.raises(MalformedInputError):
            MemoryNodeStore.from_dict({"workspaces": {}})

    @pytest.mark.parametrize("data", [
        [1],
        "repository",
        {"site": "demo"},
        {"site": {"nodeName": "demo"}, "workspaces": []},
        {"site": {"nodeName": "demo"}, "nodeTypes": ["Neos.Neos:Document"]},
        {"site": {"nodeName": "demo"}, "workspaces": {"live": [1]}},
    ])
    def test_wrong_shape(self, data):
        with pytest.raises(MalformedInputError):
            MemoryNodeStore.from_dict(data)

    def test_load_non_object_json(self, tmp_path):
        path = tmp_path / "repo.json"
        path.write_text("[1]")

        with pytest.raises(MalformedInputError, match="must be an object"):
            MemoryNodeStore.load(path)

    def test_node_without_name(self):
        with pytest.raises(MalformedInputError):
            MemoryNode.from_dict({"type": "unstructured"})
